"""Request DTOs for the resolve/explain surfaces."""

from __future__ import annotations

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from ..domain.context import build_context_from_params, device_from_user_agent
from ..domain.tags import TargetingTags
from ..domain.versions import VersionStatus


class ResolveRequest(BaseModel):
    """Input DTO for resolving the version of one content unit."""

    model_config = ConfigDict(populate_by_name=True)

    unit_id: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("unit_id", "slug"),
        description="Content unit to resolve (page slug, template id)",
    )
    campaign: str | None = Field(default=None, description="Campaign identifier")
    segment: str | None = Field(default=None, description="Audience segment identifier")
    tag: str | None = Field(default=None, description="Legacy alias for campaign")
    home_tag: str | None = Field(
        default=None,
        validation_alias=AliasChoices("home_tag", "homeTag"),
        description="Legacy alias for campaign (home template)",
    )
    template_tag: str | None = Field(
        default=None,
        validation_alias=AliasChoices("template_tag", "templateTag"),
        description="Legacy alias for campaign (templates)",
    )
    address_state: str | None = Field(
        default=None,
        validation_alias=AliasChoices("address_state", "addressState"),
        description="Visitor region code",
    )
    attributes: dict[str, str | None] | None = Field(default=None, description="Arbitrary string attributes")
    region: str | None = Field(default=None, description="Region attribute")
    language: str | None = Field(default=None, description="Language attribute")
    device: str | None = Field(default=None, description="Device attribute")
    user_agent: str | None = Field(
        default=None,
        description="Used to derive the device attribute when none is given",
    )
    preview: bool = Field(default=False, description="Preview mode; drafts become eligible")
    include_draft: bool = Field(
        default=False,
        validation_alias=AliasChoices("include_draft", "includeDraft"),
        description="Whether draft versions are eligible",
    )
    respect_active_window: bool | None = Field(
        default=None,
        description="Override the configured active-window behaviour",
    )
    now: datetime | None = Field(default=None, description="Injected clock (UTC)")

    def to_context(self) -> TargetingTags | None:
        """Build the normalized targeting context carried by this request."""
        params = {
            "campaign": self.campaign,
            "tag": self.tag,
            "homeTag": self.home_tag,
            "templateTag": self.template_tag,
            "segment": self.segment,
            "addressState": self.address_state,
            "region": self.region,
            "language": self.language,
            "device": self.device or device_from_user_agent(self.user_agent),
        }
        return build_context_from_params(params, attributes=self.attributes)

    def allowed_statuses(self, default: list[VersionStatus]) -> list[VersionStatus]:
        if self.preview or self.include_draft:
            return [VersionStatus.draft, VersionStatus.published]
        return list(default)
