"""Port: version store supplying candidate versions per content unit."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from ..domain.versions import ContentVersion


class ContentUnit(BaseModel):
    """A page, block or template together with all of its versions."""

    model_config = ConfigDict(populate_by_name=True)

    unit_id: str = Field(
        ...,
        validation_alias=AliasChoices("unit_id", "slug", "templateId"),
        description="Content unit identifier (page slug, template id)",
    )
    name: str = Field(default="", description="Display name")
    versions: list[ContentVersion] = Field(default_factory=list, description="All stored versions")
    current_published_version: int | None = Field(
        default=None,
        validation_alias=AliasChoices("current_published_version", "currentPublishedVersion"),
        description="Version number last published from the authoring UI",
    )

    @property
    def fallback_version_number(self) -> int | None:
        """Explicit fallback: the current published version, else the one flagged as such."""
        if self.current_published_version is not None:
            return self.current_published_version
        for version in self.versions:
            if version.is_current_published:
                return version.version
        return None


@runtime_checkable
class VersionStorePort(Protocol):
    """Read interface for stored content units."""

    def get_unit(self, unit_id: str) -> ContentUnit | None: ...

    def list_units(self) -> list[str]: ...
