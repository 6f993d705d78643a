"""Content version domain model."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from .tags import TargetingTags


class VersionStatus(str, Enum):
    """Lifecycle status of a version."""

    draft = "draft"
    published = "published"


def normalize_dt(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_instant(value: Any) -> datetime | None:
    """Parse a datetime or ISO string; unparseable values are treated as absent."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return normalize_dt(value)
    if isinstance(value, str):
        try:
            # fromisoformat() only accepts a trailing "Z" on 3.11+
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
        return normalize_dt(parsed)
    return None


class ContentVersion(BaseModel):
    """One candidate variant of a content unit."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    version: int = Field(..., description="Version number, unique within a content unit")
    status: VersionStatus = Field(default=VersionStatus.draft, description="Lifecycle status")
    priority: int = Field(default=0, description="Ranking weight; higher wins ties")
    is_default: bool = Field(
        default=False,
        validation_alias=AliasChoices("is_default", "isDefault"),
        description="Whether this version is the unit's default",
    )
    active_from: datetime | None = Field(
        default=None,
        validation_alias=AliasChoices("active_from", "activeFrom"),
        description="UTC instant from which the version is eligible",
    )
    active_to: datetime | None = Field(
        default=None,
        validation_alias=AliasChoices("active_to", "activeTo"),
        description="UTC instant until which the version is eligible",
    )
    tag: str | None = Field(default=None, description="Legacy single-string campaign tag")
    tags: TargetingTags | None = Field(default=None, description="Structured targeting tags")
    is_current_published: bool = Field(
        default=False,
        validation_alias=AliasChoices("is_current_published", "isCurrentPublished"),
        description="Marks the currently published version of a home template",
    )
    payload: dict[str, Any] = Field(
        default_factory=dict,
        description="Opaque content handed to the renderer (blocks, seo, ...)",
    )

    @field_validator("active_from", "active_to", mode="before")
    @classmethod
    def _tolerant_instant(cls, value: Any) -> datetime | None:
        return parse_instant(value)

    @field_validator("priority", mode="before")
    @classmethod
    def _default_priority(cls, value: Any) -> Any:
        return 0 if value is None else value

    @field_validator("is_default", "is_current_published", mode="before")
    @classmethod
    def _truthy(cls, value: Any) -> bool:
        return bool(value)

    @field_validator("tag", mode="before")
    @classmethod
    def _string_tag(cls, value: Any) -> str | None:
        return value if isinstance(value, str) else None

    @field_validator("tags", mode="before")
    @classmethod
    def _mapping_tags(cls, value: Any) -> Any:
        if value is None or isinstance(value, (TargetingTags, dict)):
            return value
        return None

    def is_active(self, now: datetime) -> bool:
        """Return True if ``now`` falls inside the version's active window."""
        now = normalize_dt(now)
        if self.active_from and now < self.active_from:
            return False
        if self.active_to and now > self.active_to:
            return False
        return True
