"""Response DTOs for the resolve/explain surfaces."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from ..domain.versions import VersionStatus


class ResolveResponse(BaseModel):
    """The resolved version, shaped for the renderer."""

    unit_id: str = Field(..., description="Content unit identifier")
    matched_by: str = Field(..., description="Why this version was chosen (diagnostic only)")
    version: int = Field(..., description="Selected version number")
    status: VersionStatus = Field(..., description="Lifecycle status of the selected version")
    tags: dict[str, Any] | None = Field(default=None, description="Targeting tags of the selected version")
    priority: int = Field(default=0, description="Priority of the selected version")
    is_default: bool = Field(default=False, description="Whether the selected version is the default")
    active_from: datetime | None = Field(default=None, description="Window start")
    active_to: datetime | None = Field(default=None, description="Window end")
    payload: dict[str, Any] = Field(default_factory=dict, description="Opaque content for the renderer")
    window_relaxed: bool = Field(
        default=False,
        description="True when no version was active and windows were ignored",
    )


class VersionAudit(BaseModel):
    """Per-version audit entry for explain."""

    version: int
    status: VersionStatus
    eligibility: str = Field(..., description="'allowed' or 'denied: <reason>'")
    matched: bool
    score: int
    matched_by: str | None = None


class ExplainResponse(BaseModel):
    """Resolution plus how every stored version fared."""

    unit_id: str
    context: dict[str, Any] | None = None
    resolved: ResolveResponse | None = None
    audits: list[VersionAudit] = Field(default_factory=list)
