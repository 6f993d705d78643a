"""Pydantic-based runtime settings for the resolver service.

Loads from environment variables (prefix ``VERSIONS_``, optional .env file).
Invalid values fail fast on first access.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..domain.versions import VersionStatus


class ResolverSettings(BaseSettings):
    """All configuration for the resolver runtime, validated at startup."""

    model_config = SettingsConfigDict(
        env_prefix="VERSIONS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # --- Resolution defaults ---
    default_allowed_statuses: list[VersionStatus] = Field(
        default_factory=lambda: [VersionStatus.published],
        description="Statuses eligible when the caller does not ask for drafts",
    )
    respect_active_window: bool = Field(
        default=True,
        description="Whether active_from/active_to windows gate eligibility",
    )

    # --- Store ---
    store_path: str = Field(
        default="data/versions.json",
        validation_alias=AliasChoices("VERSIONS_STORE_PATH", "VERSIONS_FILE"),
        description="JSON file backing the in-memory version store",
    )

    # --- MCP ---
    mcp_server_name: str = Field(default="versionresolver", description="Name advertised by the MCP server")

    # --- Logging ---
    log_level: str = Field(default="INFO", description="Root log level")

    @field_validator("default_allowed_statuses")
    @classmethod
    def _non_empty(cls, v: list[VersionStatus]) -> list[VersionStatus]:
        if not v:
            raise ValueError("default_allowed_statuses must contain at least one status")
        return v

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"log_level must be a logging level name, got {v!r}")
        return level


@lru_cache(maxsize=1)
def get_settings() -> ResolverSettings:
    """Return the singleton ResolverSettings (cached after first call)."""
    return ResolverSettings()
