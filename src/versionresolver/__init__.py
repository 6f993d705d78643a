"""Targeting-aware content version resolution."""

from .domain import (
    ContentVersion,
    Resolution,
    TargetingTags,
    VersionResolver,
    VersionStatus,
    normalize_tags,
    resolve_version,
)

__version__ = "0.1.0"
__all__ = [
    "ContentVersion",
    "Resolution",
    "TargetingTags",
    "VersionResolver",
    "VersionStatus",
    "normalize_tags",
    "resolve_version",
]
