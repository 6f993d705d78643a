"""Domain layer for version resolution."""

from .context import (
    build_context_from_params,
    context_has_data,
    device_from_user_agent,
    merge_contexts,
    tags_cache_key,
)
from .eligibility import DEFAULT_ALLOWED_STATUSES, EligibilityFilter, filter_eligible
from .fallback import FallbackSelector
from .resolver import Resolution, VersionResolver, resolve_version
from .scoring import MatchResult, MatchScorer, version_tags
from .tags import TargetingTags, normalize_attributes, normalize_tags, normalize_value
from .versions import ContentVersion, VersionStatus

__all__ = [
    "ContentVersion",
    "DEFAULT_ALLOWED_STATUSES",
    "EligibilityFilter",
    "FallbackSelector",
    "MatchResult",
    "MatchScorer",
    "Resolution",
    "TargetingTags",
    "VersionResolver",
    "VersionStatus",
    "build_context_from_params",
    "context_has_data",
    "device_from_user_agent",
    "filter_eligible",
    "merge_contexts",
    "normalize_attributes",
    "normalize_tags",
    "normalize_value",
    "resolve_version",
    "tags_cache_key",
    "version_tags",
]
