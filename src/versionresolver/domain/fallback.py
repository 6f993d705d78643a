"""FallbackSelector: pick a version when no context match is available."""

from __future__ import annotations

from collections.abc import Sequence

from .match_semantics import (
    MATCHED_BY_DEFAULT,
    MATCHED_BY_FALLBACK_VERSION,
    MATCHED_BY_LATEST,
    MATCHED_BY_PRIORITY,
)
from .versions import ContentVersion


def by_priority(versions: Sequence[ContentVersion]) -> list[ContentVersion]:
    """Sort by priority desc, then version number desc."""
    return sorted(versions, key=lambda v: (v.priority, v.version), reverse=True)


class FallbackSelector:
    """Walk the fallback chain: fallback version, default flag, priority."""

    def select(
        self,
        candidates: Sequence[ContentVersion],
        fallback_version_number: int | None = None,
        has_context: bool = False,
    ) -> tuple[ContentVersion, str] | None:
        """Return ``(version, matched_by)`` or None when there are no candidates."""
        if not candidates:
            return None

        if fallback_version_number is not None:
            for version in candidates:
                if version.version == fallback_version_number:
                    return version, MATCHED_BY_FALLBACK_VERSION

        for version in candidates:
            if version.is_default:
                return version, MATCHED_BY_DEFAULT

        top = by_priority(candidates)[0]
        return top, MATCHED_BY_PRIORITY if has_context else MATCHED_BY_LATEST
