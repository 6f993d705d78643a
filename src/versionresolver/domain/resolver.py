"""VersionResolver: sequences eligibility, scoring and fallback into one decision."""

from __future__ import annotations

from collections.abc import Collection, Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from .eligibility import EligibilityFilter
from .fallback import FallbackSelector
from .match_semantics import LABEL_CONTEXT
from .scoring import MatchScorer
from .tags import TargetingTags, normalize_tags
from .versions import ContentVersion, VersionStatus, normalize_dt


@dataclass(frozen=True)
class Resolution:
    """The selected version and why it was chosen."""

    version: ContentVersion
    matched_by: str
    window_relaxed: bool = False


class VersionResolver:
    """Select exactly one version for a context, or None.

    Stateless; a single instance may be shared across threads.
    """

    def __init__(
        self,
        eligibility: EligibilityFilter | None = None,
        scorer: MatchScorer | None = None,
        fallback: FallbackSelector | None = None,
    ) -> None:
        self._eligibility = eligibility or EligibilityFilter()
        self._scorer = scorer or MatchScorer()
        self._fallback = fallback or FallbackSelector()

    def resolve(
        self,
        versions: Sequence[ContentVersion],
        context: TargetingTags | Mapping[str, Any] | None = None,
        *,
        fallback_version_number: int | None = None,
        allowed_statuses: Collection[VersionStatus | str] | None = None,
        respect_active_window: bool = True,
        now: datetime | None = None,
    ) -> Resolution | None:
        if not versions:
            return None

        eligible = self._eligibility.by_status(versions, allowed_statuses)
        if not eligible:
            return None

        tags = normalize_tags(context)
        now = normalize_dt(now or datetime.now(timezone.utc))

        # Second pass only runs after the first one relaxed the window and still
        # found nothing; it never relaxes again, so at most two passes happen.
        phases = (True, False) if respect_active_window else (False,)
        for respect_window in phases:
            pool, relaxed = self._eligibility.window_pool(eligible, now, respect_window)
            picked = self._pick(pool, tags, fallback_version_number)
            if picked is not None:
                version, matched_by = picked
                return Resolution(version=version, matched_by=matched_by, window_relaxed=relaxed)
            if not relaxed:
                break
        return None

    def _pick(
        self,
        pool: Sequence[ContentVersion],
        tags: TargetingTags | None,
        fallback_version_number: int | None,
    ) -> tuple[ContentVersion, str] | None:
        if tags is not None:
            scored = [(v, self._scorer.score(v, tags)) for v in pool]
            matches = [(v, r) for v, r in scored if r.matched]
            if matches:
                matches.sort(key=lambda item: (item[1].score, item[0].priority, item[0].version), reverse=True)
                top, result = matches[0]
                return top, result.matched_by or LABEL_CONTEXT
        return self._fallback.select(pool, fallback_version_number, has_context=tags is not None)


_DEFAULT_RESOLVER = VersionResolver()


def resolve_version(
    versions: Sequence[ContentVersion],
    context: TargetingTags | Mapping[str, Any] | None = None,
    *,
    fallback_version_number: int | None = None,
    allowed_statuses: Collection[VersionStatus | str] | None = None,
    respect_active_window: bool = True,
    now: datetime | None = None,
) -> Resolution | None:
    """Resolve with the shared default resolver."""
    return _DEFAULT_RESOLVER.resolve(
        versions,
        context,
        fallback_version_number=fallback_version_number,
        allowed_statuses=allowed_statuses,
        respect_active_window=respect_active_window,
        now=now,
    )
