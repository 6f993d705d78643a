"""EligibilityFilter: status and active-window gating."""

from __future__ import annotations

from collections.abc import Collection, Iterable
from datetime import datetime

from .versions import ContentVersion, VersionStatus

DEFAULT_ALLOWED_STATUSES: frozenset[VersionStatus] = frozenset({VersionStatus.published})


def _as_statuses(allowed: Iterable[VersionStatus | str] | None) -> frozenset[VersionStatus]:
    if allowed is None:
        return DEFAULT_ALLOWED_STATUSES
    return frozenset(VersionStatus(s) for s in allowed)


class EligibilityFilter:
    """Narrow a candidate list to allowed statuses and, optionally, active windows."""

    def by_status(
        self,
        versions: Iterable[ContentVersion],
        allowed_statuses: Collection[VersionStatus | str] | None = None,
    ) -> list[ContentVersion]:
        statuses = _as_statuses(allowed_statuses)
        return [v for v in versions if v.status in statuses]

    def by_window(self, versions: Iterable[ContentVersion], now: datetime) -> list[ContentVersion]:
        """Strict window filter, no relaxation."""
        return [v for v in versions if v.is_active(now)]

    def window_pool(
        self,
        eligible: list[ContentVersion],
        now: datetime,
        respect_window: bool = True,
    ) -> tuple[list[ContentVersion], bool]:
        """Apply the window to status-eligible versions.

        Returns ``(pool, relaxed)``; ``relaxed`` is True when every version was
        outside its window and the unfiltered list was kept instead.
        """
        if not eligible or not respect_window:
            return eligible, False
        active = self.by_window(eligible, now)
        if active:
            return active, False
        return eligible, True

    def apply(
        self,
        versions: Iterable[ContentVersion],
        allowed_statuses: Collection[VersionStatus | str] | None,
        now: datetime,
        respect_window: bool = True,
    ) -> list[ContentVersion]:
        """Return eligible versions.

        When every status-eligible version is outside its window the
        status-filtered list is returned instead of an empty one.
        """
        pool, _ = self.window_pool(self.by_status(versions, allowed_statuses), now, respect_window)
        return pool

    def reason(
        self,
        version: ContentVersion,
        allowed_statuses: Collection[VersionStatus | str] | None,
        now: datetime,
        respect_window: bool = True,
    ) -> str:
        """Return audit reason for this version: 'allowed' or 'denied: <reason>'."""
        if version.status not in _as_statuses(allowed_statuses):
            return "denied: status"
        if respect_window and not version.is_active(now):
            return "denied: window_inactive"
        return "allowed"


def filter_eligible(
    versions: Iterable[ContentVersion],
    allowed_statuses: Collection[VersionStatus | str] | None,
    now: datetime,
    respect_window: bool = True,
) -> list[ContentVersion]:
    return EligibilityFilter().apply(versions, allowed_statuses, now, respect_window)
