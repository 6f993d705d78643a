"""ResolutionService: loads a content unit and resolves the version to render."""

from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Any

from ..config.runtime import ResolverSettings
from ..domain.context import context_has_data, tags_cache_key
from ..domain.eligibility import EligibilityFilter
from ..domain.resolver import Resolution, VersionResolver
from ..domain.scoring import MatchScorer, version_tags
from ..domain.tags import TargetingTags
from ..domain.versions import ContentVersion, VersionStatus, normalize_dt
from ..models.requests import ResolveRequest
from ..models.responses import ExplainResponse, ResolveResponse, VersionAudit
from ..observability import log_resolution
from ..ports.version_store import ContentUnit, VersionStorePort


class UnitNotFoundError(LookupError):
    """Raised by strict lookups when the content unit does not exist."""

    def __init__(self, unit_id: str) -> None:
        super().__init__(f"content unit not found: {unit_id!r}")
        self.unit_id = unit_id


def build_response(unit_id: str, resolution: Resolution) -> ResolveResponse:
    """Shape a resolution for the renderer; a legacy tag is surfaced as the campaign."""
    version = resolution.version
    tags = version_tags(version)
    return ResolveResponse(
        unit_id=unit_id,
        matched_by=resolution.matched_by,
        version=version.version,
        status=version.status,
        tags=tags.to_payload() if tags else None,
        priority=version.priority,
        is_default=version.is_default,
        active_from=version.active_from,
        active_to=version.active_to,
        payload=dict(version.payload),
        window_relaxed=resolution.window_relaxed,
    )


class ResolutionService:
    """Orchestrates store lookup, context extraction and version resolution."""

    def __init__(
        self,
        store: VersionStorePort,
        settings: ResolverSettings | None = None,
        resolver: VersionResolver | None = None,
        eligibility: EligibilityFilter | None = None,
        scorer: MatchScorer | None = None,
        logger: Any = None,
    ) -> None:
        self._store = store
        self._settings = settings or ResolverSettings()
        self._eligibility = eligibility or EligibilityFilter()
        self._scorer = scorer or MatchScorer()
        self._resolver = resolver or VersionResolver(
            eligibility=self._eligibility, scorer=self._scorer
        )
        self._logger = logger

    def get_unit(self, unit_id: str) -> ContentUnit:
        unit = self._store.get_unit(unit_id)
        if unit is None:
            raise UnitNotFoundError(unit_id)
        return unit

    def list_versions(self, unit_id: str, status: VersionStatus | str | None = None) -> list[ContentVersion]:
        """Versions of a unit, newest first, optionally filtered by status."""
        unit = self.get_unit(unit_id)
        versions = unit.versions
        if status is not None:
            versions = self._eligibility.by_status(versions, [status])
        return sorted(versions, key=lambda v: v.version, reverse=True)

    def resolve(self, request: ResolveRequest) -> ResolveResponse | None:
        """Return the version to render, or None when nothing applies."""
        t0 = time.monotonic()
        if self._logger:
            self._logger.debug("resolve_start", extra={"unit_id": request.unit_id})

        unit = self._store.get_unit(request.unit_id)
        context = request.to_context()
        resolution = self._resolve_unit(unit, request, context) if unit is not None else None
        context_fields = {"context_key": tags_cache_key(context), "has_context": context_has_data(context)}

        latency_ms = (time.monotonic() - t0) * 1000
        if resolution is None:
            log_resolution(
                request.unit_id,
                latency_ms,
                extra={"unit_found": unit is not None, **context_fields},
            )
            return None

        log_resolution(
            request.unit_id,
            latency_ms,
            version=resolution.version.version,
            matched_by=resolution.matched_by,
            window_relaxed=resolution.window_relaxed,
            extra=context_fields,
        )
        return build_response(unit.unit_id, resolution)

    def explain(self, request: ResolveRequest) -> ExplainResponse:
        """Resolve and report, per stored version, eligibility and score."""
        unit = self.get_unit(request.unit_id)
        context = request.to_context()
        allowed = request.allowed_statuses(self._settings.default_allowed_statuses)
        now = self._now(request)
        respect = self._respect_window(request)

        audits: list[VersionAudit] = []
        for version in sorted(unit.versions, key=lambda v: v.version, reverse=True):
            result = self._scorer.score(version, context)
            audits.append(
                VersionAudit(
                    version=version.version,
                    status=version.status,
                    eligibility=self._eligibility.reason(version, allowed, now, respect_window=respect),
                    matched=result.matched,
                    score=result.score,
                    matched_by=result.matched_by,
                )
            )

        resolution = self._resolve_unit(unit, request, context)
        return ExplainResponse(
            unit_id=unit.unit_id,
            context=context.to_payload() if context else None,
            resolved=build_response(unit.unit_id, resolution) if resolution else None,
            audits=audits,
        )

    def _resolve_unit(
        self, unit: ContentUnit, request: ResolveRequest, context: TargetingTags | None
    ) -> Resolution | None:
        return self._resolver.resolve(
            unit.versions,
            context,
            fallback_version_number=unit.fallback_version_number,
            allowed_statuses=request.allowed_statuses(self._settings.default_allowed_statuses),
            respect_active_window=self._respect_window(request),
            now=self._now(request),
        )

    def _respect_window(self, request: ResolveRequest) -> bool:
        if request.respect_active_window is None:
            return self._settings.respect_active_window
        return request.respect_active_window

    @staticmethod
    def _now(request: ResolveRequest) -> datetime:
        return normalize_dt(request.now or datetime.now(timezone.utc))
