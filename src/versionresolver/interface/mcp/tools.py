"""Tool registry for the MCP server.

Strict JSON schemas via Pydantic; response allowlists (field-level).
"""

from __future__ import annotations

import json
import time
from collections.abc import Callable
from typing import Any

from pydantic import ValidationError

from ...models.requests import ResolveRequest
from ...observability import log_tool_invocation, metrics_snapshot
from ...services.resolution_service import ResolutionService, UnitNotFoundError

# ---------------------------------------------------------------------------
# Response allowlists (field-level)
# ---------------------------------------------------------------------------
ALLOWED_RESOLVE_KEYS = frozenset({
    "unit_id",
    "matched_by",
    "version",
    "status",
    "tags",
    "priority",
    "is_default",
    "active_from",
    "active_to",
    "payload",
    "window_relaxed",
})
ALLOWED_VERSION_SUMMARY_KEYS = frozenset({
    "version",
    "status",
    "priority",
    "is_default",
    "active_from",
    "active_to",
    "tag",
    "tags",
})

ALLOWED_TOOLS = frozenset({
    "versions_resolve",
    "versions_explain",
    "versions_list",
    "versions_metrics",
})


def _shape(d: dict, allowed: frozenset[str]) -> dict:
    return {k: d[k] for k in allowed if k in d}


def _error(message: str, **extra: Any) -> str:
    return json.dumps({"success": False, "error": message, **extra}, default=str)


def register_tools(mcp, get_service: Callable[[], ResolutionService]) -> None:
    """Register resolver tools; ``get_service`` is called per invocation."""

    @mcp.tool()
    def versions_resolve(
        unit_id: str,
        campaign: str | None = None,
        segment: str | None = None,
        tag: str | None = None,
        address_state: str | None = None,
        region: str | None = None,
        language: str | None = None,
        device: str | None = None,
        attributes: dict[str, str] | None = None,
        preview: bool = False,
        now: str | None = None,
    ) -> str:
        """Resolve which version of a content unit to render for a visitor context.

        Args:
            unit_id: Page slug or template id
            campaign: Campaign identifier from the visitor context
            segment: Audience segment identifier
            tag: Legacy campaign alias
            address_state: Visitor region code (matched against version addressStates)
            region: Region attribute
            language: Language attribute
            device: Device attribute
            attributes: Additional string attributes
            preview: Include draft versions
            now: ISO instant to resolve at (defaults to the current time)

        Returns:
            JSON {"success": true, "data": {...}} or {"success": false, "error": ...}
        """
        t0 = time.monotonic()
        try:
            request = ResolveRequest(
                unit_id=unit_id,
                campaign=campaign,
                segment=segment,
                tag=tag,
                address_state=address_state,
                region=region,
                language=language,
                device=device,
                attributes=attributes,
                preview=preview,
                now=now,
            )
        except ValidationError as e:
            log_tool_invocation("versions_resolve", (time.monotonic() - t0) * 1000, error="invalid_request")
            return _error("invalid request", details=e.errors(include_url=False, include_input=False))

        response = get_service().resolve(request)
        latency_ms = (time.monotonic() - t0) * 1000
        if response is None:
            log_tool_invocation("versions_resolve", latency_ms, extra={"unit_id": unit_id, "resolved": False})
            return _error("Page or version not found", unit_id=unit_id)

        log_tool_invocation(
            "versions_resolve",
            latency_ms,
            extra={"unit_id": unit_id, "resolved": True, "matched_by": response.matched_by},
        )
        data = _shape(response.model_dump(mode="json"), ALLOWED_RESOLVE_KEYS)
        return json.dumps({"success": True, "data": data}, indent=2)

    @mcp.tool()
    def versions_explain(
        unit_id: str,
        campaign: str | None = None,
        segment: str | None = None,
        address_state: str | None = None,
        attributes: dict[str, str] | None = None,
        preview: bool = False,
        now: str | None = None,
    ) -> str:
        """Explain how every version of a unit scores against a context and which one wins.

        Returns:
            JSON with context, resolved version (or null) and per-version audits
        """
        t0 = time.monotonic()
        try:
            request = ResolveRequest(
                unit_id=unit_id,
                campaign=campaign,
                segment=segment,
                address_state=address_state,
                attributes=attributes,
                preview=preview,
                now=now,
            )
            explained = get_service().explain(request)
        except ValidationError as e:
            log_tool_invocation("versions_explain", (time.monotonic() - t0) * 1000, error="invalid_request")
            return _error("invalid request", details=e.errors(include_url=False, include_input=False))
        except UnitNotFoundError as e:
            log_tool_invocation("versions_explain", (time.monotonic() - t0) * 1000, error="not_found")
            return _error(str(e), unit_id=unit_id)

        log_tool_invocation("versions_explain", (time.monotonic() - t0) * 1000, extra={"unit_id": unit_id})
        return json.dumps({"success": True, "data": explained.model_dump(mode="json")}, indent=2)

    @mcp.tool()
    def versions_list(unit_id: str, status: str | None = None) -> str:
        """List stored versions of a unit, newest first.

        Args:
            unit_id: Page slug or template id
            status: Optional status filter ('draft' or 'published')
        """
        t0 = time.monotonic()
        try:
            versions = get_service().list_versions(unit_id, status)
        except UnitNotFoundError as e:
            log_tool_invocation("versions_list", (time.monotonic() - t0) * 1000, error="not_found")
            return _error(str(e), unit_id=unit_id)
        except ValueError:
            log_tool_invocation("versions_list", (time.monotonic() - t0) * 1000, error="invalid_status")
            return _error(f"unknown status {status!r}", unit_id=unit_id)

        log_tool_invocation("versions_list", (time.monotonic() - t0) * 1000, extra={"count": len(versions)})
        data = [_shape(v.model_dump(mode="json"), ALLOWED_VERSION_SUMMARY_KEYS) for v in versions]
        return json.dumps({"success": True, "data": data}, indent=2)

    @mcp.tool()
    def versions_metrics() -> str:
        """Return in-process resolution and tool-call counters."""
        return json.dumps(metrics_snapshot(), indent=2)
