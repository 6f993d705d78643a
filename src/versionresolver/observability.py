"""Observability: structured logs (unit, matched_by, latency_ms) and an in-process metrics stub."""

from __future__ import annotations

import logging
from typing import Any

_LOGGER = logging.getLogger("versionresolver")

# Metrics stub: resolutions[matched_by] = count, tool_calls[name] = count, errors[name] = count
METRICS: dict[str, dict[str, int]] = {"resolutions": {}, "tool_calls": {}, "errors": {}}


def get_logger() -> logging.Logger:
    return _LOGGER


def configure_logging(level: str = "INFO") -> None:
    """Attach a stderr handler to the package logger (idempotent)."""
    _LOGGER.setLevel(level.upper())
    if not _LOGGER.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
        _LOGGER.addHandler(handler)


def _bump(bucket: str, key: str) -> None:
    METRICS[bucket][key] = METRICS[bucket].get(key, 0) + 1


def log_resolution(
    unit_id: str,
    latency_ms: float,
    version: int | None = None,
    matched_by: str | None = None,
    window_relaxed: bool = False,
    extra: dict[str, Any] | None = None,
) -> None:
    """Emit a structured resolution log and count the outcome."""
    payload: dict[str, Any] = {
        "unit_id": unit_id,
        "version": version,
        "matched_by": matched_by,
        "window_relaxed": window_relaxed,
        "latency_ms": round(latency_ms, 2),
    }
    if extra:
        payload.update(extra)
    if version is None:
        _LOGGER.info("version_unresolved", extra=payload)
        _bump("resolutions", "none")
    else:
        _LOGGER.info("version_resolved", extra=payload)
        _bump("resolutions", matched_by or "unknown")


def log_tool_invocation(
    tool: str,
    latency_ms: float,
    error: str | None = None,
    extra: dict[str, Any] | None = None,
) -> None:
    """Emit structured log for an MCP tool call and update metrics stub."""
    payload: dict[str, Any] = {"tool": tool, "latency_ms": round(latency_ms, 2)}
    if error:
        payload["error"] = error
    if extra:
        payload.update(extra)
    _LOGGER.info("tool_invocation", extra=payload)
    _bump("tool_calls", tool)
    if error:
        _bump("errors", tool)


def metrics_snapshot() -> dict[str, dict[str, int]]:
    """Return current metrics."""
    return {k: dict(v) for k, v in METRICS.items()}
