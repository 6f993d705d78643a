"""Composition root: single place where all wiring happens.

Call ``build_resolution_service()`` to get a fully-constructed service
backed by the configured version file.
"""

from __future__ import annotations

from .adapters.memory_store import InMemoryVersionStore
from .config.runtime import ResolverSettings, get_settings
from .observability import get_logger
from .services.resolution_service import ResolutionService


def build_resolution_service(settings: ResolverSettings | None = None) -> ResolutionService:
    """Construct a ResolutionService over the JSON-backed in-memory store."""
    settings = settings or get_settings()
    return ResolutionService(
        store=InMemoryVersionStore.from_file(settings.store_path),
        settings=settings,
        logger=get_logger(),
    )
