"""Concrete adapters for ports."""

from .memory_store import InMemoryVersionStore, StoreLoadError

__all__ = ["InMemoryVersionStore", "StoreLoadError"]
