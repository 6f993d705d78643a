"""Ports (interfaces) for external collaborators."""

from .version_store import ContentUnit, VersionStorePort

__all__ = ["ContentUnit", "VersionStorePort"]
