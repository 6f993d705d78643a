"""In-memory VersionStorePort, optionally loaded from a JSON file."""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path

from pydantic import ValidationError

from ..ports.version_store import ContentUnit


class StoreLoadError(ValueError):
    """Raised when a version file cannot be read or does not match the schema."""


class InMemoryVersionStore:
    """Read-only store keyed by unit id. Safe to share once built."""

    def __init__(self, units: Iterable[ContentUnit] = ()) -> None:
        self._units: dict[str, ContentUnit] = {u.unit_id: u for u in units}

    @classmethod
    def from_file(cls, path: str | Path) -> "InMemoryVersionStore":
        """Load units from a JSON list (or ``{"units": [...]}``)."""
        path = Path(path)
        try:
            with open(path, encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StoreLoadError(f"cannot read version file {path}: {e}") from e

        if isinstance(raw, dict):
            raw = raw.get("units")
        if not isinstance(raw, list):
            raise StoreLoadError(f"{path} must contain a list of content units")

        units: list[ContentUnit] = []
        for i, item in enumerate(raw):
            try:
                units.append(ContentUnit.model_validate(item))
            except ValidationError as e:
                raise StoreLoadError(f"invalid content unit at index {i}: {e}") from e
        return cls(units)

    def get_unit(self, unit_id: str) -> ContentUnit | None:
        return self._units.get(unit_id)

    def list_units(self) -> list[str]:
        return sorted(self._units)
