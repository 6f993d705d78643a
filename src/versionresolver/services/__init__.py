"""Application services."""

from .resolution_service import ResolutionService, UnitNotFoundError, build_response

__all__ = ["ResolutionService", "UnitNotFoundError", "build_response"]
