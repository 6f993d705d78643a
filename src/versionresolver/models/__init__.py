"""Domain and request/response models."""

from ..domain.tags import TargetingTags
from ..domain.versions import ContentVersion, VersionStatus
from ..ports.version_store import ContentUnit
from .requests import ResolveRequest
from .responses import ExplainResponse, ResolveResponse, VersionAudit

__all__ = [
    # Domain
    "ContentUnit",
    "ContentVersion",
    "TargetingTags",
    "VersionStatus",
    # Requests
    "ResolveRequest",
    # Responses
    "ExplainResponse",
    "ResolveResponse",
    "VersionAudit",
]
