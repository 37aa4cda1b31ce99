"""Domain layer - Path classification, ETag and configuration rules"""

from .etag import compute_etag
from .exceptions.base import ConfigurationError, DomainError, ListenerError
from .routing import (
    DEFAULT_STATIC_EXTENSIONS,
    RequestOutcome,
    RouteMode,
    build_classifier,
)

__all__ = [
    "compute_etag",
    "DomainError",
    "ConfigurationError",
    "ListenerError",
    "DEFAULT_STATIC_EXTENSIONS",
    "RequestOutcome",
    "RouteMode",
    "build_classifier",
]
