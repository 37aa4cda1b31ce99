from .base import ConfigurationError, DomainError, ListenerError

__all__ = [
    "DomainError",
    "ConfigurationError",
    "ListenerError",
]
