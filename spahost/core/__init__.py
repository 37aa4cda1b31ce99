"""Core module - Settings and cross-cutting concerns"""

from .config import (
    ServerConfig,
    Settings,
    get_settings,
    load_server_config,
)

# Domain層のエラー
from ..domain.exceptions.base import (
    ConfigurationError,
    DomainError,
    ListenerError,
)

__all__ = [
    # Settings
    "Settings",
    "ServerConfig",
    "get_settings",
    "load_server_config",
    # Domain errors
    "DomainError",
    "ConfigurationError",
    "ListenerError",
]
