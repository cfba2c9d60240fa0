"""
AuthSession - Core

Configuration et erreurs de base.
"""

from .errors import AuthSessionError, ConfigError
from .interfaces import AuthSessionConfig, IConfigLoader, LOG_LEVEL_NAMES
from .config_loader import ConfigLoader

__all__ = [
    # Types
    "AuthSessionConfig",
    "LOG_LEVEL_NAMES",
    # Interfaces
    "IConfigLoader",
    # Implementations
    "ConfigLoader",
    # Exceptions
    "AuthSessionError",
    "ConfigError",
]
