"""
AuthSession

Gestionnaire de session d'authentification côté client.
"""

from .core import AuthSessionConfig, AuthSessionError, ConfigError, ConfigLoader
from .session import (
    ActionKind,
    AuthActionError,
    AuthSessionProvider,
    ErrorInfo,
    Session,
    SessionAccessor,
    SessionClosedError,
    SessionScopeError,
    SessionState,
    use_session,
)
from .notify import INotifier, LoggingNotifier, RecordingNotifier
from .provider import IdentityProviderError, IIdentityProvider, InMemoryIdentityProvider

__version__ = "0.1.0"

__all__ = [
    "AuthSessionConfig",
    "AuthSessionError",
    "ConfigError",
    "ConfigLoader",
    "INotifier",
    "LoggingNotifier",
    "RecordingNotifier",
    "IdentityProviderError",
    "IIdentityProvider",
    "InMemoryIdentityProvider",
    "ActionKind",
    "AuthActionError",
    "AuthSessionProvider",
    "ErrorInfo",
    "Session",
    "SessionAccessor",
    "SessionClosedError",
    "SessionScopeError",
    "SessionState",
    "use_session",
]
