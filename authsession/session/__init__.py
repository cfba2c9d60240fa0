"""
AuthSession - Session

Vue unique de l'utilisateur connecté, pont vers le flux du fournisseur
et coordination des actions d'authentification.
"""

from .interfaces import (
    # Types
    ActionKind,
    Command,
    ErrorInfo,
    Session,
    SessionState,
    StateObserver,
    Unsubscribe,
    # Interfaces
    IErrorClassifier,
    ISessionStore,
)
from .session_store import SessionStore
from .error_classifier import ErrorClassifier, FAILURE_MESSAGES
from .subscription_bridge import CancelHandle, SubscriptionBridge, SubscriptionBridgeError
from .action_coordinator import ActionCoordinator, AuthActionError
from .accessor import SessionAccessor, SessionClosedError
from .provider_scope import AuthSessionProvider, SessionScopeError, use_session

__all__ = [
    # Types
    "ActionKind",
    "Command",
    "ErrorInfo",
    "Session",
    "SessionState",
    "StateObserver",
    "Unsubscribe",
    # Interfaces
    "IErrorClassifier",
    "ISessionStore",
    # Implementations
    "SessionStore",
    "ErrorClassifier",
    "FAILURE_MESSAGES",
    "CancelHandle",
    "SubscriptionBridge",
    "ActionCoordinator",
    "SessionAccessor",
    "AuthSessionProvider",
    "use_session",
    # Exceptions
    "AuthActionError",
    "SessionClosedError",
    "SessionScopeError",
    "SubscriptionBridgeError",
]
