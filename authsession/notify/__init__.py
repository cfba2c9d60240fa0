"""
AuthSession - Notify

Retour utilisateur sur le succès ou l'échec des actions.
"""

from .interfaces import (
    DEFAULT_SUCCESS_MESSAGES,
    INotifier,
    Notification,
    NotificationKind,
)
from .notifiers import (
    CompositeNotifier,
    LoggingNotifier,
    RecordingNotifier,
    resolve_success_messages,
)

__all__ = [
    "DEFAULT_SUCCESS_MESSAGES",
    "INotifier",
    "Notification",
    "NotificationKind",
    "CompositeNotifier",
    "LoggingNotifier",
    "RecordingNotifier",
    "resolve_success_messages",
]
