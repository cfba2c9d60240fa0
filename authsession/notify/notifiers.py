"""
AuthSession - Notifiers

Implémentations du Notifier: journalisation, enregistrement, diffusion.
"""

from datetime import datetime, timezone
from typing import Dict, List, Mapping, Optional

from ..logging import IStructuredLogger
from ..session.interfaces import ActionKind
from .interfaces import DEFAULT_SUCCESS_MESSAGES, INotifier, Notification, NotificationKind


def resolve_success_messages(overrides: Optional[Mapping[str, str]] = None) -> Dict[ActionKind, str]:
    """
    Fusionne les messages par défaut et les surcharges de configuration.

    Args:
        overrides: Messages indexés par valeur d'ActionKind (ex: "sign_in")

    Raises:
        ValueError: Si une clé ne correspond à aucune action
    """
    messages = dict(DEFAULT_SUCCESS_MESSAGES)
    for key, message in (overrides or {}).items():
        try:
            action = ActionKind(key)
        except ValueError:
            raise ValueError(f"Unknown action in success_messages: {key}")
        messages[action] = message
    return messages


class RecordingNotifier(INotifier):
    """
    Conserve les notifications dans l'ordre d'émission.

    Utile pour les tests et les hôtes sans interface graphique.
    """

    def __init__(self, success_messages: Optional[Dict[ActionKind, str]] = None):
        self._messages = success_messages or dict(DEFAULT_SUCCESS_MESSAGES)
        self.notifications: List[Notification] = []

    async def success(self, action: ActionKind) -> None:
        self.notifications.append(
            Notification(
                kind=NotificationKind.SUCCESS,
                message=self._messages[action],
                created_at=datetime.now(timezone.utc),
                action=action,
            )
        )

    async def failure(self, message: str) -> None:
        self.notifications.append(
            Notification(
                kind=NotificationKind.FAILURE,
                message=message,
                created_at=datetime.now(timezone.utc),
            )
        )

    @property
    def successes(self) -> List[Notification]:
        return [n for n in self.notifications if n.kind == NotificationKind.SUCCESS]

    @property
    def failures(self) -> List[Notification]:
        return [n for n in self.notifications if n.kind == NotificationKind.FAILURE]

    def clear(self) -> None:
        self.notifications.clear()


class LoggingNotifier(INotifier):
    """Écrit les notifications dans le logger structuré (INFO / ERROR)."""

    def __init__(self, logger: IStructuredLogger, success_messages: Optional[Dict[ActionKind, str]] = None):
        self._logger = logger
        self._messages = success_messages or dict(DEFAULT_SUCCESS_MESSAGES)

    async def success(self, action: ActionKind) -> None:
        self._logger.info(self._messages[action], action=action.value, notification="success")

    async def failure(self, message: str) -> None:
        self._logger.error(message, notification="failure")


class CompositeNotifier(INotifier):
    """Diffuse chaque notification à plusieurs notifiers, dans l'ordre."""

    def __init__(self, *notifiers: INotifier):
        self._notifiers = list(notifiers)

    def add(self, notifier: INotifier) -> None:
        self._notifiers.append(notifier)

    async def success(self, action: ActionKind) -> None:
        for notifier in self._notifiers:
            await notifier.success(action)

    async def failure(self, message: str) -> None:
        for notifier in self._notifiers:
            await notifier.failure(message)
