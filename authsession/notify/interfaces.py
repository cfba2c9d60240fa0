"""
AuthSession - Notifier Interfaces

Retour visible par l'utilisateur (toast, bannière, ...) sur l'issue
des actions. Le gestionnaire de session appelle le Notifier sans rien
supposer de son implémentation.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Dict, Optional

from ..session.interfaces import ActionKind


DEFAULT_SUCCESS_MESSAGES: Dict[ActionKind, str] = {
    ActionKind.SIGN_IN: "Successfully logged in!",
    ActionKind.REGISTER: "Account created successfully!",
    ActionKind.FEDERATED_SIGN_IN: "Successfully signed in with Google!",
    ActionKind.RESET_PASSWORD: "Password reset email sent!",
    ActionKind.SIGN_OUT: "Successfully logged out!",
}


class NotificationKind(Enum):
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass(frozen=True)
class Notification:
    """Notification émise vers l'utilisateur."""

    kind: NotificationKind
    message: str
    created_at: datetime
    action: Optional[ActionKind] = None


class INotifier(ABC):
    """Interface du Notifier."""

    @abstractmethod
    async def success(self, action: ActionKind) -> None:
        """Signale le succès d'une action."""
        pass

    @abstractmethod
    async def failure(self, message: str) -> None:
        """Signale un échec avec son message présentable."""
        pass
