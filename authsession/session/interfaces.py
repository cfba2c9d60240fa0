"""
AuthSession - Session Interfaces

Types du domaine session et contrats des composants internes.
"""

import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional


class ActionKind(Enum):
    """Actions d'authentification déclenchées par l'utilisateur."""

    SIGN_IN = "sign_in"
    REGISTER = "register"
    SIGN_OUT = "sign_out"
    RESET_PASSWORD = "reset_password"
    FEDERATED_SIGN_IN = "federated_sign_in"


@dataclass(frozen=True)
class Session:
    """
    Identité authentifiée.

    Attributes:
        uid: Identifiant stable et opaque
        display_name: Nom affiché (optionnel)
        email: Adresse e-mail (optionnelle)
        metadata: Métadonnées du fournisseur, opaques pour ce package

    Immuable: toute mise à jour produit une nouvelle instance.
    """

    uid: str
    display_name: Optional[str] = None
    email: Optional[str] = None
    metadata: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        if not self.uid:
            raise ValueError("uid is required")
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    def with_display_name(self, display_name: Optional[str]) -> "Session":
        """Retourne une copie avec un autre nom affiché."""
        return replace(self, display_name=display_name)


@dataclass(frozen=True)
class ErrorInfo:
    """Dernière erreur enregistrée: action en cause et message présentable."""

    action: ActionKind
    message: str


@dataclass(frozen=True)
class SessionState:
    """
    Instantané de l'état observable.

    `loading` vaut True jusqu'au traitement de la première notification
    du fournisseur, puis False pour toute la durée du processus.
    """

    loading: bool = True
    session: Optional[Session] = None
    last_error: Optional[ErrorInfo] = None


@dataclass(frozen=True)
class Command:
    """Une invocation d'action, le temps d'un appel coordonné."""

    kind: ActionKind
    email: Optional[str] = None
    password: Optional[str] = field(default=None, repr=False)
    display_name: Optional[str] = None
    provider_id: Optional[str] = None
    command_id: str = field(default_factory=lambda: str(uuid.uuid4()))


# Observateur de l'état (couche de rendu, tests, ...)
StateObserver = Callable[[SessionState], None]

# Désabonnement retourné par subscribe()
Unsubscribe = Callable[[], None]


class ISessionStore(ABC):
    """
    Interface du store de session.

    Toutes les mutations sont last-write-wins, sans versionnement.
    """

    @abstractmethod
    def read(self) -> SessionState:
        """Dernier état validé (non bloquant)."""
        pass

    @abstractmethod
    def set_session(self, session: Optional[Session]) -> None:
        pass

    @abstractmethod
    def set_error(self, error: Optional[ErrorInfo]) -> None:
        pass

    @abstractmethod
    def set_loading(self, loading: bool) -> None:
        pass

    @abstractmethod
    def apply_notification(self, session: Optional[Session]) -> None:
        """Applique une notification du fournisseur: session et loading=False en un seul instantané."""
        pass

    @abstractmethod
    def subscribe(self, observer: StateObserver) -> Unsubscribe:
        """
        Abonne un observateur aux changements d'état.

        Returns:
            Fonction de désabonnement (idempotente)
        """
        pass


class IErrorClassifier(ABC):
    """Interface classification des échecs par type d'action."""

    @abstractmethod
    def classify(self, action: ActionKind) -> str:
        """Message fixe et présentable pour l'action."""
        pass

    @abstractmethod
    def to_error_info(self, action: ActionKind, failure: BaseException) -> ErrorInfo:
        """Construit l'ErrorInfo d'un échec. Le détail de `failure` est ignoré."""
        pass
