"""
AuthSession - Identity Provider Interfaces

Contrat du fournisseur d'identité consommé par le gestionnaire de session.
Le fournisseur vérifie les identifiants, émet les identités et pousse
les changements de session.
"""

from abc import ABC, abstractmethod
from typing import Callable, Optional

from ..session.interfaces import Session, Unsubscribe


# Callback de changement de session (None = aucune session)
AuthStateCallback = Callable[[Optional[Session]], None]


class IdentityProviderError(Exception):
    """
    Échec côté fournisseur.

    Attributes:
        code: Code fournisseur (ex: auth/wrong-password)
    """

    def __init__(self, code: str, message: Optional[str] = None):
        self.code = code
        super().__init__(message or code)


class IIdentityProvider(ABC):
    """
    Interface fournisseur d'identité.

    Toutes les opérations asynchrones peuvent lever une exception
    propre au fournisseur.
    """

    @abstractmethod
    async def sign_in_with_email_and_password(self, email: str, password: str) -> Session:
        """Vérifie les identifiants et ouvre une session."""
        pass

    @abstractmethod
    async def create_user_with_email_and_password(self, email: str, password: str) -> Session:
        """Crée un compte et ouvre une session sur celui-ci."""
        pass

    @abstractmethod
    async def update_profile(self, user: Session, display_name: Optional[str]) -> Session:
        """
        Met à jour le profil d'une identité.

        Returns:
            Nouvelle Session reflétant le profil mis à jour
        """
        pass

    @abstractmethod
    async def sign_in_with_federated_provider(self, provider_id: str) -> Session:
        """Déroule le flux de connexion fédérée (ex: google.com)."""
        pass

    @abstractmethod
    async def send_password_reset_email(self, email: str) -> None:
        pass

    @abstractmethod
    async def sign_out(self) -> None:
        pass

    @abstractmethod
    def on_auth_state_changed(self, callback: AuthStateCallback) -> Unsubscribe:
        """
        Abonne `callback` au flux de changements de session.

        Le fournisseur livre la session courante une première fois peu
        après l'abonnement, puis à chaque changement.

        Returns:
            Fonction de désabonnement
        """
        pass
