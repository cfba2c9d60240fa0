"""
AuthSession - Action Coordinator

Exécute les actions d'authentification contre le fournisseur et
réconcilie le SessionStore avec leur issue.

Déroulement commun à toutes les actions:
    1. Appel du fournisseur (seul point de suspension)
    2. Succès: effet local sur le store, puis Notifier.success(action)
    3. Échec: message classifié, store.set_error, Notifier.failure(message)
       (une erreur du notifier est journalisée), puis AuthActionError levée
       vers l'appelant (cause chaînée)
"""

from typing import Awaitable, Callable, Dict, Optional

from ..core.errors import AuthSessionError
from ..logging import StructuredLogger
from ..notify.interfaces import INotifier
from ..provider.interfaces import IIdentityProvider
from .error_classifier import ErrorClassifier
from .interfaces import (
    ActionKind,
    Command,
    ErrorInfo,
    IErrorClassifier,
    ISessionStore,
    Session,
)


class AuthActionError(AuthSessionError):
    """
    Échec d'une action, déjà classifié.

    Attributes:
        error_info: ErrorInfo enregistré dans le store
        action: Action en échec
        message: Message présentable

    L'exception d'origine du fournisseur est disponible via __cause__.
    """

    def __init__(self, error_info: ErrorInfo):
        self.error_info = error_info
        self.action = error_info.action
        self.message = error_info.message
        super().__init__(error_info.message)


class ActionCoordinator:
    """
    Coordinateur des actions utilisateur.

    Aucune annulation ni timeout: un appel fournisseur lancé va jusqu'au
    bout. Deux actions concurrentes peuvent se terminer dans n'importe
    quel ordre.

    Example:
        coordinator = ActionCoordinator(provider, store, notifier)
        await coordinator.sign_in("bea@x.com", "secret-pw")
    """

    def __init__(
        self,
        provider: IIdentityProvider,
        store: ISessionStore,
        notifier: INotifier,
        classifier: Optional[IErrorClassifier] = None,
        logger: Optional[StructuredLogger] = None,
        federated_provider_id: str = "google.com",
    ):
        """
        Args:
            provider: Fournisseur d'identité
            store: Store à réconcilier
            notifier: Destinataire du retour utilisateur
            classifier: Classification des échecs (défaut: ErrorClassifier)
            logger: Logger structuré
            federated_provider_id: Fournisseur fédéré par défaut
        """
        self._provider = provider
        self._store = store
        self._notifier = notifier
        self._classifier = classifier or ErrorClassifier()
        self._logger = logger or StructuredLogger("action-coordinator")
        self._federated_provider_id = federated_provider_id
        self._handlers: Dict[ActionKind, Callable[[Command], Awaitable[None]]] = {
            ActionKind.SIGN_IN: self._run_sign_in,
            ActionKind.REGISTER: self._run_register,
            ActionKind.FEDERATED_SIGN_IN: self._run_federated_sign_in,
            ActionKind.RESET_PASSWORD: self._run_reset_password,
            ActionKind.SIGN_OUT: self._run_sign_out,
        }

    # ──────────────────────────────────────────────────────────────────────────
    # Actions
    # ──────────────────────────────────────────────────────────────────────────

    async def sign_in(self, email: str, password: str) -> None:
        await self.execute(Command(ActionKind.SIGN_IN, email=email, password=password))

    async def register(self, email: str, password: str, display_name: Optional[str] = None) -> None:
        await self.execute(
            Command(ActionKind.REGISTER, email=email, password=password, display_name=display_name)
        )

    async def federated_sign_in(self, provider_id: Optional[str] = None) -> None:
        await self.execute(Command(ActionKind.FEDERATED_SIGN_IN, provider_id=provider_id))

    async def reset_password(self, email: str) -> None:
        await self.execute(Command(ActionKind.RESET_PASSWORD, email=email))

    async def sign_out(self) -> None:
        await self.execute(Command(ActionKind.SIGN_OUT))

    def clear_error(self) -> None:
        """Efface la dernière erreur. Ne touche à rien d'autre."""
        self._store.set_error(None)

    async def execute(self, command: Command) -> None:
        """
        Exécute une commande.

        Raises:
            AuthActionError: Échec de l'appel fournisseur, après
                enregistrement et notification de l'erreur
        """
        handler = self._handlers[command.kind]
        log = self._logger.with_context(correlation_id=command.command_id, action=command.kind.value)
        log.debug("Action started", email=command.email)

        try:
            await handler(command)
        except Exception as failure:
            error_info = self._classifier.to_error_info(command.kind, failure)
            self._store.set_error(error_info)
            log.warn(
                "Action failed",
                error_type=type(failure).__name__,
                error_code=getattr(failure, "code", None),
            )
            try:
                await self._notifier.failure(error_info.message)
            except Exception as notify_error:
                # L'appelant reçoit toujours l'échec classifié
                log.error(
                    "Failure notification failed",
                    error_type=type(notify_error).__name__,
                    error_detail=str(notify_error),
                )
            raise AuthActionError(error_info) from failure

        session = self._store.read().session
        log.info("Action succeeded", uid=session.uid if session else None)
        await self._notifier.success(command.kind)

    # ──────────────────────────────────────────────────────────────────────────
    # Appels fournisseur et effets locaux
    # ──────────────────────────────────────────────────────────────────────────

    async def _run_sign_in(self, command: Command) -> None:
        user = await self._provider.sign_in_with_email_and_password(command.email, command.password)
        self._store.set_session(user)

    async def _run_register(self, command: Command) -> None:
        user: Session = await self._provider.create_user_with_email_and_password(
            command.email, command.password
        )
        # Le profil doit être à jour avant que la session ne soit publiée
        if command.display_name:
            user = await self._provider.update_profile(user, command.display_name)
        self._store.set_session(user)

    async def _run_federated_sign_in(self, command: Command) -> None:
        provider_id = command.provider_id or self._federated_provider_id
        user = await self._provider.sign_in_with_federated_provider(provider_id)
        self._store.set_session(user)

    async def _run_reset_password(self, command: Command) -> None:
        await self._provider.send_password_reset_email(command.email)

    async def _run_sign_out(self, command: Command) -> None:
        await self._provider.sign_out()
        self._store.set_session(None)
