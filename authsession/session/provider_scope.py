"""
AuthSession - Provider Scope

Portée de vie du gestionnaire de session. L'accesseur n'est obtenable
(via use_session) qu'à l'intérieur d'une portée AuthSessionProvider active.
"""

from contextvars import ContextVar, Token
from pathlib import Path
from typing import Optional, Union

from ..core.config_loader import ConfigLoader
from ..core.errors import AuthSessionError
from ..core.interfaces import AuthSessionConfig
from ..logging import LogConfig, LogLevel, StructuredLogger
from ..notify.interfaces import INotifier
from ..notify.notifiers import LoggingNotifier, resolve_success_messages
from ..provider.interfaces import IIdentityProvider
from .accessor import SessionAccessor
from .action_coordinator import ActionCoordinator
from .error_classifier import ErrorClassifier
from .session_store import SessionStore
from .subscription_bridge import CancelHandle, SubscriptionBridge


# Accesseur de la portée active la plus interne
current_accessor_var: ContextVar[Optional[SessionAccessor]] = ContextVar(
    "authsession_current_accessor", default=None
)


class SessionScopeError(AuthSessionError):
    """Accesseur demandé hors d'une portée AuthSessionProvider (erreur de programmation)."""

    def __init__(self, message: str = "use_session must be used within an AuthSessionProvider"):
        super().__init__(message)


def use_session() -> SessionAccessor:
    """
    Retourne l'accesseur de la portée active.

    Raises:
        SessionScopeError: Hors de toute portée active
    """
    accessor = current_accessor_var.get()
    if accessor is None:
        raise SessionScopeError()
    return accessor


class AuthSessionProvider:
    """
    Portée de vie du gestionnaire de session.

    À l'entrée: construit store, bridge, coordinateur et accesseur, ouvre
    l'abonnement au fournisseur et lie l'accesseur à la portée. À la
    sortie: ferme l'abonnement et restaure la liaison précédente. Les
    portées peuvent s'imbriquer.

    Example:
        async with AuthSessionProvider(provider) as session:
            await session.wait_until_ready()
            await use_session().login("bea@x.com", "secret-pw")
    """

    def __init__(
        self,
        provider: IIdentityProvider,
        notifier: Optional[INotifier] = None,
        config: Optional[AuthSessionConfig] = None,
        logger: Optional[StructuredLogger] = None,
    ):
        """
        Args:
            provider: Fournisseur d'identité
            notifier: Notifier (défaut: LoggingNotifier)
            config: Configuration (défaut: AuthSessionConfig())
            logger: Logger racine (défaut: construit depuis config)
        """
        self._provider = provider
        self._config = config or AuthSessionConfig()
        self._logger = logger or StructuredLogger(
            "authsession",
            LogConfig(
                app_name=self._config.app_name,
                min_level=LogLevel.from_name(self._config.log_level),
                mask_sensitive=self._config.mask_sensitive,
                max_entries=self._config.max_log_entries,
            ),
        )
        self._notifier = notifier or LoggingNotifier(
            self._logger.child("notifier"),
            resolve_success_messages(self._config.success_messages),
        )
        self._store: Optional[SessionStore] = None
        self._accessor: Optional[SessionAccessor] = None
        self._handle: Optional[CancelHandle] = None
        self._token: Optional[Token] = None

    @classmethod
    async def from_config(
        cls,
        provider: IIdentityProvider,
        name: str,
        configs_path: Union[str, Path] = "configs",
        notifier: Optional[INotifier] = None,
    ) -> "AuthSessionProvider":
        """
        Construit une portée depuis une configuration YAML nommée.

        Raises:
            ConfigError: Configuration absente ou invalide
        """
        config = await ConfigLoader(configs_path).load(name)
        return cls(provider, notifier=notifier, config=config)

    @property
    def config(self) -> AuthSessionConfig:
        return self._config

    @property
    def logger(self) -> StructuredLogger:
        return self._logger

    @property
    def active(self) -> bool:
        return self._token is not None

    @property
    def store(self) -> Optional[SessionStore]:
        return self._store

    async def __aenter__(self) -> SessionAccessor:
        if self.active:
            raise SessionScopeError("AuthSessionProvider is already active")

        store = SessionStore(logger=self._logger.child("session-store"))
        coordinator = ActionCoordinator(
            self._provider,
            store,
            self._notifier,
            classifier=ErrorClassifier(),
            logger=self._logger.child("action-coordinator"),
            federated_provider_id=self._config.federated_provider_id,
        )
        bridge = SubscriptionBridge(self._provider, store, logger=self._logger.child("subscription-bridge"))

        self._store = store
        self._accessor = SessionAccessor(store, coordinator)
        self._handle = bridge.start()
        self._token = current_accessor_var.set(self._accessor)
        return self._accessor

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._accessor is not None:
            self._accessor.close()
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        if self._token is not None:
            current_accessor_var.reset(self._token)
            self._token = None
