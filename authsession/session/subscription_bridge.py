"""
AuthSession - Subscription Bridge

Relaie le flux de changements de session du fournisseur vers le
SessionStore et gère le cycle de vie de l'abonnement.
"""

from typing import Optional

from ..core.errors import AuthSessionError
from ..logging import IStructuredLogger
from ..provider.interfaces import IIdentityProvider
from .interfaces import ISessionStore, Session, Unsubscribe


class SubscriptionBridgeError(AuthSessionError):
    """Mauvaise utilisation du bridge (double démarrage)."""

    pass


class CancelHandle:
    """
    Poignée d'annulation de l'abonnement.

    cancel() est idempotent.
    """

    def __init__(self, unsubscribe: Unsubscribe):
        self._unsubscribe = unsubscribe
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        self._unsubscribe()

    def __call__(self) -> None:
        self.cancel()


class SubscriptionBridge:
    """
    Pont fournisseur → SessionStore.

    Chaque notification, y compris la première qui peut ne porter aucune
    session, est appliquée par store.apply_notification: session et
    loading=False dans un seul instantané.
    La perte d'abonnement côté fournisseur n'est pas gérée.

    Example:
        bridge = SubscriptionBridge(provider, store)
        handle = bridge.start()
        ...
        handle.cancel()
    """

    def __init__(
        self,
        provider: IIdentityProvider,
        store: ISessionStore,
        logger: Optional[IStructuredLogger] = None,
    ):
        self._provider = provider
        self._store = store
        self._logger = logger
        self._handle: Optional[CancelHandle] = None
        self._notifications = 0

    @property
    def active(self) -> bool:
        return self._handle is not None and not self._handle.cancelled

    @property
    def notifications_received(self) -> int:
        return self._notifications

    def start(self) -> CancelHandle:
        """
        Ouvre l'abonnement au flux du fournisseur.

        Returns:
            CancelHandle pour fermer l'abonnement

        Raises:
            SubscriptionBridgeError: Si un abonnement est déjà actif
        """
        if self.active:
            raise SubscriptionBridgeError("Subscription already started")

        unsubscribe = self._provider.on_auth_state_changed(self._on_auth_state_changed)
        self._handle = CancelHandle(self._wrap_unsubscribe(unsubscribe))

        if self._logger:
            self._logger.info("Subscribed to provider session stream")
        return self._handle

    def _wrap_unsubscribe(self, unsubscribe: Unsubscribe) -> Unsubscribe:
        def stop() -> None:
            unsubscribe()
            if self._logger:
                self._logger.info(
                    "Unsubscribed from provider session stream",
                    notifications=self._notifications,
                )

        return stop

    def _on_auth_state_changed(self, session: Optional[Session]) -> None:
        self._notifications += 1
        self._store.apply_notification(session)

        if self._logger:
            self._logger.debug(
                "Provider session notification",
                uid=session.uid if session else None,
                sequence=self._notifications,
            )
