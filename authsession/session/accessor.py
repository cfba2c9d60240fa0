"""
AuthSession - Session Accessor

Surface exposée au reste de l'application: lecture de l'état, actions,
effacement de l'erreur.
"""

import asyncio
from typing import Optional, Set

from ..core.errors import AuthSessionError
from .action_coordinator import ActionCoordinator
from .interfaces import ErrorInfo, ISessionStore, Session, SessionState, StateObserver, Unsubscribe


class SessionClosedError(AuthSessionError):
    """Portée fermée avant la première notification du fournisseur."""

    def __init__(self, message: str = "Session scope closed before the first provider notification"):
        super().__init__(message)


class SessionAccessor:
    """
    Accès à la session courante.

    Les lectures reflètent toujours le dernier état du store: une Session
    obtenue ici peut être périmée après la notification suivante.
    """

    def __init__(self, store: ISessionStore, coordinator: ActionCoordinator):
        self._store = store
        self._coordinator = coordinator
        self._waiters: Set[asyncio.Future] = set()
        self._closed = False

    # ──────────────────────────────────────────────────────────────────────────
    # Lecture
    # ──────────────────────────────────────────────────────────────────────────

    @property
    def current_user(self) -> Optional[Session]:
        return self._store.read().session

    @property
    def loading(self) -> bool:
        return self._store.read().loading

    @property
    def error(self) -> Optional[str]:
        """Message de la dernière erreur, ou None."""
        last_error = self._store.read().last_error
        return last_error.message if last_error else None

    @property
    def last_error(self) -> Optional[ErrorInfo]:
        return self._store.read().last_error

    @property
    def state(self) -> SessionState:
        return self._store.read()

    def subscribe(self, observer: StateObserver) -> Unsubscribe:
        return self._store.subscribe(observer)

    async def wait_until_ready(self, timeout: Optional[float] = None) -> SessionState:
        """
        Attend le traitement de la première notification du fournisseur.

        Args:
            timeout: Délai maximum en secondes (None = illimité)

        Returns:
            État courant, avec loading à False

        Raises:
            asyncio.TimeoutError: Si le délai expire
            SessionClosedError: Si la portée se ferme avant la notification
        """
        if not self.loading:
            return self.state
        if self._closed:
            raise SessionClosedError()

        ready = asyncio.get_running_loop().create_future()
        self._waiters.add(ready)

        def observer(state: SessionState) -> None:
            if not state.loading and not ready.done():
                ready.set_result(None)

        unsubscribe = self._store.subscribe(observer)
        try:
            await asyncio.wait_for(ready, timeout)
        finally:
            unsubscribe()
            self._waiters.discard(ready)
        return self.state

    def close(self) -> None:
        """Ferme l'accesseur: les attentes de wait_until_ready en cours échouent."""
        self._closed = True
        for waiter in list(self._waiters):
            if not waiter.done():
                waiter.set_exception(SessionClosedError())

    # ──────────────────────────────────────────────────────────────────────────
    # Actions
    # ──────────────────────────────────────────────────────────────────────────

    async def login(self, email: str, password: str) -> None:
        await self._coordinator.sign_in(email, password)

    async def register(self, email: str, password: str, display_name: Optional[str] = None) -> None:
        await self._coordinator.register(email, password, display_name)

    async def logout(self) -> None:
        await self._coordinator.sign_out()

    async def reset_password(self, email: str) -> None:
        await self._coordinator.reset_password(email)

    async def google_sign_in(self) -> None:
        await self._coordinator.federated_sign_in()

    def clear_error(self) -> None:
        self._coordinator.clear_error()
