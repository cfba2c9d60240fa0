"""
AuthSession - Session Store

Détenteur unique de l'état observable: session courante, indicateur de
chargement et dernière erreur. Le SubscriptionBridge et l'ActionCoordinator
y écrivent; tous les lecteurs passent par lui.
"""

from dataclasses import replace
from typing import List, Optional

from ..logging import IStructuredLogger
from .interfaces import (
    ErrorInfo,
    ISessionStore,
    Session,
    SessionState,
    StateObserver,
    Unsubscribe,
)


class SessionStore(ISessionStore):
    """
    Store de session en mémoire.

    Chaque mutation remplace l'instantané SessionState en entier puis
    prévient les observateurs, de façon synchrone. Pas de versionnement:
    la dernière écriture gagne.

    Example:
        store = SessionStore()
        unsubscribe = store.subscribe(lambda state: print(state.session))
        store.set_session(session)
    """

    def __init__(self, logger: Optional[IStructuredLogger] = None):
        """
        Args:
            logger: Logger pour les erreurs d'observateurs
        """
        self._state = SessionState()
        self._observers: List[StateObserver] = []
        self._logger = logger

    def read(self) -> SessionState:
        return self._state

    def set_session(self, session: Optional[Session]) -> None:
        self._commit(replace(self._state, session=session))

    def set_error(self, error: Optional[ErrorInfo]) -> None:
        self._commit(replace(self._state, last_error=error))

    def set_loading(self, loading: bool) -> None:
        """
        Met à jour l'indicateur de chargement.

        Une fois passé à False, il n'est plus jamais remis à True.
        """
        if loading == self._state.loading:
            return
        if loading:
            if self._logger:
                self._logger.debug("Ignored loading reset after first notification")
            return
        self._commit(replace(self._state, loading=False))

    def apply_notification(self, session: Optional[Session]) -> None:
        """
        Applique une notification du fournisseur.

        Session et fin de chargement sont validées ensemble: les
        observateurs ne voient jamais la nouvelle session avec loading=True.
        """
        self._commit(replace(self._state, session=session, loading=False))

    def subscribe(self, observer: StateObserver) -> Unsubscribe:
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    @property
    def observer_count(self) -> int:
        return len(self._observers)

    def _commit(self, state: SessionState) -> None:
        # Valeur identique: ni remplacement ni notification
        if state == self._state:
            return
        self._state = state
        # Copie: un observateur peut se désabonner pendant la diffusion
        for observer in list(self._observers):
            try:
                observer(state)
            except Exception as e:
                # Un observateur défaillant n'empêche ni la mutation ni les autres
                if self._logger:
                    self._logger.error(
                        "State observer failed",
                        observer=getattr(observer, "__qualname__", repr(observer)),
                        error_type=type(e).__name__,
                        error_detail=str(e),
                    )
