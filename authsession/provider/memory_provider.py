"""
AuthSession - In-Memory Identity Provider

Fournisseur d'identité local pour le développement et les tests:
comptes en mémoire, mots de passe hachés PBKDF2, ID tokens signés,
notifications de changement livrées de façon asynchrone.
"""

import asyncio
import hashlib
import hmac
import secrets
import uuid
from dataclasses import dataclass
from typing import Dict, List, Optional

from ..session.interfaces import Session, Unsubscribe
from .id_token import IdTokenCodec
from .interfaces import AuthStateCallback, IdentityProviderError, IIdentityProvider


MIN_PASSWORD_LENGTH = 6


@dataclass
class _Account:
    uid: str
    email: Optional[str]
    password_salt: bytes
    password_hash: bytes
    display_name: Optional[str] = None


class InMemoryIdentityProvider(IIdentityProvider):
    """
    Fournisseur d'identité en mémoire.

    Note:
        Stockage volatile, un seul utilisateur connecté à la fois.

    Example:
        provider = InMemoryIdentityProvider()
        provider.add_account("bea@x.com", "secret-pw", display_name="Bea")
        provider.register_federated_identity("google.com", "g-1", email="bea@gmail.com")
    """

    PBKDF2_ITERATIONS = 100_000

    def __init__(
        self,
        token_secret: str = "authsession-local-secret",
        codec: Optional[IdTokenCodec] = None,
        latency_seconds: float = 0.0,
    ):
        """
        Args:
            token_secret: Clé de signature des ID tokens
            codec: Codec personnalisé (prioritaire sur token_secret)
            latency_seconds: Latence simulée avant chaque opération
        """
        self._codec = codec or IdTokenCodec(token_secret)
        self._latency = latency_seconds
        self._accounts: Dict[str, _Account] = {}  # email normalisé -> compte
        self._federated: Dict[str, Session] = {}  # provider_id -> identité
        self._current: Optional[Session] = None
        self._listeners: List[AuthStateCallback] = []
        self._injected_failures: Dict[str, BaseException] = {}
        self.sent_reset_emails: List[str] = []

    # ──────────────────────────────────────────────────────────────────────────
    # Outils de mise en place
    # ──────────────────────────────────────────────────────────────────────────

    @property
    def current_user(self) -> Optional[Session]:
        return self._current

    @property
    def codec(self) -> IdTokenCodec:
        return self._codec

    def add_account(self, email: str, password: str, display_name: Optional[str] = None) -> str:
        """
        Crée un compte sans ouvrir de session.

        Returns:
            uid du compte
        """
        account = self._new_account(email, password)
        account.display_name = display_name
        return account.uid

    def register_federated_identity(
        self,
        provider_id: str,
        uid: str,
        email: Optional[str] = None,
        display_name: Optional[str] = None,
    ) -> None:
        """Définit l'identité retournée par le prochain flux fédéré `provider_id`."""
        self._federated[provider_id] = Session(uid=uid, display_name=display_name, email=email)

    def fail_next(self, operation: str, error: Optional[BaseException] = None) -> None:
        """
        Fait échouer le prochain appel de `operation`.

        Args:
            operation: Nom de méthode (ex: "sign_in_with_email_and_password")
            error: Exception à lever (défaut: auth/network-request-failed)
        """
        if not hasattr(IIdentityProvider, operation):
            raise ValueError(f"Unknown provider operation: {operation}")
        self._injected_failures[operation] = error or IdentityProviderError("auth/network-request-failed")

    def push_state(self, session: Optional[Session]) -> None:
        """Simule un changement de session venu d'ailleurs (révocation, autre onglet)."""
        self._set_current(session)

    # ──────────────────────────────────────────────────────────────────────────
    # IIdentityProvider
    # ──────────────────────────────────────────────────────────────────────────

    async def sign_in_with_email_and_password(self, email: str, password: str) -> Session:
        await self._before("sign_in_with_email_and_password")

        account = self._accounts.get(self._normalize(email))
        if account is None:
            raise IdentityProviderError("auth/user-not-found")
        if not self._verify_password(account, password):
            raise IdentityProviderError("auth/wrong-password")

        session = self._session_for(account, "password")
        self._set_current(session)
        return session

    async def create_user_with_email_and_password(self, email: str, password: str) -> Session:
        await self._before("create_user_with_email_and_password")

        account = self._new_account(email, password)
        session = self._session_for(account, "password")
        self._set_current(session)
        return session

    async def update_profile(self, user: Session, display_name: Optional[str]) -> Session:
        await self._before("update_profile")

        account = self._find_by_uid(user.uid)
        if account is None:
            raise IdentityProviderError("auth/user-not-found")
        account.display_name = display_name

        provider_id = user.metadata.get("sign_in_provider", "password")
        updated = self._session_for(account, provider_id)
        # Pas de notification: un changement de profil n'est pas un changement de session
        if self._current is not None and self._current.uid == updated.uid:
            self._current = updated
        return updated

    async def sign_in_with_federated_provider(self, provider_id: str) -> Session:
        await self._before("sign_in_with_federated_provider")

        identity = self._federated.get(provider_id)
        if identity is None:
            raise IdentityProviderError("auth/popup-closed-by-user")

        token = self._codec.issue(identity, provider_id=provider_id)
        session = self._codec.session_from_token(token)
        self._set_current(session)
        return session

    async def send_password_reset_email(self, email: str) -> None:
        await self._before("send_password_reset_email")

        normalized = self._normalize(email)
        if "@" not in normalized:
            raise IdentityProviderError("auth/invalid-email")
        if normalized not in self._accounts:
            raise IdentityProviderError("auth/user-not-found")
        self.sent_reset_emails.append(normalized)

    async def sign_out(self) -> None:
        await self._before("sign_out")
        self._set_current(None)

    def on_auth_state_changed(self, callback: AuthStateCallback) -> Unsubscribe:
        loop = asyncio.get_running_loop()
        self._listeners.append(callback)
        loop.call_soon(self._deliver, callback, self._current)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    # ──────────────────────────────────────────────────────────────────────────
    # Interne
    # ──────────────────────────────────────────────────────────────────────────

    async def _before(self, operation: str) -> None:
        # Point de suspension systématique, comme un appel réseau
        await asyncio.sleep(self._latency)
        failure = self._injected_failures.pop(operation, None)
        if failure is not None:
            raise failure

    def _set_current(self, session: Optional[Session]) -> None:
        self._current = session
        loop = asyncio.get_running_loop()
        for callback in list(self._listeners):
            loop.call_soon(self._deliver, callback, session)

    def _deliver(self, callback: AuthStateCallback, session: Optional[Session]) -> None:
        # Un abonné retiré entre-temps ne reçoit plus rien
        if callback in self._listeners:
            callback(session)

    def _new_account(self, email: str, password: str) -> _Account:
        normalized = self._normalize(email)
        if "@" not in normalized:
            raise IdentityProviderError("auth/invalid-email")
        if not password or len(password) < MIN_PASSWORD_LENGTH:
            raise IdentityProviderError("auth/weak-password")
        if normalized in self._accounts:
            raise IdentityProviderError("auth/email-already-in-use")

        salt = secrets.token_bytes(16)
        account = _Account(
            uid=uuid.uuid4().hex,
            email=normalized,
            password_salt=salt,
            password_hash=self._hash_password(password, salt),
        )
        self._accounts[normalized] = account
        return account

    def _find_by_uid(self, uid: str) -> Optional[_Account]:
        for account in self._accounts.values():
            if account.uid == uid:
                return account
        return None

    def _session_for(self, account: _Account, provider_id: str) -> Session:
        base = Session(uid=account.uid, display_name=account.display_name, email=account.email)
        return self._codec.session_from_token(self._codec.issue(base, provider_id=provider_id))

    def _hash_password(self, password: str, salt: bytes) -> bytes:
        return hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, self.PBKDF2_ITERATIONS)

    def _verify_password(self, account: _Account, password: str) -> bool:
        candidate = self._hash_password(password or "", account.password_salt)
        return hmac.compare_digest(candidate, account.password_hash)

    @staticmethod
    def _normalize(email: str) -> str:
        return (email or "").strip().lower()
