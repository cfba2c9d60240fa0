"""
AuthSession - ID Token Codec

Émission et décodage des ID tokens (JWT HS256) attachés aux sessions
du fournisseur local.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt

from ..session.interfaces import Session


# Claims standard absorbés dans les champs de Session
_RESERVED_CLAIMS = ("sub", "name", "email", "iat", "exp", "iss", "aud")


class IdTokenError(Exception):
    """ID token invalide ou expiré."""

    pass


class IdTokenCodec:
    """
    Codec des ID tokens.

    Example:
        codec = IdTokenCodec("secret", issuer="authsession-local")
        token = codec.issue(session)
        claims = codec.decode(token)
    """

    ALGORITHM = "HS256"

    def __init__(self, secret: str, issuer: str = "authsession-local", lifetime_seconds: int = 3600):
        """
        Args:
            secret: Clé de signature HMAC
            issuer: Valeur du claim iss
            lifetime_seconds: Durée de validité des tokens émis

        Raises:
            ValueError: Si secret vide ou durée non positive
        """
        if not secret:
            raise ValueError("secret is required")
        if lifetime_seconds <= 0:
            raise ValueError("lifetime_seconds must be positive")
        self.secret = secret
        self.issuer = issuer
        self.lifetime_seconds = lifetime_seconds

    def issue(self, session: Session, provider_id: str = "password", now: Optional[datetime] = None) -> str:
        """
        Émet un ID token pour une session.

        Args:
            session: Identité à encoder
            provider_id: Méthode de connexion (password, google.com, ...)
            now: Instant d'émission (tests)

        Returns:
            JWT signé
        """
        issued_at = now or datetime.now(timezone.utc)
        payload: Dict[str, Any] = {
            "sub": session.uid,
            "iss": self.issuer,
            "iat": issued_at,
            "exp": issued_at + timedelta(seconds=self.lifetime_seconds),
            "sign_in_provider": provider_id,
        }
        if session.email:
            payload["email"] = session.email
        if session.display_name:
            payload["name"] = session.display_name
        return jwt.encode(payload, self.secret, algorithm=self.ALGORITHM)

    def decode(self, token: str) -> Dict[str, Any]:
        """
        Vérifie signature, émetteur et expiration.

        Raises:
            IdTokenError: Token expiré ou invalide
        """
        try:
            return jwt.decode(
                token,
                self.secret,
                algorithms=[self.ALGORITHM],
                issuer=self.issuer,
                options={"require": ["exp", "iat", "sub"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise IdTokenError("ID token expired") from e
        except jwt.InvalidTokenError as e:
            raise IdTokenError(f"Invalid ID token: {e}") from e

    def session_from_token(self, token: str) -> Session:
        """Décode un token et reconstruit la Session correspondante."""
        return session_from_claims(self.decode(token), id_token=token)


def session_from_claims(claims: Dict[str, Any], id_token: Optional[str] = None) -> Session:
    """
    Construit une Session depuis des claims décodés.

    Les claims non standard sont conservés dans metadata.
    """
    metadata = {k: v for k, v in claims.items() if k not in _RESERVED_CLAIMS}
    if id_token:
        metadata["id_token"] = id_token
    return Session(
        uid=claims["sub"],
        display_name=claims.get("name"),
        email=claims.get("email"),
        metadata=metadata,
    )
