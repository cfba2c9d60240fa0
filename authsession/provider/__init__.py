"""
AuthSession - Identity Provider

Contrat du fournisseur d'identité et fournisseur local en mémoire.
"""

from .interfaces import AuthStateCallback, IdentityProviderError, IIdentityProvider
from .id_token import IdTokenCodec, IdTokenError, session_from_claims
from .memory_provider import InMemoryIdentityProvider

__all__ = [
    # Interfaces
    "IIdentityProvider",
    "AuthStateCallback",
    # Implementations
    "InMemoryIdentityProvider",
    "IdTokenCodec",
    "session_from_claims",
    # Exceptions
    "IdentityProviderError",
    "IdTokenError",
]
