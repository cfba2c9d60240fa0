"""
AuthSession - Erreurs de base

Toutes les erreurs levées par le package héritent de AuthSessionError.
"""


class AuthSessionError(Exception):
    """Erreur racine du package authsession."""

    pass


class ConfigError(AuthSessionError):
    """Configuration absente, illisible ou invalide."""

    pass
