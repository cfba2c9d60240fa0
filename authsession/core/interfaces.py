"""
AuthSession - Core Interfaces
Contrats et modèle de configuration du gestionnaire de session.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ValidationError, field_validator

from .errors import ConfigError


# ══════════════════════════════════════════════════════════════════════════════
# TYPES
# ══════════════════════════════════════════════════════════════════════════════


LOG_LEVEL_NAMES = ("DEBUG", "INFO", "WARN", "ERROR", "CRITICAL")


class AuthSessionConfig(BaseModel):
    """
    Configuration du gestionnaire de session.

    Attributes:
        app_name: Nom de l'application (présent dans chaque log)
        federated_provider_id: Fournisseur utilisé par google_sign_in
        log_level: Niveau minimum de log
        mask_sensitive: Masquage des données sensibles dans les logs
        max_log_entries: Entrées de log gardées en mémoire (None = illimité)
        success_messages: Surcharge des messages de succès, par action
    """

    app_name: str = "authsession"
    federated_provider_id: str = "google.com"
    log_level: str = "INFO"
    mask_sensitive: bool = True
    max_log_entries: Optional[int] = 1000
    success_messages: Dict[str, str] = {}

    @field_validator("app_name", "federated_provider_id")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("must not be empty")
        return value.strip()

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level == "WARNING":
            level = "WARN"
        if level not in LOG_LEVEL_NAMES:
            raise ValueError(f"unknown log level: {value}")
        return level

    @field_validator("max_log_entries")
    @classmethod
    def _positive_cap(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and value <= 0:
            raise ValueError("must be positive")
        return value

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AuthSessionConfig":
        """
        Construit la configuration depuis un mapping.

        Raises:
            ConfigError: Si le mapping ne respecte pas le modèle
        """
        try:
            return cls.model_validate(dict(data))
        except ValidationError as e:
            raise ConfigError(f"Configuration invalide: {e}") from e


# ══════════════════════════════════════════════════════════════════════════════
# INTERFACES
# ══════════════════════════════════════════════════════════════════════════════


class IConfigLoader(ABC):
    """Charge la configuration du gestionnaire de session."""

    @abstractmethod
    async def load(self, name: str) -> AuthSessionConfig:
        """
        Charge une configuration nommée.

        Raises:
            ConfigError: Si fichier absent ou contenu invalide
        """
        pass
