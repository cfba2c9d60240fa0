"""
AuthSession - Logging Interfaces

Contrats du logging structuré JSON.

Chaque entrée porte: timestamp ISO 8601 UTC, level, correlation_id,
app_name, message. Les données sensibles (mots de passe, jetons,
adresses e-mail) ne sont jamais écrites en clair.
"""

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class LogLevel(Enum):
    """Niveaux de log. Ordre de sévérité: DEBUG < INFO < WARN < ERROR < CRITICAL."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    @property
    def priority(self) -> int:
        """Priorité du niveau (plus haut = plus sévère)."""
        return _PRIORITIES[self]

    @classmethod
    def from_name(cls, name: str) -> "LogLevel":
        """
        Résout un niveau depuis son nom (insensible à la casse).

        Raises:
            ValueError: Si nom inconnu
        """
        key = (name or "").strip().upper()
        if key == "WARNING":
            key = "WARN"
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"Invalid log level: {name}")


_PRIORITIES = {
    LogLevel.DEBUG: 0,
    LogLevel.INFO: 1,
    LogLevel.WARN: 2,
    LogLevel.ERROR: 3,
    LogLevel.CRITICAL: 4,
}


@dataclass
class LogEntry:
    """Entrée de log avec champs obligatoires."""

    timestamp: str  # ISO 8601 UTC
    level: LogLevel
    correlation_id: str
    app_name: str
    message: str
    extra: Dict[str, Any] = field(default_factory=dict)
    logger_name: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convertit en dictionnaire."""
        result = {
            "timestamp": self.timestamp,
            "level": self.level.value,
            "correlation_id": self.correlation_id,
            "app_name": self.app_name,
            "message": self.message,
        }
        if self.logger_name:
            result["logger"] = self.logger_name
        if self.extra:
            result["extra"] = self.extra
        return result

    def to_json(self) -> str:
        """Sérialise en JSON."""
        return json.dumps(self.to_dict(), ensure_ascii=False, default=str)


@dataclass
class LogConfig:
    """Configuration du logger structuré."""

    app_name: str = "authsession"
    min_level: LogLevel = LogLevel.INFO
    include_extra: bool = True
    mask_sensitive: bool = True
    max_entries: Optional[int] = 1000  # entrées gardées en mémoire (None = illimité)


class IStructuredLogger(ABC):
    """Interface logger structuré."""

    @abstractmethod
    def log(
        self,
        level: LogLevel,
        message: str,
        correlation_id: Optional[str] = None,
        **extra: Any,
    ) -> Optional[LogEntry]:
        """
        Log structuré JSON.

        Args:
            level: Niveau de log
            message: Message à logger
            correlation_id: ID de corrélation (généré si absent)
            **extra: Données supplémentaires

        Returns:
            LogEntry créé ou None si filtré par niveau
        """
        pass

    def debug(self, message: str, **extra: Any) -> Optional[LogEntry]:
        return self.log(LogLevel.DEBUG, message, **extra)

    def info(self, message: str, **extra: Any) -> Optional[LogEntry]:
        return self.log(LogLevel.INFO, message, **extra)

    def warn(self, message: str, **extra: Any) -> Optional[LogEntry]:
        return self.log(LogLevel.WARN, message, **extra)

    def error(self, message: str, **extra: Any) -> Optional[LogEntry]:
        return self.log(LogLevel.ERROR, message, **extra)

    def critical(self, message: str, **extra: Any) -> Optional[LogEntry]:
        return self.log(LogLevel.CRITICAL, message, **extra)


class ISensitiveMasker(ABC):
    """Interface masquage données sensibles."""

    SENSITIVE_PATTERNS: List[str] = [
        "password",
        "passwd",
        "pwd",
        "token",
        "id_token",
        "refresh_token",
        "secret",
        "api_key",
        "private_key",
        "credential",
        "authorization",
        "cookie",
    ]

    EMAIL_PATTERNS: List[str] = ["email", "mail"]

    MASK_VALUE: str = "***MASKED***"

    @abstractmethod
    def mask(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Masque données sensibles dans un dictionnaire.

        Returns:
            Copie avec données sensibles masquées
        """
        pass

    @abstractmethod
    def mask_email(self, value: str) -> str:
        """Masque partiellement une adresse e-mail (a***@x.com)."""
        pass

    @abstractmethod
    def is_sensitive_key(self, key: str) -> bool:
        """True si la clé contient un pattern sensible."""
        pass
