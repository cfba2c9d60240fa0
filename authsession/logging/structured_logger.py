"""
AuthSession - Structured Logger

Logger JSON structuré: timestamp UTC, niveau, correlation_id, app_name
et données supplémentaires masquées.
"""

import uuid
from collections import deque
from datetime import datetime, timezone
from typing import Any, Callable, Deque, Dict, List, Optional

from .interfaces import (
    IStructuredLogger,
    ISensitiveMasker,
    LogConfig,
    LogEntry,
    LogLevel,
)
from .sensitive_masker import SensitiveMasker


class MissingRequiredFieldError(Exception):
    """Champ obligatoire manquant dans une entrée de log."""

    def __init__(self, field_name: str) -> None:
        self.field_name = field_name
        super().__init__(f"Required field missing: {field_name}")


class StructuredLogger(IStructuredLogger):
    """
    Logger JSON structuré.

    Les entrées les plus récentes (LogConfig.max_entries) sont conservées
    en mémoire, lecture via get_entries, et transmises sérialisées à
    l'output_handler s'il est fourni.

    Example:
        logger = StructuredLogger("session", LogConfig(app_name="my-app"))
        logger.info("Signed in", uid="u-1", email="bea@x.com")
    """

    def __init__(
        self,
        name: str,
        config: Optional[LogConfig] = None,
        masker: Optional[ISensitiveMasker] = None,
        output_handler: Optional[Callable[[str], None]] = None,
    ) -> None:
        """
        Args:
            name: Nom du logger (composant émetteur)
            config: Configuration optionnelle
            masker: Masker pour données sensibles
            output_handler: Destination des lignes JSON

        Raises:
            ValueError: Si name vide
        """
        if not name or not name.strip():
            raise ValueError("Logger name cannot be empty")

        self._name = name.strip()
        self._config = config or LogConfig()
        self._masker = masker or SensitiveMasker()
        self._output_handler = output_handler
        self._entries: Deque[LogEntry] = deque(maxlen=self._config.max_entries)

    @property
    def name(self) -> str:
        return self._name

    @property
    def config(self) -> LogConfig:
        return self._config

    def log(
        self,
        level: LogLevel,
        message: str,
        correlation_id: Optional[str] = None,
        **extra: Any,
    ) -> Optional[LogEntry]:
        """
        Crée une entrée de log.

        Processus:
            1. Filtre sur min_level
            2. Résout correlation_id (UUID4 si absent)
            3. Masque les données sensibles de extra
            4. Stocke l'entrée puis écrit le JSON

        Raises:
            MissingRequiredFieldError: Si message vide
        """
        if level.priority < self._config.min_level.priority:
            return None

        if not message:
            raise MissingRequiredFieldError("message")

        payload: Dict[str, Any] = {}
        if extra and self._config.include_extra:
            payload = self._masker.mask(dict(extra)) if self._config.mask_sensitive else dict(extra)

        entry = LogEntry(
            timestamp=self._generate_timestamp(),
            level=level,
            correlation_id=correlation_id or str(uuid.uuid4()),
            app_name=self._config.app_name,
            message=message,
            extra=payload,
            logger_name=self._name,
        )

        self._entries.append(entry)

        if self._output_handler:
            self._output_handler(entry.to_json())

        return entry

    def _generate_timestamp(self) -> str:
        """Format: 2024-12-04T14:30:00.123Z"""
        now = datetime.now(timezone.utc)
        return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"

    def get_entries(self) -> List[LogEntry]:
        """Entrées capturées (tests et diagnostic)."""
        return list(self._entries)

    def clear_entries(self) -> None:
        self._entries.clear()

    def get_entries_by_level(self, level: LogLevel) -> List[LogEntry]:
        return [e for e in self._entries if e.level == level]

    def get_entries_by_correlation(self, correlation_id: str) -> List[LogEntry]:
        return [e for e in self._entries if e.correlation_id == correlation_id]

    def child(self, name: str) -> "StructuredLogger":
        """
        Crée un logger nommé partageant config, masker, handler et entrées.

        Args:
            name: Nom du composant

        Returns:
            Logger enfant
        """
        child = StructuredLogger(name, self._config, self._masker, self._output_handler)
        child._entries = self._entries
        return child

    def with_context(self, correlation_id: Optional[str] = None, **bound: Any) -> "ContextualLogger":
        """
        Crée un logger avec correlation_id et champs extra fixés.

        Args:
            correlation_id: ID corrélation pour ce contexte (ex: command_id)
            **bound: Champs ajoutés à chaque entrée

        Returns:
            ContextualLogger
        """
        return ContextualLogger(self, correlation_id=correlation_id or str(uuid.uuid4()), **bound)


class ContextualLogger(IStructuredLogger):
    """
    Logger avec contexte pré-défini.

    Évite de répéter correlation_id et les champs communs d'une commande.
    """

    def __init__(self, logger: IStructuredLogger, correlation_id: str, **bound: Any) -> None:
        self._logger = logger
        self._correlation_id = correlation_id
        self._bound = bound

    @property
    def correlation_id(self) -> str:
        return self._correlation_id

    def log(
        self,
        level: LogLevel,
        message: str,
        correlation_id: Optional[str] = None,
        **extra: Any,
    ) -> Optional[LogEntry]:
        merged = {**self._bound, **extra}
        return self._logger.log(
            level,
            message,
            correlation_id=correlation_id or self._correlation_id,
            **merged,
        )
