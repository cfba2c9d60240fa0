"""
AuthSession - Logging

Logging structuré JSON avec masquage des données sensibles.
"""

from .interfaces import (
    # Enums
    LogLevel,
    # Dataclasses
    LogEntry,
    LogConfig,
    # Interfaces
    IStructuredLogger,
    ISensitiveMasker,
)
from .sensitive_masker import SensitiveMasker
from .structured_logger import (
    StructuredLogger,
    ContextualLogger,
    MissingRequiredFieldError,
)

__all__ = [
    "LogLevel",
    "LogEntry",
    "LogConfig",
    "IStructuredLogger",
    "ISensitiveMasker",
    "SensitiveMasker",
    "StructuredLogger",
    "ContextualLogger",
    "MissingRequiredFieldError",
]
