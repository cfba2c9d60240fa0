"""
Tests unitaires pour le logger structuré.
"""

import json
import re

import pytest

from authsession.logging import (
    ContextualLogger,
    IStructuredLogger,
    LogConfig,
    LogLevel,
    MissingRequiredFieldError,
    StructuredLogger,
)


TIMESTAMP_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$")


class TestJsonFormat:
    """Format JSON et champs obligatoires."""

    def test_output_is_valid_json_with_required_fields(self) -> None:
        logger = StructuredLogger("test", LogConfig(app_name="demo"))

        entry = logger.info("Test message")
        assert entry is not None

        parsed = json.loads(entry.to_json())
        assert parsed["level"] == "INFO"
        assert parsed["app_name"] == "demo"
        assert parsed["message"] == "Test message"
        assert parsed["logger"] == "test"
        assert parsed["correlation_id"]

    def test_timestamp_is_iso8601_utc(self) -> None:
        entry = StructuredLogger("test").info("Test")
        assert entry is not None
        assert TIMESTAMP_PATTERN.match(entry.timestamp)

    def test_extra_included(self) -> None:
        entry = StructuredLogger("test").info("Test", uid="u-1", action="sign_in")
        assert entry is not None
        assert entry.to_dict()["extra"] == {"uid": "u-1", "action": "sign_in"}

    def test_output_handler_receives_json(self) -> None:
        outputs = []
        logger = StructuredLogger("test", output_handler=outputs.append)

        logger.info("Hello")

        assert len(outputs) == 1
        assert json.loads(outputs[0])["message"] == "Hello"

    def test_empty_message_raises(self) -> None:
        with pytest.raises(MissingRequiredFieldError):
            StructuredLogger("test").info("")

    def test_empty_name_raises(self) -> None:
        with pytest.raises(ValueError):
            StructuredLogger("  ")


class TestLevels:
    """Filtrage par niveau."""

    def test_below_min_level_filtered(self) -> None:
        logger = StructuredLogger("test", LogConfig(min_level=LogLevel.WARN))

        assert logger.info("ignored") is None
        assert logger.warn("kept") is not None
        assert len(logger.get_entries()) == 1

    def test_from_name_accepts_warning_alias(self) -> None:
        assert LogLevel.from_name("warning") is LogLevel.WARN
        assert LogLevel.from_name("debug") is LogLevel.DEBUG

    def test_from_name_unknown_raises(self) -> None:
        with pytest.raises(ValueError):
            LogLevel.from_name("verbose")

    def test_get_entries_by_level(self) -> None:
        logger = StructuredLogger("test", LogConfig(min_level=LogLevel.DEBUG))
        logger.debug("d")
        logger.error("e")

        assert [e.message for e in logger.get_entries_by_level(LogLevel.ERROR)] == ["e"]


class TestMasking:
    """Masquage des données sensibles dans extra."""

    def test_password_masked(self) -> None:
        entry = StructuredLogger("test").info("Login", password="secret-pw")
        assert entry is not None
        assert entry.extra["password"] == "***MASKED***"

    def test_email_partially_masked(self) -> None:
        entry = StructuredLogger("test").info("Login", email="bea@x.com")
        assert entry is not None
        assert entry.extra["email"] == "b***@x.com"

    def test_masking_disabled(self) -> None:
        logger = StructuredLogger("test", LogConfig(mask_sensitive=False))
        entry = logger.info("Login", password="secret-pw")
        assert entry is not None
        assert entry.extra["password"] == "secret-pw"


class TestContext:
    """Logger enfant et contextuel."""

    def test_with_context_fixes_correlation_and_fields(self) -> None:
        logger = StructuredLogger("test")
        ctx = logger.with_context(correlation_id="cmd-1", action="sign_in")

        assert isinstance(ctx, ContextualLogger)
        assert isinstance(ctx, IStructuredLogger)
        ctx.info("started")
        ctx.warn("failed", error_type="IdentityProviderError")

        entries = logger.get_entries_by_correlation("cmd-1")
        assert len(entries) == 2
        assert all(e.extra["action"] == "sign_in" for e in entries)
        assert entries[1].extra["error_type"] == "IdentityProviderError"

    def test_with_context_generates_correlation(self) -> None:
        ctx = StructuredLogger("test").with_context()
        assert ctx.correlation_id

    def test_child_shares_entries(self) -> None:
        root = StructuredLogger("root", LogConfig(app_name="demo"))
        child = root.child("session-store")

        child.info("from child")

        entries = root.get_entries()
        assert len(entries) == 1
        assert entries[0].logger_name == "session-store"
        assert entries[0].app_name == "demo"

    def test_clear_entries(self) -> None:
        logger = StructuredLogger("test")
        logger.info("one")
        logger.clear_entries()
        assert logger.get_entries() == []


class TestRetention:
    """Tests rétention des entrées en mémoire."""

    def test_entries_capped_to_most_recent(self) -> None:
        """Seules les max_entries dernières entrées sont conservées."""
        logger = StructuredLogger("test", LogConfig(max_entries=3))

        for i in range(5):
            logger.info(f"message {i}")

        assert [e.message for e in logger.get_entries()] == ["message 2", "message 3", "message 4"]

    def test_cap_shared_with_children(self) -> None:
        """Le plafond s'applique au tampon partagé avec les loggers enfants."""
        root = StructuredLogger("root", LogConfig(max_entries=2))
        child = root.child("action-coordinator")

        root.info("one")
        child.info("two")
        child.info("three")

        assert [e.message for e in root.get_entries()] == ["two", "three"]

    def test_default_cap(self) -> None:
        """Plafond par défaut de 1000 entrées."""
        logger = StructuredLogger("test")

        for i in range(1005):
            logger.info("tick", index=i)

        entries = logger.get_entries()
        assert len(entries) == 1000
        assert entries[0].extra["index"] == 5

    def test_unbounded_when_cap_is_none(self) -> None:
        """max_entries=None: pas de plafond."""
        logger = StructuredLogger("test", LogConfig(max_entries=None))

        for i in range(1200):
            logger.info("tick")

        assert len(logger.get_entries()) == 1200
