"""
AuthSession - Pytest Configuration
Fixtures partagées pour tous les tests.
"""

import asyncio
from pathlib import Path

import pytest

from authsession.logging import LogConfig, LogLevel, StructuredLogger
from authsession.notify import RecordingNotifier
from authsession.provider import InMemoryIdentityProvider
from authsession.session import SessionStore


KNOWN_EMAIL = "a@x.com"
KNOWN_PASSWORD = "pw-123456"


@pytest.fixture
def fixtures_path() -> Path:
    """Chemin vers le dossier fixtures."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def configs_path(fixtures_path: Path) -> Path:
    return fixtures_path / "configs"


@pytest.fixture
def logger() -> StructuredLogger:
    """Logger capturant toutes les entrées, DEBUG inclus."""
    return StructuredLogger("test", LogConfig(app_name="test-app", min_level=LogLevel.DEBUG))


@pytest.fixture
def provider() -> InMemoryIdentityProvider:
    """Fournisseur local avec un compte connu et une identité Google."""
    provider = InMemoryIdentityProvider(token_secret="test-secret")
    provider.add_account(KNOWN_EMAIL, KNOWN_PASSWORD, display_name="Ada")
    provider.register_federated_identity("google.com", "google-uid-1", email="ada@gmail.com", display_name="Ada G")
    return provider


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def store(logger: StructuredLogger) -> SessionStore:
    return SessionStore(logger=logger)


async def drain_notifications(rounds: int = 5) -> None:
    """Laisse la boucle livrer les notifications planifiées par le fournisseur."""
    for _ in range(rounds):
        await asyncio.sleep(0)


@pytest.fixture
def drain():
    """Fonction d'attente des notifications asynchrones du fournisseur."""
    return drain_notifications
