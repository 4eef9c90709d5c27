"""
Fixtures for API tests.

Routes are exercised against in-memory metering components wired through
app.dependency_overrides, with authentication replaced by a fixed user.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock
from fastapi.testclient import TestClient

from api.app import app
from api.dependencies import (
    get_access_gatekeeper,
    get_chat_service,
    get_email_sender,
    get_usage_tracker,
    get_user_repository,
    get_verification_gate,
)
from api.middleware.auth import get_current_user
from modules.accounts.repository import InMemoryUserRepository
from modules.gatekeeper.service import AccessGatekeeper
from modules.usage.service import UsageWindowTracker
from modules.verification.service import VerificationGate
from shared.models import AuthenticatedUser
from tests.modules.conftest import NEXT_RESET


@pytest.fixture
def mock_user() -> AuthenticatedUser:
    return AuthenticatedUser(id="user-123", email="ada@example.com")


@pytest.fixture
def memory_repository(clock) -> InMemoryUserRepository:
    return InMemoryUserRepository(clock=clock)


@pytest.fixture
def verification_gate(memory_repository, clock) -> VerificationGate:
    return VerificationGate(memory_repository, clock=clock)


@pytest.fixture
def email_sender():
    sender = MagicMock()
    sender.send_verification_code = AsyncMock()
    return sender


@pytest.fixture
def chat_service():
    return MagicMock()


@pytest.fixture
def client(mock_user, memory_repository, verification_gate, email_sender, chat_service, clock):
    """TestClient wired to in-memory services and a fixed authenticated user."""
    tracker = UsageWindowTracker(memory_repository, clock=clock)
    gatekeeper = AccessGatekeeper(memory_repository, tracker, verification_gate, clock=clock)

    app.dependency_overrides[get_current_user] = lambda: mock_user
    app.dependency_overrides[get_user_repository] = lambda: memory_repository
    app.dependency_overrides[get_usage_tracker] = lambda: tracker
    app.dependency_overrides[get_verification_gate] = lambda: verification_gate
    app.dependency_overrides[get_access_gatekeeper] = lambda: gatekeeper
    app.dependency_overrides[get_email_sender] = lambda: email_sender
    app.dependency_overrides[get_chat_service] = lambda: chat_service
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def seed_user(memory_repository, clock):
    """Store the mock user's account row with the given column overrides."""
    def _seed(**columns):
        row = {
            "id": "user-123",
            "email": "ada@example.com",
            "name": "Ada",
            "plan": "free",
            "email_verified_at": None,
            "messages_used": 0,
            "message_limit": 50,
            "usage_reset_at": NEXT_RESET,
            "verification_code_hash": None,
            "verification_expires_at": None,
            "verification_last_sent_at": None,
            "created_at": clock(),
            "updated_at": clock(),
        }
        row.update(columns)
        memory_repository.insert_row(row)
        return row

    return _seed
