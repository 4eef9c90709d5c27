"""
Fixtures shared by the metering module tests.

Everything runs against InMemoryUserRepository driven by a FakeClock, so
window and cooldown boundaries can be hit exactly.
"""

from datetime import datetime, timezone

import pytest

from modules.accounts.repository import InMemoryUserRepository
from modules.usage.service import UsageWindowTracker
from modules.verification.service import VerificationGate
from modules.gatekeeper.service import AccessGatekeeper


# FIXED_NOW (2026-03-14 15:42 UTC) opens a window resetting here
NEXT_RESET = datetime(2026, 4, 14, 0, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def repository(clock) -> InMemoryUserRepository:
    return InMemoryUserRepository(clock=clock)


@pytest.fixture
def tracker(repository, clock) -> UsageWindowTracker:
    return UsageWindowTracker(repository, clock=clock)


@pytest.fixture
def gate(repository, clock) -> VerificationGate:
    return VerificationGate(repository, clock=clock)


@pytest.fixture
def gatekeeper(repository, tracker, gate, clock) -> AccessGatekeeper:
    return AccessGatekeeper(repository, tracker, gate, clock=clock)


@pytest.fixture
def seed_account(repository, clock):
    """
    Store an account row, filling unspecified columns with a fresh free
    account whose window opened at the clock's current time.
    """

    def _seed(user_id: str = "user-1", **columns):
        row = {
            "id": user_id,
            "email": f"{user_id}@example.com",
            "name": None,
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
        repository.insert_row(row)
        return row

    return _seed
