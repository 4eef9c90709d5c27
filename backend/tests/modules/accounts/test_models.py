"""Tests for account models."""

import pytest
from datetime import datetime, timezone
from pydantic import ValidationError

from modules.accounts.models import Plan, UserAccount, UsageWindow, VerificationState

RESET = datetime(2026, 4, 14, tzinfo=timezone.utc)


class TestPlan:
    def test_parse_is_case_insensitive(self):
        assert Plan.parse("PRO") == Plan.PRO

    def test_parse_unknown_is_free(self):
        assert Plan.parse("unlimited") == Plan.FREE
        assert Plan.parse(None) == Plan.FREE


class TestUsageWindow:
    def test_rejects_negative_count(self):
        with pytest.raises(ValidationError):
            UsageWindow(messages_used=-1, message_limit=50, reset_at=RESET)

    def test_rejects_zero_limit(self):
        with pytest.raises(ValidationError):
            UsageWindow(messages_used=0, message_limit=0, reset_at=RESET)

    def test_remaining_never_negative(self):
        assert UsageWindow(messages_used=60, message_limit=50, reset_at=RESET).remaining == 0


class TestVerificationState:
    def test_empty_state(self):
        state = VerificationState()
        assert state.has_code is False

    def test_hash_requires_expiry(self):
        with pytest.raises(ValidationError):
            VerificationState(code_hash="$2b$hash")

    def test_expiry_requires_hash(self):
        with pytest.raises(ValidationError):
            VerificationState(expires_at=RESET)


class TestUserAccount:
    def test_defaults(self):
        account = UserAccount(
            id="u",
            email="u@example.com",
            usage=UsageWindow(message_limit=50, reset_at=RESET),
        )
        assert account.plan == Plan.FREE
        assert account.is_verified is False
        assert account.verification == VerificationState()

    def test_plan_is_coerced(self):
        account = UserAccount(
            id="u",
            email="u@example.com",
            plan="bogus",
            usage=UsageWindow(message_limit=50, reset_at=RESET),
        )
        assert account.plan == Plan.FREE
