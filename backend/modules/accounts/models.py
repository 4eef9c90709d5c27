"""
Account module data models.

A user account is a single stored record. The usage module owns the
``usage`` window inside it and the verification module owns the
``verification`` state; each writes only its own fields.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class Plan(str, Enum):
    """Subscription plans. Set externally by billing, read-only here."""

    FREE = "free"
    PRO = "pro"
    ENTERPRISE = "enterprise"

    @classmethod
    def parse(cls, value: Any) -> "Plan":
        """Coerce a stored plan value, treating anything unknown as free."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            return cls.FREE


class UsageWindow(BaseModel):
    """
    The active metering window for a user.

    Replaced wholesale on rollover, never patched field by field.
    """

    messages_used: int = Field(default=0, ge=0, description="Messages charged in this window")
    message_limit: int = Field(..., gt=0, description="Plan limit captured at window start")
    reset_at: datetime = Field(..., description="When this window stops being valid")

    model_config = {"frozen": True}

    @property
    def remaining(self) -> int:
        """Messages left before the plan limit is reached."""
        return max(0, self.message_limit - self.messages_used)


class VerificationState(BaseModel):
    """
    Pending email verification code, stored as a hash only.

    ``code_hash`` and ``expires_at`` are either both set or both empty.
    """

    code_hash: Optional[str] = Field(None, description="bcrypt hash of the issued code")
    expires_at: Optional[datetime] = Field(None, description="When the issued code expires")
    last_sent_at: Optional[datetime] = Field(None, description="When a code was last issued")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def check_code_pair(self) -> "VerificationState":
        """Reject a hash without an expiry (or the reverse)."""
        if (self.code_hash is None) != (self.expires_at is None):
            raise ValueError("code_hash and expires_at must be set together")
        return self

    @property
    def has_code(self) -> bool:
        return self.code_hash is not None


class UserAccount(BaseModel):
    """A user's account record as the metering core sees it."""

    id: str = Field(..., description="User ID")
    email: str = Field(..., description="Email address")
    name: Optional[str] = Field(None, description="Display name")
    plan: Plan = Field(default=Plan.FREE, description="Subscription plan")
    email_verified_at: Optional[datetime] = Field(
        None,
        description="When the email was verified (None = unverified)",
    )
    usage: UsageWindow
    verification: VerificationState = Field(default_factory=VerificationState)

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("plan", mode="before")
    @classmethod
    def coerce_plan(cls, value: Any) -> Plan:
        return Plan.parse(value)

    @property
    def is_verified(self) -> bool:
        return self.email_verified_at is not None
