"""
Verification module data models.

Outcomes are returned as values, never raised, so callers can switch on
them and show the right remediation (resend, re-enter, wait).
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from modules.accounts.models import UserAccount


class VerificationFailure(str, Enum):
    """Reasons a verification step did not succeed."""

    NO_CODE_ISSUED = "NO_CODE_ISSUED"
    CODE_EXPIRED = "CODE_EXPIRED"
    CODE_MISMATCH = "CODE_MISMATCH"
    RATE_LIMITED = "RATE_LIMITED"

    @property
    def message(self) -> str:
        return FAILURE_MESSAGES[self]


FAILURE_MESSAGES: dict[VerificationFailure, str] = {
    VerificationFailure.NO_CODE_ISSUED: "No verification code issued",
    VerificationFailure.CODE_EXPIRED: "Verification code expired",
    VerificationFailure.CODE_MISMATCH: "Invalid verification code",
    VerificationFailure.RATE_LIMITED: "Please wait before requesting another code",
}


class CooldownStatus(BaseModel):
    """Whether a new code may be issued, and if not, how long to wait."""

    allowed: bool
    retry_after_seconds: int = Field(default=0, ge=0)

    model_config = {"frozen": True}


class IssuedCode(BaseModel):
    """
    A freshly issued code, handed once to the email sender.

    The plaintext code exists only in this object; it is never persisted.
    """

    code: str = Field(..., min_length=6, max_length=6)
    expires_at: datetime
    expires_in_minutes: int

    model_config = {"frozen": True}

    def __repr__(self) -> str:
        return f"IssuedCode(expires_at={self.expires_at!r}, expires_in_minutes={self.expires_in_minutes})"

    __str__ = __repr__


class CodeRequestStatus(str, Enum):
    """Result of asking for a verification code."""

    ISSUED = "issued"
    ALREADY_VERIFIED = "already_verified"
    RATE_LIMITED = "rate_limited"


class CodeRequest(BaseModel):
    """
    Outcome of a code request.

    ``account`` is the record the decision was made on, so callers can
    address the email without loading it again.
    """

    status: CodeRequestStatus
    account: Optional[UserAccount] = None
    issued: Optional[IssuedCode] = None
    retry_after_seconds: int = Field(default=0, ge=0)


class ConfirmOutcome(BaseModel):
    """Outcome of submitting a verification code."""

    verified: bool
    failure: Optional[VerificationFailure] = None
    already_verified: bool = False

    @classmethod
    def success(cls, already_verified: bool = False) -> "ConfirmOutcome":
        return cls(verified=True, already_verified=already_verified)

    @classmethod
    def denied(cls, failure: VerificationFailure) -> "ConfirmOutcome":
        return cls(verified=False, failure=failure)
