"""
Email verification module.

Blocks unverified users past a message threshold and runs the
verification code lifecycle (issue, cooldown, confirm).

Public API:
- VerificationGate: Threshold check and code lifecycle
- IEmailSender / ResendEmailSender: Code delivery
- CodeRequest, ConfirmOutcome, CooldownStatus, IssuedCode: Outcomes
- VerificationFailure: Typed failure reasons
"""

from .interfaces import IEmailSender
from .models import (
    CodeRequest,
    CodeRequestStatus,
    ConfirmOutcome,
    CooldownStatus,
    IssuedCode,
    VerificationFailure,
)
from .exceptions import EmailDeliveryError
from .email import ResendEmailSender, render_verification_email
from .service import (
    VerificationGate,
    EMAIL_VERIFICATION_THRESHOLD,
    RESEND_COOLDOWN_SECONDS,
    CODE_EXPIRATION_MINUTES,
)

__all__ = [
    # Interfaces
    "IEmailSender",
    # Models
    "CodeRequest",
    "CodeRequestStatus",
    "ConfirmOutcome",
    "CooldownStatus",
    "IssuedCode",
    "VerificationFailure",
    # Exceptions
    "EmailDeliveryError",
    # Email
    "ResendEmailSender",
    "render_verification_email",
    # Service
    "VerificationGate",
    "EMAIL_VERIFICATION_THRESHOLD",
    "RESEND_COOLDOWN_SECONDS",
    "CODE_EXPIRATION_MINUTES",
]
