"""
Error response models.

Standardized error responses for the API.
"""

from pydantic import BaseModel, Field
from typing import Any, Optional


class ErrorResponse(BaseModel):
    """Standard error response format (see MentorError.to_dict)."""

    error: str
    message: Optional[str] = None
    details: dict[str, Any] = Field(default_factory=dict)


class AccessDeniedResponse(BaseModel):
    """Chat request refused by the access gatekeeper."""

    error: str
    messages_used: Optional[int] = None
    message_limit: Optional[int] = None
    plan: Optional[str] = None
    threshold: Optional[int] = None


class RateLimitedResponse(BaseModel):
    """Verification code requested during the resend cooldown."""

    error: str = "RATE_LIMITED"
    message: str
    retry_after: int
