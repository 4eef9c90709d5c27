"""
Access gatekeeper decision model.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field

from modules.accounts.models import Plan, UsageWindow


class DenyReason(str, Enum):
    """Why a chat request was not allowed to reach the LLM."""

    EMAIL_VERIFICATION_REQUIRED = "EMAIL_VERIFICATION_REQUIRED"
    PLAN_LIMIT_REACHED = "PLAN_LIMIT_REACHED"
    USER_NOT_FOUND = "USER_NOT_FOUND"


class AccessDecision(BaseModel):
    """
    ALLOW or DENY for one chat request.

    ALLOW carries the post-increment counters. DENY carries the reason and
    the context the client needs to render the right prompt:
    - EMAIL_VERIFICATION_REQUIRED: messages_used, threshold
    - PLAN_LIMIT_REACHED: plan, messages_used, message_limit
    """

    allowed: bool
    reason: Optional[DenyReason] = None
    messages_used: Optional[int] = Field(None, description="Messages charged in the window")
    message_limit: Optional[int] = Field(None, description="Window message limit")
    plan: Optional[Plan] = Field(None, description="User plan (plan-limit denials)")
    threshold: Optional[int] = Field(None, description="Verification threshold")

    model_config = {"frozen": True}

    @classmethod
    def allow(cls, window: UsageWindow) -> "AccessDecision":
        return cls(
            allowed=True,
            messages_used=window.messages_used,
            message_limit=window.message_limit,
        )

    @classmethod
    def deny(cls, reason: DenyReason, **context: Any) -> "AccessDecision":
        return cls(allowed=False, reason=reason, **context)

    def context(self) -> dict[str, Any]:
        """Context fields that are set, in JSON-ready form."""
        return self.model_dump(
            mode="json",
            exclude={"allowed", "reason"},
            exclude_none=True,
        )
