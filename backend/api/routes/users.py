"""
User-related endpoints.

Provides the current user's account profile and usage window.
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, EmailStr

from shared.models import AuthenticatedUser
from modules.accounts.exceptions import UserNotFoundError
from modules.accounts.interfaces import IUserRepository
from modules.usage.interfaces import IUsageTracker
from modules.verification.service import VerificationGate
from ..dependencies import get_user_repository, get_usage_tracker, get_verification_gate
from ..middleware.auth import get_current_user

router = APIRouter()


class UserProfileResponse(BaseModel):
    """User profile response model."""

    id: str
    email: EmailStr
    name: Optional[str]
    plan: str
    email_verified: bool
    role: str


class UsageResponse(BaseModel):
    """Current usage window."""

    plan: str
    messages_used: int
    message_limit: int
    remaining: int
    reset_at: datetime
    email_verified: bool
    verification_threshold: int
    verification_required: bool


@router.get("/me", response_model=UserProfileResponse)
async def get_current_user_profile(
    user: AuthenticatedUser = Depends(get_current_user),
    repository: IUserRepository = Depends(get_user_repository),
) -> UserProfileResponse:
    """
    Get the current user's profile.

    Plan and verification status come from the account record, not the
    token. Requires authentication.
    """
    account = await repository.get(user.id)
    if account is None:
        raise UserNotFoundError(user.id)

    return UserProfileResponse(
        id=account.id,
        email=account.email or user.email,
        name=account.name,
        plan=account.plan.value,
        email_verified=account.is_verified,
        role=user.role,
    )


@router.get("/usage", response_model=UsageResponse)
async def get_usage(
    user: AuthenticatedUser = Depends(get_current_user),
    repository: IUserRepository = Depends(get_user_repository),
    tracker: IUsageTracker = Depends(get_usage_tracker),
    gate: VerificationGate = Depends(get_verification_gate),
) -> UsageResponse:
    """
    Get the current usage window.

    Rolls an expired window over first, so the counters shown are the ones
    the next chat request will be checked against. Does not charge a
    message. Requires authentication.
    """
    account = await repository.get(user.id)
    if account is None:
        raise UserNotFoundError(user.id)

    window = await tracker.refresh(account)

    return UsageResponse(
        plan=account.plan.value,
        messages_used=window.messages_used,
        message_limit=window.message_limit,
        remaining=window.remaining,
        reset_at=window.reset_at,
        email_verified=account.is_verified,
        verification_threshold=gate.threshold,
        verification_required=gate.exceeds_threshold(account, window),
    )
