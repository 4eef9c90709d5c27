"""
Email verification endpoints.

POST /request sends a fresh code (subject to the resend cooldown) and
POST /confirm checks a submitted code.
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from shared.models import AuthenticatedUser
from modules.verification.exceptions import EmailDeliveryError
from modules.verification.interfaces import IEmailSender
from modules.verification.models import CodeRequestStatus, VerificationFailure
from modules.verification.service import VerificationGate
from ..dependencies import get_email_sender, get_verification_gate
from ..middleware.auth import get_current_user
from ..models.errors import ErrorResponse, RateLimitedResponse

logger = logging.getLogger(__name__)

router = APIRouter()


class RequestCodeResponse(BaseModel):
    """Result of a code request."""

    success: bool
    message: str
    already_verified: bool = False
    expires_in_minutes: int | None = None


class ConfirmCodeRequest(BaseModel):
    """Code submitted by the user."""

    code: str = Field(..., pattern=r"^\d{6}$", description="6-digit verification code")


class ConfirmCodeResponse(BaseModel):
    """Result of a confirmation."""

    success: bool
    message: str
    already_verified: bool = False


@router.post(
    "/request",
    response_model=RequestCodeResponse,
    responses={
        404: {"model": ErrorResponse},
        429: {"model": RateLimitedResponse},
        502: {"model": ErrorResponse},
    },
)
async def request_verification_code(
    user: AuthenticatedUser = Depends(get_current_user),
    gate: VerificationGate = Depends(get_verification_gate),
    sender: IEmailSender = Depends(get_email_sender),
):
    """
    Email a new verification code.

    Returns 429 with ``retry_after`` (seconds) during the resend cooldown.
    If the email cannot be sent the code is revoked and 502 is returned,
    so the user can retry immediately. Requires authentication.
    """
    result = await gate.request_code(user.id)

    if result.status == CodeRequestStatus.ALREADY_VERIFIED:
        return RequestCodeResponse(
            success=True,
            message="Email already verified",
            already_verified=True,
        )

    if result.status == CodeRequestStatus.RATE_LIMITED:
        return JSONResponse(
            status_code=429,
            content=RateLimitedResponse(
                error=VerificationFailure.RATE_LIMITED.value,
                message=VerificationFailure.RATE_LIMITED.message,
                retry_after=result.retry_after_seconds,
            ).model_dump(),
            headers={"Retry-After": str(result.retry_after_seconds)},
        )

    account, issued = result.account, result.issued
    try:
        await sender.send_verification_code(
            account.email or user.email,
            issued.code,
            issued.expires_in_minutes,
            name=account.name,
        )
    except EmailDeliveryError:
        logger.error(f"Failed to deliver verification code to {user.id}")
        await gate.revoke_code(user.id)
        raise

    return RequestCodeResponse(
        success=True,
        message="Verification code sent",
        expires_in_minutes=issued.expires_in_minutes,
    )


@router.post(
    "/confirm",
    response_model=ConfirmCodeResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def confirm_verification_code(
    body: ConfirmCodeRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    gate: VerificationGate = Depends(get_verification_gate),
):
    """
    Confirm a verification code.

    Failures return 400 with ``error`` set to NO_CODE_ISSUED, CODE_EXPIRED
    or CODE_MISMATCH. Requires authentication.
    """
    outcome = await gate.confirm_code(user.id, body.code)

    if not outcome.verified:
        return JSONResponse(
            status_code=400,
            content=ErrorResponse(
                error=outcome.failure.value,
                message=outcome.failure.message,
            ).model_dump(exclude={"details"}),
        )

    if outcome.already_verified:
        return ConfirmCodeResponse(
            success=True,
            message="Email already verified",
            already_verified=True,
        )

    return ConfirmCodeResponse(success=True, message="Email verified successfully")
