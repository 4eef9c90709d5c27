"""
Email verification gate.

Per-user state machine:

    UNVERIFIED_NO_CODE -> CODE_ISSUED -> VERIFIED
                              |
                              +-> CODE_EXPIRED -> CODE_ISSUED (reissue)

VERIFIED is terminal. Unverified users may chat until they reach the
verification threshold; from then on every chat request is blocked until
they confirm a code sent to their email.
"""

import logging
import math
from datetime import datetime, timedelta
from typing import Optional

from shared.clock import Clock, utc_now
from modules.accounts.exceptions import UserNotFoundError
from modules.accounts.interfaces import IUserRepository
from modules.accounts.models import UserAccount, UsageWindow, VerificationState

from .codes import generate_code, hash_code, code_matches
from .models import (
    CodeRequest,
    CodeRequestStatus,
    ConfirmOutcome,
    CooldownStatus,
    IssuedCode,
    VerificationFailure,
)

logger = logging.getLogger(__name__)

EMAIL_VERIFICATION_THRESHOLD = 12
RESEND_COOLDOWN_SECONDS = 120
CODE_EXPIRATION_MINUTES = 10


class VerificationGate:
    """
    Decides when verification is required and runs the code lifecycle.

    The gate is the only writer of a user's verification fields and of
    ``email_verified_at``.
    """

    def __init__(
        self,
        repository: IUserRepository,
        clock: Clock = utc_now,
        threshold: int = EMAIL_VERIFICATION_THRESHOLD,
        cooldown_seconds: int = RESEND_COOLDOWN_SECONDS,
        code_expiration_minutes: int = CODE_EXPIRATION_MINUTES,
    ):
        """
        Initialize the gate.

        Args:
            repository: Account store
            clock: Source of the current UTC time
            threshold: Message count at which unverified users are blocked.
                       The client's verification prompt uses the same value.
            cooldown_seconds: Minimum time between two issued codes
            code_expiration_minutes: Lifetime of an issued code
        """
        self._repository = repository
        self._clock = clock
        self.threshold = threshold
        self.cooldown_seconds = cooldown_seconds
        self.code_expiration_minutes = code_expiration_minutes

    def exceeds_threshold(self, user: UserAccount, usage: UsageWindow) -> bool:
        """True iff the user is unverified and has used ``threshold`` messages."""
        return not user.is_verified and usage.messages_used >= self.threshold

    def can_issue_code(
        self,
        verification: VerificationState,
        now: Optional[datetime] = None,
    ) -> CooldownStatus:
        """
        Check the resend cooldown.

        Args:
            verification: Stored verification state
            now: Evaluation time (defaults to the clock)

        Returns:
            CooldownStatus; when not allowed, retry_after_seconds counts
            down to 0 as the cooldown elapses
        """
        if verification.last_sent_at is None:
            return CooldownStatus(allowed=True)

        now = now or self._clock()
        elapsed = (now - verification.last_sent_at).total_seconds()
        if elapsed >= self.cooldown_seconds:
            return CooldownStatus(allowed=True)

        return CooldownStatus(
            allowed=False,
            retry_after_seconds=max(0, self.cooldown_seconds - math.floor(elapsed)),
        )

    async def issue_code(self, user_id: str, now: Optional[datetime] = None) -> IssuedCode:
        """
        Issue a new code, superseding any pending one.

        Only the hash is stored. The plaintext is returned once, for the
        email sender. Does not check the cooldown; see request_code().

        Args:
            user_id: Account ID
            now: Issue time (defaults to the clock)

        Returns:
            The issued code and its expiry
        """
        now = now or self._clock()
        code = generate_code()
        expires_at = now + timedelta(minutes=self.code_expiration_minutes)

        await self._repository.set_verification(
            user_id,
            VerificationState(
                code_hash=await hash_code(code),
                expires_at=expires_at,
                last_sent_at=now,
            ),
        )
        logger.info(f"Issued verification code for {user_id}, expires_at={expires_at.isoformat()}")

        return IssuedCode(
            code=code,
            expires_at=expires_at,
            expires_in_minutes=self.code_expiration_minutes,
        )

    async def request_code(self, user_id: str, now: Optional[datetime] = None) -> CodeRequest:
        """
        Issue a code unless the user is verified or still cooling down.

        Args:
            user_id: Account ID
            now: Request time (defaults to the clock)

        Returns:
            CodeRequest carrying the loaded account and either the issued
            code or the wait time

        Raises:
            UserNotFoundError: If the account does not exist
        """
        now = now or self._clock()
        user = await self._repository.get(user_id)
        if user is None:
            raise UserNotFoundError(user_id)

        if user.is_verified:
            return CodeRequest(status=CodeRequestStatus.ALREADY_VERIFIED, account=user)

        cooldown = self.can_issue_code(user.verification, now)
        if not cooldown.allowed:
            logger.warning(
                f"Verification code request for {user_id} rate limited, "
                f"retry in {cooldown.retry_after_seconds}s"
            )
            return CodeRequest(
                status=CodeRequestStatus.RATE_LIMITED,
                account=user,
                retry_after_seconds=cooldown.retry_after_seconds,
            )

        issued = await self.issue_code(user_id, now)
        return CodeRequest(status=CodeRequestStatus.ISSUED, account=user, issued=issued)

    async def revoke_code(self, user_id: str) -> None:
        """
        Discard a pending code and its cooldown.

        Used when a code could not be delivered, so the user can ask again
        right away instead of waiting out a cooldown for an email that never
        arrived.
        """
        await self._repository.set_verification(user_id, VerificationState())
        logger.info(f"Revoked pending verification code for {user_id}")

    async def confirm_code(
        self,
        user_id: str,
        submitted_code: str,
        now: Optional[datetime] = None,
    ) -> ConfirmOutcome:
        """
        Check a submitted code and mark the email verified on success.

        Already verified users succeed without any write. A code is expired
        from its expiry instant onwards. A consumed code reports
        NO_CODE_ISSUED rather than CODE_MISMATCH.

        Args:
            user_id: Account ID
            submitted_code: Code entered by the user
            now: Evaluation time (defaults to the clock)

        Returns:
            ConfirmOutcome

        Raises:
            UserNotFoundError: If the account does not exist
        """
        now = now or self._clock()
        user = await self._repository.get(user_id)
        if user is None:
            raise UserNotFoundError(user_id)

        if user.is_verified:
            return ConfirmOutcome.success(already_verified=True)

        verification = user.verification
        if not verification.has_code:
            return ConfirmOutcome.denied(VerificationFailure.NO_CODE_ISSUED)

        if now >= verification.expires_at:
            return ConfirmOutcome.denied(VerificationFailure.CODE_EXPIRED)

        if not await code_matches(submitted_code, verification.code_hash):
            logger.warning(f"Verification code mismatch for {user_id}")
            return ConfirmOutcome.denied(VerificationFailure.CODE_MISMATCH)

        await self._repository.mark_email_verified(user_id, now)
        logger.info(f"Email verified for {user_id}")
        return ConfirmOutcome.success()
