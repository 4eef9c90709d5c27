"""
Access gatekeeper.

Runs once per chat request, before any LLM call:

    load user -> refresh usage window -> verification gate
              -> plan limit -> charge one message -> decision

The message is charged when the request is allowed, not when the LLM
finishes. A request that later fails downstream (bad provider key, client
disconnect) stays charged, so failed or retried calls are never free.
"""

import logging
from datetime import datetime
from typing import Optional

from shared.clock import Clock, utc_now
from modules.accounts.interfaces import IUserRepository
from modules.usage.interfaces import IUsageTracker
from modules.verification.service import VerificationGate

from .models import AccessDecision, DenyReason

logger = logging.getLogger(__name__)


class AccessGatekeeper:
    """
    Decides whether a chat request may proceed.

    Denials are returned as decisions, never raised. Persistence failures
    are not caught: a failed increment must surface as an error, not turn
    into a free ALLOW. There are no retries here; the caller decides.

    The limit check and the increment are separate steps and the increment
    is unconditional. Concurrent requests that all see ``limit - 1`` are all
    allowed, so a window can end above its limit; later requests are then
    denied until the window resets.
    """

    def __init__(
        self,
        repository: IUserRepository,
        tracker: IUsageTracker,
        verification: VerificationGate,
        clock: Clock = utc_now,
    ):
        self._repository = repository
        self._tracker = tracker
        self._verification = verification
        self._clock = clock

    async def check(self, user_id: str, now: Optional[datetime] = None) -> AccessDecision:
        """
        Gate one chat request and charge it if allowed.

        Args:
            user_id: Requesting user
            now: Evaluation time (defaults to the clock)

        Returns:
            AccessDecision (ALLOW with post-increment counters, or DENY)
        """
        now = now or self._clock()

        user = await self._repository.get(user_id)
        if user is None:
            logger.warning(f"Chat request for unknown user {user_id}")
            return AccessDecision.deny(DenyReason.USER_NOT_FOUND)

        window = await self._tracker.refresh(user, now)

        # Verification is enforced even for users still under quota
        if self._verification.exceeds_threshold(user, window):
            logger.info(
                f"Denied {user_id}: email verification required "
                f"({window.messages_used}/{self._verification.threshold})"
            )
            return AccessDecision.deny(
                DenyReason.EMAIL_VERIFICATION_REQUIRED,
                messages_used=window.messages_used,
                threshold=self._verification.threshold,
            )

        if window.messages_used >= window.message_limit:
            logger.info(
                f"Denied {user_id}: {user.plan.value} plan limit reached "
                f"({window.messages_used}/{window.message_limit})"
            )
            return AccessDecision.deny(
                DenyReason.PLAN_LIMIT_REACHED,
                plan=user.plan,
                messages_used=window.messages_used,
                message_limit=window.message_limit,
            )

        updated = await self._tracker.increment(user.id, 1)
        return AccessDecision.allow(updated)
