"""
Usage window tracker.

Keeps each user's (messages_used, message_limit, reset_at) window current
and charges messages against it.
"""

import logging
from datetime import datetime
from typing import Optional

from shared.clock import Clock, utc_now
from modules.accounts.exceptions import UserNotFoundError
from modules.accounts.interfaces import IUserRepository
from modules.accounts.models import UserAccount, UsageWindow

from .exceptions import InvalidUsageAmountError
from .window import is_expired, open_window

logger = logging.getLogger(__name__)


class UsageWindowTracker:
    """
    Rolls usage windows over and increments their counters.

    The tracker never enforces the plan limit itself; that is the access
    gatekeeper's decision. Keeping the counter separate means it stays
    authoritative even for callers that skip the gate.
    """

    def __init__(self, repository: IUserRepository, clock: Clock = utc_now):
        """
        Initialize the tracker.

        Args:
            repository: Account store
            clock: Source of the current UTC time
        """
        self._repository = repository
        self._clock = clock

    async def refresh(
        self,
        user: UserAccount,
        now: Optional[datetime] = None,
    ) -> UsageWindow:
        """
        Return the user's current window, opening a new one if it expired.

        Active windows are returned unchanged without a write. An expired
        window is replaced by ``{0, limit_for(plan), next boundary}``. When
        concurrent requests race on the same expired window, only the first
        write lands; the others read back the window it created.

        Args:
            user: Loaded account
            now: Evaluation time (defaults to the clock)

        Returns:
            The active window

        Raises:
            UserNotFoundError: If the account vanished mid-refresh
        """
        now = now or self._clock()

        if not is_expired(user.usage, now):
            return user.usage

        window = open_window(user.plan, now)
        if await self._repository.replace_expired_window(user.id, window, now):
            logger.info(
                f"Opened usage window for {user.id}: "
                f"limit={window.message_limit}, resets_at={window.reset_at.isoformat()}"
            )
            return window

        current = await self._repository.get_usage_window(user.id)
        if current is None:
            raise UserNotFoundError(user.id)
        logger.debug(f"Usage window for {user.id} was already rolled over")
        return current

    async def increment(self, user_id: str, amount: int = 1) -> UsageWindow:
        """
        Atomically charge ``amount`` messages to the current window.

        Does not roll the window over; call refresh() first.

        Args:
            user_id: Account ID
            amount: Messages to charge (positive)

        Returns:
            The window after the increment

        Raises:
            InvalidUsageAmountError: If amount is not positive
            UserNotFoundError: If the account does not exist
        """
        if amount < 1:
            raise InvalidUsageAmountError(amount)

        window = await self._repository.increment_usage(user_id, amount)
        if window is None:
            raise UserNotFoundError(user_id)
        return window
