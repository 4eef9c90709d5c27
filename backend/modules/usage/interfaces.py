"""
Usage tracking module interface.

The gatekeeper depends on IUsageTracker, not the concrete implementation.
"""

from datetime import datetime
from typing import Protocol, Optional, runtime_checkable

from modules.accounts.models import UserAccount, UsageWindow


@runtime_checkable
class IUsageTracker(Protocol):
    """
    Interface for usage window operations.
    """

    async def refresh(
        self,
        user: UserAccount,
        now: Optional[datetime] = None,
    ) -> UsageWindow:
        """
        Get the user's active window, rolling it over if it expired.

        Calling this twice within one window writes at most once.

        Args:
            user: Loaded account
            now: Evaluation time

        Returns:
            The active window
        """
        ...

    async def increment(self, user_id: str, amount: int = 1) -> UsageWindow:
        """
        Atomically charge messages to the current window.

        Args:
            user_id: Account ID
            amount: Messages to charge

        Returns:
            The window after the increment
        """
        ...
