"""
Account store interface.

The usage and verification modules depend on IUserRepository, not on a
concrete store. Every write method touches only the fields it names, so
usage and verification updates never clobber each other.
"""

from datetime import datetime
from typing import Protocol, Optional, runtime_checkable

from .models import UserAccount, UsageWindow, VerificationState


@runtime_checkable
class IUserRepository(Protocol):
    """Persistence contract for user account records."""

    async def get(self, user_id: str) -> Optional[UserAccount]:
        """
        Load an account by ID.

        Legacy records missing a plan, usage window or verification state
        are completed with defaults, and the defaults persisted, before the
        account is returned.

        Args:
            user_id: Account ID

        Returns:
            UserAccount if found, None otherwise
        """
        ...

    async def create(
        self,
        user_id: str,
        email: str,
        name: Optional[str] = None,
    ) -> UserAccount:
        """
        Create a free-plan, unverified account with an empty window.

        Args:
            user_id: Account ID (from the auth provider)
            email: Email address
            name: Optional display name

        Returns:
            The created account
        """
        ...

    async def get_usage_window(self, user_id: str) -> Optional[UsageWindow]:
        """Read only the stored usage window, or None if the user is absent."""
        ...

    async def replace_expired_window(
        self,
        user_id: str,
        window: UsageWindow,
        now: datetime,
    ) -> bool:
        """
        Replace the usage window, but only while the stored one is expired.

        Args:
            user_id: Account ID
            window: The new window
            now: The instant the stored window was judged expired at

        Returns:
            True if the write happened, False if another writer already
            rolled the window over (or the user is absent)
        """
        ...

    async def increment_usage(self, user_id: str, amount: int = 1) -> Optional[UsageWindow]:
        """
        Atomically add ``amount`` to the current window's counter.

        Returns:
            The post-increment window, or None if the user is absent
        """
        ...

    async def set_verification(self, user_id: str, state: VerificationState) -> None:
        """Overwrite the verification fields."""
        ...

    async def mark_email_verified(self, user_id: str, verified_at: datetime) -> None:
        """Record verification and clear all verification fields."""
        ...
