"""
Usage window boundaries.

Windows are monthly and calendar-aligned: a window opened on the 14th at
15:42 resets on the 14th of next month at 00:00 UTC. They are not rolling
30-day periods.
"""

from datetime import datetime
from typing import Any

from dateutil.relativedelta import relativedelta

from modules.accounts.models import UsageWindow
from .quota import limit_for


def is_expired(usage: UsageWindow, now: datetime) -> bool:
    """A window is stale from its reset instant onwards."""
    return now >= usage.reset_at


def next_reset_boundary(start: datetime) -> datetime:
    """
    Compute when a window opened at ``start`` resets.

    One calendar month later, truncated to the start of that day. Month-end
    dates clamp to the last day of the shorter month (Jan 31 -> Feb 28).

    Args:
        start: Window opening time (timezone-aware)

    Returns:
        The reset boundary
    """
    boundary = start + relativedelta(months=1)
    return boundary.replace(hour=0, minute=0, second=0, microsecond=0)


def open_window(plan: Any, now: datetime, messages_used: int = 0) -> UsageWindow:
    """Build a fresh window for ``plan`` starting at ``now``."""
    return UsageWindow(
        messages_used=messages_used,
        message_limit=limit_for(plan),
        reset_at=next_reset_boundary(now),
    )
