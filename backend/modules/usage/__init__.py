"""
Usage tracking module.

Meters chat messages against monthly, plan-sized usage windows.

Public API:
- IUsageTracker: Interface for usage window operations
- UsageWindowTracker: Tracker implementation
- limit_for: Plan quota policy
- is_expired, next_reset_boundary, open_window: Window math
"""

from .interfaces import IUsageTracker
from .exceptions import InvalidUsageAmountError
from .quota import PLAN_MESSAGE_LIMITS, limit_for
from .window import is_expired, next_reset_boundary, open_window
from .service import UsageWindowTracker

__all__ = [
    # Interfaces
    "IUsageTracker",
    # Exceptions
    "InvalidUsageAmountError",
    # Quota policy
    "PLAN_MESSAGE_LIMITS",
    "limit_for",
    # Window math
    "is_expired",
    "next_reset_boundary",
    "open_window",
    # Service
    "UsageWindowTracker",
]
