"""
Plan quota policy.

Maps a plan to the number of chat messages allowed per usage window.
"""

from typing import Any

from modules.accounts.models import Plan


PLAN_MESSAGE_LIMITS: dict[Plan, int] = {
    Plan.FREE: 50,
    Plan.PRO: 1000,
    Plan.ENTERPRISE: 10000,
}


def limit_for(plan: Any) -> int:
    """
    Get the message limit for a plan.

    Unrecognized or missing plan values get the free limit, never an
    unlimited one.

    Args:
        plan: A Plan or its stored string value

    Returns:
        Messages allowed per window
    """
    return PLAN_MESSAGE_LIMITS[Plan.parse(plan)]
