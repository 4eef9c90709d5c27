"""
Accounts module.

Owns the user account record that the metering core reads and updates.

Public API:
- IUserRepository: Interface for account persistence
- UserAccount, UsageWindow, VerificationState, Plan: Record models
- UserNotFoundError: Raised when a user ID does not resolve

Concrete stores live in modules.accounts.repository.
"""

from .interfaces import IUserRepository
from .models import Plan, UserAccount, UsageWindow, VerificationState
from .exceptions import UserNotFoundError

__all__ = [
    # Interface
    "IUserRepository",
    # Models
    "Plan",
    "UserAccount",
    "UsageWindow",
    "VerificationState",
    # Exceptions
    "UserNotFoundError",
]
