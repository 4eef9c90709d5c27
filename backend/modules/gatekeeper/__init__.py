"""
Access gatekeeper module.

Public API:
- AccessGatekeeper: Per-request verification and plan-limit gate
- AccessDecision, DenyReason: Decision returned to the chat pipeline
"""

from .models import AccessDecision, DenyReason
from .service import AccessGatekeeper

__all__ = [
    "AccessDecision",
    "DenyReason",
    "AccessGatekeeper",
]
