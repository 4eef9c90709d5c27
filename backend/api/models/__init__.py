"""API models package."""

from .user import TokenPayload
from .errors import ErrorResponse, AccessDeniedResponse, RateLimitedResponse

__all__ = [
    "TokenPayload",
    "ErrorResponse",
    "AccessDeniedResponse",
    "RateLimitedResponse",
]
