"""
Shared infrastructure for the Mentor GPT backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: Supabase client factory
- exceptions: Base exception classes
- clock: UTC wall clock used for every metering comparison

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .clock import Clock, utc_now
from .config import Settings, get_settings
from .database import get_supabase_client, reset_client_cache
from .exceptions import (
    MentorError,
    NotFoundError,
    ValidationError,
    ExternalServiceError,
)
from .models import AuthenticatedUser

__all__ = [
    "Clock",
    "utc_now",
    "Settings",
    "get_settings",
    "get_supabase_client",
    "reset_client_cache",
    "MentorError",
    "NotFoundError",
    "ValidationError",
    "ExternalServiceError",
    "AuthenticatedUser",
]
