"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.

Every metering component shares one account repository, so the usage
tracker, verification gate and gatekeeper all see the same rows.
"""

import logging
from typing import TYPE_CHECKING

from shared.config import get_settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.accounts.interfaces import IUserRepository
    from modules.usage.interfaces import IUsageTracker
    from modules.verification.interfaces import IEmailSender
    from modules.verification.service import VerificationGate
    from modules.gatekeeper.service import AccessGatekeeper
    from modules.chat.service import ChatService

logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access.

    All services are cached as singletons within the container.
    Use reset() to clear all cached services for testing.
    """

    def __init__(self) -> None:
        self._user_repository: "IUserRepository | None" = None
        self._usage_tracker: "IUsageTracker | None" = None
        self._verification_gate: "VerificationGate | None" = None
        self._gatekeeper: "AccessGatekeeper | None" = None
        self._email_sender: "IEmailSender | None" = None
        self._chat_service: "ChatService | None" = None

    @property
    def user_repository(self) -> "IUserRepository":
        """Get the account repository for the configured storage backend."""
        if self._user_repository is None:
            settings = get_settings()
            if settings.storage_backend == "memory":
                from modules.accounts.repository import InMemoryUserRepository
                logger.warning("Using in-memory account storage; data is lost on restart")
                self._user_repository = InMemoryUserRepository()
            else:
                from modules.accounts.repository import SupabaseUserRepository
                from shared.database import get_supabase_client
                self._user_repository = SupabaseUserRepository(get_supabase_client())
        return self._user_repository

    @property
    def usage_tracker(self) -> "IUsageTracker":
        """Get the usage window tracker."""
        if self._usage_tracker is None:
            from modules.usage.service import UsageWindowTracker
            self._usage_tracker = UsageWindowTracker(self.user_repository)
        return self._usage_tracker

    @property
    def verification_gate(self) -> "VerificationGate":
        """Get the email verification gate."""
        if self._verification_gate is None:
            from modules.verification.service import VerificationGate
            settings = get_settings()
            self._verification_gate = VerificationGate(
                self.user_repository,
                threshold=settings.email_verification_threshold,
                cooldown_seconds=settings.resend_cooldown_seconds,
                code_expiration_minutes=settings.code_expiration_minutes,
            )
        return self._verification_gate

    @property
    def gatekeeper(self) -> "AccessGatekeeper":
        """Get the access gatekeeper."""
        if self._gatekeeper is None:
            from modules.gatekeeper.service import AccessGatekeeper
            self._gatekeeper = AccessGatekeeper(
                repository=self.user_repository,
                tracker=self.usage_tracker,
                verification=self.verification_gate,
            )
        return self._gatekeeper

    @property
    def email_sender(self) -> "IEmailSender":
        """Get the verification email sender."""
        if self._email_sender is None:
            from modules.verification.email import ResendEmailSender
            settings = get_settings()
            self._email_sender = ResendEmailSender(
                api_key=settings.resend_api_key,
                from_email=settings.resend_from_email,
            )
        return self._email_sender

    @property
    def chat_service(self) -> "ChatService":
        """Get the chat service."""
        if self._chat_service is None:
            from modules.chat.service import ChatService
            self._chat_service = ChatService()
        return self._chat_service

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._user_repository = None
        self._usage_tracker = None
        self._verification_gate = None
        self._gatekeeper = None
        self._email_sender = None
        self._chat_service = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_user_repository() -> "IUserRepository":
    """FastAPI dependency for the account repository."""
    return get_container().user_repository


def get_usage_tracker() -> "IUsageTracker":
    """FastAPI dependency for the usage tracker."""
    return get_container().usage_tracker


def get_verification_gate() -> "VerificationGate":
    """FastAPI dependency for the verification gate."""
    return get_container().verification_gate


def get_access_gatekeeper() -> "AccessGatekeeper":
    """FastAPI dependency for the access gatekeeper."""
    return get_container().gatekeeper


def get_email_sender() -> "IEmailSender":
    """FastAPI dependency for the email sender."""
    return get_container().email_sender


def get_chat_service() -> "ChatService":
    """FastAPI dependency for the chat service."""
    return get_container().chat_service
