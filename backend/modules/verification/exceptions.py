"""
Verification module exceptions.

Verification outcomes (expired, mismatched, rate limited) are values, not
exceptions; see models.py. Only infrastructure failures are raised.
"""

from shared.exceptions import ExternalServiceError


class EmailDeliveryError(ExternalServiceError):
    """Raised when the verification email could not be sent."""

    def __init__(self, message: str):
        super().__init__(
            f"Unable to send verification email: {message}",
            service="resend",
            code="EMAIL_DELIVERY_FAILED",
        )
