"""
Verification module interfaces.
"""

from typing import Protocol, Optional, runtime_checkable


@runtime_checkable
class IEmailSender(Protocol):
    """
    Interface for delivering verification codes.

    The verification gate never sends email itself; the API hands the
    issued code to an implementation of this protocol.
    """

    async def send_verification_code(
        self,
        email: str,
        code: str,
        expires_in_minutes: int,
        name: Optional[str] = None,
    ) -> None:
        """
        Deliver a verification code.

        Args:
            email: Recipient address
            code: Plaintext 6-digit code
            expires_in_minutes: Code lifetime, shown to the recipient
            name: Optional recipient display name

        Raises:
            EmailDeliveryError: If the email could not be sent
        """
        ...
