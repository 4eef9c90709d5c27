"""
Verification email delivery through the Resend HTTP API.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

import httpx

from .exceptions import EmailDeliveryError

logger = logging.getLogger(__name__)

PRODUCT_NAME = "My Mentor GPT"


@dataclass(frozen=True)
class VerificationEmail:
    """Rendered verification email."""

    subject: str
    html: str
    text: str


def render_verification_email(
    code: str,
    expires_in_minutes: int,
    name: Optional[str] = None,
    year: Optional[int] = None,
) -> VerificationEmail:
    """
    Render the verification email bodies.

    Args:
        code: The 6-digit code
        expires_in_minutes: Code lifetime, shown to the user
        name: Recipient display name ("there" if unknown)
        year: Copyright year (defaults to the current year)

    Returns:
        Subject, HTML and plain-text bodies
    """
    display_name = name or "there"
    minutes = f"{expires_in_minutes} minute{'' if expires_in_minutes == 1 else 's'}"
    year = year or datetime.now(timezone.utc).year

    html = f"""
    <table style="width:100%;max-width:480px;margin:0 auto;font-family:'Inter',-apple-system,BlinkMacSystemFont,'Segoe UI',sans-serif;color:#111827;">
      <tr>
        <td style="padding:24px 0;text-align:center;">
          <h1 style="margin:0;font-size:24px;font-weight:600;">Verify your email</h1>
        </td>
      </tr>
      <tr>
        <td style="background:#ffffff;border-radius:16px;padding:32px;border:1px solid #e5e7eb;">
          <p style="margin:0 0 16px;font-size:16px;">Hi {display_name},</p>
          <p style="margin:0 0 24px;font-size:16px;">Use the code below to verify your email address. The code expires in {minutes}.</p>
          <div style="display:inline-block;padding:16px 24px;border-radius:12px;background:#111827;color:#ffffff;font-size:32px;font-weight:700;letter-spacing:8px;">
            {code}
          </div>
          <p style="margin:24px 0 0;font-size:14px;color:#6b7280;">If you did not request this, you can safely ignore this email.</p>
        </td>
      </tr>
      <tr>
        <td style="text-align:center;padding:24px 0 0;font-size:12px;color:#9ca3af;">
          &copy; {year} {PRODUCT_NAME}. All rights reserved.
        </td>
      </tr>
    </table>
    """

    text = (
        f"Hi {display_name},\n\n"
        f"Use the code {code} to verify your email address. "
        f"This code expires in {minutes}.\n\n"
        f"If you did not request this email, you can ignore it.\n\n"
        f"{PRODUCT_NAME}"
    )

    return VerificationEmail(
        subject=f"Verify your email for {PRODUCT_NAME}",
        html=html,
        text=text,
    )


class ResendEmailSender:
    """
    Sends verification emails with Resend.

    Configuration problems surface when sending, not at construction, so the
    API can start without email configured.
    """

    RESEND_API_URL = "https://api.resend.com/emails"

    def __init__(
        self,
        api_key: Optional[str],
        from_email: Optional[str],
        timeout: float = 10.0,
    ):
        self._api_key = api_key
        self._from_email = from_email
        self._timeout = timeout

    async def send_verification_code(
        self,
        email: str,
        code: str,
        expires_in_minutes: int,
        name: Optional[str] = None,
    ) -> None:
        """
        Send a verification code.

        Raises:
            EmailDeliveryError: If Resend is not configured or rejects the send
        """
        if not self._api_key:
            raise EmailDeliveryError("RESEND_API_KEY environment variable is not set")
        if not self._from_email:
            raise EmailDeliveryError("RESEND_FROM_EMAIL environment variable is not set")

        message = render_verification_email(code, expires_in_minutes, name=name)

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self.RESEND_API_URL,
                    headers={
                        "Authorization": f"Bearer {self._api_key}",
                        "Content-Type": "application/json",
                    },
                    json={
                        "from": self._from_email,
                        "to": email,
                        "subject": message.subject,
                        "html": message.html,
                        "text": message.text,
                    },
                    timeout=self._timeout,
                )
                response.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning(f"Resend rejected verification email: {e}")
            raise EmailDeliveryError(str(e)) from e
