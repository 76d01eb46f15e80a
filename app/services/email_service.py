"""
Email Service - transactional email over HTTP (SendGrid v3 mail/send format).
"""

import logging
from typing import Any, Dict, Optional

import httpx

from app.config import settings
from app.errors import GatewayError

logger = logging.getLogger(__name__)


class EmailService:
    """Service for sending transactional emails."""

    def __init__(
        self,
        api_url: str = "",
        api_key: str = "",
        sender: str = "",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_url = api_url or settings.email_api_url
        self.api_key = api_key or settings.email_api_key
        self.sender = sender or settings.email_from
        self.timeout = timeout
        self.transport = transport

        self.headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    def _build_payload(self, to: str, subject: str, html: str) -> Dict[str, Any]:
        return {
            "personalizations": [{"to": [{"email": to}]}],
            "from": {"email": self.sender},
            "subject": subject,
            "content": [{"type": "text/html", "value": html}],
        }

    async def send(self, to: str, subject: str, html: str) -> None:
        """Send an HTML email. Raises GatewayError if it was not accepted."""
        if not self.api_key:
            logger.error("Email API key not configured")
            raise GatewayError("Email delivery is not configured")

        try:
            async with httpx.AsyncClient(transport=self.transport) as client:
                response = await client.post(
                    self.api_url,
                    json=self._build_payload(to, subject, html),
                    headers=self.headers,
                    timeout=self.timeout,
                )
        except httpx.HTTPError as e:
            logger.error(f"Email API Exception: {e}")
            raise GatewayError(f"Email delivery failed: {e}") from e

        if response.status_code not in (200, 201, 202):
            logger.error(f"Email API Error {response.status_code}: {response.text}")
            raise GatewayError(f"Email delivery failed with status {response.status_code}")

        logger.info(f"Email '{subject}' sent to {to}")

    async def send_verification_email(self, to: str, first_name: str, token: str) -> None:
        link = f"{settings.frontend_url}/verify-email?token={token}"
        html = (
            f"<p>Hi {first_name},</p>"
            f"<p>Welcome! Please confirm your email address to activate your artist account:</p>"
            f'<p><a href="{link}">Verify my email</a></p>'
            f"<p>This link expires in {settings.verification_token_ttl_hours} hours.</p>"
        )
        await self.send(to, "Verify your email", html)

    async def send_password_reset_email(self, to: str, first_name: str, token: str) -> None:
        link = f"{settings.frontend_url}/reset-password?token={token}"
        html = (
            f"<p>Hi {first_name},</p>"
            f"<p>We received a request to reset your password:</p>"
            f'<p><a href="{link}">Choose a new password</a></p>'
            f"<p>This link expires in {settings.reset_token_ttl_minutes} minutes. "
            f"If you didn't ask for this, you can ignore this email.</p>"
        )
        await self.send(to, "Reset your password", html)
