"""Contact notification e-mail through the Resend HTTP API."""

from __future__ import annotations

import logging

import httpx

from app.core.config import EmailSettings, settings
from app.core.errors import DependencyAppError

logger = logging.getLogger(__name__)


def parse_recipients(value: str | None) -> list[str]:
    """Split a comma-separated recipient list, dropping blanks."""
    if not value:
        return []
    return [addr.strip() for addr in value.split(",") if addr.strip()]


class ResendEmailSender:
    """Send plain-text e-mails via ``POST /emails``."""

    def __init__(
        self,
        *,
        api_key: str,
        sender: str,
        recipients: list[str],
        base_url: str = "https://api.resend.com",
        timeout_seconds: float = 5.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.sender = sender
        self.recipients = recipients
        self._client = httpx.Client(
            base_url=base_url,
            headers={"Authorization": f"Bearer {api_key}"},
            timeout=timeout_seconds,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def send(self, *, subject: str, text: str) -> None:
        """Send one message to all configured recipients.

        Raises:
            DependencyAppError: If the request fails or Resend rejects it.
        """
        try:
            response = self._client.post(
                "/emails",
                json={
                    "from": self.sender,
                    "to": self.recipients,
                    "subject": subject,
                    "text": text,
                },
            )
        except httpx.HTTPError as exc:
            raise DependencyAppError(
                code="email_unreachable",
                message=f"E-mail request failed: {exc.__class__.__name__}",
                details={"dependency": "email"},
            ) from exc

        if response.status_code >= 400:
            raise DependencyAppError(
                code="email_rejected",
                message=f"E-mail provider returned HTTP {response.status_code}",
                details={"dependency": "email", "http_status": response.status_code},
            )

        logger.info("email.sent", extra={"recipient_count": len(self.recipients)})


def create_email_sender(email_settings: EmailSettings | None = None) -> ResendEmailSender | None:
    """Build the sender when API key, sender and recipients are configured."""
    cfg = email_settings or settings.email
    if not cfg.configured:
        logger.info("email.disabled", extra={"reason": "not_configured"})
        return None

    try:
        return ResendEmailSender(
            api_key=cfg.resend_api_key,  # type: ignore[arg-type]
            sender=cfg.contact_from,  # type: ignore[arg-type]
            recipients=parse_recipients(cfg.contact_to),
            base_url=cfg.resend_base_url,
            timeout_seconds=cfg.timeout_seconds,
        )
    except (ValueError, UnicodeEncodeError, httpx.InvalidURL) as exc:
        logger.error(
            "email.disabled",
            extra={"reason": "misconfigured", "error_type": type(exc).__name__},
        )
        return None
