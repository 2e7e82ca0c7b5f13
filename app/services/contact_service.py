"""Contact form submissions.

A submission is a free-form JSON object. The hidden ``company`` field is a
honeypot: real visitors never see it, so any value marks a bot, which gets a
success response and nothing else. Genuine submissions are forwarded to the
optional sinks (e-mail, KV store). A failing sink is logged and skipped; it
never changes the response.
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable

from app.adapters.email.resend_client import ResendEmailSender
from app.adapters.kv.client import KVClient
from app.core.errors import DependencyAppError

logger = logging.getLogger(__name__)

HONEYPOT_FIELD = "company"
EMAIL_SUBJECT = "New website contact"
CONTACT_TTL_SECONDS = 60 * 60 * 24 * 30


@dataclass(frozen=True)
class ContactOutcome:
    honeypot: bool
    emailed: bool = False
    stored: bool = False


def is_honeypot_filled(payload: dict[str, Any]) -> bool:
    value = payload.get(HONEYPOT_FIELD)
    if value is None:
        return False
    return bool(str(value).strip())


class ContactService:
    def __init__(
        self,
        *,
        email: ResendEmailSender | None = None,
        kv: KVClient | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.email = email
        self.kv = kv
        self._clock = clock

    def _send_email(self, payload: dict[str, Any]) -> bool:
        if self.email is None:
            return False
        try:
            self.email.send(
                subject=EMAIL_SUBJECT,
                text=json.dumps(payload, indent=2, ensure_ascii=False),
            )
        except DependencyAppError as exc:
            logger.warning(
                "contact.email_failed",
                extra={"error_code": exc.code, "error_message": exc.message},
            )
            return False
        return True

    def _store(self, payload: dict[str, Any]) -> bool:
        if self.kv is None:
            return False
        ts = int(self._clock() * 1000)
        try:
            self.kv.hset_with_ttl(
                f"contact:{ts}",
                {"ts": str(ts), "data": json.dumps(payload, ensure_ascii=False)},
                CONTACT_TTL_SECONDS,
            )
        except DependencyAppError as exc:
            logger.warning(
                "contact.store_failed",
                extra={"error_code": exc.code, "error_message": exc.message},
            )
            return False
        return True

    def submit(self, payload: dict[str, Any]) -> ContactOutcome:
        """Process one submission.

        Args:
            payload: Decoded JSON object from the request body.

        Returns:
            ContactOutcome saying which sinks accepted the submission.
        """
        if is_honeypot_filled(payload):
            logger.info("contact.honeypot", extra={"field_count": len(payload)})
            return ContactOutcome(honeypot=True)

        emailed = self._send_email(payload)
        stored = self._store(payload)
        logger.info(
            "contact.accepted",
            extra={"emailed": emailed, "stored": stored, "field_count": len(payload)},
        )
        return ContactOutcome(honeypot=False, emailed=emailed, stored=stored)
