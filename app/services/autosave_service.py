"""Best-effort persistence of partially filled forms."""

from __future__ import annotations

import json
import logging
import time
from typing import Any, Callable

from app.adapters.kv.client import KVClient
from app.core.errors import DependencyAppError

logger = logging.getLogger(__name__)

DEFAULT_SELECTOR = "#contact-form"
AUTOSAVE_TTL_SECONDS = 60 * 60 * 24 * 7


class AutosaveService:
    def __init__(
        self,
        *,
        kv: KVClient | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.kv = kv
        self._clock = clock

    def save(
        self,
        *,
        selector: Any = None,
        data: Any = None,
        failed_submit: Any = False,
        user_agent: str = "",
    ) -> bool:
        """Store a form snapshot if the KV store is available.

        Loosely typed inputs are coerced: a non-string selector becomes the
        contact form selector and non-object data becomes ``{}``.

        Returns:
            True when the snapshot was written.
        """
        selector = selector if isinstance(selector, str) else DEFAULT_SELECTOR
        data = data if isinstance(data, dict) else {}
        failed = bool(failed_submit)

        if self.kv is None:
            return False

        ts = int(self._clock() * 1000)
        try:
            self.kv.hset_with_ttl(
                f"autosave:{selector}:{ts}",
                {
                    "selector": selector,
                    "data": json.dumps(data, ensure_ascii=False),
                    "failedSubmit": "true" if failed else "false",
                    "ts": str(ts),
                    "ua": user_agent,
                },
                AUTOSAVE_TTL_SECONDS,
            )
        except DependencyAppError as exc:
            logger.warning(
                "autosave.store_failed",
                extra={"error_code": exc.code, "error_message": exc.message},
            )
            return False
        return True
