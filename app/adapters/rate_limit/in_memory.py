"""In-process fixed-window rate limiter.

Notes:
- Per-process only: state is lost on restart and not shared between workers.
- Thread-safe: a lock guards the read-increment-compare sequence.
"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Callable

from app.adapters.rate_limit.base import AbstractRateLimiter, RateLimitResult


@dataclass
class RateRecord:
    count: int
    window_expires_at: float


class InMemoryFixedWindowRateLimiter(AbstractRateLimiter):
    """Count requests per key in windows that start at the key's first request.

    A window opens on the first request for a key and lasts ``window_seconds``.
    Once ``now >= window_expires_at`` the next request opens a fresh window.
    Blocked requests still count, so hammering the endpoint never frees budget
    early.
    """

    def __init__(
        self,
        *,
        limit: int,
        window_seconds: int,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the limiter.

        Args:
            limit: Maximum number of allowed requests per window.
            window_seconds: Window length in seconds.
            clock: Time source returning UNIX time in seconds.

        Raises:
            ValueError: If limit or window_seconds are invalid.
        """
        if limit < 1:
            raise ValueError("limit must be >= 1")
        if window_seconds < 1:
            raise ValueError("window_seconds must be >= 1")

        self._limit = limit
        self._window_seconds = window_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._records: dict[str, RateRecord] = {}

    def __len__(self) -> int:
        return len(self._records)

    def _purge_expired(self, now: float) -> None:
        stale = [k for k, rec in self._records.items() if now >= rec.window_expires_at]
        for key in stale:
            del self._records[key]

    def check(self, key: str) -> RateLimitResult:
        key = str(key)
        now = self._clock()

        with self._lock:
            record = self._records.get(key)
            if record is None or now >= record.window_expires_at:
                # Opportunistic cleanup keeps the map bounded by active clients.
                self._purge_expired(now)
                record = RateRecord(count=1, window_expires_at=now + self._window_seconds)
                self._records[key] = record
                return RateLimitResult(
                    allowed=True,
                    limit=self._limit,
                    remaining=self._limit - 1,
                    reset_at=int(record.window_expires_at),
                    retry_after_seconds=None,
                )

            record.count += 1
            count = record.count
            expires_at = record.window_expires_at

        if count > self._limit:
            return RateLimitResult(
                allowed=False,
                limit=self._limit,
                remaining=0,
                reset_at=int(expires_at),
                retry_after_seconds=self._window_seconds,
            )

        return RateLimitResult(
            allowed=True,
            limit=self._limit,
            remaining=self._limit - count,
            reset_at=int(expires_at),
            retry_after_seconds=None,
        )
