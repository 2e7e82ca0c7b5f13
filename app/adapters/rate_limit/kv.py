"""Durable fixed-window rate limiter backed by the KV store.

Each check is one ``MULTI/EXEC`` transaction:

    INCR   rl:contact:<key>
    EXPIRE rl:contact:<key> <window> NX
    TTL    rl:contact:<key>

``NX`` only sets the expiry when the key has none, so the window starts at the
first request and later requests do not extend it.
"""

from __future__ import annotations

import time
from typing import Callable

from app.adapters.kv.client import KVClient
from app.adapters.rate_limit.base import AbstractRateLimiter, RateLimitResult
from app.core.errors import DependencyAppError


class KVFixedWindowRateLimiter(AbstractRateLimiter):
    """Rate limiter shared across processes via atomic INCR on the KV store."""

    def __init__(
        self,
        client: KVClient,
        *,
        limit: int,
        window_seconds: int,
        prefix: str = "rl:contact:",
        clock: Callable[[], float] = time.time,
    ) -> None:
        if limit < 1:
            raise ValueError("limit must be >= 1")
        if window_seconds < 1:
            raise ValueError("window_seconds must be >= 1")

        self._client = client
        self._limit = limit
        self._window_seconds = window_seconds
        self._prefix = prefix
        self._clock = clock

    def check(self, key: str) -> RateLimitResult:
        """Count one request in the shared store.

        Raises:
            DependencyAppError: If the store is unreachable or answers
                something unexpected.
        """
        kv_key = f"{self._prefix}{key}"
        count, _, ttl = self._client.transaction(
            [
                ["INCR", kv_key],
                ["EXPIRE", kv_key, self._window_seconds, "NX"],
                ["TTL", kv_key],
            ]
        )
        try:
            count = int(count)
            ttl = int(ttl)
        except (TypeError, ValueError) as exc:
            raise DependencyAppError(
                code="kv_bad_response",
                message="Rate limit counter is not an integer",
                details={"dependency": "kv"},
            ) from exc

        if ttl < 0:
            ttl = self._window_seconds
        reset_at = int(self._clock()) + ttl

        if count > self._limit:
            return RateLimitResult(
                allowed=False,
                limit=self._limit,
                remaining=0,
                reset_at=reset_at,
                retry_after_seconds=self._window_seconds,
            )

        return RateLimitResult(
            allowed=True,
            limit=self._limit,
            remaining=max(0, self._limit - count),
            reset_at=reset_at,
            retry_after_seconds=None,
        )
