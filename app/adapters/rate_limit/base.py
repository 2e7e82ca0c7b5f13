"""Rate limiter interfaces.

Request handlers depend on this abstraction; the concrete backend (durable
KV store or in-process map) is chosen once at startup.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class RateLimitResult:
    """Outcome of a single rate limit check.

    Attributes:
        allowed: Whether the request may proceed.
        limit: Max requests per window.
        remaining: Requests left in the current window (0 when blocked).
        reset_at: UNIX epoch seconds when the current window expires.
        retry_after_seconds: Suggested wait in seconds when blocked.
    """

    allowed: bool
    limit: int
    remaining: int
    reset_at: int
    retry_after_seconds: int | None


class AbstractRateLimiter(ABC):
    """Fixed-window counter keyed by client identifier."""

    @abstractmethod
    def check(self, key: str) -> RateLimitResult:
        """Count one request for ``key`` and decide whether it is allowed.

        Args:
            key: Client identifier (usually an IP address).

        Returns:
            RateLimitResult describing the decision.
        """
        raise NotImplementedError
