"""Rate limiter that degrades to a local fallback when the primary fails."""

from __future__ import annotations

import logging

from app.adapters.rate_limit.base import AbstractRateLimiter, RateLimitResult
from app.core.errors import DependencyAppError

logger = logging.getLogger(__name__)


class FailoverRateLimiter(AbstractRateLimiter):
    """Ask ``primary`` first; on any error answer from ``fallback``.

    The fallback only sees the calls the primary could not serve, so during
    an outage requests are still limited, just per process. A limiter fault
    never rejects a request.
    """

    def __init__(self, primary: AbstractRateLimiter, fallback: AbstractRateLimiter) -> None:
        self.primary = primary
        self.fallback = fallback

    def check(self, key: str) -> RateLimitResult:
        try:
            return self.primary.check(key)
        except DependencyAppError as exc:
            logger.warning(
                "rate_limit.primary_failed",
                extra={"error_code": exc.code, "error_message": exc.message},
            )
        except Exception as exc:
            logger.exception(
                "rate_limit.primary_failed",
                extra={"error_type": type(exc).__name__},
            )
        return self.fallback.check(key)
