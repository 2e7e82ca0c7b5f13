"""Rate limiting adapters.

Two interchangeable backends sit behind ``AbstractRateLimiter``: a durable
one on the KV store and an in-process one. ``FailoverRateLimiter`` composes
them so a store outage never rejects a request.
"""

from app.adapters.rate_limit.base import AbstractRateLimiter, RateLimitResult
from app.adapters.rate_limit.failover import FailoverRateLimiter
from app.adapters.rate_limit.in_memory import InMemoryFixedWindowRateLimiter
from app.adapters.rate_limit.kv import KVFixedWindowRateLimiter

__all__ = [
    "AbstractRateLimiter",
    "FailoverRateLimiter",
    "InMemoryFixedWindowRateLimiter",
    "KVFixedWindowRateLimiter",
    "RateLimitResult",
]
