"""Rate limiting for the contact endpoint.

Strategy:
- Fixed window per client IP (5 requests per 10 minutes by default).
- Durable KV-backed counting when the store is configured, with an
  in-process fallback for calls the store cannot serve.
- The backend is built once at startup and injected via ``Depends``.

The client IP is taken from the first ``X-Forwarded-For`` entry when present.
That header is client-controlled unless a trusted proxy overwrites it.
"""

from __future__ import annotations

import hashlib
import logging

from fastapi import Depends, Request

from app.adapters.kv.client import KVClient
from app.adapters.rate_limit.base import AbstractRateLimiter, RateLimitResult
from app.adapters.rate_limit.failover import FailoverRateLimiter
from app.adapters.rate_limit.in_memory import InMemoryFixedWindowRateLimiter
from app.adapters.rate_limit.kv import KVFixedWindowRateLimiter
from app.core.config import AppSettings, settings
from app.core.errors import RateLimitAppError

logger = logging.getLogger(__name__)

UNKNOWN_CLIENT = "unknown"


def build_rate_limiter(
    kv_client: KVClient | None,
    app_settings: AppSettings | None = None,
) -> AbstractRateLimiter:
    """Select the limiter backend from configuration.

    Args:
        kv_client: KV client, or None when the store is not configured.
        app_settings: Limits to apply; defaults to ``settings.app``.

    Returns:
        A failover limiter over the KV store, or a plain in-memory limiter.
    """
    cfg = app_settings or settings.app
    fallback = InMemoryFixedWindowRateLimiter(
        limit=cfg.contact_rate_limit_requests,
        window_seconds=cfg.contact_rate_limit_window_seconds,
    )
    if kv_client is None:
        logger.info("rate_limit.backend", extra={"backend": "memory"})
        return fallback

    logger.info("rate_limit.backend", extra={"backend": "kv"})
    return FailoverRateLimiter(
        primary=KVFixedWindowRateLimiter(
            kv_client,
            limit=cfg.contact_rate_limit_requests,
            window_seconds=cfg.contact_rate_limit_window_seconds,
        ),
        fallback=fallback,
    )


def get_rate_limiter(request: Request) -> AbstractRateLimiter:
    return request.app.state.rate_limiter


def client_key(request: Request) -> str:
    """Identify the caller: forwarded-for, then peer address, then ``unknown``."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    if request.client and request.client.host:
        return str(request.client.host)
    return UNKNOWN_CLIENT


def _hash_key(key: str) -> str:
    """Hash the client key for logging without exposing addresses."""
    return hashlib.sha256(key.encode()).hexdigest()[:16]


def enforce_contact_rate_limit(
    request: Request,
    limiter: AbstractRateLimiter = Depends(get_rate_limiter),
) -> RateLimitResult:
    """FastAPI dependency counting one contact request for the caller.

    Returns:
        RateLimitResult for an allowed request (``remaining`` feeds the
        response body).

    Raises:
        RateLimitAppError: When the caller exceeded its budget.
    """
    cfg = settings.app
    if not cfg.rate_limit_enabled:
        return RateLimitResult(
            allowed=True,
            limit=cfg.contact_rate_limit_requests,
            remaining=cfg.contact_rate_limit_requests,
            reset_at=0,
            retry_after_seconds=None,
        )

    key = client_key(request)
    result = limiter.check(key)
    log_extra = {
        "key_hash": _hash_key(key),
        "limit": result.limit,
        "remaining": result.remaining,
        "window_s": cfg.contact_rate_limit_window_seconds,
    }

    if result.allowed:
        logger.info("rate_limit.allowed", extra=log_extra)
        return result

    logger.warning("rate_limit.exceeded", extra=log_extra)
    raise RateLimitAppError(
        code="rate_limited",
        message="Too many requests. Please try again later.",
        details={
            "retry_after": cfg.contact_rate_limit_window_seconds,
            "limit": result.limit,
            "remaining": result.remaining,
            "reset_at": result.reset_at,
        },
    )
