"""Factory for the optional KV store client."""

from __future__ import annotations

import logging

import httpx

from app.adapters.kv.client import KVClient
from app.core.config import KVSettings, settings

logger = logging.getLogger(__name__)


def create_kv_client(kv_settings: KVSettings | None = None) -> KVClient | None:
    """Build a KV client when both URL and token are configured.

    A malformed URL or token disables the store instead of failing startup;
    the rate limiter then runs in memory.

    Returns:
        KVClient, or None when the store is not configured or misconfigured.
    """
    cfg = kv_settings or settings.kv
    if not cfg.configured:
        logger.info("kv.disabled", extra={"reason": "not_configured"})
        return None

    try:
        return KVClient(
            url=cfg.url,  # type: ignore[arg-type]
            token=cfg.token,  # type: ignore[arg-type]
            timeout_seconds=cfg.timeout_seconds,
        )
    except (ValueError, UnicodeEncodeError, httpx.InvalidURL) as exc:
        logger.error(
            "kv.disabled",
            extra={"reason": "misconfigured", "error_type": type(exc).__name__},
        )
        return None
