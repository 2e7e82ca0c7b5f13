"""Client for Redis-over-REST key-value stores (Upstash / Vercel KV).

Commands are sent as JSON arrays, e.g. ``["INCR", "rl:contact:1.2.3.4"]``.
``/multi-exec`` runs a list of commands as one atomic transaction.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

import httpx

from app.core.errors import DependencyAppError

logger = logging.getLogger(__name__)

Command = Sequence[str | int]


class KVClient:
    """Thin synchronous wrapper around the KV REST API."""

    def __init__(
        self,
        *,
        url: str,
        token: str,
        timeout_seconds: float = 2.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._client = httpx.Client(
            base_url=url.rstrip("/"),
            headers={"Authorization": f"Bearer {token}"},
            timeout=timeout_seconds,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def _post(self, path: str, body: Any) -> Any:
        try:
            response = self._client.post(path, json=body)
        except httpx.HTTPError as exc:
            raise DependencyAppError(
                code="kv_unreachable",
                message=f"KV store request failed: {exc.__class__.__name__}",
                details={"dependency": "kv"},
            ) from exc

        if response.status_code >= 400:
            raise DependencyAppError(
                code="kv_http_error",
                message=f"KV store returned HTTP {response.status_code}",
                details={"dependency": "kv", "http_status": response.status_code},
            )

        try:
            return response.json()
        except ValueError as exc:
            raise DependencyAppError(
                code="kv_bad_response",
                message="KV store returned a non-JSON body",
                details={"dependency": "kv"},
            ) from exc

    @staticmethod
    def _unwrap(item: Any) -> Any:
        if not isinstance(item, Mapping):
            raise DependencyAppError(
                code="kv_bad_response",
                message="Unexpected KV response shape",
                details={"dependency": "kv"},
            )
        if "error" in item:
            raise DependencyAppError(
                code="kv_command_error",
                message=str(item["error"]),
                details={"dependency": "kv"},
            )
        return item.get("result")

    def execute(self, *command: str | int) -> Any:
        """Run a single command and return its ``result``."""
        return self._unwrap(self._post("", [str(part) for part in command]))

    def transaction(self, commands: Sequence[Command]) -> list[Any]:
        """Run ``commands`` atomically and return their results in order.

        Raises:
            DependencyAppError: On transport failure or if any command fails.
        """
        body = [[str(part) for part in cmd] for cmd in commands]
        results = self._post("/multi-exec", body)
        if not isinstance(results, list) or len(results) != len(body):
            raise DependencyAppError(
                code="kv_bad_response",
                message="KV transaction returned an unexpected number of results",
                details={"dependency": "kv"},
            )
        return [self._unwrap(item) for item in results]

    def hset_with_ttl(self, key: str, fields: Mapping[str, str], ttl_seconds: int) -> None:
        """Write a hash and give it an expiry in one transaction."""
        flat: list[str | int] = ["HSET", key]
        for field, value in fields.items():
            flat.extend([field, value])
        self.transaction([flat, ["EXPIRE", key, ttl_seconds]])
        logger.debug("kv.hset", extra={"kv_key": key, "ttl_s": ttl_seconds})
