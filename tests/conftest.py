"""Pytest configuration and fixtures shared across all test modules.

Optional collaborators are switched off by default so tests never reach the
network; tests that need the KV store use the in-process fake below.
"""

import json
import os

# CRITICAL: Set this before any imports that might load settings
os.environ["APP_ENV"] = "testing"
for _var in (
    "KV_REST_API_URL",
    "KV_REST_API_TOKEN",
    "RESEND_API_KEY",
    "CONTACT_TO",
    "CONTACT_FROM",
):
    os.environ.pop(_var, None)

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.adapters.kv.client import KVClient
from app.core.app_factory import create_app


class FakeKVServer:
    """Minimal stand-in for the Upstash REST API (INCR/EXPIRE/TTL/HSET)."""

    def __init__(self) -> None:
        self.values: dict[str, int] = {}
        self.ttls: dict[str, int] = {}
        self.hashes: dict[str, dict[str, str]] = {}
        self.requests: list[httpx.Request] = []
        self.fail_with: int | str | None = None

    def expire_all(self) -> None:
        self.values.clear()
        self.ttls.clear()

    def _run(self, cmd: list[str]) -> object:
        op, key = cmd[0].upper(), cmd[1]
        if op == "INCR":
            self.values[key] = self.values.get(key, 0) + 1
            return self.values[key]
        if op == "EXPIRE":
            if len(cmd) > 3 and cmd[3].upper() == "NX" and key in self.ttls:
                return 0
            self.ttls[key] = int(cmd[2])
            return 1
        if op == "TTL":
            return self.ttls.get(key, -1)
        if op == "HSET":
            fields = self.hashes.setdefault(key, {})
            pairs = cmd[2:]
            for field, value in zip(pairs[::2], pairs[1::2]):
                fields[field] = value
            return len(pairs) // 2
        raise AssertionError(f"unexpected command {op}")

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_with == "connect":
            raise httpx.ConnectError("connection refused", request=request)
        if isinstance(self.fail_with, int):
            return httpx.Response(self.fail_with, json={"error": "unavailable"})

        body = json.loads(request.content)
        if request.url.path == "/multi-exec":
            return httpx.Response(200, json=[{"result": self._run(cmd)} for cmd in body])
        return httpx.Response(200, json={"result": self._run(body)})

    def client(self) -> KVClient:
        return KVClient(
            url="https://kv.test",
            token="kv-test-token",
            transport=httpx.MockTransport(self.handler),
        )


@pytest.fixture
def fake_kv() -> FakeKVServer:
    return FakeKVServer()


@pytest.fixture
def app() -> FastAPI:
    """Fresh app per test so rate limit state never leaks between tests."""
    return create_app()


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)
