"""Tests for the KV REST client."""

from __future__ import annotations

import httpx
import pytest

from app.adapters.kv.client import KVClient
from app.adapters.kv.factory import create_kv_client
from app.core.config import KVSettings
from app.core.errors import DependencyAppError


def _client(handler) -> KVClient:
    return KVClient(url="https://kv.test/", token="tok", transport=httpx.MockTransport(handler))


def test_execute_returns_result(fake_kv) -> None:
    client = fake_kv.client()

    assert client.execute("INCR", "counter") == 1
    assert client.execute("INCR", "counter") == 2
    assert fake_kv.requests[0].url.path == "/"


def test_hset_with_ttl(fake_kv) -> None:
    fake_kv.client().hset_with_ttl("contact:1", {"ts": "1", "data": "{}"}, 30)

    assert fake_kv.hashes["contact:1"] == {"ts": "1", "data": "{}"}
    assert fake_kv.ttls["contact:1"] == 30


def test_command_error_raises() -> None:
    client = _client(lambda request: httpx.Response(200, json=[{"result": 1}, {"error": "WRONGTYPE"}]))

    with pytest.raises(DependencyAppError) as exc_info:
        client.transaction([["INCR", "k"], ["HSET", "k", "f", "v"]])

    assert exc_info.value.code == "kv_command_error"


def test_result_count_mismatch_raises() -> None:
    client = _client(lambda request: httpx.Response(200, json=[{"result": 1}]))

    with pytest.raises(DependencyAppError):
        client.transaction([["INCR", "k"], ["TTL", "k"]])


def test_non_json_body_raises() -> None:
    client = _client(lambda request: httpx.Response(200, text="<html>"))

    with pytest.raises(DependencyAppError) as exc_info:
        client.execute("TTL", "k")

    assert exc_info.value.code == "kv_bad_response"


def test_factory_needs_url_and_token() -> None:
    assert create_kv_client(KVSettings(url="https://kv.test")) is None
    assert create_kv_client(KVSettings(token="tok")) is None

    client = create_kv_client(KVSettings(url="https://kv.test", token="tok"))
    assert isinstance(client, KVClient)
    client.close()


@pytest.mark.parametrize(
    "kv_settings",
    [
        KVSettings(url="https://kv.example.com:notaport", token="t"),
        KVSettings(url="https://kv.example.com", token="tök"),
    ],
)
def test_factory_disables_misconfigured_store(kv_settings) -> None:
    assert create_kv_client(kv_settings) is None


def test_app_starts_with_misconfigured_store(monkeypatch: pytest.MonkeyPatch) -> None:
    from fastapi.testclient import TestClient

    from app.adapters.rate_limit.in_memory import InMemoryFixedWindowRateLimiter
    from app.core import app_factory

    monkeypatch.setattr(
        app_factory.settings,
        "kv",
        KVSettings(url="https://kv.example.com:notaport", token="t"),
    )
    app = app_factory.create_app()

    assert app.state.kv_client is None
    assert isinstance(app.state.rate_limiter, InMemoryFixedWindowRateLimiter)
    statuses = [
        TestClient(app).post("/api/contact", json={"name": "Ana"}).status_code for _ in range(6)
    ]
    assert statuses == [200] * 5 + [429]
