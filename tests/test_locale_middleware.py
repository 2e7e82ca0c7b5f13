"""Tests for locale redirect middleware and the explicit locale switch."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient


def _cookie_header(resp) -> str:
    return resp.headers.get("set-cookie", "")


def test_bare_path_redirects_to_header_locale(client: TestClient) -> None:
    resp = client.get(
        "/pricing",
        headers={"Accept-Language": "sr-RS,en;q=0.5"},
        follow_redirects=False,
    )

    assert resp.status_code == 307
    assert resp.headers["location"] == "/sr/pricing"
    cookie = _cookie_header(resp)
    assert "lang=sr" in cookie
    assert "Max-Age=31536000" in cookie
    assert "Path=/" in cookie
    assert "samesite=lax" in cookie.lower()


def test_localized_path_passes_through_and_persists(client: TestClient) -> None:
    resp = client.get(
        "/en/pricing",
        headers={"Accept-Language": "hu"},
        follow_redirects=False,
    )

    assert resp.status_code == 200
    assert resp.json()["locale"] == "en"
    assert "lang=en" in _cookie_header(resp)


def test_legacy_prefix_is_permanent_redirect(client: TestClient) -> None:
    resp = client.get("/rs/about", follow_redirects=False)

    assert resp.status_code == 308
    assert resp.headers["location"] == "/sr/about"


@pytest.mark.parametrize("cookie", [None, "hu"])
def test_favicon_is_never_redirected(app, cookie) -> None:
    client = TestClient(app, cookies={"lang": cookie} if cookie else None)
    resp = client.get(
        "/favicon.ico",
        headers={"Accept-Language": "sr"},
        follow_redirects=False,
    )

    assert resp.status_code not in (301, 302, 307, 308)
    assert "lang=" not in _cookie_header(resp)


def test_cookie_wins_over_header(app) -> None:
    client = TestClient(app, cookies={"lang": "hu"})
    resp = client.get(
        "/faq",
        headers={"Accept-Language": "sr"},
        follow_redirects=False,
    )

    assert resp.headers["location"] == "/hu/faq"


def test_root_redirect_keeps_query(client: TestClient) -> None:
    resp = client.get("/?tab=packages", headers={"Accept-Language": "hu"}, follow_redirects=False)

    assert resp.status_code == 307
    assert resp.headers["location"] == "/hu/?tab=packages"


def test_root_redirect_lands_on_locale_home(client: TestClient) -> None:
    resp = client.get("/", headers={"Accept-Language": "sr"})

    assert resp.status_code == 200
    assert resp.json()["locale"] == "sr"


def test_following_redirect_lands_on_page(client: TestClient) -> None:
    resp = client.get("/about", headers={"Accept-Language": "hu-HU"})

    assert resp.status_code == 200
    assert resp.json()["locale"] == "hu"
    assert resp.json()["section"] == "about"


def test_api_paths_are_not_localized(client: TestClient) -> None:
    resp = client.post("/api/quote", json={"windows": True}, follow_redirects=False)

    assert resp.status_code == 200
    assert "lang=" not in _cookie_header(resp)


class TestLocaleSwitch:
    def test_switch_sets_cookie(self, client: TestClient) -> None:
        resp = client.post("/api/locale", json={"locale": "hu", "query": "?tab=faq"})

        assert resp.status_code == 200
        assert resp.json() == {"ok": True, "locale": "hu", "href": "/hu?tab=faq"}
        assert "lang=hu" in _cookie_header(resp)

    def test_switch_normalizes_legacy_code(self, client: TestClient) -> None:
        resp = client.post("/api/locale", json={"locale": "RS"})

        assert resp.json()["locale"] == "sr"
        assert resp.json()["href"] == "/sr"

    def test_switch_rejects_unknown_code(self, client: TestClient) -> None:
        resp = client.post("/api/locale", json={"locale": "de"})

        assert resp.status_code == 400
        body = resp.json()
        assert body["ok"] is False
        assert body["error"]["code"] == "unsupported_locale"
        assert "lang=" not in _cookie_header(resp)

    def test_switched_cookie_drives_next_redirect(self, client: TestClient) -> None:
        client.post("/api/locale", json={"locale": "sr"})
        resp = client.get("/services", headers={"Accept-Language": "en"}, follow_redirects=False)

        assert resp.headers["location"] == "/sr/services"
