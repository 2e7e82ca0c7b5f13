from __future__ import annotations

from fastapi.testclient import TestClient


def test_home_page_descriptor(client: TestClient) -> None:
    resp = client.get("/hu")

    assert resp.status_code == 200
    body = resp.json()
    assert body["locale"] == "hu"
    assert body["section"] is None
    assert body["tabs"] == ["services", "packages", "faq", "about"]
    assert [link["code"] for link in body["languages"]] == ["en", "hu", "sr"]
    assert [link["current"] for link in body["languages"]] == [False, True, False]


def test_section_links_keep_section(client: TestClient) -> None:
    resp = client.get("/sr/pricing")

    hrefs = [link["href"] for link in resp.json()["languages"]]
    assert hrefs == ["/en/pricing", "/hu/pricing", "/sr/pricing"]


def test_unknown_section_is_404(client: TestClient) -> None:
    resp = client.get("/en/nope")

    assert resp.status_code == 404
    assert resp.json()["error"]["code"] == "page_not_found"


def test_health_reports_optional_sinks(client: TestClient) -> None:
    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "kv": False, "email": False}
