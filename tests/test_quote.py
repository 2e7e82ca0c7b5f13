"""Tests for the quick quote calculator."""

from __future__ import annotations

import doctest

import pytest
from fastapi.testclient import TestClient

from app.services import calculator
from app.services.calculator import calculate_quote, format_amount


def test_doctests() -> None:
    failures, _ = doctest.testmod(calculator)
    assert failures == 0


class TestCalculateQuote:
    def test_empty_selection_is_zero(self) -> None:
        quote = calculate_quote()

        assert quote.total == 0
        assert quote.lines == []
        assert quote.formatted == "0 RSD"

    def test_full_selection(self) -> None:
        quote = calculate_quote(
            ssd="480",
            windows=True,
            deep_clean=True,
            gpu_service=True,
            data_rescue=True,
        )

        assert [line.key for line in quote.lines] == [
            "ssd",
            "windows",
            "deep_clean",
            "gpu_service",
            "data_rescue",
        ]
        assert quote.total == 5500 + 2000 + 2500 + 1800 + 4500
        assert quote.formatted == "16.300 RSD"

    @pytest.mark.parametrize(("size", "price"), [("240", 3500), ("480", 5500), ("960", 9000)])
    def test_ssd_prices(self, size, price) -> None:
        assert calculate_quote(ssd=size).total == price

    def test_unknown_ssd_size(self) -> None:
        with pytest.raises(ValueError):
            calculate_quote(ssd="120")

    def test_labels_follow_locale(self) -> None:
        quote = calculate_quote(windows=True, locale="hu")

        assert quote.locale == "hu"
        assert quote.lines[0].label == "Tiszta Windows telepítés"
        assert quote.total_label == "Becsült végösszeg"

    def test_legacy_and_unknown_locales(self) -> None:
        assert calculate_quote(locale="rs").locale == "sr"
        assert calculate_quote(locale="de").locale == "en"

    def test_format_amount(self) -> None:
        assert format_amount(9000) == "9.000 RSD"


class TestQuoteRoute:
    def test_quote_with_camel_case_options(self, client: TestClient) -> None:
        resp = client.post(
            "/api/quote",
            json={"ssd": "960", "deepClean": True, "gpuService": True, "locale": "sr"},
        )

        assert resp.status_code == 200
        body = resp.json()
        assert body["total"] == 9000 + 2500 + 1800
        assert body["currency"] == "RSD"
        assert body["formatted"] == "13.300 RSD"
        assert body["title"] == "Brzi kalkulator ponude"
        assert [line["amount"] for line in body["lines"]] == [9000, 2500, 1800]

    def test_quote_with_snake_case_options(self, client: TestClient) -> None:
        resp = client.post("/api/quote", json={"data_rescue": True})

        assert resp.json()["total"] == 4500

    def test_quote_rejects_unknown_ssd(self, client: TestClient) -> None:
        resp = client.post("/api/quote", json={"ssd": "2000"})

        assert resp.status_code == 422
