"""Tests for redaction of visitor data and secrets in logs."""

from __future__ import annotations

import json
import logging
from io import StringIO

import pytest

from app.core.logging import (
    JsonFormatter,
    RequestIdFilter,
    SensitiveDataFilter,
    clear_request_id,
    redact,
    set_request_id,
)


@pytest.fixture
def capture():
    logger = logging.getLogger("test_site_logging")
    logger.setLevel(logging.INFO)
    logger.handlers.clear()
    logger.propagate = False

    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.addFilter(RequestIdFilter())
    handler.addFilter(SensitiveDataFilter())
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)

    yield logger, stream

    logger.handlers.clear()
    clear_request_id()


def test_contact_payload_is_redacted(capture):
    logger, stream = capture

    logger.info(
        "contact.debug",
        extra={"payload": {"email": "ana@example.com", "phone": "+381600000000"}, "field_count": 2},
    )

    output = stream.getvalue()
    assert "ana@example.com" not in output
    assert "+381600000000" not in output
    assert "[REDACTED]" in output
    assert json.loads(output)["field_count"] == 2


def test_nested_secrets_are_redacted(capture):
    logger, stream = capture

    logger.info(
        "kv.debug",
        extra={"headers": {"Authorization": "Bearer secret-token", "user-agent": "pytest"}},
    )

    output = stream.getvalue()
    assert "secret-token" not in output
    assert "pytest" in output


def test_safe_fields_pass_through(capture):
    logger, stream = capture

    logger.info(
        "rate_limit.allowed",
        extra={"key_hash": "abc123", "limit": 5, "remaining": 4, "window_s": 600},
    )

    record = json.loads(stream.getvalue())
    assert record["message"] == "rate_limit.allowed"
    assert record["remaining"] == 4
    assert "[REDACTED]" not in stream.getvalue()


def test_request_id_is_attached(capture):
    logger, stream = capture
    set_request_id("req-42")

    logger.info("locale.redirect", extra={"locale": "sr"})

    assert json.loads(stream.getvalue())["request_id"] == "req-42"


def test_non_ascii_is_kept_readable(capture):
    logger, stream = capture

    logger.info("quote.priced", extra={"label": "Čista instalacija"})

    assert "Čista instalacija" in stream.getvalue()


def test_redact_walks_sequences():
    value = redact([{"token": "t"}, ("x", {"cookie": "c"})])

    assert value == [{"token": "[REDACTED]"}, ("x", {"cookie": "[REDACTED]"})]
