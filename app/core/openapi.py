"""OpenAPI customization: tag descriptions and the contact 429 contract."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import FastAPI

TAGS_METADATA = [
    {"name": "Contact", "description": "Contact form submission and form autosave."},
    {"name": "Quote", "description": "Quick quote calculator."},
    {"name": "Locale", "description": "Explicit language switching."},
    {"name": "Site", "description": "Locale-prefixed page descriptors."},
    {"name": "Health", "description": "Liveness checks."},
]


def apply_openapi_customizations(app: FastAPI) -> None:
    """Patch OpenAPI generation with tags and the rate limit response."""

    original_openapi = app.openapi

    def custom_openapi() -> Dict[str, Any]:
        schema = original_openapi()

        tags = schema.setdefault("tags", [])
        existing = {t.get("name") for t in tags}
        tags.extend(t for t in TAGS_METADATA if t["name"] not in existing)

        contact = schema.get("paths", {}).get("/api/contact", {}).get("post")
        if isinstance(contact, dict):
            contact.setdefault("responses", {})["429"] = {
                "description": "Too many submissions from this client",
                "headers": {
                    "Retry-After": {
                        "description": "Window length in seconds",
                        "schema": {"type": "integer"},
                    }
                },
            }

        return schema

    app.openapi = custom_openapi  # type: ignore[assignment]
