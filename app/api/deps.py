"""Request-scoped accessors for services built at startup."""

from __future__ import annotations

from fastapi import Request

from app.core.errors import ValidationAppError
from app.services.autosave_service import AutosaveService
from app.services.contact_service import ContactService


def get_contact_service(request: Request) -> ContactService:
    return request.app.state.contact_service


def get_autosave_service(request: Request) -> AutosaveService:
    return request.app.state.autosave_service


async def read_json_object(request: Request) -> dict:
    """Decode the request body as a JSON object.

    Raises:
        ValidationAppError: If the body is not valid JSON or not an object.
    """
    try:
        body = await request.json()
    except ValueError as exc:
        raise ValidationAppError(code="bad_json", message="Bad JSON") from exc
    if not isinstance(body, dict):
        raise ValidationAppError(code="bad_json", message="Bad JSON")
    return body
