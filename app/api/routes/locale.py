from __future__ import annotations

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from app.core.errors import ValidationAppError
from app.core.middleware import set_locale_cookie
from app.schemas.locale import LocaleSwitchRequest, LocaleSwitchResponse
from app.services.locale import LEGACY_ALIASES, SUPPORTED_LOCALES, switch_href

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Locale"])


@router.post("/locale", response_model=LocaleSwitchResponse)
def switch_locale(body: LocaleSwitchRequest) -> JSONResponse:
    """Explicitly change the preferred locale.

    This is the only path that moves a visitor from one supported locale to
    another; passive routing never does.

    Raises:
        ValidationAppError: 400 for codes outside the supported set.
    """
    code = body.locale.strip().lower()
    code = LEGACY_ALIASES.get(code, code)
    if code not in SUPPORTED_LOCALES:
        raise ValidationAppError(
            code="unsupported_locale",
            message=f"Unsupported locale: {body.locale!r}",
            details={"locale": body.locale, "supported": list(SUPPORTED_LOCALES)},
        )

    payload = LocaleSwitchResponse(locale=code, href=switch_href(code, body.query))
    response = JSONResponse(payload.model_dump())
    set_locale_cookie(response, code)
    logger.info("locale.switched", extra={"locale": code})
    return response
