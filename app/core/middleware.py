"""HTTP middleware: request correlation and locale routing.

Usage:
    app.middleware("http")(locale_middleware)
    app.middleware("http")(request_id_middleware)

Starlette runs the last registered middleware first, so registering the
request id middleware last makes it wrap locale redirects too.
"""

from __future__ import annotations

import logging
import time
import uuid

from fastapi import Request, Response
from fastapi.responses import RedirectResponse

from app.core.config import settings
from app.core.logging import clear_request_id, set_request_id
from app.services.locale import resolve

logger = logging.getLogger(__name__)


def set_locale_cookie(response: Response, locale: str) -> None:
    """Remember ``locale`` site-wide for about a year."""
    response.set_cookie(
        settings.app.locale_cookie_name,
        locale,
        max_age=settings.app.locale_cookie_max_age,
        path="/",
        samesite="lax",
    )


async def request_id_middleware(request: Request, call_next) -> Response:
    """Propagate or generate a correlation id and time the request.

    The incoming ``X-Request-ID`` (header name configurable via
    ``LOG_REQUEST_ID_HEADER``) is reused when present, otherwise a UUID is
    generated. The id is bound to the logging context for the duration of the
    request and echoed back with an ``X-Request-Duration-ms`` header.
    """

    header_name = settings.log.request_id_header
    request_id = request.headers.get(header_name) or str(uuid.uuid4())
    set_request_id(request_id)
    start = time.perf_counter()
    try:
        response: Response = await call_next(request)
    finally:
        clear_request_id()

    duration_ms = (time.perf_counter() - start) * 1000
    response.headers[header_name] = request_id
    response.headers.setdefault("X-Request-Duration-ms", f"{duration_ms:.2f}")
    return response


async def locale_middleware(request: Request, call_next) -> Response:
    """Send bare content paths to their locale-prefixed form.

    Asset, API and file paths pass through untouched. Localized paths pass
    through and refresh the locale cookie; everything else is redirected
    (``/rs/...`` permanently to ``/sr/...``).
    """

    path = request.url.path
    resolution = resolve(
        path,
        request.cookies.get(settings.app.locale_cookie_name),
        request.headers.get("accept-language"),
        query=request.url.query or None,
    )
    if resolution is None:
        return await call_next(request)

    if resolution.redirect:
        logger.info(
            "locale.redirect",
            extra={
                "from_path": path,
                "to_path": resolution.target_path,
                "locale": resolution.locale_to_persist,
                "status_code": resolution.status_code,
            },
        )
        response: Response = RedirectResponse(
            resolution.target_path,  # type: ignore[arg-type]
            status_code=resolution.status_code,
        )
    else:
        response = await call_next(request)

    set_locale_cookie(response, resolution.locale_to_persist)
    return response
