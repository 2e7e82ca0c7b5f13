"""Application factory for the FastAPI app.

Builds the optional collaborators (KV store, e-mail) and the rate limiter
once, from configuration, and stores them on ``app.state`` for injection.
"""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.adapters.email.resend_client import create_email_sender
from app.adapters.kv.factory import create_kv_client
from app.api.routes import (
    contact_router,
    health_router,
    locale_router,
    quote_router,
    site_router,
)
from app.core.config import settings
from app.core.exception_handlers import setup_exception_handlers
from app.core.logging import configure_logging
from app.core.middleware import locale_middleware, request_id_middleware
from app.core.openapi import apply_openapi_customizations
from app.core.rate_limit import build_rate_limiter
from app.services.autosave_service import AutosaveService
from app.services.contact_service import ContactService


@asynccontextmanager
async def _lifespan(app: FastAPI):
    yield
    if app.state.kv_client is not None:
        app.state.kv_client.close()
    if app.state.email_sender is not None:
        app.state.email_sender.close()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application instance.

    Returns:
        Configured FastAPI app with middleware, handlers and routers.
    """
    # Logging first so subsequent init logs are formatted as desired
    configure_logging(settings.log)

    app = FastAPI(
        title="PC Repair Site",
        description=(
            "Backend for a multilingual (en/hu/sr) PC-repair marketing site: "
            "locale routing, rate-limited contact form, form autosave and a "
            "quick quote calculator."
        ),
        version="0.1.0",
        lifespan=_lifespan,
    )

    kv_client = create_kv_client(settings.kv)
    email_sender = create_email_sender(settings.email)
    app.state.kv_client = kv_client
    app.state.email_sender = email_sender
    app.state.rate_limiter = build_rate_limiter(kv_client, settings.app)
    app.state.contact_service = ContactService(email=email_sender, kv=kv_client)
    app.state.autosave_service = AutosaveService(kv=kv_client)

    # Middleware (last registered runs first)
    app.middleware("http")(locale_middleware)
    app.middleware("http")(request_id_middleware)

    setup_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(contact_router, prefix="/api")
    app.include_router(quote_router, prefix="/api")
    app.include_router(locale_router, prefix="/api")
    # Catch-all locale pages go last so they never shadow fixed routes.
    app.include_router(site_router)

    apply_openapi_customizations(app)

    return app
