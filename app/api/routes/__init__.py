from __future__ import annotations

from app.api.routes.contact import router as contact_router
from app.api.routes.health import router as health_router
from app.api.routes.locale import router as locale_router
from app.api.routes.quote import router as quote_router
from app.api.routes.site import router as site_router

__all__ = [
    "contact_router",
    "health_router",
    "locale_router",
    "quote_router",
    "site_router",
]
