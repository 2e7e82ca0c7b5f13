from __future__ import annotations

from fastapi import APIRouter

from app.core.errors import NotFoundAppError
from app.schemas.site import LanguageLink, PageResponse
from app.services.locale import SUPPORTED_LOCALES, switch_href

router = APIRouter(tags=["Site"])

TABS = ["services", "packages", "faq", "about"]
SECTIONS = frozenset({*TABS, "pricing", "contact"})


def _page(locale: str, section: str | None) -> PageResponse:
    if locale not in SUPPORTED_LOCALES:
        raise NotFoundAppError(code="page_not_found", message="Page not found")
    if section is not None and section not in SECTIONS:
        raise NotFoundAppError(
            code="page_not_found",
            message="Page not found",
            details={"locale": locale},
        )

    suffix = f"/{section}" if section else ""
    return PageResponse(
        locale=locale,
        section=section,
        tabs=TABS,
        languages=[
            LanguageLink(
                code=code,
                label=code.upper(),
                href=f"{switch_href(code)}{suffix}",
                current=code == locale,
            )
            for code in SUPPORTED_LOCALES
        ],
    )


@router.get("/{locale}", response_model=PageResponse)
def home(locale: str) -> PageResponse:
    return _page(locale, None)


@router.get("/{locale}/{section}", response_model=PageResponse)
def section_page(locale: str, section: str) -> PageResponse:
    return _page(locale, section)
