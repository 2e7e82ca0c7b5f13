from __future__ import annotations

from pydantic import BaseModel


class LanguageLink(BaseModel):
    code: str
    label: str
    href: str
    current: bool


class PageResponse(BaseModel):
    locale: str
    section: str | None
    tabs: list[str]
    languages: list[LanguageLink]
