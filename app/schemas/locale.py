from __future__ import annotations

from pydantic import BaseModel, Field


class LocaleSwitchRequest(BaseModel):
    locale: str = Field(..., description="Target locale code (en, hu, sr; rs accepted)")
    query: str | None = Field(None, description="Query string to carry over, e.g. ?tab=faq")


class LocaleSwitchResponse(BaseModel):
    ok: bool = True
    locale: str
    href: str
