from app.schemas.contact import AutosaveRequest, ContactResponse, OkResponse
from app.schemas.locale import LocaleSwitchRequest, LocaleSwitchResponse
from app.schemas.quote import QuoteLineOut, QuoteRequest, QuoteResponse
from app.schemas.site import LanguageLink, PageResponse

__all__ = [
    "AutosaveRequest",
    "ContactResponse",
    "LanguageLink",
    "LocaleSwitchRequest",
    "LocaleSwitchResponse",
    "OkResponse",
    "PageResponse",
    "QuoteLineOut",
    "QuoteRequest",
    "QuoteResponse",
]
