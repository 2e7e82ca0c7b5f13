"""Locale selection for locale-prefixed routes.

Every content page lives under ``/{locale}/...``. A bare path is redirected
to the visitor's locale, chosen from (in order) the ``lang`` cookie, the
``Accept-Language`` header and the default. Paths that already carry a
supported locale are never rewritten to another one; visiting them only
refreshes the cookie.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Final

SUPPORTED_LOCALES: Final[tuple[str, ...]] = ("en", "hu", "sr")
DEFAULT_LOCALE: Final[str] = "en"
LEGACY_ALIASES: Final[dict[str, str]] = {"rs": "sr"}

# Primary subtags checked against each Accept-Language entry, in this order.
HEADER_MATCH_ORDER: Final[tuple[str, ...]] = ("sr", "hu", "en")

BYPASS_PREFIXES: Final[tuple[str, ...]] = (
    "/_next",
    "/static",
    "/api",
    "/favicon",
    "/health",
    "/docs",
    "/redoc",
    "/openapi.json",
)

_FILE_EXTENSION_RE = re.compile(r"\.[A-Za-z0-9]+$")
_LEGACY_PREFIX_RE = re.compile(r"^/rs(/|$)")

REDIRECT_STATUS: Final[int] = 307
PERMANENT_REDIRECT_STATUS: Final[int] = 308


@dataclass(frozen=True)
class LocaleResolution:
    """Result of resolving one request path.

    Attributes:
        target_path: Redirect target, or None when the path is already
            localized.
        locale_to_persist: Locale to write into the preference cookie.
        status_code: HTTP status to use when redirecting.
    """

    target_path: str | None
    locale_to_persist: str
    status_code: int = REDIRECT_STATUS

    @property
    def redirect(self) -> bool:
        return self.target_path is not None


def is_supported(code: str | None) -> bool:
    return code in SUPPORTED_LOCALES


def normalize_locale(code: str | None) -> str:
    """Map a locale code onto the supported set.

    ``rs`` becomes ``sr``; anything unknown becomes the default.
    """
    if not code:
        return DEFAULT_LOCALE
    code = code.strip().lower()
    code = LEGACY_ALIASES.get(code, code)
    return code if code in SUPPORTED_LOCALES else DEFAULT_LOCALE


def is_bypassed(path: str) -> bool:
    """True for framework, asset and API paths that must not be localized."""
    if path.startswith(BYPASS_PREFIXES):
        return True
    return bool(_FILE_EXTENSION_RE.search(path))


def locale_from_path(path: str) -> str | None:
    """Return the supported locale carried by the first path segment, if any."""
    for code in SUPPORTED_LOCALES:
        if path == f"/{code}" or path.startswith(f"/{code}/"):
            return code
    return None


def locale_from_accept_language(header: str | None) -> str | None:
    """Pick a locale from an Accept-Language header.

    Entries are scanned in header order; quality weights are ignored. The
    first entry starting with ``sr``, ``hu`` or ``en`` (tested in that
    order) wins.

    >>> locale_from_accept_language("sr-RS,en;q=0.5")
    'sr'
    >>> locale_from_accept_language("de-DE,hu;q=0.9,en;q=0.8")
    'hu'
    >>> locale_from_accept_language("de,fr") is None
    True
    """
    if not header:
        return None
    for entry in header.lower().split(","):
        tag = entry.split(";", 1)[0].strip()
        for code in HEADER_MATCH_ORDER:
            if tag.startswith(code):
                return code
    return None


def best_locale(cookie_value: str | None, accept_language: str | None) -> str:
    """Choose a locale for a bare path: cookie, then header, then default."""
    if is_supported(cookie_value):
        return cookie_value  # type: ignore[return-value]
    return locale_from_accept_language(accept_language) or DEFAULT_LOCALE


def legacy_redirect(path: str) -> str | None:
    """Rewrite a leading ``/rs`` segment to ``/sr``.

    >>> legacy_redirect("/rs/about")
    '/sr/about'
    >>> legacy_redirect("/rsvp") is None
    True
    """
    if not _LEGACY_PREFIX_RE.match(path):
        return None
    return _LEGACY_PREFIX_RE.sub(r"/sr\1", path, count=1)


def _with_query(path: str, query: str | None) -> str:
    return f"{path}?{query}" if query else path


def resolve(
    request_path: str,
    cookie_value: str | None,
    accept_language: str | None,
    *,
    query: str | None = None,
) -> LocaleResolution | None:
    """Compute where a request should go and which locale to remember.

    Args:
        request_path: URL path of the incoming request.
        cookie_value: Current value of the locale cookie, if any.
        accept_language: Raw Accept-Language header, if any.
        query: Raw query string, carried over to redirect targets.

    Returns:
        None for bypassed paths, otherwise a LocaleResolution. Its
        ``target_path`` is None when the path is already localized.
    """
    if is_bypassed(request_path):
        return None

    legacy_target = legacy_redirect(request_path)
    if legacy_target is not None:
        return LocaleResolution(
            target_path=_with_query(legacy_target, query),
            locale_to_persist="sr",
            status_code=PERMANENT_REDIRECT_STATUS,
        )

    current = locale_from_path(request_path)
    if current is not None:
        return LocaleResolution(target_path=None, locale_to_persist=current)

    locale = best_locale(cookie_value, accept_language)
    suffix = request_path if request_path.startswith("/") else f"/{request_path}"
    return LocaleResolution(
        target_path=_with_query(f"/{locale}{suffix}", query),
        locale_to_persist=locale,
    )


def switch_href(code: str, query: str | None = None) -> str:
    """Link target used by the language switcher."""
    normalized = normalize_locale(code)
    if not query:
        return f"/{normalized}"
    return f"/{normalized}{query if query.startswith('?') else '?' + query}"
