"""Quick quote calculator.

Prices a selection of common services. Amounts are whole Serbian dinars.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from app.services.locale import normalize_locale

CURRENCY: Final[str] = "RSD"

SSD_PRICES: Final[dict[str, int]] = {"240": 3500, "480": 5500, "960": 9000}
SERVICE_PRICES: Final[dict[str, int]] = {
    "windows": 2000,
    "deep_clean": 2500,
    "gpu_service": 1800,
    "data_rescue": 4500,
}

LABELS: Final[dict[str, dict[str, str]]] = {
    "en": {
        "title": "Quick Quote Calculator",
        "ssd": "SSD Upgrade",
        "windows": "Clean Windows install",
        "deep_clean": "Deep clean + thermal paste",
        "gpu_service": "GPU fan clean & paste",
        "data_rescue": "Data rescue (no hardware damage)",
        "total": "Estimated total",
    },
    "hu": {
        "title": "Gyors árajánlat kalkulátor",
        "ssd": "SSD bővítés",
        "windows": "Tiszta Windows telepítés",
        "deep_clean": "Mélytisztítás + pasztázás",
        "gpu_service": "GPU tisztítás és paszta",
        "data_rescue": "Adatmentés (hardver hiba nélkül)",
        "total": "Becsült végösszeg",
    },
    "sr": {
        "title": "Brzi kalkulator ponude",
        "ssd": "SSD nadogradnja",
        "windows": "Čista instalacija Windows-a",
        "deep_clean": "Dubinsko čišćenje + pasta",
        "gpu_service": "GPU čišćenje i pasta",
        "data_rescue": "Spašavanje podataka (bez HW kvara)",
        "total": "Procena ukupno",
    },
}


@dataclass(frozen=True)
class QuoteLine:
    key: str
    label: str
    amount: int


@dataclass(frozen=True)
class Quote:
    locale: str
    title: str
    lines: list[QuoteLine]
    total: int
    total_label: str
    currency: str = CURRENCY

    @property
    def formatted(self) -> str:
        return format_amount(self.total)


def format_amount(amount: int) -> str:
    """Format an amount the way sr-RS groups thousands.

    >>> format_amount(12000)
    '12.000 RSD'
    """
    return f"{amount:,} {CURRENCY}".replace(",", ".")


def calculate_quote(
    *,
    ssd: str | None = None,
    windows: bool = False,
    deep_clean: bool = False,
    gpu_service: bool = False,
    data_rescue: bool = False,
    locale: str | None = None,
) -> Quote:
    """Sum the prices of the selected options.

    Raises:
        ValueError: If ``ssd`` is not one of the offered sizes.
    """
    lang = normalize_locale(locale)
    labels = LABELS[lang]
    lines: list[QuoteLine] = []

    if ssd:
        if ssd not in SSD_PRICES:
            raise ValueError(f"unknown SSD size: {ssd}")
        lines.append(QuoteLine("ssd", f"{labels['ssd']} {ssd} GB", SSD_PRICES[ssd]))

    selected = {
        "windows": windows,
        "deep_clean": deep_clean,
        "gpu_service": gpu_service,
        "data_rescue": data_rescue,
    }
    for key, chosen in selected.items():
        if chosen:
            lines.append(QuoteLine(key, labels[key], SERVICE_PRICES[key]))

    return Quote(
        locale=lang,
        title=labels["title"],
        lines=lines,
        total=sum(line.amount for line in lines),
        total_label=labels["total"],
    )
