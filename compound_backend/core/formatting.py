"""Fixed-locale (ru-RU) display helpers and the share/title text built on them."""

from __future__ import annotations

import math
from typing import Dict, List, Literal

from pydantic import BaseModel, ConfigDict

from compound_backend.core.projection import ProjectionResult, round_half_up

GROUP_SEPARATOR = "\u00a0"  # ru-RU groups thousands with a no-break space
DECIMAL_SEPARATOR = ","

SHARE_TITLE = "Мой инвестиционный план"

CurrencyCode = Literal["USD", "RUB", "UZS", "KZT", "EUR", "BYN"]


class Currency(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: CurrencyCode
    symbol: str
    name: str
    flag: str


# only the displayed symbol changes; amounts are never converted
CURRENCIES: List[Currency] = [
    Currency(code="USD", symbol="$", name="US Dollar", flag="🇺🇸"),
    Currency(code="RUB", symbol="₽", name="Российский рубль", flag="🇷🇺"),
    Currency(code="UZS", symbol="сўм", name="Узбекский сум", flag="🇺🇿"),
    Currency(code="KZT", symbol="₸", name="Казахстанский тенге", flag="🇰🇿"),
    Currency(code="EUR", symbol="€", name="Euro", flag="🇪🇺"),
    Currency(code="BYN", symbol="Br", name="Белорусский рубль", flag="🇧🇾"),
]

_BY_CODE: Dict[str, Currency] = {c.code: c for c in CURRENCIES}

DEFAULT_CURRENCY_CODE = "RUB"

# (threshold, suffix), largest first
_COMPACT_UNITS = [
    (1e12, "трлн"),
    (1e9, "млрд"),
    (1e6, "млн"),
    (1e3, "тыс."),
]


class SharePayload(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    text: str
    url: str
    clipboardText: str


def get_currency(code: str) -> Currency:
    """Look up a currency by code; raises KeyError for unknown codes."""
    return _BY_CODE[code]


def _non_finite(value: float) -> str:
    if math.isnan(value):
        return "—"
    return "-∞" if value < 0 else "∞"


def _group_digits(digits: str) -> str:
    groups = []
    while len(digits) > 3:
        groups.insert(0, digits[-3:])
        digits = digits[:-3]
    groups.insert(0, digits)
    return GROUP_SEPARATOR.join(groups)


def format_number(value: float) -> str:
    """Whole units with ru-RU digit grouping, e.g. 1234567 -> '1 234 567'."""
    if not math.isfinite(value):
        return _non_finite(value)
    rounded = round_half_up(value)
    sign = "-" if rounded < 0 else ""
    return sign + _group_digits(str(abs(rounded)))


def _one_decimal(value: float) -> str:
    tenths = math.floor(value * 10 + 0.5)
    whole, frac = divmod(tenths, 10)
    text = _group_digits(str(int(whole)))
    if frac:
        text += DECIMAL_SEPARATOR + str(int(frac))
    return text


def format_compact(value: float) -> str:
    """
    Short form used in the page title: at most one fraction digit and a
    unit word, e.g. 1534000 -> '1,5 млн', 999 -> '999'.
    """
    if not math.isfinite(value):
        return _non_finite(value)

    sign = "-" if value < 0 else ""
    magnitude = abs(value)

    for index, (threshold, suffix) in enumerate(_COMPACT_UNITS):
        if magnitude < threshold:
            continue
        scaled = math.floor(magnitude / threshold * 10 + 0.5) / 10
        # 999 950 rounds to "1000 тыс." which reads as the next unit up
        if scaled >= 1000 and index > 0:
            threshold, suffix = _COMPACT_UNITS[index - 1]
            scaled = magnitude / threshold
        return f"{sign}{_one_decimal(scaled)} {suffix}"

    scaled = math.floor(magnitude * 10 + 0.5) / 10
    if scaled >= 1000:
        return f"{sign}1 тыс."
    return sign + _one_decimal(scaled)


def page_title(result: ProjectionResult, horizon_years: int, currency: Currency) -> str:
    total = format_compact(result.finalTotalCapital)
    return f"Калькулятор: Рост до {total} {currency.symbol} за {horizon_years} лет | Сложный процент"


def share_payload(
    result: ProjectionResult,
    horizon_years: int,
    currency: Currency,
    url: str,
) -> SharePayload:
    """
    Text for the browser's native share sheet. clipboardText is what the
    browser copies when native sharing is unavailable.
    """
    text = f"Я планирую накопить {format_number(result.finalTotalCapital)} {currency.symbol} за {horizon_years} лет!"
    return SharePayload(
        title=SHARE_TITLE,
        text=text,
        url=url,
        clipboardText=f"{SHARE_TITLE}\n{text}\n{url}",
    )


__all__ = [
    "CurrencyCode",
    "Currency",
    "CURRENCIES",
    "DEFAULT_CURRENCY_CODE",
    "SharePayload",
    "get_currency",
    "format_number",
    "format_compact",
    "page_title",
    "share_payload",
]
