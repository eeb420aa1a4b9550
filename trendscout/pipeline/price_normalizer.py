# trendscout/pipeline/price_normalizer.py

"""Extract a single USD price from heterogeneous upstream price fields.

Upstream listings expose prices in several shapes: a nested
``product_price_info`` block (decimal / formatted / minimum / plain
strings plus a currency), a top-level integer ``price`` in minor units,
or a top-level ``min_price`` string.  Every path ends in a non-negative
float; anything unparseable becomes ``0.0`` and is left for the
candidate selector to drop.

Known ambiguity: dots and commas are treated as thousands separators
for VND, and commas are treated as thousands separators for USD.  A
USD string written with a decimal comma (``"$12,99"``) therefore
parses as ``1299.0``.
"""

import logging
import math
import re
from typing import Any

from trendscout.config.settings import Settings

logger = logging.getLogger("trendscout.pipeline")

# Field priority inside ``product_price_info``
PRICE_FIELDS: tuple[str, ...] = (
    "sale_price_decimal",
    "sale_price_format",
    "min_price",
    "price",
)

_THOUSANDS_SEPARATORS = re.compile(r"[.,]")
_NON_NUMERIC = re.compile(r"[^\d.]")

_VND_CODES = frozenset({"VND"})
_VND_SYMBOLS = frozenset({"₫", "đ"})
_USD_CODES = frozenset({"USD"})
_USD_SYMBOLS = frozenset({"$", "US$"})


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _to_float(text: str) -> float:
    """Parse *text* as a finite, non-negative float, else ``0.0``."""
    try:
        value = float(text)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(value) or value < 0:
        return 0.0
    return value


def _currency_kind(currency_name: str, currency_symbol: str) -> str:
    code = currency_name.strip().upper()
    symbol = currency_symbol.strip()
    if code in _VND_CODES or symbol in _VND_SYMBOLS:
        return "VND"
    if code in _USD_CODES or symbol in _USD_SYMBOLS:
        return "USD"
    return ""


def parse_price_string(
    value: Any,
    currency_name: str = "",
    currency_symbol: str = "",
) -> float:
    """Convert one raw price value to USD.

    >>> parse_price_string("1.234.567", currency_name="VND")
    49.38268
    >>> parse_price_string("$1,299.50", currency_symbol="$")
    1299.5
    """
    if value is None:
        return 0.0
    kind = _currency_kind(currency_name or "", currency_symbol or "")

    if _is_number(value):
        number = _to_float(str(value))
        return number / Settings.VND_PER_USD if kind == "VND" else number

    raw = str(value).strip()
    if kind == "VND":
        digits = _NON_NUMERIC.sub(
            "", _THOUSANDS_SEPARATORS.sub("", raw)
        )
        return _to_float(digits) / Settings.VND_PER_USD
    if kind == "USD":
        return _to_float(_NON_NUMERIC.sub("", raw.replace(",", "")))
    return _to_float(_NON_NUMERIC.sub("", raw))


def price_from_info(price_info: dict[str, Any]) -> float:
    """Resolve the USD price held in a ``product_price_info`` block."""
    raw_value: Any = "0"
    for key in PRICE_FIELDS:
        candidate = price_info.get(key)
        if candidate not in (None, ""):
            raw_value = candidate
            break

    currency_name = str(
        price_info.get("currency_name")
        or price_info.get("currency")
        or ""
    )
    currency_symbol = str(price_info.get("currency_symbol") or "")
    return parse_price_string(raw_value, currency_name, currency_symbol)


def normalize_price(item: dict[str, Any]) -> float:
    """Return the USD price of one raw upstream item (``0.0`` if unknown)."""
    price_info = item.get("product_price_info")
    if isinstance(price_info, dict):
        return price_from_info(price_info)

    top_price = item.get("price")
    if top_price not in (None, "", 0):
        # Minor units (cents)
        if _is_number(top_price):
            return _to_float(str(top_price)) / 100
        return _to_float(_NON_NUMERIC.sub("", str(top_price))) / 100

    min_price = item.get("min_price")
    if min_price not in (None, ""):
        return parse_price_string(min_price)

    logger.debug("No price fields found on item %s", sorted(item)[:10])
    return 0.0
