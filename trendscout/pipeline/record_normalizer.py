# trendscout/pipeline/record_normalizer.py

"""Map an arbitrary upstream item onto the canonical Product record."""

import logging
import math
import re
from typing import Any

from trendscout.models.product import Product
from trendscout.pipeline.price_normalizer import normalize_price

logger = logging.getLogger("trendscout.pipeline")

_LEADING_NUMBER = re.compile(r"\d+(?:\.\d+)?")


def _nested(item: dict[str, Any], parent: str, key: str) -> Any:
    block = item.get(parent)
    if isinstance(block, dict):
        return block.get(key)
    return None


def _first_present(*values: Any) -> Any:
    """Return the first value that is neither ``None``, ``""`` nor ``0``."""
    for value in values:
        if value not in (None, "", 0):
            return value
    return None


def to_count(value: Any) -> int:
    """Coerce a counter (int, float or ``"1,234"``-style string) to int >= 0."""
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return max(value, 0)
    if isinstance(value, float):
        number = value
    else:
        match = _LEADING_NUMBER.search(str(value).replace(",", ""))
        if not match:
            return 0
        number = float(match.group())
    if not math.isfinite(number):
        return 0
    return max(int(number), 0)


def _image_url(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, list):
        for entry in value:
            if isinstance(entry, str) and entry:
                return entry
        return ""
    if isinstance(value, dict):
        urls = value.get("url_list")
        if isinstance(urls, list) and urls:
            return str(urls[0])
    return ""


def compute_engagement(likes: int, views: int) -> float:
    """Likes as a percentage of views, 2 dp; ``0.0`` without views."""
    if views <= 0:
        return 0.0
    return round(likes / views * 100, 2)


def normalize_record(item: dict[str, Any], category: str) -> Product:
    """Build a Product from one raw upstream item."""
    title = _first_present(item.get("product_name"), item.get("title"))
    image = _first_present(
        item.get("product_img_url"),
        item.get("image"),
        item.get("cover"),
    )

    views = to_count(
        _first_present(
            _nested(item, "statistics", "play_count"),
            _nested(item, "rate_info", "view_count"),
        )
    )
    likes = to_count(
        _first_present(
            _nested(item, "statistics", "digg_count"),
            _nested(item, "rate_info", "like_count"),
        )
    )
    sold = to_count(
        _first_present(
            _nested(item, "sold_info", "sold_count"),
            _nested(item, "sold_info", "sales"),
            item.get("sold_count"),
            item.get("sales"),
        )
    )

    return Product(
        title=str(title) if title is not None else "No title",
        image=_image_url(image),
        views=views,
        likes=likes,
        sold=sold,
        price=normalize_price(item),
        engagement=compute_engagement(likes, views),
        category=category,
        raw_data=item,
    )


def normalize_items(
    items: list[Any], category: str, limit: int | None = None
) -> list[Product]:
    """Normalize the first *limit* dict-shaped items of a category."""
    selected = items[:limit] if limit is not None else items
    products: list[Product] = []
    skipped = 0
    for item in selected:
        if not isinstance(item, dict):
            skipped += 1
            continue
        products.append(normalize_record(item, category))
    if skipped:
        logger.warning(
            "Skipped %d non-object items for category '%s'",
            skipped,
            category,
        )
    return products
