# tests/helpers.py

"""Builders for raw upstream items and products shared across tests."""

from typing import Any

from trendscout.analysis.margin_calculator import calculate_margins
from trendscout.analysis.sourcing import sourcing_options
from trendscout.models.product import AnalyzedProduct, Product


def raw_item(
    title: str = "Mini Portable Blender",
    price: str = "24.99",
    currency: str = "USD",
    views: int = 1000,
    likes: int = 100,
    sold: int = 50,
) -> dict[str, Any]:
    """A TikTok Shop listing in the nested shape the API returns."""
    return {
        "product_name": title,
        "product_img_url": "https://img.example.com/p.jpg",
        "product_price_info": {
            "sale_price_decimal": price,
            "currency_name": currency,
            "currency_symbol": "$" if currency == "USD" else "",
        },
        "statistics": {"play_count": views, "digg_count": likes},
        "sold_info": {"sold_count": sold},
    }


def make_product(
    title: str = "Gadget",
    price: float = 20.0,
    views: int = 0,
    likes: int = 0,
    sold: int = 0,
    category: str = "viral gadgets",
) -> Product:
    return Product(
        title=title,
        price=price,
        views=views,
        likes=likes,
        sold=sold,
        category=category,
    )


def make_analyzed(title: str = "Gadget", price: float = 20.0, **kwargs: Any) -> AnalyzedProduct:
    product = make_product(title=title, price=price, **kwargs)
    return AnalyzedProduct.from_product(
        product, calculate_margins(price), sourcing_options(title)
    )
