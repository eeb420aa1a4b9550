# trendscout/analysis/margin_calculator.py

"""Fixed-formula dropshipping margin model."""

from trendscout.config.settings import Settings
from trendscout.models.analysis import MarginBreakdown


def calculate_margins(price: float) -> MarginBreakdown:
    """Derive the cost and profit breakdown for a selling *price*.

    Supplier cost, ad spend and platform fees are fixed fractions of the
    selling price; shipping is flat.  Negative profit is a valid result.
    """
    supplier_price = price * Settings.SUPPLIER_RATIO
    shipping_cost = Settings.FLAT_SHIPPING_COST
    ad_cost = price * Settings.AD_RATIO
    platform_fees = price * Settings.PLATFORM_FEE_RATIO

    total_cost = supplier_price + shipping_cost + ad_cost + platform_fees
    profit = price - total_cost
    profit_margin = profit / price * 100 if price else 0.0

    return MarginBreakdown(
        selling_price=round(price, 2),
        supplier_price=round(supplier_price, 2),
        shipping_cost=round(shipping_cost, 2),
        ad_cost=round(ad_cost, 2),
        platform_fees=round(platform_fees, 2),
        total_cost=round(total_cost, 2),
        profit=round(profit, 2),
        profit_margin=round(profit_margin, 1),
    )
