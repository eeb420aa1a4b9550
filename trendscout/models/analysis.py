# trendscout/models/analysis.py

"""Derived per-product and per-category analysis records."""

from dataclasses import dataclass


@dataclass(frozen=True)
class MarginBreakdown:
    """Fixed-formula dropshipping cost model for one selling price."""

    selling_price: float
    supplier_price: float
    shipping_cost: float
    ad_cost: float
    platform_fees: float
    total_cost: float
    profit: float
    profit_margin: float

    def to_dict(self) -> dict[str, float]:
        return {
            "sellingPrice": self.selling_price,
            "supplierPrice": self.supplier_price,
            "shippingCost": self.shipping_cost,
            "adCost": self.ad_cost,
            "platformFees": self.platform_fees,
            "totalCost": self.total_cost,
            "profit": self.profit,
            "profitMargin": self.profit_margin,
        }


@dataclass(frozen=True)
class SourcingOption:
    """A supplier channel with a ready-made search URL."""

    supplier: str
    url: str
    avg_price: str
    shipping_time: str
    reliability: str

    def to_dict(self) -> dict[str, str]:
        return {
            "supplier": self.supplier,
            "url": self.url,
            "avgPrice": self.avg_price,
            "shippingTime": self.shipping_time,
            "reliability": self.reliability,
        }


@dataclass
class NicheSummary:
    """Category-level aggregate over scored products."""

    category: str
    count: int
    avg_score: int
    total_sales: int

    def to_dict(self) -> dict[str, object]:
        return {
            "category": self.category,
            "count": self.count,
            "avgScore": self.avg_score,
            "totalSales": self.total_sales,
        }
