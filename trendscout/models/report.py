# trendscout/models/report.py

"""Outcome containers returned by the pipeline entry points."""

from dataclasses import dataclass, field
from typing import Any

from trendscout.models.analysis import (
    MarginBreakdown,
    NicheSummary,
    SourcingOption,
)
from trendscout.models.product import ScoredProduct


@dataclass
class RecommendationReport:
    """Snapshot of one recommendation run."""

    success: bool
    timestamp: str
    products: list[ScoredProduct] = field(
        default_factory=lambda: list[ScoredProduct]()
    )
    niches: list[NicheSummary] = field(
        default_factory=lambda: list[NicheSummary]()
    )
    categories: list[str] = field(
        default_factory=lambda: list[str]()
    )
    error: str | None = None
    errors: list[str] = field(
        default_factory=lambda: list[str]()
    )

    @property
    def total_products(self) -> int:
        return len(self.products)

    def to_dict(self, include_raw: bool = False) -> dict[str, Any]:
        if not self.success:
            return {
                "success": False,
                "error": self.error,
                "errors": list(self.errors),
                "categories": list(self.categories),
                "timestamp": self.timestamp,
            }
        return {
            "success": True,
            "products": [
                p.to_dict(include_raw) for p in self.products
            ],
            "niches": [n.to_dict() for n in self.niches],
            "totalProducts": self.total_products,
            "categories": list(self.categories),
            "errors": list(self.errors),
            "timestamp": self.timestamp,
        }


@dataclass
class ProductAnalysis:
    """Margins and sourcing for a single, already-known product."""

    success: bool
    margins: MarginBreakdown | None = None
    sourcing: list[SourcingOption] = field(
        default_factory=lambda: list[SourcingOption]()
    )
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        if not self.success:
            return {"success": False, "error": self.error}
        return {
            "success": True,
            "margins": self.margins.to_dict() if self.margins else None,
            "sourcing": [s.to_dict() for s in self.sourcing],
        }
