# trendscout/models/product.py

"""Product data models for inter-module data flow."""

import uuid
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any

from trendscout.models.analysis import MarginBreakdown, SourcingOption


class Trend(str, Enum):
    """Direction of a product's popularity."""

    RISING = "Rising"
    STABLE = "Stable"
    DECLINING = "Declining"
    UNKNOWN = "Unknown"


class Competition(str, Enum):
    """How crowded the product's market is."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


def new_product_id() -> str:
    """Return a short random identifier for one normalized product."""
    return uuid.uuid4().hex[:12]


@dataclass
class Product:
    """A normalized listing from one upstream category query."""

    title: str
    price: float
    image: str = ""
    views: int = 0
    likes: int = 0
    sold: int = 0
    engagement: float = 0.0
    category: str = ""
    raw_data: dict[str, Any] = field(
        default_factory=lambda: dict[str, Any](),
        repr=False,
        compare=False,
    )
    product_id: str = field(
        default_factory=new_product_id, compare=False
    )

    @property
    def popularity(self) -> int:
        """Additive popularity proxy used for candidate ranking."""
        return self.views + self.likes + self.sold

    def _base_fields(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(Product)}

    def to_dict(self, include_raw: bool = False) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.product_id,
            "title": self.title,
            "image": self.image,
            "views": self.views,
            "likes": self.likes,
            "sold": self.sold,
            "price": self.price,
            "engagement": self.engagement,
            "category": self.category,
        }
        if include_raw:
            data["rawData"] = self.raw_data
        return data


@dataclass
class AnalyzedProduct(Product):
    """A candidate carrying its margin model and sourcing options."""

    margins: MarginBreakdown | None = None
    sourcing: list[SourcingOption] = field(
        default_factory=lambda: list[SourcingOption]()
    )

    @classmethod
    def from_product(
        cls,
        product: Product,
        margins: MarginBreakdown,
        sourcing: list[SourcingOption],
    ) -> "AnalyzedProduct":
        return cls(
            **product._base_fields(),
            margins=margins,
            sourcing=list(sourcing),
        )

    def to_dict(self, include_raw: bool = False) -> dict[str, Any]:
        data = super().to_dict(include_raw)
        data["margins"] = self.margins.to_dict() if self.margins else None
        data["sourcing"] = [s.to_dict() for s in self.sourcing]
        return data


@dataclass
class ScoredProduct(AnalyzedProduct):
    """An analyzed candidate with its viability assessment."""

    ai_score: int = 0
    trend: Trend = Trend.UNKNOWN
    competition: Competition = Competition.MEDIUM
    recommendation: str = ""

    @classmethod
    def from_analyzed(
        cls,
        product: AnalyzedProduct,
        ai_score: int,
        trend: Trend,
        competition: Competition,
        recommendation: str,
    ) -> "ScoredProduct":
        return cls(
            **product._base_fields(),
            margins=product.margins,
            sourcing=list(product.sourcing),
            ai_score=ai_score,
            trend=trend,
            competition=competition,
            recommendation=recommendation,
        )

    def to_dict(self, include_raw: bool = False) -> dict[str, Any]:
        data = super().to_dict(include_raw)
        data.update(
            {
                "aiScore": self.ai_score,
                "trend": self.trend.value,
                "competition": self.competition.value,
                "recommendation": self.recommendation,
            }
        )
        return data
