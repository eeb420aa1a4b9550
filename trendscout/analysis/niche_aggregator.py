# trendscout/analysis/niche_aggregator.py

"""Category-level aggregation over scored products."""

import math

from trendscout.models.analysis import NicheSummary
from trendscout.models.product import ScoredProduct


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def aggregate_niches(products: list[ScoredProduct]) -> list[NicheSummary]:
    """Group *products* by category, best average score first.

    Categories appear once each; ties keep first-seen order.
    """
    totals: dict[str, list[int]] = {}
    for product in products:
        bucket = totals.setdefault(product.category, [0, 0, 0])
        bucket[0] += 1
        bucket[1] += product.ai_score
        bucket[2] += product.sold

    niches = [
        NicheSummary(
            category=category,
            count=count,
            avg_score=_round_half_up(score_sum / count),
            total_sales=sales,
        )
        for category, (count, score_sum, sales) in totals.items()
    ]
    niches.sort(key=lambda n: n.avg_score, reverse=True)
    return niches
