# trendscout/scoring/strategies.py

"""Viability scoring strategies: AI-assisted and heuristic."""

import logging
import math
import random
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Protocol

from trendscout.config.settings import Settings
from trendscout.models.product import Competition, Product, Trend

logger = logging.getLogger("trendscout.scoring")


@dataclass(frozen=True)
class Assessment:
    """Viability verdict for one product."""

    ai_score: int
    trend: Trend
    competition: Competition
    recommendation: str


DEFAULT_ASSESSMENT = Assessment(
    ai_score=Settings.DEFAULT_AI_SCORE,
    trend=Trend.STABLE,
    competition=Competition.MEDIUM,
    recommendation="Good potential for dropshipping",
)


class ScoringCollaborator(Protocol):
    """Anything that can assess a batch of product summaries."""

    def score_batch(
        self, summaries: list[dict[str, Any]]
    ) -> list[dict[str, Any]]:
        ...


class ScoringStrategy(ABC):
    """Produce one Assessment per product, keyed by ``product_id``."""

    name: str = "base"

    @abstractmethod
    def assess(
        self, products: Sequence[Product]
    ) -> dict[str, Assessment]:
        ...


class HeuristicScoringStrategy(ScoringStrategy):
    """Plausible pseudo-random scores with no external dependency.

    Pass a seeded ``random.Random`` for reproducible output.
    """

    name = "heuristic"

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng or random.Random()

    def _score(self) -> int:
        low, high = Settings.HEURISTIC_SCORE_RANGE
        return self.rng.randint(low, high)

    def assess(
        self, products: Sequence[Product]
    ) -> dict[str, Assessment]:
        results: dict[str, Assessment] = {}
        for product in products:
            results[product.product_id] = Assessment(
                ai_score=self._score(),
                trend=(
                    Trend.RISING
                    if self.rng.random() > 0.5
                    else Trend.STABLE
                ),
                competition=(
                    Competition.MEDIUM
                    if self.rng.random() > 0.5
                    else Competition.HIGH
                ),
                recommendation="Analyze manually for best results",
            )
        return results

    def assess_after_failure(
        self, products: Sequence[Product]
    ) -> dict[str, Assessment]:
        """Scores for a batch whose assisted assessment failed."""
        return {
            product.product_id: Assessment(
                ai_score=self._score(),
                trend=Trend.UNKNOWN,
                competition=Competition.MEDIUM,
                recommendation="Manual analysis recommended",
            )
            for product in products
        }


def _coerce_score(value: Any) -> int:
    if value is None or isinstance(value, bool):
        return Settings.DEFAULT_AI_SCORE
    try:
        number = float(value)
    except (TypeError, ValueError):
        return Settings.DEFAULT_AI_SCORE
    if not math.isfinite(number):
        return Settings.DEFAULT_AI_SCORE
    return min(max(int(round(number)), 0), 100)


def _coerce_label(value: Any, enum_cls: Any, default: Any) -> Any:
    if isinstance(value, str):
        wanted = value.strip().lower()
        for member in enum_cls:
            if member.value.lower() == wanted:
                return member
    return default


def parse_assessment(entry: dict[str, Any]) -> Assessment:
    """Turn one collaborator entry into an Assessment with safe defaults."""
    recommendation = entry.get("recommendation")
    if not isinstance(recommendation, str) or not recommendation.strip():
        recommendation = DEFAULT_ASSESSMENT.recommendation
    return Assessment(
        ai_score=_coerce_score(entry.get("aiScore", entry.get("score"))),
        trend=_coerce_label(
            entry.get("trend"), Trend, DEFAULT_ASSESSMENT.trend
        ),
        competition=_coerce_label(
            entry.get("competition"),
            Competition,
            DEFAULT_ASSESSMENT.competition,
        ),
        recommendation=recommendation.strip(),
    )


class AssistedScoringStrategy(ScoringStrategy):
    """Delegate the first ``batch_limit`` products to a collaborator.

    Returned entries are matched by ``productId``; entries carrying only
    a 1-based ``productIndex`` are mapped through the summaries sent.
    Products without a match, and those past the batch limit, get
    :data:`DEFAULT_ASSESSMENT`.  Collaborator errors propagate.
    """

    name = "assisted"

    def __init__(
        self,
        collaborator: ScoringCollaborator,
        batch_limit: int = Settings.AI_BATCH_LIMIT,
    ) -> None:
        self.collaborator = collaborator
        self.batch_limit = batch_limit

    @staticmethod
    def summarize(product: Product, position: int) -> dict[str, Any]:
        return {
            "productId": product.product_id,
            "productIndex": position,
            "title": product.title,
            "price": round(product.price, 2),
            "views": product.views,
            "likes": product.likes,
            "engagement": product.engagement,
        }

    @staticmethod
    def _resolve_id(
        entry: dict[str, Any],
        known_ids: set[str],
        id_by_position: dict[int, str],
    ) -> str | None:
        product_id = entry.get("productId")
        if isinstance(product_id, str) and product_id in known_ids:
            return product_id
        position = entry.get("productIndex")
        try:
            return id_by_position.get(int(position))
        except (TypeError, ValueError):
            return None

    def assess(
        self, products: Sequence[Product]
    ) -> dict[str, Assessment]:
        batch = list(products[: self.batch_limit])
        summaries = [
            self.summarize(p, i) for i, p in enumerate(batch, 1)
        ]
        id_by_position = {
            s["productIndex"]: s["productId"] for s in summaries
        }
        known_ids = set(id_by_position.values())

        entries = self.collaborator.score_batch(summaries)

        results: dict[str, Assessment] = {}
        for entry in entries:
            if not isinstance(entry, dict):
                continue
            product_id = self._resolve_id(
                entry, known_ids, id_by_position
            )
            if product_id is None or product_id in results:
                continue
            results[product_id] = parse_assessment(entry)

        unmatched = len(batch) - len(results)
        if unmatched:
            logger.warning(
                "%d of %d summarized products had no assessment",
                unmatched,
                len(batch),
            )

        for product in products:
            results.setdefault(product.product_id, DEFAULT_ASSESSMENT)
        return results
