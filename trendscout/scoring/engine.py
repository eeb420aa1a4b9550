# trendscout/scoring/engine.py

"""Batch scoring with graceful degradation to the heuristic path."""

import logging
import random

from trendscout.models.product import AnalyzedProduct, ScoredProduct
from trendscout.scoring.strategies import (
    DEFAULT_ASSESSMENT,
    AssistedScoringStrategy,
    HeuristicScoringStrategy,
    ScoringCollaborator,
    ScoringStrategy,
)

logger = logging.getLogger("trendscout.scoring")


class ScoringEngine:
    """Apply a strategy to a candidate batch; never raises."""

    def __init__(
        self,
        strategy: ScoringStrategy,
        fallback: HeuristicScoringStrategy | None = None,
    ) -> None:
        self.strategy = strategy
        self.fallback = fallback or HeuristicScoringStrategy()

    def score(
        self, candidates: list[AnalyzedProduct]
    ) -> list[ScoredProduct]:
        """Return one ScoredProduct per candidate, in input order."""
        if not candidates:
            return []
        try:
            assessments = self.strategy.assess(candidates)
        except Exception as exc:
            logger.error(
                "%s scoring failed, falling back to heuristic: %s",
                self.strategy.name,
                exc,
                exc_info=True,
            )
            assessments = self.fallback.assess_after_failure(candidates)
        else:
            logger.info(
                "Scored %d products with %s strategy",
                len(candidates),
                self.strategy.name,
            )

        scored: list[ScoredProduct] = []
        for product in candidates:
            verdict = assessments.get(
                product.product_id, DEFAULT_ASSESSMENT
            )
            scored.append(
                ScoredProduct.from_analyzed(
                    product,
                    ai_score=verdict.ai_score,
                    trend=verdict.trend,
                    competition=verdict.competition,
                    recommendation=verdict.recommendation,
                )
            )
        return scored


def build_scoring_engine(
    collaborator: ScoringCollaborator | None = None,
    rng: random.Random | None = None,
) -> ScoringEngine:
    """Assisted scoring when a collaborator is configured, else heuristic."""
    heuristic = HeuristicScoringStrategy(rng)
    if collaborator is None:
        return ScoringEngine(heuristic, heuristic)
    return ScoringEngine(AssistedScoringStrategy(collaborator), heuristic)
