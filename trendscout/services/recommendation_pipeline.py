# trendscout/services/recommendation_pipeline.py

"""Orchestrates category queries, normalization, ranking and scoring."""

import asyncio
import logging
import math
import random
from datetime import datetime, timezone
from typing import Any, Protocol

from trendscout.analysis.margin_calculator import calculate_margins
from trendscout.analysis.niche_aggregator import aggregate_niches
from trendscout.analysis.sourcing import sourcing_options
from trendscout.config.settings import Settings
from trendscout.filters.candidate_selector import CandidateSelector
from trendscout.filters.language_filter import LanguageFilter
from trendscout.models.product import AnalyzedProduct, Product
from trendscout.models.report import ProductAnalysis, RecommendationReport
from trendscout.pipeline.record_normalizer import normalize_items
from trendscout.scoring.engine import build_scoring_engine
from trendscout.scoring.strategies import ScoringCollaborator

logger = logging.getLogger("trendscout.pipeline")

NO_PRODUCTS_MESSAGE = "No products found. Try again or check your API key."
INVALID_PRODUCT_MESSAGE = "Invalid product data"


class ProductSource(Protocol):
    """Upstream capability: raw listings for one category search."""

    def query(self, category: str) -> list[dict[str, Any]]:
        ...


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def analyze_product(title: str | None, price: Any) -> ProductAnalysis:
    """Margins and sourcing for one known product, outside the ranking run."""
    try:
        numeric_price = float(price)
    except (TypeError, ValueError):
        numeric_price = 0.0
    if not math.isfinite(numeric_price) or numeric_price <= 0:
        logger.warning("Rejected product analysis (price=%r)", price)
        return ProductAnalysis(success=False, error=INVALID_PRODUCT_MESSAGE)

    return ProductAnalysis(
        success=True,
        margins=calculate_margins(numeric_price),
        sourcing=sourcing_options(title or ""),
    )


class RecommendationPipeline:
    """One-shot recommendation run over a sample of trending categories."""

    def __init__(
        self,
        source: ProductSource,
        collaborator: ScoringCollaborator | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.settings = Settings()
        self.source = source
        self.rng = rng or random.Random()
        self.engine = build_scoring_engine(collaborator, self.rng)

    def sample_categories(self) -> list[str]:
        """Pick the categories to query for this run."""
        catalog = self.settings.TRENDING_CATEGORIES
        size = min(self.settings.CATEGORY_SAMPLE_SIZE, len(catalog))
        return self.rng.sample(catalog, size)

    # ── Private helpers ──────────────────────────────────

    async def _fetch_categories(
        self, categories: list[str]
    ) -> tuple[list[Product], list[str]]:
        """Query every category concurrently and normalize the items.

        A failing category contributes nothing; its message is returned
        in the error list.
        """

        async def run_one(category: str) -> list[Product]:
            items = await asyncio.to_thread(self.source.query, category)
            products = normalize_items(
                items, category, self.settings.ITEMS_PER_CATEGORY
            )
            logger.info(
                "Category '%s': %d items, %d normalized",
                category,
                len(items),
                len(products),
            )
            return products

        batches = await asyncio.gather(
            *(run_one(c) for c in categories),
            return_exceptions=True,
        )

        products: list[Product] = []
        errors: list[str] = []
        for category, batch in zip(categories, batches):
            if isinstance(batch, list):
                products.extend(batch)
            elif isinstance(batch, Exception):
                errors.append(str(batch))
                logger.error(
                    "Failed to fetch '%s': %s",
                    category,
                    batch,
                    exc_info=batch,
                )

        return products, errors

    @staticmethod
    def _analyze(candidates: list[Product]) -> list[AnalyzedProduct]:
        return [
            AnalyzedProduct.from_product(
                p, calculate_margins(p.price), sourcing_options(p.title)
            )
            for p in candidates
        ]

    # ── Entry point ──────────────────────────────────────

    async def generate(
        self, categories: list[str] | None = None
    ) -> RecommendationReport:
        """Run the full pipeline and return a ranked snapshot."""
        selected = categories or self.sample_categories()
        logger.info("Searching categories: %s", ", ".join(selected))

        pooled, errors = await self._fetch_categories(selected)
        english, _dropped = LanguageFilter.filter_english(pooled)
        candidates = CandidateSelector.select(english)

        if not candidates:
            logger.warning(
                "No candidates survived (%d pooled, %d errors)",
                len(pooled),
                len(errors),
            )
            return RecommendationReport(
                success=False,
                timestamp=_utc_timestamp(),
                categories=selected,
                error=NO_PRODUCTS_MESSAGE,
                errors=errors,
            )

        analyzed = self._analyze(candidates)
        scored = await asyncio.to_thread(self.engine.score, analyzed)
        scored.sort(key=lambda p: p.ai_score, reverse=True)

        report = RecommendationReport(
            success=True,
            timestamp=_utc_timestamp(),
            products=scored,
            niches=aggregate_niches(scored),
            categories=selected,
            errors=errors,
        )
        logger.info(
            "Generated %d recommendations across %d niches",
            report.total_products,
            len(report.niches),
        )
        return report
