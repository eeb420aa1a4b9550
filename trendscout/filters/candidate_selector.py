# trendscout/filters/candidate_selector.py

"""Price-bound filtering and popularity ranking of pooled products."""

import logging

from trendscout.config.settings import Settings
from trendscout.models.product import Product

logger = logging.getLogger("trendscout.filters")


class CandidateSelector:
    """Pick the most popular, reasonably priced products for scoring."""

    @staticmethod
    def select(
        products: list[Product],
        min_price: float = Settings.MIN_PRICE,
        max_price: float = Settings.MAX_PRICE,
        limit: int = Settings.MAX_CANDIDATES,
    ) -> list[Product]:
        """Filter to ``min_price < price < max_price``, rank, truncate.

        Ranking is descending by ``views + likes + sold``; ties keep their
        pooled order.
        """
        in_range = [
            p for p in products if min_price < p.price < max_price
        ]
        out_of_range = len(products) - len(in_range)
        if out_of_range:
            logger.info(
                "Dropped %d products outside price range (%.2f, %.2f)",
                out_of_range,
                min_price,
                max_price,
            )

        ranked = sorted(
            in_range, key=lambda p: p.popularity, reverse=True
        )
        selected = ranked[:limit]
        logger.info(
            "%d candidates selected from %d pooled products",
            len(selected),
            len(products),
        )
        return selected
