# trendscout/filters/language_filter.py

"""Coarse English-text heuristic used to bias toward the target market."""

import logging

from trendscout.config.settings import Settings
from trendscout.models.product import Product

logger = logging.getLogger("trendscout.filters")


class LanguageFilter:
    """Drop listings whose titles are not predominantly ASCII letters."""

    @staticmethod
    def is_english(
        text: str | None,
        threshold: float = Settings.ENGLISH_RATIO_THRESHOLD,
    ) -> bool:
        """Return True when ASCII letters make up >= *threshold* of the
        non-whitespace characters of *text*.

        Not a language detector: digits and punctuation count against
        the ratio, and any Latin-script language passes.
        """
        if not text:
            return False
        chars = [c for c in text if not c.isspace()]
        if not chars:
            return False
        letters = sum(1 for c in chars if c.isascii() and c.isalpha())
        return letters / len(chars) >= threshold

    @staticmethod
    def filter_english(
        products: list[Product],
    ) -> tuple[list[Product], int]:
        """Keep products with English titles.

        Returns the kept products and the count of dropped ones.
        """
        kept: list[Product] = []
        dropped = 0
        for product in products:
            if LanguageFilter.is_english(product.title):
                kept.append(product)
            else:
                logger.debug(
                    "Dropped non-English listing (title=%s, category=%s)",
                    product.title,
                    product.category,
                )
                dropped += 1

        if dropped:
            logger.info(
                "Language filter dropped %d non-English products",
                dropped,
            )

        return kept, dropped
