# trendscout/storage/file_manager.py

"""Handles exporting recommendation snapshots to disk."""

import csv
import json
import logging
from datetime import datetime
from pathlib import Path

from trendscout.config.settings import Settings
from trendscout.models.product import ScoredProduct
from trendscout.models.report import RecommendationReport

logger = logging.getLogger("trendscout.storage")

CSV_HEADER = [
    "Score",
    "Title",
    "Category",
    "Price",
    "Profit",
    "Margin %",
    "Trend",
    "Competition",
    "Views",
    "Likes",
    "Sold",
    "Engagement %",
    "Recommendation",
]


class FileManager:
    """Write reports as JSON and scored products as CSV."""

    def __init__(self, results_dir: Path | None = None) -> None:
        self.results_dir: Path = results_dir or Settings.RESULTS_DIR
        self.results_dir.mkdir(parents=True, exist_ok=True)
        logger.debug("FileManager initialised, results_dir=%s", self.results_dir)

    def save_report(
        self, report: RecommendationReport, include_raw: bool = False
    ) -> Path:
        """Save a report to a timestamped JSON file."""
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filepath = self.results_dir / f"recommendations_{timestamp}.json"

        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(
                report.to_dict(include_raw),
                f,
                ensure_ascii=False,
                indent=2,
            )

        logger.info(
            "Saved report with %d products to %s",
            report.total_products,
            filepath,
        )
        return filepath

    def export_csv(self, products: list[ScoredProduct]) -> Path:
        """Export scored products to CSV, best score first."""
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filepath = self.results_dir / f"export_recommendations_{timestamp}.csv"

        ranked = sorted(products, key=lambda p: p.ai_score, reverse=True)

        with open(filepath, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(CSV_HEADER)
            for p in ranked:
                margins = p.margins
                writer.writerow(
                    [
                        p.ai_score,
                        p.title,
                        p.category,
                        f"{p.price:.2f}",
                        f"{margins.profit:.2f}" if margins else "",
                        f"{margins.profit_margin:.1f}" if margins else "",
                        p.trend.value,
                        p.competition.value,
                        p.views,
                        p.likes,
                        p.sold,
                        p.engagement,
                        p.recommendation,
                    ]
                )

        logger.info("Exported %d products to %s", len(products), filepath)
        return filepath
