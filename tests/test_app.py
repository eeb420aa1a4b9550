# tests/test_app.py

"""Smoke tests for the TUI application using Textual's Pilot."""

import unittest
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

from helpers import make_analyzed
from textual.widgets import DataTable, Input, Static

from trendscout.analysis.niche_aggregator import aggregate_niches
from trendscout.models.product import Competition, ScoredProduct, Trend
from trendscout.models.report import RecommendationReport
from trendscout.ui.app import TrendScoutApp


def _report(success: bool = True, errors: list[str] | None = None) -> RecommendationReport:
    if not success:
        return RecommendationReport(
            success=False,
            timestamp="t",
            categories=["pet products"],
            error="No products found. Try again or check your API key.",
            errors=errors or [],
        )
    products = [
        ScoredProduct.from_analyzed(
            make_analyzed(f"Item {i}", price=15.0 + i, category=cat),
            ai_score=score,
            trend=Trend.RISING,
            competition=Competition.LOW,
            recommendation="",
        )
        for i, (cat, score) in enumerate(
            [("pet products", 92), ("pet products", 81), ("smart home", 74)]
        )
    ]
    return RecommendationReport(
        success=True,
        timestamp="t",
        products=products,
        niches=aggregate_niches(products),
        categories=["pet products", "smart home"],
        errors=errors or [],
    )


def _provider(report: RecommendationReport) -> MagicMock:
    provider = MagicMock()
    pipeline = MagicMock()
    pipeline.generate = AsyncMock(return_value=report)
    provider.pipeline.return_value = pipeline
    return provider


class TestTrendScoutApp(unittest.IsolatedAsyncioTestCase):
    """Smoke tests for the Textual TUI."""

    async def test_app_composes_without_crash(self) -> None:
        app = TrendScoutApp(provider=_provider(_report()))
        async with app.run_test() as pilot:
            app.query_one("#category_input", Input)
            app.query_one("#generate_btn")
            app.query_one("#products_table", DataTable)
            app.query_one("#niches_table", DataTable)
            app.query_one("#status", Static)
            await pilot.pause()

    async def test_generate_populates_tables(self) -> None:
        provider = _provider(_report())
        app = TrendScoutApp(provider=provider)
        async with app.run_test() as pilot:
            await pilot.click("#generate_btn")
            await pilot.pause()

            products = app.query_one("#products_table", DataTable)
            niches = app.query_one("#niches_table", DataTable)
            self.assertEqual(products.row_count, 3)
            self.assertEqual(niches.row_count, 2)
            provider.pipeline.return_value.generate.assert_awaited_once_with(None)

    async def test_categories_forwarded(self) -> None:
        provider = _provider(_report())
        app = TrendScoutApp(provider=provider)
        async with app.run_test() as pilot:
            app.query_one("#category_input", Input).value = "pet products, smart home"
            await pilot.click("#generate_btn")
            await pilot.pause()
            provider.pipeline.return_value.generate.assert_awaited_once_with(
                ["pet products", "smart home"]
            )

    async def test_failed_run_leaves_tables_empty(self) -> None:
        app = TrendScoutApp(provider=_provider(_report(False, ["boom"])))
        async with app.run_test(notifications=True) as pilot:
            await pilot.click("#generate_btn")
            await pilot.pause()
            self.assertEqual(
                app.query_one("#products_table", DataTable).row_count, 0
            )
            self.assertIsNotNone(app.report)
            self.assertFalse(app.report.success)

    async def test_pipeline_exception_is_reported(self) -> None:
        provider = MagicMock()
        provider.pipeline.side_effect = RuntimeError("bad key")
        app = TrendScoutApp(provider=provider)
        async with app.run_test(notifications=True) as pilot:
            await pilot.click("#generate_btn")
            await pilot.pause()
            self.assertIsNone(app.report)

    async def test_save_and_export_use_file_manager(self) -> None:
        file_manager = MagicMock()
        app = TrendScoutApp(
            provider=_provider(_report()), file_manager=file_manager
        )
        async with app.run_test() as pilot:
            await pilot.click("#generate_btn")
            await pilot.pause()
            await pilot.press("s")
            await pilot.press("e")
            await pilot.pause()
            file_manager.save_report.assert_called_once()
            file_manager.export_csv.assert_called_once()

    async def test_save_without_report_does_nothing(self) -> None:
        file_manager = MagicMock()
        app = TrendScoutApp(
            provider=_provider(_report()), file_manager=file_manager
        )
        async with app.run_test(notifications=True) as pilot:
            app.action_save()
            await pilot.pause()
            file_manager.save_report.assert_not_called()

    @patch("trendscout.ui.app.webbrowser")
    async def test_row_select_opens_sourcing_link(self, mock_browser: Any) -> None:
        app = TrendScoutApp(provider=_provider(_report()))
        async with app.run_test() as pilot:
            await pilot.click("#generate_btn")
            await pilot.pause()
            table = app.query_one("#products_table", DataTable)
            table.focus()
            await pilot.press("enter")
            await pilot.pause()
            mock_browser.open.assert_called_once()
            url = mock_browser.open.call_args[0][0]
            self.assertIn("aliexpress", url)


if __name__ == "__main__":
    unittest.main()
