# tests/test_cli_runner.py

"""Tests for the headless CLI runner."""

import io
import json
import tempfile
import unittest
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

from trendscout.cli.runner import (
    cli_analyze,
    cli_recommend,
    cli_search,
    parse_categories,
)
from trendscout.config.config_store import ApiKeys
from trendscout.models.report import RecommendationReport
from trendscout.sources.scrapecreators_client import UpstreamError


def _provider(report: RecommendationReport) -> MagicMock:
    provider = MagicMock()
    provider.keys.return_value = ApiKeys("sc", "")
    provider.pipeline.return_value.generate = AsyncMock(return_value=report)
    return provider


class TestParseCategories(unittest.TestCase):
    def test_none_means_sampling(self) -> None:
        self.assertIsNone(parse_categories(None))

    def test_blank_entries_dropped(self) -> None:
        self.assertEqual(
            parse_categories(" pet products, ,smart home "),
            ["pet products", "smart home"],
        )
        self.assertIsNone(parse_categories(" , "))


class TestCliRecommend(unittest.IsolatedAsyncioTestCase):
    """Exit codes and output of a headless recommendation run."""

    async def test_success_prints_json(self) -> None:
        report = RecommendationReport(
            success=True, timestamp="t", categories=["gaming gear"]
        )
        provider = _provider(report)
        with patch("sys.stdout", new_callable=io.StringIO) as out:
            code = await cli_recommend("gaming gear", "json", None, provider)
        self.assertEqual(code, 0)
        data = json.loads(out.getvalue())
        self.assertTrue(data["success"])
        provider.pipeline.return_value.generate.assert_awaited_once_with(
            ["gaming gear"]
        )

    async def test_failure_exit_code(self) -> None:
        report = RecommendationReport(
            success=False, timestamp="t", error="No products found.", errors=["x"]
        )
        with patch("sys.stdout", new_callable=io.StringIO) as out:
            code = await cli_recommend(None, "json", None, _provider(report))
        self.assertEqual(code, 1)
        self.assertEqual(json.loads(out.getvalue())["error"], "No products found.")

    async def test_output_dir_saves_files(self) -> None:
        report = RecommendationReport(success=True, timestamp="t")
        with tempfile.TemporaryDirectory() as tmp:
            with patch("sys.stdout", new_callable=io.StringIO):
                code = await cli_recommend(None, "json", tmp, _provider(report))
            names = sorted(p.name for p in Path(tmp).iterdir())
        self.assertEqual(code, 0)
        self.assertTrue(names[0].startswith("export_recommendations_"))
        self.assertTrue(names[1].startswith("recommendations_"))


class TestCliAnalyze(unittest.TestCase):
    def test_valid(self) -> None:
        with patch("sys.stdout", new_callable=io.StringIO) as out:
            code = cli_analyze("Yoga Mat", "40")
        self.assertEqual(code, 0)
        self.assertEqual(json.loads(out.getvalue())["margins"]["profit"], 7.0)

    def test_invalid_price(self) -> None:
        with patch("sys.stdout", new_callable=io.StringIO) as out:
            code = cli_analyze("Yoga Mat", "free")
        self.assertEqual(code, 1)
        self.assertFalse(json.loads(out.getvalue())["success"])


class TestCliSearch(unittest.TestCase):
    def test_passes_payload_through(self) -> None:
        provider = MagicMock()
        provider.source.return_value.search.return_value = {"data": [1]}
        with patch("sys.stdout", new_callable=io.StringIO) as out:
            code = cli_search("tiktok_top", "lamp", provider)
        self.assertEqual(code, 0)
        self.assertEqual(
            json.loads(out.getvalue()), {"success": True, "data": {"data": [1]}}
        )

    def test_upstream_error_exit_code(self) -> None:
        provider = MagicMock()
        provider.source.return_value.search.side_effect = UpstreamError("401")
        self.assertEqual(cli_search("tiktok_top", "lamp", provider), 1)


if __name__ == "__main__":
    unittest.main()
