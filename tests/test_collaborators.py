# tests/test_collaborators.py

"""Tests for the key-aware collaborator provider."""

import unittest
from unittest.mock import MagicMock, patch

from trendscout.config.config_store import ApiKeys
from trendscout.scoring.strategies import (
    AssistedScoringStrategy,
    HeuristicScoringStrategy,
)
from trendscout.services.collaborators import CollaboratorProvider


def _store(api_key: str = "", openai_key: str = "") -> MagicMock:
    store = MagicMock()
    store.load.return_value = ApiKeys(api_key, openai_key)
    return store


@patch("trendscout.services.collaborators.OpenAIScorer")
@patch("trendscout.services.collaborators.ScrapeCreatorsClient")
class TestCollaboratorProvider(unittest.TestCase):
    """Client caching and rebuild on key change."""

    def test_source_cached_while_key_unchanged(
        self, mock_client: MagicMock, _mock_scorer: MagicMock
    ) -> None:
        provider = CollaboratorProvider(_store("k1"))
        first = provider.source()
        second = provider.source()
        self.assertIs(first, second)
        mock_client.assert_called_once_with(api_key="k1")

    def test_source_rebuilt_on_key_change(
        self, mock_client: MagicMock, _mock_scorer: MagicMock
    ) -> None:
        store = _store("k1")
        provider = CollaboratorProvider(store)
        provider.source()
        store.load.return_value = ApiKeys("k2", "")
        provider.source()
        self.assertEqual(mock_client.call_count, 2)
        mock_client.assert_called_with(api_key="k2")

    def test_scorer_none_without_key(
        self, _mock_client: MagicMock, mock_scorer: MagicMock
    ) -> None:
        provider = CollaboratorProvider(_store("k1", ""))
        self.assertIsNone(provider.scorer())
        mock_scorer.assert_not_called()

    def test_scorer_built_and_cached(
        self, _mock_client: MagicMock, mock_scorer: MagicMock
    ) -> None:
        provider = CollaboratorProvider(_store("k1", "sk"))
        self.assertIs(provider.scorer(), provider.scorer())
        mock_scorer.assert_called_once_with(api_key="sk")

    def test_reset_forces_rebuild(
        self, mock_client: MagicMock, _mock_scorer: MagicMock
    ) -> None:
        provider = CollaboratorProvider(_store("k1"))
        provider.source()
        provider.reset()
        provider.source()
        self.assertEqual(mock_client.call_count, 2)

    def test_pipeline_strategy_follows_keys(
        self, _mock_client: MagicMock, _mock_scorer: MagicMock
    ) -> None:
        store = _store("k1", "")
        provider = CollaboratorProvider(store)
        self.assertIsInstance(
            provider.pipeline().engine.strategy, HeuristicScoringStrategy
        )
        store.load.return_value = ApiKeys("k1", "sk")
        self.assertIsInstance(
            provider.pipeline().engine.strategy, AssistedScoringStrategy
        )


if __name__ == "__main__":
    unittest.main()
