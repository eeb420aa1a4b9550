# trendscout/services/collaborators.py

"""Lazily built, key-aware handles for the upstream and AI clients."""

import logging

from trendscout.config.config_store import ApiKeys, ConfigStore
from trendscout.scoring.openai_scorer import OpenAIScorer
from trendscout.services.recommendation_pipeline import RecommendationPipeline
from trendscout.sources.scrapecreators_client import ScrapeCreatorsClient

logger = logging.getLogger("trendscout.collaborators")


class CollaboratorProvider:
    """Own the expensive clients for the CLI/TUI layer.

    Keys are re-read from the store on every call; a client is rebuilt
    only when its key changed since it was constructed.
    """

    def __init__(self, store: ConfigStore | None = None) -> None:
        self.store = store or ConfigStore()
        self._source: ScrapeCreatorsClient | None = None
        self._source_key: str | None = None
        self._scorer: OpenAIScorer | None = None
        self._scorer_key: str | None = None

    def keys(self) -> ApiKeys:
        return self.store.load()

    def source(self) -> ScrapeCreatorsClient:
        """Return the upstream client (it raises on use if no key is set)."""
        key = self.keys().api_key
        if self._source is None or key != self._source_key:
            logger.debug("Building ScrapeCreators client")
            self._source = ScrapeCreatorsClient(api_key=key)
            self._source_key = key
        return self._source

    def scorer(self) -> OpenAIScorer | None:
        """Return the AI scorer, or None when no OpenAI key is configured."""
        key = self.keys().openai_key
        if not key:
            self._scorer = None
            self._scorer_key = None
            return None
        if self._scorer is None or key != self._scorer_key:
            logger.debug("Building OpenAI scorer")
            self._scorer = OpenAIScorer(api_key=key)
            self._scorer_key = key
        return self._scorer

    def reset(self) -> None:
        """Drop cached clients, e.g. after keys were saved."""
        self._source = None
        self._source_key = None
        self._scorer = None
        self._scorer_key = None

    def pipeline(self) -> RecommendationPipeline:
        """Wire a pipeline run to whatever collaborators are configured."""
        return RecommendationPipeline(
            source=self.source(), collaborator=self.scorer()
        )
