# trendscout/services/health_checker.py

"""Connectivity and configuration health check for the collaborators."""

import asyncio
import logging
import time
from dataclasses import dataclass

from trendscout.services.collaborators import CollaboratorProvider

logger = logging.getLogger("trendscout.health")

_SLOW_MS = 5000


@dataclass
class HealthResult:
    """Result of a single collaborator check."""

    source_id: str
    status: str  # "ok", "slow", "down", "off"
    latency_ms: float
    message: str


def probe_upstream(provider: CollaboratorProvider) -> HealthResult:
    """Issue one cheap upstream query and report remaining credits."""
    start = time.monotonic()
    try:
        credits = provider.source().credits_remaining()
    except Exception as exc:
        return HealthResult(
            source_id="scrapecreators",
            status="down",
            latency_ms=(time.monotonic() - start) * 1000,
            message=str(exc)[:80],
        )
    elapsed_ms = (time.monotonic() - start) * 1000
    return HealthResult(
        source_id="scrapecreators",
        status="slow" if elapsed_ms > _SLOW_MS else "ok",
        latency_ms=elapsed_ms,
        message=f"credits remaining: {credits}",
    )


def probe_scorer(provider: CollaboratorProvider) -> HealthResult:
    """Report whether AI-assisted scoring is configured (no API call)."""
    if provider.keys().has_openai_key:
        return HealthResult(
            source_id="openai",
            status="ok",
            latency_ms=0.0,
            message="AI-assisted scoring enabled",
        )
    return HealthResult(
        source_id="openai",
        status="off",
        latency_ms=0.0,
        message="No OpenAI key, heuristic scoring in use",
    )


class HealthChecker:
    """Runs the collaborator probes concurrently."""

    def __init__(self, provider: CollaboratorProvider | None = None) -> None:
        self.provider = provider or CollaboratorProvider()

    async def check_all(self) -> list[HealthResult]:
        results: list[HealthResult] = list(
            await asyncio.gather(
                asyncio.to_thread(probe_upstream, self.provider),
                asyncio.to_thread(probe_scorer, self.provider),
            )
        )
        for r in results:
            logger.info(
                "Health check %s: %s (%.0fms) %s",
                r.source_id,
                r.status,
                r.latency_ms,
                r.message,
            )
        return results
