# trendscout/scoring/openai_scorer.py

"""OpenAI-backed scoring collaborator."""

import json
import logging
from typing import Any

from openai import OpenAI

from trendscout.config.settings import Settings

logger = logging.getLogger("trendscout.scoring")

PROMPT_TEMPLATE = """Analyze these trending TikTok products for dropshipping potential. For each product, provide:
1. AI Score (0-100) based on viral potential, engagement, and market demand
2. Trend direction (Rising/Stable/Declining)
3. Competition level (Low/Medium/High)
4. Brief recommendation (one sentence)

Products:
{summaries}

Respond in JSON format: {{"products": [{{"productId": "<id>", "productIndex": 1, "aiScore": 85, "trend": "Rising", "competition": "Medium", "recommendation": "..."}}]}}
Echo each product's id exactly as given."""


class ScoringError(Exception):
    """The model returned something that is not a list of assessments."""


def format_summaries(summaries: list[dict[str, Any]]) -> str:
    lines = [
        f"{s['productIndex']}. [id={s['productId']}] {s['title']} - "
        f"${s['price']} - {s['views']} views, {s['likes']} likes, "
        f"{s['engagement']}% engagement"
        for s in summaries
    ]
    return "\n".join(lines)


def extract_entries(content: str | None) -> list[dict[str, Any]]:
    """Pull the assessment list out of the model's JSON reply.

    Accepts ``{"products": [...]}``, any object whose first list value
    holds the entries, a bare list, or an object of per-product objects.
    """
    if not content:
        raise ScoringError("Empty response from scoring model")
    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ScoringError(f"Scoring reply is not JSON: {exc}") from exc

    if isinstance(data, list):
        entries: list[Any] = data
    elif isinstance(data, dict):
        products = data.get("products")
        if isinstance(products, list):
            entries = products
        else:
            lists = [v for v in data.values() if isinstance(v, list)]
            entries = lists[0] if lists else list(data.values())
    else:
        raise ScoringError(
            f"Unexpected scoring reply type: {type(data).__name__}"
        )
    return [e for e in entries if isinstance(e, dict)]


class OpenAIScorer:
    """Score product summaries with one chat-completion round-trip."""

    def __init__(
        self,
        api_key: str,
        model: str = Settings.OPENAI_MODEL,
        timeout: float = Settings.AI_TIMEOUT,
        client: Any = None,
    ) -> None:
        self.model = model
        # No client-side retries; failures fall back to heuristics
        self.client = client or OpenAI(
            api_key=api_key, timeout=timeout, max_retries=0
        )

    def score_batch(
        self, summaries: list[dict[str, Any]]
    ) -> list[dict[str, Any]]:
        if not summaries:
            return []
        prompt = PROMPT_TEMPLATE.format(
            summaries=format_summaries(summaries)
        )
        logger.info(
            "Requesting %s assessment for %d products",
            self.model,
            len(summaries),
        )
        response = self.client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            response_format={"type": "json_object"},
            temperature=Settings.AI_TEMPERATURE,
        )
        content = response.choices[0].message.content
        entries = extract_entries(content)
        logger.debug("Scoring model returned %d entries", len(entries))
        return entries
