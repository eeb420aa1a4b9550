# tests/test_openai_scorer.py

"""Tests for the OpenAI-backed scoring collaborator."""

import json
import unittest
from typing import Any
from unittest.mock import MagicMock, patch

from trendscout.scoring.openai_scorer import (
    OpenAIScorer,
    ScoringError,
    extract_entries,
    format_summaries,
)


def _summary(index: int = 1) -> dict[str, Any]:
    return {
        "productId": f"id{index}",
        "productIndex": index,
        "title": f"Widget {index}",
        "price": 12.5,
        "views": 1000,
        "likes": 80,
        "engagement": 8.0,
    }


def _client_returning(content: str | None) -> MagicMock:
    client = MagicMock()
    message = MagicMock()
    message.content = content
    choice = MagicMock()
    choice.message = message
    client.chat.completions.create.return_value = MagicMock(choices=[choice])
    return client


class TestExtractEntries(unittest.TestCase):
    """Parsing of the model's JSON reply."""

    def test_products_key(self) -> None:
        content = json.dumps({"products": [{"productId": "a"}]})
        self.assertEqual(extract_entries(content), [{"productId": "a"}])

    def test_first_list_value(self) -> None:
        content = json.dumps({"analysis": [{"productIndex": 1}], "n": 1})
        self.assertEqual(extract_entries(content), [{"productIndex": 1}])

    def test_object_of_objects(self) -> None:
        content = json.dumps({"1": {"productIndex": 1}, "2": {"productIndex": 2}})
        self.assertEqual(len(extract_entries(content)), 2)

    def test_bare_list(self) -> None:
        self.assertEqual(extract_entries('[{"a": 1}, 3]'), [{"a": 1}])

    def test_invalid_json_raises(self) -> None:
        with self.assertRaises(ScoringError):
            extract_entries("not json")

    def test_empty_raises(self) -> None:
        with self.assertRaises(ScoringError):
            extract_entries(None)

    def test_scalar_raises(self) -> None:
        with self.assertRaises(ScoringError):
            extract_entries("42")


class TestOpenAIScorer(unittest.TestCase):
    """score_batch request and response handling."""

    def test_sends_single_json_request(self) -> None:
        client = _client_returning(
            json.dumps({"products": [{"productId": "id1", "aiScore": 90}]})
        )
        scorer = OpenAIScorer(api_key="sk-test", client=client)
        entries = scorer.score_batch([_summary(1), _summary(2)])

        self.assertEqual(entries, [{"productId": "id1", "aiScore": 90}])
        client.chat.completions.create.assert_called_once()
        kwargs = client.chat.completions.create.call_args.kwargs
        self.assertEqual(kwargs["model"], "gpt-4o-mini")
        self.assertEqual(kwargs["response_format"], {"type": "json_object"})
        prompt = kwargs["messages"][0]["content"]
        self.assertIn("[id=id1] Widget 1", prompt)
        self.assertIn("2. [id=id2] Widget 2", prompt)

    def test_empty_batch_skips_call(self) -> None:
        client = _client_returning("{}")
        scorer = OpenAIScorer(api_key="sk-test", client=client)
        self.assertEqual(scorer.score_batch([]), [])
        client.chat.completions.create.assert_not_called()

    def test_malformed_reply_raises(self) -> None:
        scorer = OpenAIScorer(
            api_key="sk-test", client=_client_returning("oops")
        )
        with self.assertRaises(ScoringError):
            scorer.score_batch([_summary()])

    @patch("trendscout.scoring.openai_scorer.OpenAI")
    def test_builds_client_without_retries(self, mock_openai: MagicMock) -> None:
        OpenAIScorer(api_key="sk-test", timeout=12.0)
        mock_openai.assert_called_once_with(
            api_key="sk-test", timeout=12.0, max_retries=0
        )

    def test_format_summaries_line(self) -> None:
        text = format_summaries([_summary(3)])
        self.assertEqual(
            text,
            "3. [id=id3] Widget 3 - $12.5 - 1000 views, 80 likes, 8.0% engagement",
        )


if __name__ == "__main__":
    unittest.main()
