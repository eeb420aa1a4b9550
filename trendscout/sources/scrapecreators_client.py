# trendscout/sources/scrapecreators_client.py

"""HTTP client for the ScrapeCreators social-commerce data API."""

import logging
import time
from typing import Any

from curl_cffi import requests as curl_requests

from trendscout.config.settings import Settings


class UpstreamError(Exception):
    """The upstream API could not serve a request."""


class MissingApiKeyError(UpstreamError):
    """No ScrapeCreators API key is configured."""


MISSING_KEY_MESSAGE = (
    "API key not set. Run `trendscout --set-api-key KEY` "
    "or set SCRAPECREATORS_API_KEY."
)


class ScrapeCreatorsClient:
    """Blocking JSON client with retries and adaptive back-off.

    Authorization failures (401/403) and other client errors raise
    immediately; 429, 5xx and transport errors are retried up to
    ``MAX_RETRIES`` times before raising :class:`UpstreamError`.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = Settings.API_BASE_URL,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.logger = logging.getLogger("trendscout.upstream")
        self.settings = Settings()
        self.session = curl_requests.Session(
            impersonate=self.settings.IMPERSONATE_BROWSER
        )
        self._current_delay: float = self.settings.REQUEST_DELAY
        self._request_timeout: int = self.settings.REQUEST_TIMEOUT

    def _escalate_delay(self) -> None:
        """Double the current delay up to the configured max."""
        max_delay = (
            self.settings.REQUEST_DELAY
            * self.settings.MAX_DELAY_MULTIPLIER
        )
        self._current_delay = min(self._current_delay * 2, max_delay)
        self.logger.warning(
            "Upstream throttled, delay escalated to %.1fs",
            self._current_delay,
        )

    @staticmethod
    def _error_message(resp: Any) -> str:
        detail = ""
        try:
            body = resp.json()
        except Exception:
            body = None
        if isinstance(body, dict):
            detail = str(body.get("message") or body.get("error") or "")
        message = f"Request failed with status code {resp.status_code}"
        return f"{message}: {detail}" if detail else message

    def _fetch_json(
        self, path: str, params: dict[str, str]
    ) -> dict[str, Any]:
        """GET *path* and return the decoded JSON object."""
        if not self.api_key:
            raise MissingApiKeyError(MISSING_KEY_MESSAGE)

        url = f"{self.base_url}{path}"
        headers = {
            **self.settings.DEFAULT_HEADERS,
            "x-api-key": self.api_key,
        }
        self.logger.info("API: %s %s", path, params)

        last_error = "no attempts made"
        for attempt in range(self.settings.MAX_RETRIES):
            try:
                resp = self.session.get(
                    url,
                    headers=headers,
                    params=params,
                    timeout=self._request_timeout,
                )
            except Exception as exc:
                last_error = str(exc)
                self.logger.warning(
                    "Request error on attempt %d for %s: %s",
                    attempt + 1,
                    path,
                    exc,
                    exc_info=True,
                )
                time.sleep(self._current_delay * (attempt + 1))
                continue

            if resp.status_code == 200:
                try:
                    data = resp.json()
                except ValueError as exc:
                    raise UpstreamError(
                        f"Invalid JSON from {path}: {exc}"
                    ) from exc
                if not isinstance(data, dict):
                    raise UpstreamError(
                        f"Unexpected response shape from {path}"
                    )
                self._current_delay = self.settings.REQUEST_DELAY
                self.logger.info(
                    "Got response for %s, credits remaining: %s",
                    path,
                    data.get("credits_remaining"),
                )
                return data

            last_error = self._error_message(resp)
            self.logger.warning(
                "HTTP %d on attempt %d for %s",
                resp.status_code,
                attempt + 1,
                path,
            )
            if resp.status_code == 429 or resp.status_code >= 500:
                self._escalate_delay()
                time.sleep(self._current_delay)
                continue
            raise UpstreamError(last_error)

        raise UpstreamError(last_error)

    def search(self, endpoint_id: str, query: str) -> dict[str, Any]:
        """Call one registered search endpoint and return its payload."""
        try:
            path = self.settings.ENDPOINTS[endpoint_id]
        except KeyError:
            valid = ", ".join(sorted(self.settings.ENDPOINTS))
            raise ValueError(
                f"Unknown endpoint '{endpoint_id}' (valid: {valid})"
            ) from None
        return self._fetch_json(path, {"query": query})

    def query(self, category: str) -> list[dict[str, Any]]:
        """Return the raw shop listings for one category search."""
        data = self.search(self.settings.PRODUCT_ENDPOINT, category)
        items = data.get("products") or data.get("data") or []
        if not isinstance(items, list):
            self.logger.warning(
                "Listings for '%s' are not a list (%s)",
                category,
                type(items).__name__,
            )
            return []
        if items and isinstance(items[0], dict):
            self.logger.debug(
                "Sample item keys for '%s': %s",
                category,
                sorted(items[0]),
            )
        return items

    def credits_remaining(self) -> Any:
        """Probe the API with a cheap query and report remaining credits."""
        data = self.search("tiktok_top", "test")
        return data.get("credits_remaining")
