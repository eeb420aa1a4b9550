# trendscout/config/config_store.py

"""On-disk API key store (``config.json``) with environment fallback."""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from trendscout.config.settings import Settings

logger = logging.getLogger("trendscout.config")


@dataclass(frozen=True)
class ApiKeys:
    """Credentials for the upstream data API and the AI scorer."""

    api_key: str = ""
    openai_key: str = ""

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)

    @property
    def has_openai_key(self) -> bool:
        return bool(self.openai_key)


class ConfigStore:
    """Read and write the ``apiKey`` / ``openaiKey`` pair.

    Values stored in the file win over ``SCRAPECREATORS_API_KEY`` and
    ``OPENAI_API_KEY`` from the environment (or ``.env``).
    """

    def __init__(self, path: Path | None = None) -> None:
        self.path: Path = path or Settings.CONFIG_PATH

    def _read_raw(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            logger.error(
                "Config load error for %s: %s",
                self.path,
                exc,
                exc_info=True,
            )
            return {}
        if not isinstance(data, dict):
            logger.error(
                "Config file %s does not hold an object", self.path
            )
            return {}
        return {k: str(v) for k, v in data.items() if v is not None}

    def load(self) -> ApiKeys:
        """Return the current keys, re-reading the file on every call."""
        raw = self._read_raw()
        return ApiKeys(
            api_key=raw.get("apiKey")
            or os.environ.get("SCRAPECREATORS_API_KEY", ""),
            openai_key=raw.get("openaiKey")
            or os.environ.get("OPENAI_API_KEY", ""),
        )

    def save(
        self,
        api_key: str | None = None,
        openai_key: str | None = None,
    ) -> None:
        """Update whichever keys are given and persist the file."""
        raw = self._read_raw()
        if api_key is not None:
            raw["apiKey"] = api_key
        if openai_key is not None:
            raw["openaiKey"] = openai_key
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(raw, f, indent=2)
        logger.info("Config saved to %s", self.path)
