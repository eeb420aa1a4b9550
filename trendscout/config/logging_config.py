# trendscout/config/logging_config.py

"""Per-run logging for trendscout.

Every launch writes ``logs/run_<timestamp>.log`` holding the full
``trendscout.*`` tree at DEBUG: upstream calls and credit counts,
per-category failures, scoring fallbacks and UI events.  The console
only shows warnings so CLI JSON on stdout stays clean.  The OpenAI SDK
and its HTTP stack log every request at INFO; they are capped at
WARNING so API chatter does not drown the pipeline trace.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from trendscout.config.settings import Settings

_FILE_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s | "
    "%(funcName)s:%(lineno)d | %(message)s"
)
_CONSOLE_FORMAT = "%(levelname)-8s %(name)s: %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers pulled in by the scorer and the upstream client
NOISY_LOGGERS: tuple[str, ...] = ("openai", "httpx", "httpcore", "curl_cffi")


def _file_handler(log_file: Path) -> logging.Handler:
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt=_DATE_FORMAT))
    return handler


def _console_handler() -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(logging.WARNING)
    handler.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    return handler


def quiet_third_party(level: int = logging.WARNING) -> None:
    """Cap the SDK/HTTP loggers listed in :data:`NOISY_LOGGERS`."""
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(level)


def setup_logging() -> Path:
    """Attach the run log and console handlers to the ``trendscout`` logger.

    Returns:
        The path of this run's log file.  On repeated calls (tests, TUI
        relaunch) the existing handlers are kept and no new file is opened.
    """
    quiet_third_party()

    project_logger = logging.getLogger("trendscout")
    project_logger.setLevel(logging.DEBUG)

    for handler in project_logger.handlers:
        if isinstance(handler, logging.FileHandler):
            return Path(handler.baseFilename)

    logs_dir: Path = Settings.LOGS_DIR
    logs_dir.mkdir(parents=True, exist_ok=True)
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = logs_dir / f"run_{stamp}.log"

    project_logger.addHandler(_file_handler(log_file))
    project_logger.addHandler(_console_handler())
    project_logger.info(
        "Run log opened: %s (model=%s, endpoint=%s)",
        log_file,
        Settings.OPENAI_MODEL,
        Settings.PRODUCT_ENDPOINT,
    )
    return log_file
