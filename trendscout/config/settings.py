# trendscout/config/settings.py

"""Central configuration for the trendscout engine."""

import os
from pathlib import Path

from curl_cffi.requests import BrowserTypeLiteral
from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Central configuration for the trendscout engine."""

    # --- Upstream API (ScrapeCreators) ---
    API_BASE_URL: str = "https://api.scrapecreators.com"
    REQUEST_TIMEOUT: int = 30           # Seconds before a request times out
    REQUEST_DELAY: float = 1.0          # Base back-off between retries
    MAX_RETRIES: int = 3                # Retry count on transient failures
    MAX_DELAY_MULTIPLIER: int = 8       # Cap for adaptive backoff
    IMPERSONATE_BROWSER: BrowserTypeLiteral = "chrome131"
    DEFAULT_HEADERS: dict[str, str] = {
        "Accept": "application/json",
        "Accept-Language": "en-US,en;q=0.9",
    }
    PRODUCT_ENDPOINT: str = "tiktok_shop"
    ENDPOINTS: dict[str, str] = {
        "tiktok_search": "/v1/tiktok/search/keyword",
        "tiktok_top": "/v1/tiktok/search/top",
        "tiktok_shop": "/v1/tiktok/shop/search",
        "instagram_reels": "/v1/instagram/reels/search",
    }

    # --- Category sampling ---
    TRENDING_CATEGORIES: list[str] = [
        "viral gadgets",
        "beauty products",
        "home decor",
        "fitness gear",
        "tech accessories",
        "kitchen tools",
        "pet products",
        "fashion accessories",
        "phone accessories",
        "car accessories",
        "gaming gear",
        "smart home",
    ]
    CATEGORY_SAMPLE_SIZE: int = 3
    ITEMS_PER_CATEGORY: int = 8

    # --- Candidate selection ---
    MIN_PRICE: float = 0.0              # Exclusive lower bound (USD)
    MAX_PRICE: float = 200.0            # Exclusive upper bound (USD)
    MAX_CANDIDATES: int = 20
    ENGLISH_RATIO_THRESHOLD: float = 0.5

    # --- Currency ---
    VND_PER_USD: float = 25000.0

    # --- Margin model (fractions of selling price) ---
    SUPPLIER_RATIO: float = 0.30
    AD_RATIO: float = 0.25
    PLATFORM_FEE_RATIO: float = 0.15
    FLAT_SHIPPING_COST: float = 5.00

    # --- AI scoring ---
    OPENAI_MODEL: str = "gpt-4o-mini"
    AI_TEMPERATURE: float = 0.7
    AI_TIMEOUT: float = 30.0
    AI_BATCH_LIMIT: int = 10
    DEFAULT_AI_SCORE: int = 75
    HEURISTIC_SCORE_RANGE: tuple[int, int] = (70, 100)

    # --- Sourcing catalog ---
    SOURCING_CATALOG: list[dict[str, str]] = [
        {
            "supplier": "AliExpress",
            "url": "https://www.aliexpress.com/wholesale?SearchText={query}",
            "avg_price": "Low",
            "shipping_time": "15-30 days",
            "reliability": "Medium",
        },
        {
            "supplier": "CJ Dropshipping",
            "url": "https://cjdropshipping.com/search?keyword={query}",
            "avg_price": "Medium",
            "shipping_time": "7-15 days",
            "reliability": "High",
        },
        {
            "supplier": "Spocket",
            "url": "https://www.spocket.co/search/{query}",
            "avg_price": "High",
            "shipping_time": "2-7 days",
            "reliability": "High",
        },
    ]

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    CONFIG_PATH: Path = Path(
        os.environ.get("TRENDSCOUT_CONFIG", BASE_DIR / "config.json")
    )
    RESULTS_DIR: Path = BASE_DIR / "results"
    LOGS_DIR: Path = BASE_DIR / "logs"
