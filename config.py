"""
TrendBot Configuration

Single configuration surface for the trend aggregation bot. Credentials are
looked up at call time so source resolution follows the live environment;
everything else is read once at import.
"""

import os
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()


def _csv_env(name: str, default: List[str]) -> List[str]:
    raw = os.getenv(name)
    if raw is None:
        return list(default)
    return [item.strip() for item in raw.split(",") if item.strip()]


class TrendBotConfig:
    """Runtime configuration shared by the pipeline, HTTP surface and scheduler."""

    # Text generation
    DEFAULT_MODEL = os.getenv("TRENDBOT_MODEL", "o3-mini")
    REASONING_EFFORT = os.getenv("TRENDBOT_REASONING_EFFORT", "medium")
    RESPONSE_FORMAT = {"type": "json_object"}
    LLM_TIMEOUT_SECONDS = float(os.getenv("TRENDBOT_LLM_TIMEOUT", "120"))
    OPENAI_ORGANIZATION = os.getenv("OPENAI_ORGANIZATION")

    # Extraction service
    FIRECRAWL_BASE_URL = os.getenv("FIRECRAWL_BASE_URL", "https://api.firecrawl.dev/v1")
    EXTRACT_POLL_INTERVAL = float(os.getenv("TRENDBOT_EXTRACT_POLL_INTERVAL", "2"))
    EXTRACT_MAX_POLLS = int(os.getenv("TRENDBOT_EXTRACT_MAX_POLLS", "60"))

    # Social search
    X_API_BASE_URL = os.getenv("X_API_BASE_URL", "https://api.x.com/2")
    SOCIAL_WINDOW_DAYS = int(os.getenv("TRENDBOT_SOCIAL_WINDOW_DAYS", "7"))
    SOCIAL_MAX_RESULTS = int(os.getenv("TRENDBOT_SOCIAL_MAX_RESULTS", "20"))

    # Outbound HTTP
    HTTP_TIMEOUT_SECONDS = int(os.getenv("TRENDBOT_HTTP_TIMEOUT", "60"))
    FETCH_CONCURRENCY = int(os.getenv("TRENDBOT_FETCH_CONCURRENCY", "1"))

    # Source catalog
    WEB_DOMAINS = _csv_env(
        "TRENDBOT_WEB_DOMAINS",
        [
            "deccanherald.com",
            "thehindu.com",
            "news18.com",
            "thenewsminute.com",
            "republickannada.co.in",
        ],
    )
    SOCIAL_HANDLE = os.getenv("TRENDBOT_SOCIAL_HANDLE", "thenewsminute")
    CRON_SOURCE_URLS = _csv_env(
        "TRENDBOT_CRON_SOURCES",
        [
            "https://www.thehindu.com/news/national/karnataka/",
            "https://www.deccanherald.com/top-karnataka-news",
            "https://www.news18.com/india/",
            "https://www.thenewsminute.com/news/karnataka",
            "https://www.republickannada.co.in/",
        ],
    )

    # Drafts
    DRAFT_LABEL = os.getenv("TRENDBOT_DRAFT_LABEL", "Indian News Trends")

    # Serving and scheduling
    PORT = int(os.getenv("PORT", "3000"))
    SCHEDULE_TIME = os.getenv("TRENDBOT_SCHEDULE_TIME", "17:00")
    LOG_DIR = os.getenv("TRENDBOT_LOG_DIR")

    @classmethod
    def firecrawl_api_key(cls) -> Optional[str]:
        return os.getenv("FIRECRAWL_API_KEY") or None

    @classmethod
    def openai_api_key(cls) -> Optional[str]:
        return os.getenv("OPENAI_API_KEY") or None

    @classmethod
    def x_bearer_token(cls) -> Optional[str]:
        return os.getenv("X_API_BEARER_TOKEN") or None

    @classmethod
    def notification_driver(cls) -> Optional[str]:
        driver = os.getenv("NOTIFICATION_DRIVER")
        return driver.lower() if driver else None

    @classmethod
    def webhook_url(cls, driver: str) -> Optional[str]:
        return os.getenv(f"{driver.upper()}_WEBHOOK_URL") or None
