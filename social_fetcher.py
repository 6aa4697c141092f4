"""Recent-post search against the X API v2, restricted to one account."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, List, Optional

import requests
from pydantic import ValidationError

from config import TrendBotConfig
from models import Story

logger = logging.getLogger(__name__)

PERMALINK_TEMPLATE = "https://x.com/i/status/{post_id}"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _iso_millis(moment: datetime) -> str:
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class SocialFetcher:
    """
    Query recent posts from a single handle.

    Returns an empty list without touching the network when the bearer token
    or the handle is missing. Transport errors and non-2xx responses are
    logged and produce an empty list.
    """

    def __init__(
        self,
        bearer_token: Optional[str],
        handle: Optional[str],
        session: Optional[requests.Session] = None,
        base_url: Optional[str] = None,
        window_days: Optional[int] = None,
        max_results: Optional[int] = None,
        timeout: Optional[float] = None,
        clock: Callable[[], datetime] = _utc_now,
    ):
        self.bearer_token = bearer_token
        self.handle = handle
        self.session = session or requests.Session()
        self.base_url = (base_url or TrendBotConfig.X_API_BASE_URL).rstrip("/")
        self.window_days = window_days if window_days is not None else TrendBotConfig.SOCIAL_WINDOW_DAYS
        self.max_results = max_results if max_results is not None else TrendBotConfig.SOCIAL_MAX_RESULTS
        self.timeout = timeout if timeout is not None else TrendBotConfig.HTTP_TIMEOUT_SECONDS
        self._clock = clock

    def fetch(self, keywords: str) -> List[Story]:
        if not self._available():
            return []
        query = f"from:{self.handle} ({keywords}) -is:retweet -is:reply"
        return self._search(query, context=f"keywords \"{keywords}\"")

    def fetch_recent(self) -> List[Story]:
        """Latest original posts from the handle, no keyword filter."""
        if not self._available():
            return []
        query = f"from:{self.handle} -is:retweet -is:reply"
        return self._search(query, context="recent posts")

    def _available(self) -> bool:
        if not self.bearer_token or not self.handle:
            logger.info("X API Bearer Token or Twitter source not available, skipping Twitter search")
            return False
        return True

    def _search(self, query: str, context: str) -> List[Story]:
        start_time = _iso_millis(self._clock() - timedelta(days=self.window_days))
        params = {
            "query": query,
            "max_results": self.max_results,
            "start_time": start_time,
        }
        logger.info(f"Searching Twitter for: {query}")

        try:
            resp = self.session.get(
                f"{self.base_url}/tweets/search/recent",
                params=params,
                headers={"Authorization": f"Bearer {self.bearer_token}"},
                timeout=self.timeout,
            )
            resp.raise_for_status()
            payload: Any = resp.json()
        except (requests.RequestException, ValueError) as e:
            logger.error(f"Error fetching tweets for {context} from {self.handle}: {e}")
            return []

        if not isinstance(payload, dict):
            logger.error(f"Unexpected tweet search body for {context} from {self.handle}: {type(payload).__name__}")
            return []

        meta = payload.get("meta")
        if isinstance(meta, dict) and meta.get("result_count") == 0:
            logger.info(f"No tweets found for {context} from {self.handle}")
            return []

        posts = payload.get("data")
        if not isinstance(posts, list):
            return []

        logger.info(f"Found {len(posts)} tweets for {context} from {self.handle}")
        stories: List[Story] = []
        for post in posts:
            if not isinstance(post, dict) or not post.get("id"):
                continue
            try:
                stories.append(
                    Story(
                        headline=post.get("text") or "",
                        link=PERMALINK_TEMPLATE.format(post_id=post["id"]),
                        date_posted=start_time,
                    )
                )
            except ValidationError:
                logger.warning(f"Skipping malformed tweet {post.get('id')} from {self.handle}")
        return stories
