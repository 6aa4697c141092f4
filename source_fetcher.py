"""
Source Fetcher

Pulls structured story lists out of news sites through the Firecrawl extract
API. Every failure is contained to the source being fetched: callers always
get a (possibly empty) list back.
"""

from __future__ import annotations

import logging
import time
from datetime import date, timedelta
from typing import Any, Callable, Dict, List, Optional, Sequence

import requests
from pydantic import ValidationError

from config import TrendBotConfig
from models import StoriesPayload, Story

logger = logging.getLogger(__name__)

TERMINAL_FAILURE_STATES = {"failed", "cancelled"}


class ExtractionError(Exception):
    """Raised when the extraction service reports a failure."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def one_month_ago(today: Optional[date] = None) -> str:
    """
    Same day of the previous calendar month as YYYY-MM-DD.

    Days that do not exist in the previous month roll forward, so March 31
    becomes March 3 (or March 2 in a leap year).
    """
    today = today or date.today()
    if today.month == 1:
        year, month = today.year - 1, 12
    else:
        year, month = today.year, today.month - 1
    return (date(year, month, 1) + timedelta(days=today.day - 1)).isoformat()


class FirecrawlExtractClient:
    """Minimal client for the Firecrawl v1 extract endpoint (submit, then poll)."""

    def __init__(
        self,
        api_key: str,
        base_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
        poll_interval: Optional[float] = None,
        max_polls: Optional[int] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.base_url = (base_url or TrendBotConfig.FIRECRAWL_BASE_URL).rstrip("/")
        self.session = session or requests.Session()
        self.session.headers["Authorization"] = f"Bearer {api_key}"
        self.session.headers["Content-Type"] = "application/json"
        self.timeout = timeout if timeout is not None else TrendBotConfig.HTTP_TIMEOUT_SECONDS
        self.poll_interval = (
            poll_interval if poll_interval is not None else TrendBotConfig.EXTRACT_POLL_INTERVAL
        )
        self.max_polls = max_polls if max_polls is not None else TrendBotConfig.EXTRACT_MAX_POLLS
        self._sleep = sleep

    def extract(self, urls: Sequence[str], prompt: str, schema: Dict[str, Any]) -> Any:
        response = self.session.post(
            f"{self.base_url}/extract",
            json={"urls": list(urls), "prompt": prompt, "schema": schema},
            timeout=self.timeout,
        )
        payload = self._check(response)

        if payload.get("data") is not None and payload.get("status", "completed") == "completed":
            return payload["data"]

        job_id = payload.get("id")
        if not job_id:
            raise ExtractionError("Extraction response carried neither data nor a job id")

        for attempt in range(self.max_polls):
            self._sleep(self.poll_interval)
            response = self.session.get(f"{self.base_url}/extract/{job_id}", timeout=self.timeout)
            payload = self._check(response)
            status = payload.get("status")
            logger.debug(f"Extract job {job_id} status={status} (poll {attempt + 1}/{self.max_polls})")
            if status == "completed":
                return payload.get("data")
            if status in TERMINAL_FAILURE_STATES:
                raise ExtractionError(payload.get("error") or f"Extraction job {status}")

        raise ExtractionError(f"Extraction job {job_id} did not finish after {self.max_polls} polls")

    def _check(self, response: requests.Response) -> Dict[str, Any]:
        if response.status_code == 429:
            raise ExtractionError("Rate limit exceeded", status_code=429)
        if response.status_code >= 400:
            raise ExtractionError(f"HTTP {response.status_code}", status_code=response.status_code)
        try:
            payload = response.json()
        except ValueError:
            raise ExtractionError("Extraction service returned invalid JSON", status_code=response.status_code)
        if not isinstance(payload, dict) or not payload.get("success", False):
            error = payload.get("error") if isinstance(payload, dict) else None
            raise ExtractionError(error or "Extraction failed", status_code=response.status_code)
        return payload


class SourceFetcher:
    """Fetch stories for one web source at a time."""

    def __init__(self, client: Optional[FirecrawlExtractClient]):
        self.client = client

    @classmethod
    def from_env(cls) -> "SourceFetcher":
        api_key = TrendBotConfig.firecrawl_api_key()
        return cls(FirecrawlExtractClient(api_key) if api_key else None)

    def fetch(self, domain: str, keywords: str, since_date: Optional[str] = None) -> List[Story]:
        """Search one domain for stories about `keywords` published after `since_date`."""
        since_date = since_date or one_month_ago()
        search_query = f"site:{domain} {keywords} after:{since_date}"
        logger.info(f"Searching with query: {search_query}")

        prompt = f"""
Search for news stories, articles, or posts related to "{keywords}" from {domain} that were published after {since_date}.
Use the search query: "{search_query}"

Look for content that mentions or discusses these terms and related topics.

The format should be:
{{
  "stories": [
    {{
      "headline": "headline1",
      "link": "link1",
      "date_posted": "YYYY-MM-DD"
    }},
    ...
  ]
}}
If there are no stories related to these terms, return {{"stories": []}}.

Return only pure JSON in the specified format (no extra text, no markdown, no ```).
"""
        stories = self._extract_stories(domain, f"https://{domain}", prompt)
        logger.info(f"Found {len(stories)} stories from {domain} related to \"{keywords}\"")
        return stories

    def scrape(self, url: str, today: Optional[date] = None) -> List[Story]:
        """Pull the day's stories from a section page (scheduled path)."""
        today_str = (today or date.today()).isoformat()
        prompt = f"""
Return the news stories published on this page today ({today_str}) focusing on regional politics,
governance, public safety and civic issues. Ignore advertisements, opinion columns and sponsored content.

The format should be:
{{
  "stories": [
    {{
      "headline": "headline1",
      "link": "link1",
      "date_posted": "YYYY-MM-DD"
    }},
    ...
  ]
}}
If there are no stories from today, return {{"stories": []}}.

Return only pure JSON in the specified format (no extra text, no markdown, no ```).
"""
        stories = self._extract_stories(url, url, prompt)
        logger.info(f"Found {len(stories)} stories from {url}")
        return stories

    def _extract_stories(self, label: str, url: str, prompt: str) -> List[Story]:
        if self.client is None:
            logger.info(f"No extraction credential configured, skipping {label}")
            return []

        try:
            data = self.client.extract([url], prompt=prompt, schema=StoriesPayload.extraction_schema())
        except ExtractionError as e:
            if e.status_code == 429:
                logger.error(f"Rate limit exceeded for {label}. Skipping this source.")
            else:
                logger.error(f"Failed to scrape {label}: {e}")
            return []
        except requests.RequestException as e:
            logger.error(f"Error scraping {label}: {e}")
            return []

        if not isinstance(data, dict) or "stories" not in data:
            logger.error(f"Scraped data from {label} does not have a \"stories\" key.")
            return []

        try:
            return StoriesPayload.model_validate(data).stories
        except ValidationError as e:
            logger.error(f"Scraped data from {label} failed validation: {e.error_count()} errors")
            return []
