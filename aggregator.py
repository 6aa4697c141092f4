"""
Aggregator

Fans a request out over every catalog source and concatenates whatever comes
back. A source that fails contributes nothing; it never stops the others.
Results keep catalog order (web sources first, then social) whether fetches
run one at a time or on a thread pool.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional, Sequence

from config import TrendBotConfig
from models import SourceDescriptor, Story
from social_fetcher import SocialFetcher
from source_catalog import SourceCatalog, handle_from_identifier
from source_fetcher import SourceFetcher, one_month_ago

logger = logging.getLogger(__name__)

FetchTask = Callable[[], List[Story]]


class Aggregator:
    def __init__(
        self,
        catalog: SourceCatalog,
        source_fetcher: SourceFetcher,
        social_fetcher: SocialFetcher,
        concurrency: Optional[int] = None,
    ):
        self.catalog = catalog
        self.source_fetcher = source_fetcher
        self.social_fetcher = social_fetcher
        self.concurrency = max(1, concurrency if concurrency is not None else TrendBotConfig.FETCH_CONCURRENCY)

    def aggregate(self, keywords: str) -> List[Story]:
        """Keyword search across the catalog's web domains, then its social account."""
        sources = self.catalog.sources()
        since_date = one_month_ago()
        logger.info(f"Searching for trends related to: \"{keywords}\"")
        logger.info(f"Using web domains: {[s.identifier for s in sources if s.kind == 'web']}")
        logger.info(f"Searching for content after: {since_date}")

        tasks: List[tuple] = []
        for source in sources:
            if source.kind == "social":
                tasks.append((source.identifier, self._keyword_social_task(source.identifier, keywords)))
            else:
                tasks.append(
                    (source.identifier, lambda d=source.identifier: self.source_fetcher.fetch(d, keywords, since_date))
                )

        stories = self._run(tasks)
        logger.info(f"Total stories found for \"{keywords}\": {len(stories)}")
        return stories

    def collect(self, sources: Sequence[SourceDescriptor]) -> List[Story]:
        """Scheduled path: pull the latest stories from each catalog descriptor."""
        tasks: List[tuple] = []
        for source in sources:
            if source.kind == "social":
                tasks.append((source.identifier, self._social_task(source.identifier)))
            else:
                tasks.append((source.identifier, lambda url=source.identifier: self.source_fetcher.scrape(url)))

        stories = self._run(tasks)
        logger.info(f"Collected {len(stories)} stories from {len(sources)} sources")
        return stories

    def _social_task(self, identifier: str) -> FetchTask:
        return lambda: self._fetcher_for(identifier).fetch_recent()

    def _keyword_social_task(self, identifier: str, keywords: str) -> FetchTask:
        return lambda: self._fetcher_for(identifier).fetch(keywords)

    def _fetcher_for(self, identifier: str) -> SocialFetcher:
        handle = handle_from_identifier(identifier)
        if handle == self.social_fetcher.handle:
            return self.social_fetcher
        logger.debug(f"Social source {handle} overrides fetcher handle")
        return SocialFetcher(
            self.social_fetcher.bearer_token,
            handle,
            session=self.social_fetcher.session,
            base_url=self.social_fetcher.base_url,
            window_days=self.social_fetcher.window_days,
            max_results=self.social_fetcher.max_results,
            timeout=self.social_fetcher.timeout,
        )

    def _run(self, tasks: Sequence[tuple]) -> List[Story]:
        if self.concurrency == 1 or len(tasks) <= 1:
            results = [self._settle(label, task) for label, task in tasks]
        else:
            with ThreadPoolExecutor(max_workers=min(self.concurrency, len(tasks))) as executor:
                futures = [executor.submit(self._settle, label, task) for label, task in tasks]
                results = [future.result() for future in futures]

        stories: List[Story] = []
        for batch in results:
            stories.extend(batch)
        return stories

    def _settle(self, label: str, task: FetchTask) -> List[Story]:
        # Last line of failure isolation for errors a fetcher did not contain
        try:
            return list(task() or [])
        except Exception as e:
            logger.error(f"Source {label} failed: {type(e).__name__}: {e}")
            return []
