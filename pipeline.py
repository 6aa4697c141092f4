"""
Trend pipeline service.

Wires the catalog, fetchers, aggregator, composers and stores together for
the three flows the bot supports: keyword search, scheduled digest and
counter-measure generation.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional

from aggregator import Aggregator
from config import TrendBotConfig
from counter_measure_composer import CounterMeasureComposer
from draft_composer import DraftComposer, Generator, format_display_date
from llm import TextGenerator
from models import CounterMeasure, Trend
from notifier import send_draft
from social_fetcher import SocialFetcher
from source_catalog import SourceCatalog
from source_fetcher import SourceFetcher
from stores import CounterMeasureStore, IdGenerator, TrendStore

logger = logging.getLogger(__name__)


def build_aggregator(catalog: SourceCatalog) -> Aggregator:
    return Aggregator(
        catalog,
        SourceFetcher.from_env(),
        SocialFetcher(TrendBotConfig.x_bearer_token(), catalog.social_handle()),
    )


class TrendService:
    def __init__(
        self,
        draft_generator: Optional[Generator] = None,
        counter_measure_generator: Optional[Generator] = None,
        catalog_factory: Callable[[], SourceCatalog] = SourceCatalog.from_env,
        aggregator_factory: Callable[[SourceCatalog], Aggregator] = build_aggregator,
        trend_store: Optional[TrendStore] = None,
        counter_measure_store: Optional[CounterMeasureStore] = None,
        id_generator: Optional[IdGenerator] = None,
        notify: Callable[[str], str] = send_draft,
    ):
        self.draft_composer = DraftComposer(draft_generator or TextGenerator(json_mode=True))
        self.counter_measure_composer = CounterMeasureComposer(counter_measure_generator or TextGenerator())
        self.catalog_factory = catalog_factory
        self.aggregator_factory = aggregator_factory
        self.trends = trend_store if trend_store is not None else TrendStore()
        self.counter_measures = counter_measure_store if counter_measure_store is not None else CounterMeasureStore()
        self.ids = id_generator or IdGenerator()
        self.notify = notify

    def list_trends(self) -> List[Trend]:
        return self.trends.list()

    def add_trend(self, content: str) -> Trend:
        return self.trends.insert_front(self._new_trend(content))

    def search_trends(self, keywords: str) -> Trend:
        if not keywords or not keywords.strip():
            raise ValueError("Keywords are required")

        logger.info(f"Searching for trends with keywords: \"{keywords}\"")
        # Catalog is resolved per request
        aggregator = self.aggregator_factory(self.catalog_factory())
        stories = aggregator.aggregate(keywords)
        logger.info(f"Total stories found: {len(stories)}")

        draft = self.draft_composer.compose(stories, keywords)
        trend = self.trends.insert_front(self._new_trend(draft, keywords))
        logger.info("Search completed successfully!")
        return trend

    def run_scheduled(self, notify: bool = False) -> Trend:
        """Scheduled digest: fixed catalog, no keywords, stored and optionally dispatched."""
        catalog = self.catalog_factory()
        sources = catalog.cron_sources()
        stories = self.aggregator_factory(catalog).collect(sources)
        draft = self.draft_composer.compose(stories)
        trend = self.trends.insert_front(self._new_trend(draft))
        logger.info("Trend stored successfully")

        if notify:
            logger.info(self.notify(draft))
        return trend

    def generate_counter_measure(self, search_result: str, keywords: Optional[str] = None) -> CounterMeasure:
        counter_measure = self.counter_measure_composer.compose(search_result)
        logger.info("Counter-measure generated successfully")
        record = CounterMeasure(
            id=self.ids.next_id(),
            searchResult=search_result,
            counterMeasure=counter_measure,
            keywords=keywords,
            timestamp=datetime.now(timezone.utc),
        )
        return self.counter_measures.insert_front(record)

    def get_counter_measure(self, counter_measure_id: str) -> Optional[CounterMeasure]:
        return self.counter_measures.find_by_id(counter_measure_id)

    def _new_trend(self, content: str, keywords: Optional[str] = None) -> Trend:
        return Trend(
            id=self.ids.next_id(),
            date=format_display_date(),
            content=content,
            timestamp=datetime.now(timezone.utc),
            keywords=keywords,
        )
