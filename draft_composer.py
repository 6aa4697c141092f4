"""
Draft Composer

Turns an aggregated story list into a bullet-pointed draft post. The
generation service is asked for strict JSON; anything unusable falls back to
fixed text, and any failure collapses into ERROR_DRAFT.
"""

from __future__ import annotations

import json
import logging
from datetime import date
from typing import Any, Dict, List, Optional, Protocol, Sequence

from pydantic import ValidationError

from config import TrendBotConfig
from logging_utils import log_exception
from models import DraftItem, Story

logger = logging.getLogger(__name__)

ERROR_DRAFT = "Error generating draft post."
NO_STORIES_MESSAGE = "No trending stories or tweets found at this time."
ITEMS_KEY = "interestingTweetsOrStories"
LEGACY_ITEMS_KEY = "stories"

DRAFT_SYSTEM_PROMPT = (
    "You are a helpful assistant that creates a concise, bullet-pointed draft post based on input stories and tweets. "
    "Focus on the most important and recent news items. "
    f"Return strictly valid JSON that has a key '{ITEMS_KEY}' containing an array of items. "
    "Each item should have a 'description' and a 'story_or_tweet_link' key. "
    "Limit to 5-8 most relevant items."
)


class Generator(Protocol):
    def generate(self, system_prompt: str, user_prompt: str) -> str: ...


def format_display_date(day: Optional[date] = None) -> str:
    """M/D/YYYY, the format used in draft headers and trend records."""
    day = day or date.today()
    return f"{day.month}/{day.day}/{day.year}"


def build_header(keywords: Optional[str] = None, day: Optional[date] = None) -> str:
    current_date = format_display_date(day)
    if keywords:
        return f"Search Results for \"{keywords}\" - {current_date}\n\n"
    return f"{TrendBotConfig.DRAFT_LABEL} for {current_date}\n\n"


def extract_json(text: str) -> Dict[str, Any]:
    """Pull the outermost JSON object out of a model reply."""
    text = (text or "").strip()
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end == -1 or end <= start:
        raise ValueError("No JSON object found")
    try:
        return json.loads(text[start:end + 1])
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON: {e}")


class DraftComposer:
    def __init__(self, generator: Generator):
        self.generator = generator

    def compose(
        self,
        stories: Sequence[Story],
        keywords: Optional[str] = None,
        day: Optional[date] = None,
    ) -> str:
        try:
            header = build_header(keywords, day)
            if not stories:
                logger.info("No stories to summarize, skipping generation")
                return header + NO_STORIES_MESSAGE

            raw_stories = json.dumps([story.model_dump() for story in stories], ensure_ascii=False)
            logger.info(f"Generating a post draft with raw stories ({len(raw_stories)} characters)...")
            reply = self.generator.generate(DRAFT_SYSTEM_PROMPT, raw_stories)
            logger.debug(f"Draft generation reply: {reply}")

            items = self._parse_items(reply)
            if not items:
                return header + NO_STORIES_MESSAGE
            return header + "\n\n".join(item.render() for item in items)
        except Exception as e:
            log_exception(logger, e, context="Error generating draft post", keywords=keywords)
            return ERROR_DRAFT

    def _parse_items(self, reply: str) -> List[DraftItem]:
        try:
            payload = extract_json(reply)
        except ValueError as e:
            logger.warning(f"Draft reply was not usable JSON: {e}")
            return []

        raw_items = payload.get(ITEMS_KEY) or payload.get(LEGACY_ITEMS_KEY) or []
        if not isinstance(raw_items, list):
            logger.warning(f"Draft reply '{ITEMS_KEY}' is not a list")
            return []

        items: List[DraftItem] = []
        for raw in raw_items:
            if not isinstance(raw, dict):
                continue
            try:
                item = DraftItem.model_validate(raw)
            except ValidationError:
                logger.warning(f"Skipping malformed draft item: {raw}")
                continue
            if not item.text():
                logger.warning(f"Skipping draft item without text: {raw}")
                continue
            items.append(item)
        return items
