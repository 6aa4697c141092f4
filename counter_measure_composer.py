"""Drafts a formal counter-measure for a single search result."""

from __future__ import annotations

import logging

from draft_composer import Generator

logger = logging.getLogger(__name__)

COUNTER_MEASURE_SYSTEM_PROMPT = (
    "You are a professional content writer who creates formal, socially appealing "
    "counter-measures for news and social issues."
)

COUNTER_MEASURE_PROMPT = """
You are a professional content writer specializing in creating socially appealing and formal counter-measures for news and social issues.

Based on the following search result summary, compose a comprehensive counter-measure that:

1. Acknowledges the issue professionally
2. Provides constructive solutions or alternative perspectives
3. Maintains a formal yet accessible tone
4. Is socially appealing and well-structured
5. Offers actionable recommendations
6. Considers multiple stakeholders' perspectives

Search Result Summary:
{search_result}

Please provide a well-formatted counter-measure that addresses the key points raised in the search results. Structure it with clear sections and maintain a professional tone throughout.
"""


class NoContentGenerated(Exception):
    """The generation service answered without any content."""


class CounterMeasureComposer:
    """Unlike DraftComposer, failures here propagate to the caller."""

    def __init__(self, generator: Generator):
        self.generator = generator

    def compose(self, search_result: str) -> str:
        if not search_result or not search_result.strip():
            raise ValueError("Search result is required")

        logger.info("Generating counter-measure for search result...")
        try:
            counter_measure = self.generator.generate(
                COUNTER_MEASURE_SYSTEM_PROMPT,
                COUNTER_MEASURE_PROMPT.format(search_result=search_result),
            )
        except Exception as e:
            logger.error(f"Error generating counter-measure: {type(e).__name__}: {e}")
            raise

        if not counter_measure:
            raise NoContentGenerated("No counter-measure generated")
        return counter_measure
