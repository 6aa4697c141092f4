"""
TrendBot MCP Server

FastMCP server exposing the trend pipeline as tools so agents can run keyword
searches, read stored drafts and request counter-measures.
"""

import json
import logging

from mcp.server.fastmcp import FastMCP

from logging_utils import log_exception
from pipeline import TrendService

logger = logging.getLogger(__name__)

# Initialize FastMCP server
trend_mcp = FastMCP("TrendBot")

service = TrendService()


@trend_mcp.tool()
def search_trends(keywords: str) -> str:
    """
    Search the configured news sites and social account for `keywords` and
    return the stored trend (id, date, draft content) as JSON.
    """
    if not keywords or not keywords.strip():
        return json.dumps({"error": "Keywords are required"})
    try:
        trend = service.search_trends(keywords)
    except Exception as e:
        log_exception(logger, e, context="search_trends tool", keywords=keywords)
        return json.dumps({"error": "Failed to search trends"})
    return json.dumps(trend.to_json(), ensure_ascii=False)


@trend_mcp.tool()
def list_trends(limit: int = 10) -> str:
    """Return up to `limit` stored trends, most recent first, as a JSON array."""
    trends = service.list_trends()[:max(0, limit)]
    return json.dumps([trend.to_json() for trend in trends], ensure_ascii=False)


@trend_mcp.tool()
def generate_counter_measure(search_result: str, keywords: str = "") -> str:
    """Draft a formal counter-measure for a search result and return the stored record as JSON."""
    if not search_result or not search_result.strip():
        return json.dumps({"error": "Search result is required"})
    try:
        record = service.generate_counter_measure(search_result, keywords or None)
    except Exception as e:
        log_exception(logger, e, context="generate_counter_measure tool")
        return json.dumps({"error": "Failed to generate counter-measure"})
    return json.dumps(record.to_json(), ensure_ascii=False)


if __name__ == "__main__":
    trend_mcp.run()
