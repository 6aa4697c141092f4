"""
HTTP surface for the trend bot.

JSON in, JSON out. Error bodies only ever carry a short message; details stay
in the logs.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from flask import Flask, jsonify, request

from logging_utils import log_exception
from pipeline import TrendService

logger = logging.getLogger(__name__)


def _json_body() -> Dict[str, Any]:
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def create_app(service: Optional[TrendService] = None) -> Flask:
    app = Flask(__name__)
    service = service or TrendService()

    @app.get("/api/trends")
    def list_trends():
        return jsonify([trend.to_json() for trend in service.list_trends()])

    @app.post("/api/trends")
    def add_trend():
        content = _json_body().get("content")
        trend = service.add_trend("" if content is None else str(content))
        return jsonify(trend.to_json())

    @app.post("/api/search-trends")
    def search_trends():
        keywords = _json_body().get("keywords")
        if _is_blank(keywords):
            return jsonify({"error": "Keywords are required"}), 400
        try:
            trend = service.search_trends(keywords)
        except Exception as e:
            log_exception(logger, e, context="Error searching trends", keywords=keywords)
            return jsonify({"error": "Failed to search trends"}), 500
        return jsonify(trend.to_json())

    @app.post("/api/generate-counter-measure")
    def generate_counter_measure():
        body = _json_body()
        search_result = body.get("searchResult")
        keywords = body.get("keywords")
        if _is_blank(search_result):
            return jsonify({"error": "Search result is required"}), 400
        if not isinstance(keywords, str):
            keywords = None
        try:
            record = service.generate_counter_measure(search_result, keywords)
        except Exception as e:
            log_exception(logger, e, context="Error generating counter-measure")
            return jsonify({"error": "Failed to generate counter-measure"}), 500
        return jsonify(record.to_json())

    @app.get("/api/counter-measure/<counter_measure_id>")
    def get_counter_measure(counter_measure_id: str):
        logger.info(f"Looking for counter-measure with ID: {counter_measure_id}")
        record = service.get_counter_measure(counter_measure_id)
        if record is None:
            logger.info(f"Counter-measure not found for ID: {counter_measure_id}")
            return jsonify({"error": "Counter-measure not found"}), 404
        return jsonify(record.to_json())

    return app
