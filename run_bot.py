#!/usr/bin/env python3
"""
CLI entrypoint for the trend bot: serve the API, run one digest, or search once.
"""

from __future__ import annotations

import argparse
import logging
import sys

from dotenv import load_dotenv

from config import TrendBotConfig
from logging_utils import log_exception, setup_logging


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Aggregate news trends into draft posts.")
    parser.add_argument("--debug", action="store_true", help="Enable verbose logging.")
    parser.add_argument("--log-dir", default=TrendBotConfig.LOG_DIR, help="Also write a DEBUG log file here.")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP API.")
    serve.add_argument("--port", type=int, default=TrendBotConfig.PORT, help="Port to listen on.")
    serve.add_argument("--host", default="0.0.0.0", help="Interface to bind.")
    serve.add_argument("--schedule", action="store_true", help="Also run the daily digest job.")
    serve.add_argument("--notify", action="store_true", help="Dispatch scheduled digests to the webhook.")

    run_once = sub.add_parser("run-once", help="Run the scheduled digest immediately.")
    run_once.add_argument("--notify", action="store_true", help="Dispatch the draft to the webhook.")

    search = sub.add_parser("search", help="Search trends for keywords and print the draft.")
    search.add_argument("keywords", type=str, help="Keywords to search for.")

    return parser.parse_args(argv)


def main(argv=None) -> None:
    args = parse_args(argv)
    load_dotenv()
    setup_logging(debug=args.debug, log_dir=args.log_dir)
    logger = logging.getLogger("trendbot")

    from pipeline import TrendService

    service = TrendService()

    if args.command == "serve":
        from app import create_app
        from scheduler import start_background_scheduler

        if args.schedule:
            start_background_scheduler(service, notify=args.notify)
        app = create_app(service)
        logger.info(f"Server running on http://localhost:{args.port}")
        app.run(host=args.host, port=args.port)
        return

    if args.command == "run-once":
        try:
            trend = service.run_scheduled(notify=args.notify)
        except Exception as exc:
            log_exception(logger, exc, context="run_scheduled")
            print("❌ Digest failed. Check logs for details.")
            sys.exit(1)
        print(trend.content)
        return

    if args.command == "search":
        if not args.keywords.strip():
            print("❌ Keywords are required")
            sys.exit(2)
        try:
            trend = service.search_trends(args.keywords)
        except Exception as exc:
            log_exception(logger, exc, context="search_trends", keywords=args.keywords)
            print("❌ Search failed. Check logs for details.")
            sys.exit(1)
        print(trend.content)


if __name__ == "__main__":
    main()
