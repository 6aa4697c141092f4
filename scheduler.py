"""Daily digest job built on the `schedule` library."""

from __future__ import annotations

import logging
import threading
from typing import Optional

import schedule

from config import TrendBotConfig
from logging_utils import log_exception
from pipeline import TrendService

logger = logging.getLogger(__name__)


def run_digest(service: TrendService, notify: bool = False) -> bool:
    """Run one scheduled digest; failures are logged and reported as False."""
    logger.info("Starting process to generate draft...")
    try:
        service.run_scheduled(notify=notify)
    except Exception as e:
        log_exception(logger, e, context="Scheduled digest failed")
        return False
    return True


def register_daily_digest(
    service: TrendService,
    at: Optional[str] = None,
    notify: bool = False,
    scheduler: Optional[schedule.Scheduler] = None,
) -> schedule.Job:
    scheduler = scheduler or schedule.default_scheduler
    at = at or TrendBotConfig.SCHEDULE_TIME
    job = scheduler.every().day.at(at).do(run_digest, service, notify=notify)
    logger.info(f"Daily digest scheduled at {at}")
    return job


def run_pending_forever(
    scheduler: Optional[schedule.Scheduler] = None,
    stop: Optional[threading.Event] = None,
    interval: float = 30.0,
) -> None:
    scheduler = scheduler or schedule.default_scheduler
    stop = stop or threading.Event()
    while not stop.is_set():
        scheduler.run_pending()
        stop.wait(interval)


def start_background_scheduler(
    service: TrendService,
    at: Optional[str] = None,
    notify: bool = False,
) -> threading.Event:
    """Register the daily job and drive it from a daemon thread. Set the returned event to stop."""
    scheduler = schedule.Scheduler()
    register_daily_digest(service, at=at, notify=notify, scheduler=scheduler)
    stop = threading.Event()
    thread = threading.Thread(
        target=run_pending_forever,
        kwargs={"scheduler": scheduler, "stop": stop},
        name="trendbot-scheduler",
        daemon=True,
    )
    thread.start()
    return stop
