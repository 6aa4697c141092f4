"""Webhook notification sink for finished drafts (Slack or Discord)."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import requests

from config import TrendBotConfig

logger = logging.getLogger(__name__)

SUPPRESS_EMBEDS = 4


class UnsupportedDriverError(Exception):
    """The configured notification driver is neither slack nor discord."""


class NotificationError(Exception):
    """A supported driver is selected but cannot be used."""


def _post(url: Optional[str], payload: Dict[str, Any], driver: str) -> None:
    if not url:
        raise NotificationError(f"No webhook URL configured for {driver}")
    resp = requests.post(
        url,
        json=payload,
        headers={"Content-Type": "application/json"},
        timeout=TrendBotConfig.HTTP_TIMEOUT_SECONDS,
    )
    resp.raise_for_status()


def send_draft_to_slack(draft_post: str, webhook_url: Optional[str] = None) -> str:
    try:
        _post(webhook_url or TrendBotConfig.webhook_url("slack"), {"text": draft_post}, "slack")
    except (requests.RequestException, NotificationError) as e:
        logger.error(f"Error sending draft to Slack webhook: {e}")
        raise
    return f"Success sending draft to webhook at {datetime.now(timezone.utc).isoformat()}"


def send_draft_to_discord(draft_post: str, webhook_url: Optional[str] = None) -> str:
    try:
        _post(
            webhook_url or TrendBotConfig.webhook_url("discord"),
            {"content": draft_post, "flags": SUPPRESS_EMBEDS},
            "discord",
        )
    except (requests.RequestException, NotificationError) as e:
        logger.error(f"Error sending draft to Discord webhook: {e}")
        raise
    return f"Success sending draft to Discord webhook at {datetime.now(timezone.utc).isoformat()}"


def send_draft(draft_post: str, driver: Optional[str] = None) -> str:
    """Deliver a draft through the configured driver; unknown drivers raise."""
    notification_driver = (driver or TrendBotConfig.notification_driver() or "").lower() or None

    if notification_driver == "slack":
        return send_draft_to_slack(draft_post)
    if notification_driver == "discord":
        return send_draft_to_discord(draft_post)
    raise UnsupportedDriverError(f"Unsupported notification driver: {notification_driver}")
