import os

import pytest

os.environ.setdefault("OPENAI_API_KEY", "test-key")

from models import Story


@pytest.fixture
def story_factory():
    def make(n=1, prefix="Story"):
        return [
            Story(headline=f"{prefix} {i}", link=f"https://example.com/{prefix.lower()}/{i}", date_posted="2024-05-01")
            for i in range(1, n + 1)
        ]

    return make


@pytest.fixture
def clean_env(monkeypatch):
    for key in (
        "FIRECRAWL_API_KEY",
        "X_API_BEARER_TOKEN",
        "NOTIFICATION_DRIVER",
        "SLACK_WEBHOOK_URL",
        "DISCORD_WEBHOOK_URL",
    ):
        monkeypatch.delenv(key, raising=False)
    return monkeypatch
