"""Credential-gated catalog of the sources the pipeline is allowed to query."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from config import TrendBotConfig
from models import SourceDescriptor

logger = logging.getLogger(__name__)

SOCIAL_PROFILE_BASE = "https://x.com/"


class SourceCatalog:
    """
    Resolve active sources from two capability flags.

    Web domains are listed only when an extraction credential is present and
    the social handle only when a social-search credential is present. No
    state is kept between calls.
    """

    def __init__(
        self,
        has_extraction_credential: bool,
        has_social_credential: bool,
        web_domains: Optional[Sequence[str]] = None,
        social_handle: Optional[str] = None,
        cron_urls: Optional[Sequence[str]] = None,
    ):
        self.has_extraction_credential = bool(has_extraction_credential)
        self.has_social_credential = bool(has_social_credential)
        self._web_domains = tuple(TrendBotConfig.WEB_DOMAINS if web_domains is None else web_domains)
        self._social_handle = TrendBotConfig.SOCIAL_HANDLE if social_handle is None else social_handle
        self._cron_urls = tuple(TrendBotConfig.CRON_SOURCE_URLS if cron_urls is None else cron_urls)

    @classmethod
    def from_env(cls) -> "SourceCatalog":
        return cls(
            has_extraction_credential=bool(TrendBotConfig.firecrawl_api_key()),
            has_social_credential=bool(TrendBotConfig.x_bearer_token()),
        )

    def web_domains(self) -> List[str]:
        if not self.has_extraction_credential:
            return []
        return list(self._web_domains)

    def social_handle(self) -> Optional[str]:
        if not self.has_social_credential or not self._social_handle:
            return None
        return self._social_handle

    def sources(self) -> List[SourceDescriptor]:
        """Descriptors for the keyword search path, web domains first."""
        descriptors = [SourceDescriptor(identifier=d, kind="web") for d in self.web_domains()]
        handle = self.social_handle()
        if handle:
            descriptors.append(SourceDescriptor(identifier=handle, kind="social"))
        logger.debug(f"Resolved {len(descriptors)} search sources")
        return descriptors

    def cron_sources(self) -> List[SourceDescriptor]:
        """Descriptors for the scheduled path: section pages plus the social profile."""
        descriptors: List[SourceDescriptor] = []
        if self.has_extraction_credential:
            descriptors.extend(SourceDescriptor(identifier=url, kind="web") for url in self._cron_urls)
        handle = self.social_handle()
        if handle:
            descriptors.append(SourceDescriptor(identifier=f"{SOCIAL_PROFILE_BASE}{handle}", kind="social"))
        logger.info(f"Fetching sources... {len(descriptors)} active")
        return descriptors


def handle_from_identifier(identifier: str) -> str:
    """Return the bare handle for either `handle` or `https://x.com/handle`."""
    value = identifier.strip().rstrip("/")
    if "/" in value:
        value = value.rsplit("/", 1)[-1]
    return value.lstrip("@")
