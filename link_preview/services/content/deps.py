"""Collaborators the link content pipeline depends on."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

import httpx

from link_preview.services.content.firecrawl import create_firecrawl_scraper
from link_preview.services.content.transcript import TranscriptResolver
from link_preview.services.content.types import (
    FirecrawlScrapeResult,
    ResolverConfig,
    TranscriptResolution,
    YoutubeTranscriptMode,
)

if TYPE_CHECKING:
    from link_preview.core.config import Settings


class ScrapeFunction(Protocol):
    async def __call__(self, url: str, *, timeout_ms: int) -> FirecrawlScrapeResult | None: ...


class TranscriptSource(Protocol):
    async def resolve(
        self,
        url: str,
        html: str | None,
        *,
        mode: YoutubeTranscriptMode = "auto",
        timeout_ms: int = ...,
    ) -> TranscriptResolution: ...


@dataclass(frozen=True)
class LinkPreviewDeps:
    """Network-facing collaborators, shared read-only across resolutions.

    A None scrape_with_firecrawl disables the scraping fallback entirely.
    """

    http_client: httpx.AsyncClient
    transcript_resolver: TranscriptSource
    scrape_with_firecrawl: ScrapeFunction | None = None
    user_agent: str | None = None
    max_response_bytes: int | None = None


def build_link_preview_deps(http_client: httpx.AsyncClient, settings: Settings) -> LinkPreviewDeps:
    """Wire the concrete Firecrawl and transcript backends from settings."""
    return LinkPreviewDeps(
        http_client=http_client,
        transcript_resolver=TranscriptResolver(
            http_client,
            apify_api_token=settings.apify_api_token,
            apify_actor=settings.apify_transcript_actor,
            languages=settings.get_transcript_languages(),
        ),
        scrape_with_firecrawl=create_firecrawl_scraper(
            http_client,
            settings.firecrawl_api_key,
            settings.firecrawl_base_url,
        ),
        user_agent=settings.user_agent,
        max_response_bytes=settings.link_max_response_bytes,
    )


def build_resolver_config(settings: Settings) -> ResolverConfig:
    """Pipeline tuning from settings; the blocked-page phrases keep their defaults."""
    return ResolverConfig(
        max_characters=settings.link_max_characters,
        timeout_ms=settings.link_fetch_timeout_ms,
        min_html_content_characters=settings.link_min_html_content_characters,
    )
