"""Link content extraction for downstream summarization.

The LinkContentPipeline fetches a page directly and falls back to the
Firecrawl scraping service when the page is unreachable, blocked or thin:
1. Direct HTML fetch (httpx) + article extraction (trafilatura / newspaper4k)
2. Firecrawl scrape to markdown (when an API key is configured)
3. YouTube transcripts (youtube-transcript-api / Apify) override page text

Usage:
    from link_preview.services.content import LinkContentPipeline, build_link_preview_deps

    async with httpx.AsyncClient() as client:
        pipeline = LinkContentPipeline(build_link_preview_deps(client, settings))
        result = await pipeline.fetch_link_content("https://example.com")
        print(result.content)
"""

from link_preview.services.content.deps import (
    LinkPreviewDeps,
    build_link_preview_deps,
    build_resolver_config,
)
from link_preview.services.content.exceptions import (
    ContentTooLargeError,
    ContentTypeError,
    ExtractionError,
    FirecrawlError,
    NetworkError,
    NoUsableContentError,
    RateLimitError,
    TranscriptError,
)
from link_preview.services.content.pipeline import LinkContentPipeline, fetch_link_content
from link_preview.services.content.types import (
    DEFAULT_MAX_CONTENT_CHARACTERS,
    DEFAULT_TIMEOUT_MS,
    ExtractedLinkContent,
    FetchLinkContentOptions,
    FirecrawlDiagnostics,
    LinkContentDiagnostics,
    ResolverConfig,
    TranscriptDiagnostics,
    TranscriptResolution,
)

__all__ = [
    # Pipeline
    "LinkContentPipeline",
    "fetch_link_content",
    "LinkPreviewDeps",
    "build_link_preview_deps",
    "build_resolver_config",
    # Types
    "DEFAULT_MAX_CONTENT_CHARACTERS",
    "DEFAULT_TIMEOUT_MS",
    "ExtractedLinkContent",
    "FetchLinkContentOptions",
    "FirecrawlDiagnostics",
    "LinkContentDiagnostics",
    "ResolverConfig",
    "TranscriptDiagnostics",
    "TranscriptResolution",
    # Exceptions
    "ExtractionError",
    "NetworkError",
    "ContentTypeError",
    "ContentTooLargeError",
    "RateLimitError",
    "FirecrawlError",
    "TranscriptError",
    "NoUsableContentError",
]
