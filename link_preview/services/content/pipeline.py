"""Link content pipeline choosing between direct HTML and Firecrawl."""

from __future__ import annotations

import logging
import re

from link_preview.services.content.article import ArticleExtractor
from link_preview.services.content.cleaner import normalize_for_prompt
from link_preview.services.content.deps import LinkPreviewDeps
from link_preview.services.content.exceptions import (
    ExtractionError,
    NetworkError,
    NoUsableContentError,
)
from link_preview.services.content.fetcher import fetch_html_document, fetch_with_firecrawl
from link_preview.services.content.parsers import (
    extract_metadata_from_firecrawl,
    extract_metadata_from_html,
)
from link_preview.services.content.types import (
    ExtractedLinkContent,
    Failed,
    FetchLinkContentOptions,
    FetchOutcome,
    FirecrawlDiagnostics,
    FirecrawlScrapeResult,
    LinkContentDiagnostics,
    LinkMetadata,
    ResolverConfig,
    Succeeded,
    YoutubeTranscriptMode,
)
from link_preview.services.content.utils import (
    ensure_transcript_diagnostics,
    finalize_extracted_link_content,
    pick_first_text,
    resolve_max_characters,
    resolve_timeout_ms,
    safe_hostname,
    select_base_content,
)
from link_preview.services.content.youtube import (
    extract_youtube_short_description,
    is_youtube_url,
)

logger = logging.getLogger(__name__)

_LEADING_CONTROL = re.compile(r"^[\s\x00-\x1f\x7f-\x9f]+")


def strip_leading_title(content: str, title: str | None) -> str:
    """Drop a copy of the page title from the start of the content."""
    if not content or not title:
        return content
    normalized_title = title.strip()
    if not normalized_title:
        return content

    trimmed = content.lstrip()
    if not trimmed.lower().startswith(normalized_title.lower()):
        return content
    return _LEADING_CONTROL.sub("", trimmed[len(normalized_title) :])


class LinkContentPipeline:
    """Resolve readable content for a link.

    Strategy:
    1. Fetch the page HTML directly
    2. Fall back to Firecrawl when the fetch failed or the HTML looks
       blocked or thin (never for YouTube, where transcripts win)
    3. Merge in a transcript when one resolves, then bound and annotate
       the result

    Each of the direct fetch and the Firecrawl scrape runs at most once per
    call, in that order.
    """

    def __init__(self, deps: LinkPreviewDeps, config: ResolverConfig | None = None) -> None:
        self.deps = deps
        self.config = config or ResolverConfig()
        self.article_extractor = ArticleExtractor()
        hints = "|".join(re.escape(hint) for hint in self.config.blocked_html_hints if hint)
        self._blocked_hint = re.compile(hints, re.IGNORECASE) if hints else None

    async def fetch_link_content(
        self,
        url: str,
        options: FetchLinkContentOptions | None = None,
    ) -> ExtractedLinkContent:
        """Fetch and extract content for url.

        Raises:
            NetworkError: If the HTML fetch failed and no fallback applied
            NoUsableContentError: If both the HTML fetch and Firecrawl failed
        """
        max_characters = resolve_max_characters(options, self.config.max_characters)
        timeout_ms = resolve_timeout_ms(options, self.config.timeout_ms)
        mode: YoutubeTranscriptMode = options.youtube_transcript if options else "auto"

        html_outcome = await self._fetch_html(url, timeout_ms)
        html = html_outcome.value if isinstance(html_outcome, Succeeded) else None
        html_error = html_outcome.error if isinstance(html_outcome, Failed) else None

        should_try_firecrawl = (
            self.deps.scrape_with_firecrawl is not None
            and not is_youtube_url(url)
            and (html is None or self.looks_blocked_or_thin(html, url))
        )

        if not should_try_firecrawl:
            if html is None:
                raise html_error or NetworkError("Failed to fetch HTML document")
            return await self._build_from_html(
                url, html, max_characters, mode, timeout_ms, FirecrawlDiagnostics()
            )

        attempt = await fetch_with_firecrawl(
            url, self.deps.scrape_with_firecrawl, timeout_ms=timeout_ms
        )
        reason = (
            "HTML fetch failed; falling back to Firecrawl"
            if html is None
            else "HTML content looked blocked/thin; falling back to Firecrawl"
        )
        diagnostics = attempt.diagnostics.with_note(reason)
        logger.info("%s (%s)", reason, url)

        if attempt.payload is not None:
            result, diagnostics = await self._build_from_firecrawl(
                url, attempt.payload, max_characters, mode, timeout_ms, diagnostics
            )
            if result is not None:
                return result
            diagnostics = diagnostics.with_note("Firecrawl returned empty content")

        if html is not None:
            return await self._build_from_html(
                url, html, max_characters, mode, timeout_ms, diagnostics
            )

        message = "Failed to fetch HTML document"
        if diagnostics.notes:
            message += f"; Firecrawl notes: {diagnostics.notes}"
        if html_error is not None:
            message += f"; HTML error: {html_error}"
        raise NoUsableContentError(message, url=url, notes=diagnostics.notes, cause=html_error)

    def looks_blocked_or_thin(self, html: str, url: str | None = None) -> bool:
        """True when html is a bot-block page or carries too little text."""
        if self._blocked_hint is not None and self._blocked_hint.search(html):
            return True
        text = normalize_for_prompt(self.article_extractor.extract(html, url))
        return len(text) < self.config.min_html_content_characters

    async def _fetch_html(self, url: str, timeout_ms: int) -> FetchOutcome[str]:
        try:
            html = await fetch_html_document(
                self.deps.http_client,
                url,
                timeout_ms=timeout_ms,
                user_agent=self.deps.user_agent,
                max_response_bytes=self.deps.max_response_bytes,
            )
        except ExtractionError as e:
            logger.warning("HTML fetch failed for %s: %s", url, e)
            return Failed(e)
        return Succeeded(html)

    async def _build_from_firecrawl(
        self,
        url: str,
        payload: FirecrawlScrapeResult,
        max_characters: int,
        mode: YoutubeTranscriptMode,
        timeout_ms: int,
        diagnostics: FirecrawlDiagnostics,
    ) -> tuple[ExtractedLinkContent | None, FirecrawlDiagnostics]:
        """Build a result from a Firecrawl payload.

        Returns (None, diagnostics-with-note) when the payload has no usable
        text, so the caller can fall back to the HTML path.
        """
        normalized_markdown = normalize_for_prompt(payload.markdown or "")
        if not normalized_markdown:
            return None, diagnostics.with_note(
                "Firecrawl markdown normalization yielded empty text"
            )

        transcript = await self.deps.transcript_resolver.resolve(
            url, payload.html, mode=mode, timeout_ms=timeout_ms
        )
        base_content = select_base_content(normalized_markdown, transcript.text)
        if not base_content:
            return None, diagnostics.with_note(
                "Firecrawl produced content that normalized to an empty string"
            )

        html_metadata = (
            extract_metadata_from_html(payload.html, url) if payload.html else LinkMetadata()
        )
        metadata = extract_metadata_from_firecrawl(payload.metadata)
        diagnostics = diagnostics.mark_used()

        result = finalize_extracted_link_content(
            url=url,
            base_content=base_content,
            max_characters=max_characters,
            title=pick_first_text([metadata.title, html_metadata.title]),
            description=pick_first_text([metadata.description, html_metadata.description]),
            site_name=pick_first_text(
                [metadata.site_name, html_metadata.site_name, safe_hostname(url)]
            ),
            transcript_resolution=transcript,
            diagnostics=LinkContentDiagnostics(
                strategy="firecrawl",
                firecrawl=diagnostics,
                transcript=ensure_transcript_diagnostics(transcript),
            ),
        )
        return result, diagnostics

    async def _build_from_html(
        self,
        url: str,
        html: str,
        max_characters: int,
        mode: YoutubeTranscriptMode,
        timeout_ms: int,
        diagnostics: FirecrawlDiagnostics,
    ) -> ExtractedLinkContent:
        metadata = extract_metadata_from_html(html, url)
        normalized = normalize_for_prompt(self.article_extractor.extract(html, url))
        transcript = await self.deps.transcript_resolver.resolve(
            url, html, mode=mode, timeout_ms=timeout_ms
        )

        video_description = (
            extract_youtube_short_description(html) if transcript.text is None else None
        )
        candidate = normalize_for_prompt(video_description) if video_description else normalized

        base_content = select_base_content(candidate, transcript.text)
        if base_content == normalized:
            base_content = strip_leading_title(base_content, metadata.title) or base_content
        if not base_content:
            message = f"No readable content extracted from {url}"
            if diagnostics.notes:
                message += f"; Firecrawl notes: {diagnostics.notes}"
            raise NoUsableContentError(message, url=url, notes=diagnostics.notes)

        return finalize_extracted_link_content(
            url=url,
            base_content=base_content,
            max_characters=max_characters,
            title=metadata.title,
            description=metadata.description,
            site_name=metadata.site_name,
            transcript_resolution=transcript,
            diagnostics=LinkContentDiagnostics(
                strategy="html",
                firecrawl=diagnostics,
                transcript=ensure_transcript_diagnostics(transcript),
            ),
        )


async def fetch_link_content(
    url: str,
    options: FetchLinkContentOptions | None,
    deps: LinkPreviewDeps,
    config: ResolverConfig | None = None,
) -> ExtractedLinkContent:
    """Resolve content for url with a one-off pipeline."""
    return await LinkContentPipeline(deps, config).fetch_link_content(url, options)
