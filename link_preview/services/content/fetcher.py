"""Direct HTML fetching and the guarded Firecrawl attempt."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

import httpx

from link_preview.services.content.exceptions import (
    ContentTooLargeError,
    ContentTypeError,
    NetworkError,
    RateLimitError,
)
from link_preview.services.content.types import FirecrawlAttempt, FirecrawlDiagnostics

if TYPE_CHECKING:
    from link_preview.services.content.deps import ScrapeFunction

logger = logging.getLogger(__name__)

_HTML_CONTENT_TYPES = ("text/html", "application/xhtml")


def _is_html(content_type: str) -> bool:
    """An absent content type is given the benefit of the doubt."""
    if not content_type:
        return True
    ct_lower = content_type.lower()
    return any(kind in ct_lower for kind in _HTML_CONTENT_TYPES)


async def fetch_html_document(
    client: httpx.AsyncClient,
    url: str,
    *,
    timeout_ms: int,
    user_agent: str | None = None,
    max_response_bytes: int | None = None,
) -> str:
    """Fetch a URL and return its HTML.

    Args:
        client: Shared HTTP client
        url: URL to fetch
        timeout_ms: Upper bound for the whole request
        user_agent: Optional User-Agent header
        max_response_bytes: Largest accepted body; None for no limit

    Returns:
        Response body as text

    Raises:
        NetworkError: On timeout, transport failure or non-2xx status
        RateLimitError: If HTTP 429 is received
        ContentTypeError: If the response is not HTML
        ContentTooLargeError: If the body exceeds max_response_bytes
    """
    headers = {"Accept": "text/html,application/xhtml+xml;q=0.9,*/*;q=0.8"}
    if user_agent:
        headers["User-Agent"] = user_agent

    timeout_seconds = timeout_ms / 1000
    try:
        response = await asyncio.wait_for(
            client.get(
                url,
                headers=headers,
                timeout=timeout_seconds,
                follow_redirects=True,
            ),
            timeout=timeout_seconds,
        )
    except (asyncio.TimeoutError, httpx.TimeoutException) as e:
        raise NetworkError(f"Timeout fetching {url} after {timeout_ms}ms") from e
    except (httpx.RequestError, httpx.InvalidURL) as e:
        raise NetworkError(f"Network error fetching {url}: {e}") from e

    if response.status_code == 429:
        raise RateLimitError(f"Rate limited by {url}")
    if not response.is_success:
        raise NetworkError(
            f"HTTP {response.status_code} from {url}: {response.reason_phrase}"
        )

    content_type = response.headers.get("content-type", "")
    if not _is_html(content_type):
        raise ContentTypeError(f"Unsupported content type: {content_type}")

    content_length = len(response.content)
    if max_response_bytes is not None and content_length > max_response_bytes:
        raise ContentTooLargeError(
            f"Content size {content_length} exceeds maximum {max_response_bytes}"
        )

    logger.debug("Fetched %d chars of HTML from %s", len(response.text), url)
    return response.text


async def fetch_with_firecrawl(
    url: str,
    scrape: ScrapeFunction,
    *,
    timeout_ms: int,
) -> FirecrawlAttempt:
    """Attempt one Firecrawl scrape, turning every failure into a note.

    Never raises; the returned diagnostics are always marked attempted.
    """
    diagnostics = FirecrawlDiagnostics(attempted=True, used=False, notes=None)

    try:
        payload = await asyncio.wait_for(
            scrape(url, timeout_ms=timeout_ms),
            timeout=timeout_ms / 1000,
        )
    except asyncio.TimeoutError:
        logger.warning("Firecrawl timed out for %s after %dms", url, timeout_ms)
        return FirecrawlAttempt(
            payload=None,
            diagnostics=diagnostics.with_note(f"Firecrawl error: timed out after {timeout_ms}ms"),
        )
    except Exception as e:
        logger.warning("Firecrawl failed for %s: %s", url, e)
        return FirecrawlAttempt(
            payload=None,
            diagnostics=diagnostics.with_note(f"Firecrawl error: {e}"),
        )

    if payload is None:
        return FirecrawlAttempt(
            payload=None,
            diagnostics=diagnostics.with_note("Firecrawl returned no content"),
        )

    return FirecrawlAttempt(payload=payload, diagnostics=diagnostics)
