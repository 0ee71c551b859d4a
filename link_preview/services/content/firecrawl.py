"""Client for the Firecrawl managed scraping API."""

from __future__ import annotations

import logging

import httpx

from link_preview.services.content.exceptions import FirecrawlError
from link_preview.services.content.types import FirecrawlScrapeResult

logger = logging.getLogger(__name__)

DEFAULT_FIRECRAWL_BASE_URL = "https://api.firecrawl.dev"


class FirecrawlClient:
    """Scrape a URL to markdown (plus raw HTML and metadata) via Firecrawl.

    Usage:
        client = FirecrawlClient(http_client, api_key="fc-...")
        result = await client.scrape("https://example.com", timeout_ms=5000)
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        api_key: str,
        base_url: str = DEFAULT_FIRECRAWL_BASE_URL,
    ) -> None:
        self._http_client = http_client
        self._api_key = api_key
        self._endpoint = f"{base_url.rstrip('/')}/v1/scrape"

    async def scrape(self, url: str, *, timeout_ms: int) -> FirecrawlScrapeResult | None:
        """Scrape url.

        Returns:
            FirecrawlScrapeResult, or None when Firecrawl returned no data

        Raises:
            FirecrawlError: If the request fails or Firecrawl reports an error
        """
        body = {
            "url": url,
            "formats": ["markdown", "html"],
            "onlyMainContent": True,
            "timeout": timeout_ms,
        }
        try:
            response = await self._http_client.post(
                self._endpoint,
                json=body,
                headers={"Authorization": f"Bearer {self._api_key}"},
                timeout=timeout_ms / 1000,
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.TimeoutException as e:
            raise FirecrawlError(f"Timeout scraping {url}: {e}") from e
        except httpx.HTTPStatusError as e:
            raise FirecrawlError(
                f"HTTP {e.response.status_code} from Firecrawl for {url}"
            ) from e
        except httpx.RequestError as e:
            raise FirecrawlError(f"Network error scraping {url}: {e}") from e
        except ValueError as e:
            raise FirecrawlError(f"Invalid Firecrawl response for {url}: {e}") from e

        if not isinstance(payload, dict):
            raise FirecrawlError(f"Invalid Firecrawl response for {url}")
        if payload.get("success") is False:
            raise FirecrawlError(str(payload.get("error") or "Firecrawl scrape failed"))

        data = payload.get("data")
        if not isinstance(data, dict):
            return None

        markdown = data.get("markdown")
        html = data.get("html") or data.get("rawHtml")
        metadata = data.get("metadata")
        if not markdown and not html:
            return None

        logger.debug("Firecrawl returned %d chars of markdown for %s", len(markdown or ""), url)
        return FirecrawlScrapeResult(
            markdown=markdown if isinstance(markdown, str) else None,
            html=html if isinstance(html, str) else None,
            metadata=metadata if isinstance(metadata, dict) else None,
        )


def create_firecrawl_scraper(
    http_client: httpx.AsyncClient,
    api_key: str | None,
    base_url: str = DEFAULT_FIRECRAWL_BASE_URL,
):
    """Return a bound scrape function, or None when Firecrawl is not configured."""
    if not api_key or not api_key.strip():
        return None
    return FirecrawlClient(http_client, api_key.strip(), base_url).scrape
