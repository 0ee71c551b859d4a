"""Title, description and site-name extraction from HTML and Firecrawl metadata."""

from __future__ import annotations

import logging
from typing import Any, Iterable

from bs4 import BeautifulSoup

from link_preview.services.content.types import LinkMetadata
from link_preview.services.content.utils import pick_first_text, safe_hostname

logger = logging.getLogger(__name__)

# Ordered by priority
_TITLE_META = (("property", "og:title"), ("name", "twitter:title"))
_DESCRIPTION_META = (
    ("property", "og:description"),
    ("name", "description"),
    ("name", "twitter:description"),
)
_SITE_NAME_META = (("property", "og:site_name"), ("name", "application-name"))

_FIRECRAWL_TITLE_KEYS = ("title", "ogTitle", "og:title")
_FIRECRAWL_DESCRIPTION_KEYS = ("description", "ogDescription", "og:description")
_FIRECRAWL_SITE_NAME_KEYS = ("ogSiteName", "og:site_name", "siteName")


def _meta_values(soup: BeautifulSoup, keys: Iterable[tuple[str, str]]) -> list[str | None]:
    values: list[str | None] = []
    for attr, name in keys:
        tag = soup.find("meta", attrs={attr: name})
        if tag is None and attr == "property":
            # Some sites put Open Graph keys in name=
            tag = soup.find("meta", attrs={"name": name})
        values.append(tag.get("content") if tag else None)
    return values


def extract_metadata_from_html(html: str, url: str) -> LinkMetadata:
    """Extract link metadata from raw HTML.

    Never raises; unparseable documents yield only the hostname as site name.
    """
    try:
        soup = BeautifulSoup(html, "lxml")
    except Exception as e:
        logger.warning("Metadata parsing failed for %s: %s", url, e)
        return LinkMetadata(site_name=safe_hostname(url))

    title_tag = soup.find("title")
    document_title = title_tag.get_text(strip=True) if title_tag else None

    return LinkMetadata(
        title=pick_first_text([*_meta_values(soup, _TITLE_META), document_title]),
        description=pick_first_text(_meta_values(soup, _DESCRIPTION_META)),
        site_name=pick_first_text([*_meta_values(soup, _SITE_NAME_META), safe_hostname(url)]),
    )


def _firecrawl_value(metadata: dict[str, Any], keys: Iterable[str]) -> list[str | None]:
    values: list[str | None] = []
    for key in keys:
        value = metadata.get(key)
        if isinstance(value, list):
            value = next((item for item in value if isinstance(item, str)), None)
        values.append(value if isinstance(value, str) else None)
    return values


def extract_metadata_from_firecrawl(metadata: dict[str, Any] | None) -> LinkMetadata:
    """Map a Firecrawl metadata object onto LinkMetadata."""
    if not isinstance(metadata, dict):
        return LinkMetadata()
    return LinkMetadata(
        title=pick_first_text(_firecrawl_value(metadata, _FIRECRAWL_TITLE_KEYS)),
        description=pick_first_text(_firecrawl_value(metadata, _FIRECRAWL_DESCRIPTION_KEYS)),
        site_name=pick_first_text(_firecrawl_value(metadata, _FIRECRAWL_SITE_NAME_KEYS)),
    )
