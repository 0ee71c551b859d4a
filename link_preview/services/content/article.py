"""Readable article text extraction using trafilatura with newspaper4k fallback."""

from __future__ import annotations

import logging

import trafilatura
from bs4 import BeautifulSoup
from newspaper import Article

logger = logging.getLogger(__name__)

# trafilatura output shorter than this is retried with newspaper4k
MIN_PRIMARY_CONTENT_LENGTH = 100

_NON_CONTENT_TAGS = ("script", "style", "noscript", "template", "svg", "head")


class ArticleExtractor:
    """Extract the primary readable text from an HTML document.

    Tries trafilatura first, then newspaper4k when trafilatura fails or
    returns too little, and finally the visible body text. Never raises;
    returns an empty string when nothing could be extracted.
    """

    def __init__(self, min_content_length: int = MIN_PRIMARY_CONTENT_LENGTH) -> None:
        self.min_content_length = min_content_length

    def extract(self, html: str, url: str | None = None) -> str:
        if not html or not html.strip():
            return ""

        content = self._try_trafilatura(html, url)

        if not content or len(content) < self.min_content_length:
            fallback = self._try_newspaper4k(html, url) if url else None
            if fallback and len(fallback) > len(content or ""):
                content = fallback

        if not content:
            content = self._body_text(html)

        return content or ""

    def _try_trafilatura(self, html: str, url: str | None) -> str | None:
        """Extract using trafilatura with plain-text output."""
        try:
            return trafilatura.extract(
                html,
                url=url,
                output_format="txt",
                include_links=False,
                include_images=False,
                include_tables=True,
                include_comments=False,
            )
        except Exception as e:
            logger.warning("trafilatura extraction failed: %s", e)
            return None

    def _try_newspaper4k(self, html: str, url: str) -> str | None:
        """Extract using newspaper4k as fallback."""
        try:
            article = Article(url)
            article.set_html(html)
            article.parse()
            return article.text
        except Exception as e:
            logger.warning("newspaper4k extraction failed: %s", e)
            return None

    def _body_text(self, html: str) -> str:
        try:
            soup = BeautifulSoup(html, "lxml")
        except Exception as e:
            logger.warning("HTML parsing failed: %s", e)
            return ""
        for tag in soup(_NON_CONTENT_TAGS):
            tag.decompose()
        root = soup.body or soup
        return root.get_text("\n", strip=True)
