"""Exception hierarchy for link content extraction."""

from __future__ import annotations


class ExtractionError(Exception):
    """Base exception for all extraction errors."""

    pass


class NetworkError(ExtractionError):
    """Raised for network-related failures (timeout, connection, DNS, HTTP status)."""

    pass


class ContentTypeError(ExtractionError):
    """Raised when the fetched document is not HTML."""

    pass


class ContentTooLargeError(ExtractionError):
    """Raised when the fetched document exceeds the size limit."""

    pass


class RateLimitError(ExtractionError):
    """Raised when HTTP 429 is received."""

    pass


class FirecrawlError(ExtractionError):
    """Raised when the Firecrawl scrape request fails."""

    pass


class TranscriptError(ExtractionError):
    """Raised by a transcript backend; always recovered as a diagnostic note."""

    pass


class NoUsableContentError(ExtractionError):
    """Raised when neither the HTML fetch nor Firecrawl produced content.

    Attributes:
        url: The link that was being resolved.
        notes: Accumulated Firecrawl diagnostic notes, if any.
        cause: The original HTML fetch error, if any.
    """

    def __init__(
        self,
        message: str,
        url: str,
        notes: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.notes = notes
        self.cause = cause
