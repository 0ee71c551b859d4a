"""Value types shared by the link content pipeline.

Every value here is created fresh for a single resolution and never mutated
afterwards; steps that need to record more information return a new copy.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Generic, Literal, TypeVar, Union

DEFAULT_MAX_CONTENT_CHARACTERS = 8000
DEFAULT_TIMEOUT_MS = 5000

YoutubeTranscriptMode = Literal["auto", "web", "apify"]
Strategy = Literal["firecrawl", "html"]

T = TypeVar("T")


def append_note(existing: str | None, note: str) -> str:
    """Append a note to a semicolon-separated note string."""
    if not existing:
        return note
    return f"{existing}; {note}"


@dataclass(frozen=True)
class FetchLinkContentOptions:
    """Caller options for a single link resolution."""

    max_characters: int | None = None
    timeout_ms: int | None = None
    youtube_transcript: YoutubeTranscriptMode = "auto"


@dataclass(frozen=True)
class FirecrawlDiagnostics:
    """What happened with the scraping-service fallback."""

    attempted: bool = False
    used: bool = False
    notes: str | None = None

    def with_note(self, note: str) -> FirecrawlDiagnostics:
        return replace(self, notes=append_note(self.notes, note))

    def mark_used(self) -> FirecrawlDiagnostics:
        return replace(self, used=True)


@dataclass(frozen=True)
class TranscriptDiagnostics:
    """How transcript resolution went for a link."""

    provider: str | None = None
    attempted_providers: tuple[str, ...] = ()
    text_provided: bool = False
    notes: str | None = None


@dataclass(frozen=True)
class TranscriptResolution:
    text: str | None = None
    source: str | None = None
    diagnostics: TranscriptDiagnostics | None = None


@dataclass(frozen=True)
class FirecrawlScrapeResult:
    markdown: str | None = None
    html: str | None = None
    metadata: dict[str, Any] | None = None


@dataclass(frozen=True)
class FirecrawlAttempt:
    payload: FirecrawlScrapeResult | None
    diagnostics: FirecrawlDiagnostics


@dataclass(frozen=True)
class LinkMetadata:
    title: str | None = None
    description: str | None = None
    site_name: str | None = None


@dataclass(frozen=True)
class LinkContentDiagnostics:
    strategy: Strategy
    firecrawl: FirecrawlDiagnostics
    transcript: TranscriptDiagnostics


@dataclass(frozen=True)
class ExtractedLinkContent:
    """Final, bounded content for a link plus how it was obtained."""

    url: str
    title: str | None
    description: str | None
    site_name: str | None
    content: str
    truncated: bool
    total_characters: int
    word_count: int
    transcript_characters: int | None
    transcript_source: str | None
    diagnostics: LinkContentDiagnostics


# -----------------------------------------------------------------------------
# Fetch outcomes
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class Failed:
    error: Exception


@dataclass(frozen=True)
class Succeeded(Generic[T]):
    value: T


# The direct fetch is always attempted, so an outcome is one of these two
FetchOutcome = Union[Failed, Succeeded[T]]


@dataclass(frozen=True)
class ResolverConfig:
    """Tuning knobs for the blocked/thin HTML heuristic and defaults."""

    max_characters: int = DEFAULT_MAX_CONTENT_CHARACTERS
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    min_html_content_characters: int = 200
    blocked_html_hints: tuple[str, ...] = field(
        default=(
            "access denied",
            "attention required",
            "captcha",
            "cloudflare",
            "enable javascript",
            "forbidden",
            "please turn javascript on",
            "verify you are human",
        )
    )
