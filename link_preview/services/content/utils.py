"""Helpers for option defaults, metadata selection and result finalization."""

from __future__ import annotations

import math
from typing import Iterable
from urllib.parse import urlparse

from link_preview.services.content.cleaner import normalize_for_prompt, truncate_to_characters
from link_preview.services.content.types import (
    DEFAULT_MAX_CONTENT_CHARACTERS,
    DEFAULT_TIMEOUT_MS,
    ExtractedLinkContent,
    FetchLinkContentOptions,
    LinkContentDiagnostics,
    TranscriptDiagnostics,
    TranscriptResolution,
)


def _positive_int(value: object) -> int | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value) or value <= 0:
        return None
    floored = math.floor(value)
    return floored if floored > 0 else None


def resolve_max_characters(
    options: FetchLinkContentOptions | None,
    default: int = DEFAULT_MAX_CONTENT_CHARACTERS,
) -> int:
    """Use the caller's budget when it is a positive finite number."""
    requested = _positive_int(options.max_characters) if options else None
    return requested if requested is not None else default


def resolve_timeout_ms(
    options: FetchLinkContentOptions | None,
    default: int = DEFAULT_TIMEOUT_MS,
) -> int:
    requested = _positive_int(options.timeout_ms) if options else None
    return requested if requested is not None else default


def pick_first_text(candidates: Iterable[object]) -> str | None:
    """Return the first candidate that is a non-blank string, stripped."""
    for candidate in candidates:
        if isinstance(candidate, str):
            stripped = candidate.strip()
            if stripped:
                return stripped
    return None


def safe_hostname(url: str) -> str | None:
    """Hostname without a leading ``www.``; None for unparseable URLs."""
    try:
        hostname = urlparse(url).hostname
    except ValueError:
        return None
    if not hostname:
        return None
    return hostname[4:] if hostname.startswith("www.") else hostname


def select_base_content(candidate: str, transcript_text: str | None) -> str:
    """A non-empty transcript replaces the page content outright."""
    if transcript_text is None:
        return candidate
    normalized_transcript = normalize_for_prompt(transcript_text)
    if normalized_transcript:
        return normalized_transcript
    return candidate


def ensure_transcript_diagnostics(resolution: TranscriptResolution) -> TranscriptDiagnostics:
    if resolution.diagnostics is not None:
        return resolution.diagnostics
    return TranscriptDiagnostics(
        provider=resolution.source,
        attempted_providers=(),
        text_provided=bool(resolution.text),
        notes=None,
    )


def finalize_extracted_link_content(
    *,
    url: str,
    base_content: str,
    max_characters: int,
    title: str | None,
    description: str | None,
    site_name: str | None,
    transcript_resolution: TranscriptResolution,
    diagnostics: LinkContentDiagnostics,
) -> ExtractedLinkContent:
    """Truncate the base content to budget and assemble the final result."""
    content = truncate_to_characters(base_content, max_characters)
    transcript_text = (
        normalize_for_prompt(transcript_resolution.text) if transcript_resolution.text else ""
    )

    return ExtractedLinkContent(
        url=url,
        title=title,
        description=description,
        site_name=site_name,
        content=content,
        truncated=content != base_content,
        total_characters=len(base_content),
        word_count=len(content.split()),
        transcript_characters=len(transcript_text) if transcript_text else None,
        transcript_source=transcript_resolution.source if transcript_text else None,
        diagnostics=diagnostics,
    )
