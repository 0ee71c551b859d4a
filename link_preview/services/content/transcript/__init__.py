"""Transcript resolution for video links.

The resolver picks transcript backends according to the transcript mode:

- ``web``: captions fetched directly from YouTube (youtube-transcript-api)
- ``apify``: an Apify actor run (requires an API token)
- ``auto``: ``web`` first, then ``apify`` when a token is configured

Backend failures never propagate; they are recorded as diagnostic notes.
"""

from __future__ import annotations

import asyncio
import logging
import re
from typing import Sequence

import httpx

from link_preview.services.content.cleaner import normalize_for_prompt
from link_preview.services.content.transcript.apify import (
    DEFAULT_APIFY_ACTOR,
    fetch_apify_transcript,
)
from link_preview.services.content.transcript.web import fetch_web_transcript
from link_preview.services.content.types import (
    DEFAULT_TIMEOUT_MS,
    TranscriptDiagnostics,
    TranscriptResolution,
    YoutubeTranscriptMode,
    append_note,
)
from link_preview.services.content.youtube import extract_youtube_video_id, is_youtube_url

logger = logging.getLogger(__name__)

_PROVIDERS_BY_MODE: dict[str, tuple[str, ...]] = {
    "auto": ("web", "apify"),
    "web": ("web",),
    "apify": ("apify",),
}
_HTML_VIDEO_ID = re.compile(r'"videoId"\s*:\s*"([A-Za-z0-9_-]{11})"')


class TranscriptResolver:
    """Resolve a transcript for a link, honoring the transcript mode."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        *,
        apify_api_token: str | None = None,
        apify_actor: str = DEFAULT_APIFY_ACTOR,
        languages: Sequence[str] = ("en",),
    ) -> None:
        self._http_client = http_client
        self._apify_api_token = apify_api_token
        self._apify_actor = apify_actor
        self._languages = tuple(languages) or ("en",)

    async def resolve(
        self,
        url: str,
        html: str | None,
        *,
        mode: YoutubeTranscriptMode = "auto",
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
    ) -> TranscriptResolution:
        if not is_youtube_url(url):
            return TranscriptResolution(text=None, source=None, diagnostics=TranscriptDiagnostics())

        video_id = extract_youtube_video_id(url)
        if video_id is None and html:
            match = _HTML_VIDEO_ID.search(html)
            video_id = match.group(1) if match else None
        if video_id is None:
            return TranscriptResolution(
                text=None,
                source=None,
                diagnostics=TranscriptDiagnostics(notes="Unable to determine YouTube video id"),
            )

        notes: str | None = None
        attempted: list[str] = []
        for provider in _PROVIDERS_BY_MODE.get(mode, _PROVIDERS_BY_MODE["auto"]):
            if provider == "apify" and not self._apify_api_token:
                notes = append_note(notes, "Apify token not configured")
                continue

            attempted.append(provider)
            try:
                text = await self._fetch(provider, url, video_id, timeout_ms)
            except asyncio.TimeoutError:
                logger.warning("%s transcript timed out for %s", provider, url)
                notes = append_note(notes, f"{provider} transcript timed out after {timeout_ms}ms")
                continue
            except Exception as e:
                logger.warning("%s transcript failed for %s: %s", provider, url, e)
                notes = append_note(notes, f"{provider} transcript failed: {e}")
                continue

            if text and normalize_for_prompt(text):
                logger.info("Resolved transcript for %s via %s", url, provider)
                return TranscriptResolution(
                    text=text,
                    source=provider,
                    diagnostics=TranscriptDiagnostics(
                        provider=provider,
                        attempted_providers=tuple(attempted),
                        text_provided=True,
                        notes=notes,
                    ),
                )
            notes = append_note(notes, f"{provider} transcript was empty")

        return TranscriptResolution(
            text=None,
            source=None,
            diagnostics=TranscriptDiagnostics(
                provider=None,
                attempted_providers=tuple(attempted),
                text_provided=False,
                notes=notes,
            ),
        )

    async def _fetch(self, provider: str, url: str, video_id: str, timeout_ms: int) -> str | None:
        if provider == "web":
            return await fetch_web_transcript(
                video_id, languages=self._languages, timeout_ms=timeout_ms
            )
        return await asyncio.wait_for(
            fetch_apify_transcript(
                self._http_client,
                url,
                token=self._apify_api_token or "",
                actor=self._apify_actor,
                timeout_ms=timeout_ms,
            ),
            timeout=timeout_ms / 1000,
        )


__all__ = ["TranscriptResolver"]
