"""YouTube caption fetching via youtube-transcript-api."""

from __future__ import annotations

import asyncio
import logging
from typing import Sequence

from youtube_transcript_api import NoTranscriptFound, YouTubeTranscriptApi

logger = logging.getLogger(__name__)


def _fetch_transcript_text(video_id: str, languages: Sequence[str]) -> str | None:
    api = YouTubeTranscriptApi()
    transcript_list = api.list(video_id)
    try:
        transcript = transcript_list.find_transcript(list(languages))
    except NoTranscriptFound:
        # Any language beats no transcript at all
        transcript = next(iter(transcript_list), None)
    if transcript is None:
        return None

    fetched = transcript.fetch()
    parts = [snippet.text.strip() for snippet in fetched if snippet.text and snippet.text.strip()]
    logger.debug(
        "Fetched %d caption segments for %s (%s)",
        len(parts),
        video_id,
        transcript.language_code,
    )
    return " ".join(parts) or None


async def fetch_web_transcript(
    video_id: str,
    *,
    languages: Sequence[str] = ("en",),
    timeout_ms: int,
) -> str | None:
    """Fetch captions for a video, preferring the given languages.

    The library is synchronous, so it runs in a worker thread bounded by
    timeout_ms.

    Raises:
        asyncio.TimeoutError: If the fetch exceeds timeout_ms
        youtube_transcript_api errors: If captions are disabled or unavailable
    """
    return await asyncio.wait_for(
        asyncio.to_thread(_fetch_transcript_text, video_id, languages),
        timeout=timeout_ms / 1000,
    )
