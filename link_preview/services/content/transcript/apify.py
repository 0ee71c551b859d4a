"""YouTube transcripts through an Apify actor run."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from link_preview.services.content.exceptions import TranscriptError

logger = logging.getLogger(__name__)

APIFY_API_BASE_URL = "https://api.apify.com/v2"
DEFAULT_APIFY_ACTOR = "pintostudio~youtube-transcript-scraper"


def _segment_text(segment: Any) -> str | None:
    if isinstance(segment, str):
        return segment
    if isinstance(segment, dict):
        text = segment.get("text")
        return text if isinstance(text, str) else None
    return None


def transcript_from_items(items: Any) -> str | None:
    """Flatten Apify dataset items into a single transcript string.

    Actors disagree on shape, so ``data``, ``transcript`` and ``text`` fields
    holding either a string or a list of segments are all accepted.
    """
    if not isinstance(items, list):
        return None

    parts: list[str] = []
    for item in items:
        if not isinstance(item, dict):
            continue
        for key in ("data", "transcript", "text"):
            value = item.get(key)
            segments = value if isinstance(value, list) else [value]
            found = [text.strip() for text in map(_segment_text, segments) if text and text.strip()]
            if found:
                parts.extend(found)
                break

    return " ".join(parts) or None


async def fetch_apify_transcript(
    client: httpx.AsyncClient,
    url: str,
    *,
    token: str,
    actor: str = DEFAULT_APIFY_ACTOR,
    timeout_ms: int,
) -> str | None:
    """Run the transcript actor synchronously and return its text.

    Raises:
        TranscriptError: If the actor run fails or returns malformed data
    """
    endpoint = f"{APIFY_API_BASE_URL}/acts/{actor}/run-sync-get-dataset-items"
    try:
        response = await client.post(
            endpoint,
            params={"token": token},
            json={"videoUrl": url},
            timeout=timeout_ms / 1000,
        )
        response.raise_for_status()
        items = response.json()
    except httpx.TimeoutException as e:
        raise TranscriptError(f"Apify timed out for {url}") from e
    except httpx.HTTPStatusError as e:
        raise TranscriptError(f"Apify returned HTTP {e.response.status_code}") from e
    except httpx.RequestError as e:
        raise TranscriptError(f"Apify request failed: {e}") from e
    except ValueError as e:
        raise TranscriptError(f"Apify returned invalid JSON: {e}") from e

    text = transcript_from_items(items)
    logger.debug("Apify transcript for %s: %d chars", url, len(text or ""))
    return text
