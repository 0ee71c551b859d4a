"""YouTube URL recognition and watch-page helpers."""

from __future__ import annotations

import json
import logging
import re
from urllib.parse import parse_qs, urlparse

logger = logging.getLogger(__name__)

YOUTUBE_HOSTS = frozenset(
    {
        "youtube.com",
        "www.youtube.com",
        "m.youtube.com",
        "music.youtube.com",
        "youtube-nocookie.com",
        "www.youtube-nocookie.com",
        "youtu.be",
    }
)

_VIDEO_ID = re.compile(r"^[A-Za-z0-9_-]{6,}$")
_PATH_PREFIXES = ("/shorts/", "/embed/", "/live/", "/v/")
_PLAYER_RESPONSE_MARKER = re.compile(r"ytInitialPlayerResponse\s*=\s*")
_SHORT_DESCRIPTION = re.compile(r'"shortDescription"\s*:\s*("(?:[^"\\]|\\.)*")')


def _hostname(url: str) -> str:
    try:
        return (urlparse(url).hostname or "").lower()
    except ValueError:
        return ""


def is_youtube_url(url: str) -> bool:
    """Return True for any recognized YouTube host."""
    return _hostname(url) in YOUTUBE_HOSTS


def extract_youtube_video_id(url: str) -> str | None:
    """Extract the video id from watch, short-link, shorts, embed and live URLs."""
    host = _hostname(url)
    if host not in YOUTUBE_HOSTS:
        return None

    parsed = urlparse(url)
    candidate: str | None = None
    if host == "youtu.be":
        candidate = parsed.path.lstrip("/").split("/")[0]
    elif parsed.path == "/watch":
        candidate = (parse_qs(parsed.query).get("v") or [None])[0]
    else:
        for prefix in _PATH_PREFIXES:
            if parsed.path.startswith(prefix):
                candidate = parsed.path[len(prefix) :].split("/")[0]
                break

    if candidate and _VIDEO_ID.match(candidate):
        return candidate
    return None


def extract_youtube_short_description(html: str) -> str | None:
    """Pull the video description from a YouTube watch page.

    Reads ``videoDetails.shortDescription`` from the embedded
    ``ytInitialPlayerResponse`` JSON, falling back to a direct field match
    when the object cannot be decoded.
    """
    if not html:
        return None

    match = _PLAYER_RESPONSE_MARKER.search(html)
    if match:
        try:
            player_response, _ = json.JSONDecoder().raw_decode(html, match.end())
        except ValueError:
            player_response = None
        if isinstance(player_response, dict):
            details = player_response.get("videoDetails") or {}
            description = details.get("shortDescription")
            if isinstance(description, str) and description.strip():
                return description.strip()

    field_match = _SHORT_DESCRIPTION.search(html)
    if field_match:
        try:
            description = json.loads(field_match.group(1))
        except ValueError:
            logger.debug("Could not decode shortDescription literal")
            return None
        if description.strip():
            return description.strip()

    return None
