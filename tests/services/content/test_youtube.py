"""Tests for YouTube URL helpers."""

from __future__ import annotations

import pytest

from link_preview.services.content.youtube import (
    extract_youtube_short_description,
    extract_youtube_video_id,
    is_youtube_url,
)


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("https://www.youtube.com/watch?v=dQw4w9WgXcQ", True),
        ("https://youtu.be/dQw4w9WgXcQ", True),
        ("https://m.youtube.com/shorts/abcdefghijk", True),
        ("https://music.youtube.com/watch?v=dQw4w9WgXcQ", True),
        ("https://vimeo.com/123456", False),
        ("https://notyoutube.com/watch?v=dQw4w9WgXcQ", False),
        ("not a url", False),
    ],
)
def test_is_youtube_url(url: str, expected: bool) -> None:
    assert is_youtube_url(url) is expected


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("https://www.youtube.com/watch?v=dQw4w9WgXcQ&t=10", "dQw4w9WgXcQ"),
        ("https://youtu.be/dQw4w9WgXcQ?si=abc", "dQw4w9WgXcQ"),
        ("https://www.youtube.com/shorts/abcdefghijk", "abcdefghijk"),
        ("https://www.youtube.com/embed/dQw4w9WgXcQ", "dQw4w9WgXcQ"),
        ("https://www.youtube.com/live/dQw4w9WgXcQ", "dQw4w9WgXcQ"),
        ("https://www.youtube.com/@channel", None),
        ("https://example.com/watch?v=dQw4w9WgXcQ", None),
    ],
)
def test_extract_youtube_video_id(url: str, expected: str | None) -> None:
    assert extract_youtube_video_id(url) == expected


class TestShortDescription:
    def test_reads_player_response(self) -> None:
        html = (
            "<script>var ytInitialPlayerResponse = "
            '{"videoDetails": {"shortDescription": "Line one\\nLine two {braces}"}};'
            "var other = 1;</script>"
        )
        assert extract_youtube_short_description(html) == "Line one\nLine two {braces}"

    def test_field_fallback_when_object_is_truncated(self) -> None:
        html = 'ytInitialPlayerResponse = {"videoDetails": {"shortDescription": "Just this"'
        assert extract_youtube_short_description(html) == "Just this"

    def test_missing_description(self) -> None:
        assert extract_youtube_short_description("<html><body>nothing</body></html>") is None
        assert extract_youtube_short_description("") is None
