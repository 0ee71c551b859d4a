"""Tests for the Apify transcript backend."""

from __future__ import annotations

import json

import httpx
import pytest

from link_preview.services.content.exceptions import TranscriptError
from link_preview.services.content.transcript.apify import (
    fetch_apify_transcript,
    transcript_from_items,
)


class TestTranscriptFromItems:
    def test_segment_list(self) -> None:
        items = [{"data": [{"text": "hello "}, {"text": "world"}, {"start": 3}]}]
        assert transcript_from_items(items) == "hello world"

    def test_plain_transcript_string(self) -> None:
        assert transcript_from_items([{"transcript": "all of it"}]) == "all of it"

    def test_unusable_shapes(self) -> None:
        assert transcript_from_items({"data": []}) is None
        assert transcript_from_items([{"data": []}, "junk"]) is None


class TestFetchApifyTranscript:
    @pytest.mark.asyncio
    async def test_runs_actor_with_token(self) -> None:
        captured: dict = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["url"] = request.url
            captured["body"] = json.loads(request.content)
            return httpx.Response(200, json=[{"data": [{"text": "spoken"}]}])

        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        text = await fetch_apify_transcript(
            client,
            "https://youtu.be/dQw4w9WgXcQ",
            token="secret",
            actor="someone~actor",
            timeout_ms=1000,
        )

        assert text == "spoken"
        assert captured["url"].path == "/v2/acts/someone~actor/run-sync-get-dataset-items"
        assert captured["url"].params["token"] == "secret"
        assert captured["body"] == {"videoUrl": "https://youtu.be/dQw4w9WgXcQ"}

    @pytest.mark.asyncio
    async def test_http_error_raises_transcript_error(self) -> None:
        client = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(401)))

        with pytest.raises(TranscriptError) as exc_info:
            await fetch_apify_transcript(
                client, "https://youtu.be/dQw4w9WgXcQ", token="bad", timeout_ms=1000
            )

        assert "HTTP 401" in str(exc_info.value)
