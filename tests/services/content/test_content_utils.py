"""Tests for option defaults, metadata selection and finalization helpers."""

from __future__ import annotations

import math

import pytest

from link_preview.services.content.types import (
    DEFAULT_MAX_CONTENT_CHARACTERS,
    DEFAULT_TIMEOUT_MS,
    FetchLinkContentOptions,
    FirecrawlDiagnostics,
    LinkContentDiagnostics,
    TranscriptDiagnostics,
    TranscriptResolution,
    append_note,
)
from link_preview.services.content.utils import (
    ensure_transcript_diagnostics,
    finalize_extracted_link_content,
    pick_first_text,
    resolve_max_characters,
    resolve_timeout_ms,
    safe_hostname,
    select_base_content,
)


class TestOptionDefaults:
    def test_defaults_without_options(self) -> None:
        assert resolve_max_characters(None) == DEFAULT_MAX_CONTENT_CHARACTERS
        assert resolve_timeout_ms(None) == DEFAULT_TIMEOUT_MS

    def test_positive_values_are_floored(self) -> None:
        options = FetchLinkContentOptions(max_characters=1500.9, timeout_ms=2500)
        assert resolve_max_characters(options) == 1500
        assert resolve_timeout_ms(options) == 2500

    @pytest.mark.parametrize("bad", [0, -5, math.inf, math.nan, 0.4])
    def test_invalid_values_fall_back(self, bad: float) -> None:
        options = FetchLinkContentOptions(max_characters=bad, timeout_ms=bad)
        assert resolve_max_characters(options) == DEFAULT_MAX_CONTENT_CHARACTERS
        assert resolve_timeout_ms(options, default=1234) == 1234


class TestNotesAndDiagnostics:
    def test_append_note_accumulates(self) -> None:
        assert append_note(None, "first") == "first"
        assert append_note("first", "second") == "first; second"

    def test_firecrawl_diagnostics_are_copied_not_mutated(self) -> None:
        original = FirecrawlDiagnostics(attempted=True)
        noted = original.with_note("one").with_note("two")
        used = noted.mark_used()

        assert original.notes is None
        assert noted.notes == "one; two"
        assert noted.used is False
        assert used.used is True
        assert used.notes == "one; two"

    def test_ensure_transcript_diagnostics_keeps_existing(self) -> None:
        diagnostics = TranscriptDiagnostics(provider="web", text_provided=True)
        resolution = TranscriptResolution(text="x", source="web", diagnostics=diagnostics)
        assert ensure_transcript_diagnostics(resolution) is diagnostics

    def test_ensure_transcript_diagnostics_defaults(self) -> None:
        resolution = TranscriptResolution(text="words", source="apify", diagnostics=None)
        diagnostics = ensure_transcript_diagnostics(resolution)
        assert diagnostics.provider == "apify"
        assert diagnostics.text_provided is True
        assert diagnostics.attempted_providers == ()


class TestSelection:
    def test_pick_first_text_skips_blank_and_non_strings(self) -> None:
        assert pick_first_text([None, "  ", 42, " Title ", "Other"]) == "Title"
        assert pick_first_text([None, ""]) is None

    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("https://www.example.com/a", "example.com"),
            ("https://blog.example.com", "blog.example.com"),
            ("not a url", None),
        ],
    )
    def test_safe_hostname(self, url: str, expected: str | None) -> None:
        assert safe_hostname(url) == expected

    def test_transcript_overrides_candidate(self) -> None:
        assert select_base_content("article", "  transcript  ") == "transcript"

    def test_blank_transcript_keeps_candidate(self) -> None:
        assert select_base_content("article", "   ") == "article"
        assert select_base_content("article", None) == "article"


class TestFinalize:
    def _finalize(self, base_content: str, max_characters: int, transcript: str | None = None):
        resolution = TranscriptResolution(text=transcript, source="web" if transcript else None)
        return finalize_extracted_link_content(
            url="https://example.com",
            base_content=base_content,
            max_characters=max_characters,
            title="Title",
            description=None,
            site_name="example.com",
            transcript_resolution=resolution,
            diagnostics=LinkContentDiagnostics(
                strategy="html",
                firecrawl=FirecrawlDiagnostics(),
                transcript=ensure_transcript_diagnostics(resolution),
            ),
        )

    def test_within_budget(self) -> None:
        result = self._finalize("one two three", 100)
        assert result.content == "one two three"
        assert result.truncated is False
        assert result.word_count == 3
        assert result.total_characters == 13
        assert result.transcript_characters is None
        assert result.transcript_source is None

    def test_over_budget(self) -> None:
        result = self._finalize("word " * 100, 20)
        assert len(result.content) <= 20
        assert result.truncated is True

    def test_transcript_stats(self) -> None:
        result = self._finalize("spoken", 100, transcript="spoken")
        assert result.transcript_characters == 6
        assert result.transcript_source == "web"
