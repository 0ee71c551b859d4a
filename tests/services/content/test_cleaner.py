"""Tests for text normalization and truncation."""

from __future__ import annotations

import pytest

from link_preview.services.content.cleaner import (
    TRUNCATION_MARKER,
    normalize_for_prompt,
    truncate_to_characters,
)


class TestNormalizeForPrompt:
    def test_collapses_whitespace_and_blank_lines(self) -> None:
        text = "  Hello  world \r\n\r\n\r\n\r\nSecond\t\tline   \n"
        assert normalize_for_prompt(text) == "Hello world\n\nSecond line"

    def test_strips_control_characters(self) -> None:
        assert normalize_for_prompt("a\x00b\x07c\x1fd") == "abcd"

    def test_strips_c1_control_characters(self) -> None:
        assert normalize_for_prompt("a\x80b\x85c\x9fd") == "abcd"

    def test_composes_across_removed_control_character(self) -> None:
        assert normalize_for_prompt("cafe\x00\u0301") == "caf\u00e9"

    def test_empty_input(self) -> None:
        assert normalize_for_prompt("") == ""
        assert normalize_for_prompt(" \n\t ") == ""

    @pytest.mark.parametrize(
        "text",
        [
            "plain",
            "  spaced   out \n\n\n\n text ",
            "tabs\tand\x0bvertical\x0ctabs",
            "line one\r\nline two\rline three",
            "cafe\x00\u0301",
            "re\x85\u0301sume\u0301",
        ],
    )
    def test_idempotent(self, text: str) -> None:
        once = normalize_for_prompt(text)
        assert normalize_for_prompt(once) == once


class TestTruncateToCharacters:
    def test_short_text_unchanged(self) -> None:
        assert truncate_to_characters("hello", 10) == "hello"

    def test_cut_text_carries_marker_within_budget(self) -> None:
        truncated = truncate_to_characters("hello world", 6)
        assert len(truncated) <= 6
        assert truncated.endswith(TRUNCATION_MARKER)

    @pytest.mark.parametrize("budget", [0, 1, 2, 5, 17, 100])
    def test_never_exceeds_budget(self, budget: int) -> None:
        text = "The quick brown fox jumps over the lazy dog. " * 5
        assert len(truncate_to_characters(text, budget)) <= budget

    @pytest.mark.parametrize("budget", [1, 3, 12, 40])
    def test_idempotent(self, budget: int) -> None:
        text = "Lorem ipsum dolor sit amet, consectetur adipiscing elit."
        once = truncate_to_characters(text, budget)
        assert truncate_to_characters(once, budget) == once

    def test_zero_budget_yields_empty(self) -> None:
        assert truncate_to_characters("anything", 0) == ""
