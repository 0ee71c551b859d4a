"""Tests for command-line flag grammars."""

import pytest

from link_preview.cli import (
    InvalidArgumentError,
    LengthArg,
    SUMMARY_LENGTH_TO_CHARACTERS,
    main,
    parse_duration_ms,
    parse_length_arg,
    parse_youtube_mode,
    truncate_to_characters,
)


class TestYoutubeMode:
    @pytest.mark.parametrize("mode", ["auto", "web", "apify"])
    def test_known_modes_pass_through(self, mode):
        assert parse_youtube_mode(mode) == mode

    def test_typo_alias(self):
        assert parse_youtube_mode("autp") == "auto"

    def test_unknown_mode_names_flag(self):
        with pytest.raises(InvalidArgumentError) as exc_info:
            parse_youtube_mode("nope")
        assert "--youtube" in str(exc_info.value)
        assert exc_info.value.flag == "--youtube"


class TestDuration:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("30", 30000), ("30s", 30000), ("2m", 120000), ("500ms", 500), ("1.5s", 1500)],
    )
    def test_valid_durations(self, raw, expected):
        assert parse_duration_ms(raw) == expected

    @pytest.mark.parametrize("raw", ["0", "0s", "abc", "10h", "-5"])
    def test_rejected_durations(self, raw):
        with pytest.raises(InvalidArgumentError) as exc_info:
            parse_duration_ms(raw)
        assert "--timeout" in str(exc_info.value)


class TestLength:
    def test_preset(self):
        arg = parse_length_arg("medium")
        assert arg == LengthArg(kind="preset", preset="medium")
        assert arg.resolve_max_characters() == SUMMARY_LENGTH_TO_CHARACTERS["medium"]

    def test_kilo_suffix(self):
        arg = parse_length_arg("20k")
        assert arg.kind == "chars"
        assert arg.max_characters == 20000

    def test_plain_count(self):
        assert parse_length_arg("1500").max_characters == 1500

    @pytest.mark.parametrize("raw", ["nope", "0", "12q"])
    def test_rejected_lengths(self, raw):
        with pytest.raises(InvalidArgumentError) as exc_info:
            parse_length_arg(raw)
        assert "--length" in str(exc_info.value)


class TestMain:
    def test_invalid_flag_exits_with_usage_code(self, capsys):
        assert main(["https://example.com", "--timeout", "0"]) == 2
        assert "--timeout" in capsys.readouterr().err


def test_truncate_respects_budget():
    text = "word " * 100
    truncated = truncate_to_characters(text, 50)
    assert len(truncated) <= 50
    assert truncate_to_characters(truncated, 50) == truncated
