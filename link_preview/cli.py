"""Command-line entry point: ``link-preview <url>``.

Flag grammars:
    --youtube  auto | web | apify
    --timeout  <n> (seconds) | <n>s | <n>m | <n>ms
    --length   short | medium | long | xl | xxl | <n> | <n>k
"""

from __future__ import annotations

import argparse
import asyncio
import dataclasses
import json
import logging
import re
import sys
from dataclasses import dataclass
from typing import Literal, Sequence

import httpx

from link_preview.core.config import settings
from link_preview.services.content import (
    ExtractionError,
    FetchLinkContentOptions,
    LinkContentPipeline,
    build_link_preview_deps,
    build_resolver_config,
)
from link_preview.services.content.cleaner import truncate_to_characters
from link_preview.services.content.types import YoutubeTranscriptMode
from link_preview.version import resolve_package_version

logger = logging.getLogger(__name__)

SummaryLength = Literal["short", "medium", "long", "xl", "xxl"]

SUMMARY_LENGTH_TO_CHARACTERS: dict[str, int] = {
    "short": 1200,
    "medium": 2500,
    "long": 6000,
    "xl": 14000,
    "xxl": 30000,
}

_YOUTUBE_MODES: dict[str, YoutubeTranscriptMode] = {
    "auto": "auto",
    "autp": "auto",  # common typo
    "web": "web",
    "apify": "apify",
}
_DURATION = re.compile(r"^(\d+(?:\.\d+)?)(ms|s|m)?$")
_CHARACTER_COUNT = re.compile(r"^(\d+(?:\.\d+)?)(k)?$")


class InvalidArgumentError(ValueError):
    """A command-line flag value does not match its grammar."""

    def __init__(self, flag: str, value: str, expected: str) -> None:
        super().__init__(f"Unsupported {flag}: {value!r} (expected {expected})")
        self.flag = flag
        self.value = value


@dataclass(frozen=True)
class LengthArg:
    kind: Literal["preset", "chars"]
    preset: SummaryLength | None = None
    max_characters: int | None = None

    def resolve_max_characters(self) -> int:
        if self.kind == "preset" and self.preset is not None:
            return SUMMARY_LENGTH_TO_CHARACTERS[self.preset]
        return self.max_characters or SUMMARY_LENGTH_TO_CHARACTERS["medium"]


def parse_youtube_mode(raw: str) -> YoutubeTranscriptMode:
    mode = _YOUTUBE_MODES.get(raw.strip().lower())
    if mode is None:
        raise InvalidArgumentError("--youtube", raw, "auto, web or apify")
    return mode


def parse_duration_ms(raw: str) -> int:
    """Parse a duration; bare numbers are seconds."""
    match = _DURATION.match(raw.strip().lower())
    if not match:
        raise InvalidArgumentError("--timeout", raw, "<n>, <n>s, <n>m or <n>ms")

    value = float(match.group(1))
    unit = match.group(2) or "s"
    multiplier = {"ms": 1, "s": 1000, "m": 60_000}[unit]
    duration_ms = int(round(value * multiplier))
    if duration_ms <= 0:
        raise InvalidArgumentError("--timeout", raw, "a positive duration")
    return duration_ms


def parse_length_arg(raw: str) -> LengthArg:
    normalized = raw.strip().lower()
    if normalized in SUMMARY_LENGTH_TO_CHARACTERS:
        return LengthArg(kind="preset", preset=normalized)  # type: ignore[arg-type]

    match = _CHARACTER_COUNT.match(normalized)
    if not match:
        raise InvalidArgumentError(
            "--length", raw, "short, medium, long, xl, xxl, <n> or <n>k"
        )
    count = float(match.group(1)) * (1000 if match.group(2) else 1)
    max_characters = int(count)
    if max_characters <= 0:
        raise InvalidArgumentError("--length", raw, "a positive character count")
    return LengthArg(kind="chars", max_characters=max_characters)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="link-preview",
        description="Extract readable content and metadata from a web page or video.",
    )
    parser.add_argument("url", help="Page or video URL")
    parser.add_argument("--youtube", default="auto", help="Transcript mode: auto, web, apify")
    parser.add_argument("--timeout", default=None, help="Per-request timeout, e.g. 30s, 2m, 500ms")
    parser.add_argument("--length", default=None, help="Preset or character count, e.g. medium, 20k")
    parser.add_argument("--json", action="store_true", help="Print the full result as JSON")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=resolve_package_version())
    return parser


async def _run(url: str, options: FetchLinkContentOptions, as_json: bool) -> int:
    async with httpx.AsyncClient() as client:
        pipeline = LinkContentPipeline(
            build_link_preview_deps(client, settings),
            build_resolver_config(settings),
        )
        try:
            result = await pipeline.fetch_link_content(url, options)
        except ExtractionError as e:
            logger.error("Extraction failed for %s: %s", url, e)
            print(f"Error: {e}", file=sys.stderr)
            return 1

    if as_json:
        print(json.dumps(dataclasses.asdict(result), indent=2, ensure_ascii=False))
    else:
        if result.title:
            print(result.title)
            print()
        print(result.content)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.get_log_level_int(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )

    try:
        options = FetchLinkContentOptions(
            youtube_transcript=parse_youtube_mode(args.youtube),
            timeout_ms=parse_duration_ms(args.timeout) if args.timeout else None,
            max_characters=(
                parse_length_arg(args.length).resolve_max_characters() if args.length else None
            ),
        )
    except InvalidArgumentError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    return asyncio.run(_run(args.url, options, args.json))


__all__ = [
    "InvalidArgumentError",
    "LengthArg",
    "SUMMARY_LENGTH_TO_CHARACTERS",
    "main",
    "parse_duration_ms",
    "parse_length_arg",
    "parse_youtube_mode",
    "truncate_to_characters",
]


if __name__ == "__main__":
    sys.exit(main())
