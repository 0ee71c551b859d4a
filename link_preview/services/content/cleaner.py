"""Text normalization and character-budget truncation."""

from __future__ import annotations

import re
import unicodedata

TRUNCATION_MARKER = "…"

_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")
_HORIZONTAL_SPACE = re.compile(r"[ \t\u00a0\u2000-\u200a\u202f\u205f\u3000]+")
_TRAILING_LINE_SPACE = re.compile(r" *\n *")
_EXCESS_NEWLINES = re.compile(r"\n{3,}")


def normalize_for_prompt(text: str) -> str:
    """Canonicalize whitespace and strip control characters.

    Idempotent: normalizing normalized text returns it unchanged.
    """
    if not text:
        return ""
    value = text.replace("\r\n", "\n").replace("\r", "\n")
    value = _CONTROL_CHARS.sub("", value)
    value = _HORIZONTAL_SPACE.sub(" ", value)
    value = _TRAILING_LINE_SPACE.sub("\n", value)
    value = _EXCESS_NEWLINES.sub("\n\n", value)
    # compose last: removed characters must not block composition
    return unicodedata.normalize("NFC", value).strip()


def truncate_to_characters(text: str, max_characters: int) -> str:
    """Bound text to max_characters, marking cuts with an ellipsis.

    The marker counts against the budget, so the result never exceeds it.
    Text already within budget is returned unchanged.
    """
    if max_characters <= 0:
        return ""
    if len(text) <= max_characters:
        return text
    if max_characters <= len(TRUNCATION_MARKER):
        return TRUNCATION_MARKER[:max_characters]
    head = text[: max_characters - len(TRUNCATION_MARKER)].rstrip()
    return f"{head}{TRUNCATION_MARKER}"
