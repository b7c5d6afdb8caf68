"""Cleanup of raw converter output before segmentation."""

from __future__ import annotations

from typing import Iterable, List

_QUOTE_TABLE = str.maketrans(
    {
        "‘": "'",  # left single quotation mark
        "’": "'",  # right single quotation mark
        "‚": "'",  # single low-9 quotation mark
        "‛": "'",  # single high-reversed-9 quotation mark
        "′": "'",  # prime
        "“": '"',  # left double quotation mark
        "”": '"',  # right double quotation mark
        "„": '"',  # double low-9 quotation mark
        "‟": '"',  # double high-reversed-9 quotation mark
        "″": '"',  # double prime
    }
)

ESCAPED_APOSTROPHE = "\\'"


def unescape_apostrophes(text: str) -> str:
    """Collapse ``\\'`` to ``'`` until no escaped apostrophe remains."""
    while ESCAPED_APOSTROPHE in text:
        text = text.replace(ESCAPED_APOSTROPHE, "'")
    return text


def normalize_line(line: str) -> str:
    """Replace typographic quotes with ASCII and drop escaped apostrophes."""
    return unescape_apostrophes(line.translate(_QUOTE_TABLE))


def normalize_lines(lines: Iterable[str]) -> List[str]:
    """Normalize every line, preserving count and order."""
    return [normalize_line(line) for line in lines]


__all__ = ["ESCAPED_APOSTROPHE", "normalize_line", "normalize_lines", "unescape_apostrophes"]
