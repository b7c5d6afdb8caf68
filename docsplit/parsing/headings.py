"""Markdown heading markers for the three structural levels."""

from __future__ import annotations

import re

BOOK_MARKER = "# "
CHAPTER_MARKER = "## "
PART_MARKER = "### "

_MARKER_PATTERN = re.compile(r"^#+[ \t]*")
_ATTRIBUTES_PATTERN = re.compile(r"\s*\{[^{}]*\}\s*$")


def heading_level(line: str) -> int:
    """Return 3, 2 or 1 for part, chapter and book headings, else 0."""
    if line.startswith(PART_MARKER):
        return 3
    if line.startswith(CHAPTER_MARKER):
        return 2
    if line.startswith(BOOK_MARKER):
        return 1
    return 0


def strip_marker(heading: str) -> str:
    """Return heading text without its ``#`` prefix or trailing attribute block."""
    text = _MARKER_PATTERN.sub("", heading.strip(), count=1)
    text = _ATTRIBUTES_PATTERN.sub("", text)
    return text.strip()


__all__ = ["BOOK_MARKER", "CHAPTER_MARKER", "PART_MARKER", "heading_level", "strip_marker"]
