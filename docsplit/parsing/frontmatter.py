"""Detection of a leading metadata block in converted markdown."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

OPEN_DELIMITER = "---"
CLOSE_DELIMITERS = frozenset({"---", "..."})


@dataclass(frozen=True)
class Frontmatter:
    """Raw metadata lines plus the index where body content begins."""

    lines: Tuple[str, ...]
    body_start: int


def extract_frontmatter(lines: Sequence[str]) -> Frontmatter:
    """Split an optional ``---`` block off the top of ``lines``.

    The block's inner lines are returned verbatim. When the opening delimiter
    is never closed, everything after it counts as metadata and the body is
    empty.
    """
    if not lines or lines[0] != OPEN_DELIMITER:
        return Frontmatter(lines=(), body_start=0)

    collected = []
    for index in range(1, len(lines)):
        line = lines[index]
        if line in CLOSE_DELIMITERS:
            return Frontmatter(lines=tuple(collected), body_start=index + 1)
        collected.append(line)
    return Frontmatter(lines=tuple(collected), body_start=len(lines))


__all__ = ["CLOSE_DELIMITERS", "OPEN_DELIMITER", "Frontmatter", "extract_frontmatter"]
