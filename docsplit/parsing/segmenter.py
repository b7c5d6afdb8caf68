"""Grouping of body lines into part records."""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import reduce
from typing import List, Optional, Sequence, Tuple

from ..logging import get_logger
from ..models import Part
from .headings import heading_level

_LOGGER = get_logger("segmenter")


class StructureError(ValueError):
    """Raised when a document has no part headings to split on."""


@dataclass
class _OpenPart:
    book_heading: str
    chapter_heading: str
    lines: List[str]

    def close(self) -> Part:
        return Part(
            book_heading=self.book_heading,
            chapter_heading=self.chapter_heading,
            content_lines=tuple(self.lines),
        )


@dataclass
class SegmenterState:
    """Heading trackers and output carried through one pass over the body."""

    current_book: str = ""
    current_chapter: str = ""
    active: Optional[_OpenPart] = None
    parts: List[Part] = field(default_factory=list)
    discarded: int = 0

    def feed(self, line: str) -> "SegmenterState":
        level = heading_level(line)
        if level == 3:
            self._close_active()
            # Book and chapter are captured as they stand when the part opens.
            self.active = _OpenPart(self.current_book, self.current_chapter, [line])
        elif level == 2:
            self.current_chapter = line
        elif level == 1:
            self.current_book = line
            self.current_chapter = ""
        elif self.active is not None:
            self.active.lines.append(line)
        else:
            self.discarded += 1
        return self

    def finish(self) -> Tuple[Part, ...]:
        self._close_active()
        return tuple(self.parts)

    def _close_active(self) -> None:
        if self.active is not None:
            self.parts.append(self.active.close())
            self.active = None


def segment_lines(lines: Sequence[str]) -> Tuple[Part, ...]:
    """Split body lines into parts at each ``###`` heading.

    Lines that appear before the first part heading belong to no part and
    are dropped. Raises :class:`StructureError` when no part heading exists.
    """
    state = reduce(lambda acc, line: acc.feed(line), lines, SegmenterState())
    parts = state.finish()
    if state.discarded:
        _LOGGER.debug("Dropped %d line(s) that precede the first part heading", state.discarded)
    if not parts:
        raise StructureError("no level-3 headings found; nothing to split")
    return parts


__all__ = ["SegmenterState", "StructureError", "segment_lines"]
