"""Sequence numbering and filesystem naming for parts."""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import reduce
from typing import List, Optional, Sequence, Tuple

from .config import DEFAULT_PADDING, ConfigError
from .models import FileInfo, Part
from .parsing.headings import strip_marker

MARKDOWN_EXTENSION = ".md"


def slugify(heading: str) -> str:
    """Return a lowercase, hyphenated, filesystem-safe name for a heading."""
    slug = strip_marker(heading).lower()
    slug = re.sub(r"[^a-z0-9\s-]", "", slug)
    slug = re.sub(r"\s+", "-", slug)
    return slug.strip("-")


def pad(value: int, width: int) -> str:
    """Zero-pad ``value`` to ``width`` digits; wider values keep their natural width."""
    return f"{value:0{width}d}"


def _numbered(number: str, slug: str) -> str:
    return f"{number}-{slug}" if slug else number


@dataclass
class SequencerState:
    """Counters and heading trackers for one document's numbering pass."""

    width: int = DEFAULT_PADDING
    book: int = 0
    chapter: int = 0
    part: int = 0
    last_book_heading: Optional[str] = None
    last_chapter_heading: Optional[str] = None

    def advance(self, part: Part) -> None:
        if part.book_heading != self.last_book_heading:
            self.book += 1
            self.chapter = 1
            self.part = 1
            self.last_book_heading = part.book_heading
            self.last_chapter_heading = part.chapter_heading
        elif part.chapter_heading and part.chapter_heading != self.last_chapter_heading:
            self.chapter += 1
            self.part = 1
            self.last_chapter_heading = part.chapter_heading
        else:
            self.part += 1

    def book_folder(self, part: Part) -> str:
        return _numbered(pad(self.book, self.width), slugify(part.book_heading))

    def chapter_folder(self, part: Part) -> str:
        number = pad(self.chapter, self.width)
        if part.chapter_heading.strip():
            return _numbered(number, slugify(part.chapter_heading))
        return f"{number}-chapter-{pad(self.book, self.width)}"

    def file_name(self, part: Part) -> str:
        heading = part.content_lines[0] if part.content_lines else ""
        return _numbered(pad(self.part, self.width), slugify(heading)) + MARKDOWN_EXTENSION


class Sequencer:
    """Assigns hierarchical numbers and output paths to an ordered run of parts."""

    def __init__(self, width: int = DEFAULT_PADDING) -> None:
        if isinstance(width, bool) or not isinstance(width, int) or width < 1:
            raise ConfigError(f"padding must be a positive integer, got {width!r}")
        self.width = width

    def number(self, parts: Sequence[Part]) -> Tuple[FileInfo, ...]:
        """Return one :class:`FileInfo` per part, in the same order."""

        def step(acc: Tuple[SequencerState, List[FileInfo]], part: Part):
            state, infos = acc
            state.advance(part)
            infos.append(self._describe(state, part))
            return state, infos

        _, infos = reduce(step, parts, (SequencerState(width=self.width), []))
        return tuple(infos)

    @staticmethod
    def _describe(state: SequencerState, part: Part) -> FileInfo:
        file_name = state.file_name(part)
        relative_path = "/".join((state.book_folder(part), state.chapter_folder(part), file_name))
        return FileInfo(
            file_name=file_name,
            relative_path=relative_path,
            book_name=strip_marker(part.book_heading),
            chapter_name=strip_marker(part.chapter_heading),
            part_name=strip_marker(part.content_lines[0]) if part.content_lines else "",
            content_lines=part.content_lines,
        )


__all__ = ["MARKDOWN_EXTENSION", "Sequencer", "SequencerState", "pad", "slugify"]
