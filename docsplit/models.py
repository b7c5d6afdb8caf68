"""Core data models shared across docsplit components."""

from dataclasses import dataclass
from typing import Tuple

SIMPLE_LINKS = "simple"
FULL_LINKS = "full"
LINK_STYLES: Tuple[str, ...] = (SIMPLE_LINKS, FULL_LINKS)


@dataclass(frozen=True)
class Part:
    """One third-level heading section of a source document."""

    book_heading: str
    chapter_heading: str
    content_lines: Tuple[str, ...]


@dataclass(frozen=True)
class FileInfo:
    """A part after numbering and naming have been resolved."""

    file_name: str
    relative_path: str
    book_name: str
    chapter_name: str
    part_name: str
    content_lines: Tuple[str, ...]

    @property
    def stem(self) -> str:
        """File name without the markdown extension."""
        return self.file_name.rsplit(".", 1)[0]
