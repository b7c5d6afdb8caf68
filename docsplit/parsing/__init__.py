"""Text cleanup, frontmatter extraction and segmentation of converted documents."""

from .frontmatter import Frontmatter, extract_frontmatter
from .headings import heading_level, strip_marker
from .normalize import normalize_lines
from .segmenter import SegmenterState, StructureError, segment_lines

__all__ = [
    "Frontmatter",
    "SegmenterState",
    "StructureError",
    "extract_frontmatter",
    "heading_level",
    "normalize_lines",
    "segment_lines",
    "strip_marker",
]
