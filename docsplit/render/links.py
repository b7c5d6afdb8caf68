"""Previous/next navigation references between adjacent parts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from ..models import FULL_LINKS, SIMPLE_LINKS, FileInfo
from ..naming import MARKDOWN_EXTENSION

NO_LINK = ""


@dataclass(frozen=True)
class Navigation:
    """Rendered navigation references for one output document."""

    previous: str
    next: str


def link_to(info: FileInfo, style: str) -> str:
    """Return a wiki-style reference to ``info`` labelled with its part name.

    ``simple`` links target the bare file stem; ``full`` links target the
    path relative to the document's output root.
    """
    if style == SIMPLE_LINKS:
        target = info.stem
    elif style == FULL_LINKS:
        target = info.relative_path
        if target.endswith(MARKDOWN_EXTENSION):
            target = target[: -len(MARKDOWN_EXTENSION)]
    else:
        raise ValueError(f"Unknown link style: {style!r}")
    return f"[[{target}|{info.part_name}]]"


def build_navigation(infos: Sequence[FileInfo], style: str) -> List[Navigation]:
    """Return one :class:`Navigation` per entry; chain ends get :data:`NO_LINK`."""
    navigation: List[Navigation] = []
    last = len(infos) - 1
    for index in range(len(infos)):
        previous = link_to(infos[index - 1], style) if index > 0 else NO_LINK
        following = link_to(infos[index + 1], style) if index < last else NO_LINK
        navigation.append(Navigation(previous=previous, next=following))
    return navigation


__all__ = ["NO_LINK", "Navigation", "build_navigation", "link_to"]
