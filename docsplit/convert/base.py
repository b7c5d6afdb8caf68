"""Interface between the splitter and whatever turns a source file into markdown."""

from __future__ import annotations

from pathlib import Path
from typing import List, Protocol


class ConversionError(RuntimeError):
    """Raised when a source document cannot be converted to markdown text."""


class Converter(Protocol):
    """Turns a source document into markdown lines or raises ConversionError."""

    def convert(self, source: Path) -> List[str]:
        ...


__all__ = ["ConversionError", "Converter"]
