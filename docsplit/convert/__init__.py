"""Source document converters."""

from .base import ConversionError, Converter
from .pandoc import PandocConverter

__all__ = ["ConversionError", "Converter", "PandocConverter"]
