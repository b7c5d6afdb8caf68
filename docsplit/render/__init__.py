"""Navigation linking and output document emission."""

from .emitter import DocumentEmitter, EmitReport, RenderedDocument, WriteFailure
from .links import NO_LINK, Navigation, build_navigation, link_to

__all__ = [
    "DocumentEmitter",
    "EmitReport",
    "NO_LINK",
    "Navigation",
    "RenderedDocument",
    "WriteFailure",
    "build_navigation",
    "link_to",
]
