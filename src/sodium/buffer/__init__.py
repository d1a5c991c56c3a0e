"""Grapheme-aware line and document storage."""

from .document import Document
from .errors import DocumentIOError
from .files import FileSurface, LocalFiles
from .line import TAB_WIDTH, Line
from .position import Position, SearchDirection, Size

__all__ = [
    "Document",
    "DocumentIOError",
    "FileSurface",
    "LocalFiles",
    "Line",
    "Position",
    "SearchDirection",
    "Size",
    "TAB_WIDTH",
]
