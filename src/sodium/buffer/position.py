"""Plain value types shared by the buffer, view, and search layers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True, slots=True)
class Position:
    """A (column, row) location in document space.

    ``x`` counts grapheme clusters, ``y`` counts rows. ``y`` equal to the
    document's line count is the valid append row.
    """

    x: int = 0
    y: int = 0


@dataclass(frozen=True, slots=True)
class Size:
    width: int = 0
    height: int = 0


class SearchDirection(str, Enum):
    FORWARD = "forward"
    BACKWARD = "backward"
