"""Cursor movement arithmetic over a document."""

from __future__ import annotations

from enum import Enum

from sodium.buffer import Document, Position, Size


class Movement(str, Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    HOME = "home"
    END = "end"


def _row_length(document: Document, y: int) -> int:
    line = document.line(y)
    return line.length() if line is not None else 0


def move(
    position: Position, movement: Movement, document: Document, size: Size
) -> Position:
    """Return where ``movement`` takes the cursor from ``position``.

    Rows stay within ``[0, line_count]`` and the column never passes the end of
    the row it lands on. Left and Right wrap onto the neighbouring row.
    """

    x, y = position.x, position.y
    height = document.line_count()
    width = _row_length(document, y)

    if movement is Movement.UP:
        y = max(y - 1, 0)
    elif movement is Movement.DOWN:
        if y < height:
            y += 1
    elif movement is Movement.LEFT:
        if x > 0:
            x -= 1
        elif y > 0:
            y -= 1
            x = _row_length(document, y)
    elif movement is Movement.RIGHT:
        if x < width:
            x += 1
        elif y < height:
            y += 1
            x = 0
    elif movement is Movement.PAGE_UP:
        y = max(y - size.height, 0)
    elif movement is Movement.PAGE_DOWN:
        y = min(y + size.height, height)
    elif movement is Movement.HOME:
        x = 0
    elif movement is Movement.END:
        x = width

    y = min(y, height)
    x = min(x, _row_length(document, y))
    return Position(x, y)


__all__ = ["Movement", "move"]
