"""Viewport scrolling and the cursor state it follows."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import grapheme

from sodium.buffer import TAB_WIDTH, Document, Line, Position, Size

from .movement import Movement, move


def _follow(cursor: int, offset: int, extent: int) -> int:
    extent = max(extent, 1)
    if cursor < offset:
        return cursor
    if cursor >= offset + extent:
        return cursor - extent + 1
    return offset


def scroll(cursor: Position, size: Size, offset: Position) -> Position:
    """Smallest change to ``offset`` that brings ``cursor`` into view.

    Pure and idempotent. A zero-sized axis behaves like a one-cell window.
    """

    return Position(
        _follow(cursor.x, offset.x, size.width),
        _follow(cursor.y, offset.y, size.height),
    )


def _cells(line: Line, start: int, end: int, tab_width: int) -> int:
    return grapheme.length(line.render(start, end, tab_width=tab_width))


def scroll_rendered(
    cursor: Position,
    size: Size,
    offset: Position,
    document: Document,
    *,
    tab_width: int = TAB_WIDTH,
) -> Position:
    """Like ``scroll``, but measures the cursor row in rendered cells.

    Tabs widen to ``tab_width`` cells on screen, so the column offset advances
    until the text between it and the cursor, plus the cursor cell, fits.
    """

    base = scroll(cursor, size, offset)
    line = document.line(cursor.y)
    if line is None or cursor.x < offset.x:
        return base
    width = max(size.width, 1)
    under = max(_cells(line, cursor.x, cursor.x + 1, tab_width), 1)
    x = offset.x
    while x < cursor.x and _cells(line, x, cursor.x, tab_width) + under > width:
        x += 1
    return Position(x, base.y)


@dataclass
class CursorState:
    """Cursor location plus the viewport offset that keeps it visible."""

    position: Position = field(default_factory=Position)
    offset: Position = field(default_factory=Position)

    def move(self, movement: Movement, document: Document, size: Size) -> None:
        self.position = move(self.position, movement, document, size)

    def place(self, position: Position) -> None:
        self.position = position

    def scroll(
        self,
        size: Size,
        document: Optional[Document] = None,
        *,
        tab_width: int = TAB_WIDTH,
    ) -> None:
        if document is None:
            self.offset = scroll(self.position, size, self.offset)
        else:
            self.offset = scroll_rendered(
                self.position, size, self.offset, document, tab_width=tab_width
            )

    def snapshot(self) -> tuple[Position, Position]:
        return self.position, self.offset

    def restore(self, snapshot: tuple[Position, Position]) -> None:
        self.position, self.offset = snapshot

    @property
    def screen_position(self) -> Position:
        """Cursor location relative to the top-left of the window."""

        return Position(
            max(self.position.x - self.offset.x, 0),
            max(self.position.y - self.offset.y, 0),
        )


__all__ = ["CursorState", "scroll", "scroll_rendered"]
