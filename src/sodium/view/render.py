"""Pure composition of the text area, status line, and message bar."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import grapheme

from sodium.buffer import Document, Position, Size
from sodium.config import EditorConfig


@dataclass
class StatusMessage:
    """Transient text shown under the status line."""

    text: str = ""
    created: float = field(default_factory=time.monotonic)

    def visible(self, timeout: float, now: Optional[float] = None) -> bool:
        if not self.text:
            return False
        now = time.monotonic() if now is None else now
        return now - self.created < timeout


def welcome_lines(config: EditorConfig, width: int) -> List[str]:
    """Centred banner lines, each starting with the empty-row marker."""

    lines = []
    for message in config.welcome:
        padding = max(width - len(message), 0) // 2
        spaces = " " * max(padding - 1, 0)
        lines.append(f"{config.empty_row_marker}{spaces}{message}"[:width])
    return lines


def render_rows(
    document: Document, offset: Position, size: Size, config: EditorConfig
) -> List[str]:
    """Exactly ``size.height`` display strings for the text area."""

    rows: List[str] = []
    banner = welcome_lines(config, size.width) if document.is_empty() else []
    banner_start = size.height // 3
    for screen_row in range(size.height):
        line = document.line(offset.y + screen_row)
        if line is not None:
            rows.append(
                line.render(
                    offset.x, offset.x + size.width, tab_width=config.tab_width
                )
            )
        elif banner and banner_start <= screen_row < banner_start + len(banner):
            rows.append(banner[screen_row - banner_start])
        else:
            rows.append(config.empty_row_marker)
    return rows


def cursor_span(
    document: Document, cursor: Position, offset: Position, config: EditorConfig
) -> Tuple[int, int, int]:
    """``(row, start, end)`` character span of the cursor within rendered rows.

    ``start == end`` never happens: past the end of a row the span covers one
    padding cell.
    """

    row = max(cursor.y - offset.y, 0)
    line = document.line(cursor.y)
    if line is None:
        return row, 0, 1
    start = len(line.render(offset.x, cursor.x, tab_width=config.tab_width))
    under = line.render(cursor.x, cursor.x + 1, tab_width=config.tab_width)
    return row, start, start + max(len(under), 1)


def status_line(
    document: Document, cursor: Position, width: int, config: EditorConfig
) -> str:
    name = document.file_name or "[No Name]"
    if grapheme.length(name) > 20:
        name = grapheme.slice(name, 0, 20)
    modified = " (modified)" if document.is_dirty() else ""
    left = f"{name} - {document.line_count()} lines{modified}"
    right = f"{cursor.y + 1}/{document.line_count()}"
    padding = max(width - len(left) - len(right), 1)
    return f"{left}{' ' * padding}{right}"[:width]


def message_line(
    message: StatusMessage, width: int, config: EditorConfig, now: Optional[float] = None
) -> str:
    if message.visible(config.message_timeout, now):
        return message.text[:width]
    return ""


__all__ = [
    "StatusMessage",
    "cursor_span",
    "message_line",
    "render_rows",
    "status_line",
    "welcome_lines",
]
