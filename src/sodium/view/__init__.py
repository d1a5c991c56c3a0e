"""Cursor movement, viewport scrolling, and screen composition."""

from .movement import Movement, move
from .render import (
    StatusMessage,
    cursor_span,
    message_line,
    render_rows,
    status_line,
    welcome_lines,
)
from .viewport import CursorState, scroll, scroll_rendered

__all__ = [
    "CursorState",
    "Movement",
    "StatusMessage",
    "cursor_span",
    "message_line",
    "move",
    "render_rows",
    "scroll",
    "scroll_rendered",
    "status_line",
    "welcome_lines",
]
