"""Key dispatch for one editing session, independent of the Textual widgets.

Each key runs to completion in the order read -> mutate -> scroll -> redraw:
the viewport is always recomputed before a ``Frame`` is published.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from sodium.buffer import (
    Document,
    DocumentIOError,
    FileSurface,
    Line,
    LocalFiles,
    Position,
    SearchDirection,
    Size,
)
from sodium.config import EditorConfig
from sodium.runtime import telemetry
from sodium.search import SearchSession
from sodium.view import (
    CursorState,
    Movement,
    StatusMessage,
    cursor_span,
    message_line,
    render_rows,
    status_line,
)

KEY_MOVEMENTS: Dict[str, Movement] = {
    "up": Movement.UP,
    "down": Movement.DOWN,
    "left": Movement.LEFT,
    "right": Movement.RIGHT,
    "pageup": Movement.PAGE_UP,
    "pagedown": Movement.PAGE_DOWN,
    "home": Movement.HOME,
    "end": Movement.END,
}

SEARCH_PROMPT = "Search (ESC to cancel, Arrows to navigate): "
SAVE_PROMPT = "Save as: "


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class Frame:
    """Everything the terminal surface needs to draw one screen."""

    rows: List[str]
    status: str
    message: str
    cursor: Tuple[int, int, int]


@dataclass(slots=True)
class UIHooks:
    """Callbacks the controller invokes on its host."""

    refresh: Callable[[Frame], None]
    quit: Callable[[], None] = _noop
    log: Callable[[str], None] = _noop


@dataclass
class Prompt:
    """Single-line input collected in the message bar."""

    label: str
    on_submit: Callable[[str], None]
    on_cancel: Callable[[], None]
    on_change: Optional[Callable[[str, str], None]] = None
    line: Line = field(default_factory=Line)

    @property
    def text(self) -> str:
        return self.line.text

    def render(self) -> str:
        return f"{self.label}{self.line.text}"


def open_document(
    path: Optional[str], *, files: Optional[FileSurface] = None
) -> Tuple[Document, Optional[str]]:
    """Load ``path`` for editing, returning the document and an error message.

    A missing file gives an empty document bound to ``path``; an unreadable one
    gives an empty unnamed document and a message for the status bar.
    """

    files = files or LocalFiles()
    if path is None:
        return Document(files=files), None
    if not files.exists(path):
        return Document.create(path, files=files), None
    try:
        return Document.open(path, files=files), None
    except DocumentIOError as exc:
        return Document(files=files), f"ERR: Could not open file: {exc}"


class EditorController:
    """Owns the document and cursor for a session and turns keys into edits."""

    def __init__(
        self,
        document: Document,
        hooks: UIHooks,
        *,
        config: Optional[EditorConfig] = None,
        size: Size = Size(80, 24),
        message: Optional[str] = None,
    ) -> None:
        self.document = document
        self.hooks = hooks
        self.config = config or EditorConfig()
        self.cursor = CursorState()
        self.size = size
        self.message = StatusMessage(message or self.config.help_message)
        self.should_quit = False
        self.search: Optional[SearchSession] = None
        self._prompt: Optional[Prompt] = None
        self._quit_times = self.config.quit_times
        self.logger = telemetry.get_logger("sodium.controller")
        self.refresh()

    @property
    def text_area(self) -> Size:
        return Size(
            self.size.width, max(self.size.height - self.config.status_rows, 0)
        )

    @property
    def prompt(self) -> Optional[Prompt]:
        return self._prompt

    def resize(self, width: int, height: int) -> None:
        self.size = Size(max(width, 0), max(height, 0))
        if self.search is not None:
            self.search.size = self.text_area
        self._scroll()
        self.refresh()

    def handle_key(self, key: str, *, text: Optional[str] = None) -> None:
        """Apply one key, rescroll, and publish a fresh frame."""

        self._log("key ->", key=key, text=text, cursor=self.cursor.position)
        if key != "ctrl+q":
            self._quit_times = self.config.quit_times

        if self._prompt is not None:
            self._handle_prompt_key(self._prompt, key, text)
        else:
            self._handle_edit_key(key, text)

        self._scroll()
        self.refresh()

    def _handle_edit_key(self, key: str, text: Optional[str]) -> None:
        if key == "ctrl+q":
            self.request_quit()
            return
        if key == "ctrl+s":
            self.save()
            return
        if key == "ctrl+f":
            self.start_search()
            return

        movement = KEY_MOVEMENTS.get(key)
        if movement is not None:
            self.cursor.move(movement, self.document, self.text_area)
        elif key == "enter":
            position = self.cursor.position
            self.document.insert(position, "\n")
            self.cursor.place(Position(0, position.y + 1))
        elif key == "backspace":
            position = self.cursor.position
            if position.x > 0 or position.y > 0:
                self.cursor.move(Movement.LEFT, self.document, self.text_area)
                self.document.delete(self.cursor.position)
        elif key == "delete":
            self.document.delete(self.cursor.position)
        elif key == "tab":
            self.insert_text("\t")
        elif text and text.isprintable():
            self.insert_text(text)

    def insert_text(self, text: str) -> None:
        for char in text:
            position = self.cursor.position
            before = self._row_length(position.y)
            self.document.insert(position, char)
            # A combining mark joins the cluster before it and adds no column.
            grown = self._row_length(position.y) - before
            self.cursor.place(Position(position.x + grown, position.y))

    def _row_length(self, index: int) -> int:
        line = self.document.line(index)
        return line.length() if line is not None else 0

    def _scroll(self) -> None:
        self.cursor.scroll(
            self.text_area, self.document, tab_width=self.config.tab_width
        )

    def request_quit(self) -> None:
        if self.document.is_dirty() and self._quit_times > 0:
            self.message = StatusMessage(
                "WARNING! File has unsaved changes. "
                f"Press Ctrl-Q {self._quit_times} more times to quit."
            )
            self._quit_times -= 1
            return
        self.should_quit = True
        telemetry.record_event("editor.quit", data={"dirty": self.document.is_dirty()})
        self.hooks.quit()

    def save(self) -> None:
        if self.document.file_name is None or self.document.has_pending_name:
            self._prompt = Prompt(
                label=SAVE_PROMPT,
                on_submit=self._save_as,
                on_cancel=lambda: self._set_message("Save aborted."),
                line=Line(self.document.file_name or ""),
            )
            return
        self._write(None)

    def _save_as(self, name: str) -> None:
        if not name:
            self._set_message("Save aborted.")
            return
        self._write(name)

    def _write(self, name: Optional[str]) -> None:
        try:
            if name is None:
                self.document.save()
            else:
                self.document.save_as(name)
        except DocumentIOError as exc:
            self.logger.error(f"save failed: {exc}")
            self._set_message(f"Error writing file: {exc}")
        else:
            self._set_message("File saved successfully.")

    def start_search(self) -> None:
        session = SearchSession(
            self.document,
            self.cursor,
            self.text_area,
            tab_width=self.config.tab_width,
        )
        self.search = session

        def on_change(key: str, query: str) -> None:
            if key in {"right", "down"}:
                session.update(query, SearchDirection.FORWARD, step=True)
            elif key in {"left", "up"}:
                session.update(query, SearchDirection.BACKWARD, step=True)
            else:
                session.update(query, SearchDirection.FORWARD)

        def on_submit(_query: str) -> None:
            session.accept()
            self.search = None

        def on_cancel() -> None:
            session.cancel()
            self.search = None
            self._set_message("Search aborted.")

        self._prompt = Prompt(
            label=SEARCH_PROMPT,
            on_submit=on_submit,
            on_cancel=on_cancel,
            on_change=on_change,
        )

    def _handle_prompt_key(
        self, prompt: Prompt, key: str, text: Optional[str]
    ) -> None:
        if key == "escape":
            self._prompt = None
            prompt.on_cancel()
            return
        if key == "enter":
            self._prompt = None
            prompt.on_submit(prompt.text)
            return

        if key == "backspace":
            prompt.line.delete(prompt.line.length() - 1)
        elif text and text.isprintable():
            for char in text:
                prompt.line.insert(prompt.line.length(), char)
        if prompt.on_change is not None:
            prompt.on_change(key, prompt.text)

    def _set_message(self, text: str) -> None:
        self.message = StatusMessage(text)

    def frame(self) -> Frame:
        area = self.text_area
        position, offset = self.cursor.position, self.cursor.offset
        if self._prompt is not None:
            message = self._prompt.render()[: area.width]
        else:
            message = message_line(self.message, area.width, self.config)
        return Frame(
            rows=render_rows(self.document, offset, area, self.config),
            status=status_line(self.document, position, area.width, self.config),
            message=message,
            cursor=cursor_span(self.document, position, offset, self.config),
        )

    def refresh(self) -> None:
        self.hooks.refresh(self.frame())

    def _log(self, prefix: str, **fields: object) -> None:
        parts = [prefix]
        parts.extend(f"{key}={value!r}" for key, value in fields.items() if value is not None)
        line = " ".join(parts)
        self.logger.debug(line)
        self.hooks.log(line)


__all__ = ["EditorController", "Frame", "Prompt", "UIHooks", "open_document"]
