"""Executable Textual app hosting the Sodium editor."""

from __future__ import annotations

import argparse
from typing import Optional, Sequence, Tuple

try:  # pragma: no cover - imported only when the editor is run
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.binding import Binding
    from textual.widgets import Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use sodium.adapters.textual.app"
    ) from exc

from sodium.buffer import Size
from sodium.config import EditorConfig
from sodium.runtime import telemetry

from .controller import EditorController, Frame, UIHooks, open_document


def frame_to_text(frame: Frame, config: EditorConfig) -> Text:
    """Join a frame's rows into Rich text with the cursor cell highlighted."""

    text = Text(no_wrap=True, overflow="crop")
    cursor_row, start, end = frame.cursor
    for index, row in enumerate(frame.rows):
        line = Text(row)
        if index == cursor_row:
            if len(row) < end:
                line.append(" " * (end - len(row)))
            line.stylize(config.cursor_style, start, end)
        text.append_text(line)
        if index < len(frame.rows) - 1:
            text.append("\n")
    return text


class SodiumApp(App[None]):
    """Full-screen editor: text area, status line, message bar."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-view {
		height: 1fr;
		overflow: hidden;
	}

	#status-line {
		height: 1;
	}

	#message-line {
		height: 1;
	}
	"""

    ENABLE_COMMAND_PALETTE = False

    BINDINGS = [
        Binding("ctrl+q", "request_quit", "Quit", priority=True),
        Binding("ctrl+c", "request_quit", "Quit", show=False, priority=True),
    ]

    def __init__(
        self,
        path: Optional[str] = None,
        *,
        config: Optional[EditorConfig] = None,
    ) -> None:
        super().__init__()
        self.path = path
        self.config = config or EditorConfig.from_env()
        self.controller: EditorController | None = None
        self._buffer_widget: Static | None = None
        self._status_widget: Static | None = None
        self._message_widget: Static | None = None

    def compose(self) -> ComposeResult:
        self._buffer_widget = Static("", id="buffer-view")
        self._status_widget = Static("", id="status-line")
        self._message_widget = Static("", id="message-line")
        yield self._buffer_widget
        yield self._status_widget
        yield self._message_widget

    def on_mount(self) -> None:
        document, error = open_document(self.path)
        hooks = UIHooks(refresh=self._draw, quit=self.exit)
        self.controller = EditorController(
            document,
            hooks,
            config=self.config,
            size=_size_of(self),
            message=error,
        )

    def on_resize(self, event: events.Resize) -> None:
        if self.controller:
            self.controller.resize(event.size.width, event.size.height)

    def action_request_quit(self) -> None:
        if self.controller:
            self.controller.handle_key("ctrl+q")

    def on_key(self, event: events.Key) -> None:
        if not self.controller:
            return
        key, text = self._normalize_key(event)
        self.controller.handle_key(key, text=text)
        event.prevent_default()
        event.stop()

    def _draw(self, frame: Frame) -> None:
        if self._buffer_widget:
            self._buffer_widget.update(frame_to_text(frame, self.config))
        if self._status_widget:
            self._status_widget.update(
                Text(frame.status, style=self.config.status_style, no_wrap=True)
            )
        if self._message_widget:
            self._message_widget.update(
                Text(frame.message, style=self.config.message_style, no_wrap=True)
            )

    @staticmethod
    def _normalize_key(event: events.Key) -> Tuple[str, Optional[str]]:
        key = event.key
        if key in {"return", "ctrl+m"}:
            key = "enter"
        elif key in {"ctrl+h"}:
            key = "backspace"
        elif key == "ctrl+i":
            key = "tab"
        text = event.character if event.is_printable else None
        return key, text


def _size_of(app: App[None]) -> Size:
    return Size(app.size.width, app.size.height)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Sodium terminal text editor.")
    parser.add_argument("file", nargs="?", help="File to open or create")
    parser.add_argument(
        "--log-preset",
        choices=telemetry.PRESETS,
        default="production",
        help="Telemetry preset (default: production, logs to sodium.log)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    telemetry.configure(preset=args.log_preset)
    app = SodiumApp(args.file)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual run
    main()
