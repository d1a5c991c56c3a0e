"""Error types raised by the buffer layer."""

from __future__ import annotations


class DocumentIOError(OSError):
    """Raised when a document cannot be read from or written to its file."""

    def __init__(self, message: str, *, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path
