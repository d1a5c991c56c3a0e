"""File surface used by documents to load and persist their content."""

from __future__ import annotations

import os
from typing import Protocol

from .errors import DocumentIOError


class FileSurface(Protocol):
    """Whole-file UTF-8 text access."""

    def exists(self, path: str) -> bool:
        """Return whether ``path`` names an existing file."""
        ...

    def read_text(self, path: str) -> str:
        """Return the file's full content, raising ``DocumentIOError`` on failure."""
        ...

    def write_text(self, path: str, content: str) -> None:
        """Replace the file's content, raising ``DocumentIOError`` on failure."""
        ...


class LocalFiles:
    """``FileSurface`` backed by the local filesystem.

    Newlines are passed through untouched in both directions.
    """

    encoding = "utf-8"

    def exists(self, path: str) -> bool:
        return os.path.exists(path)

    def read_text(self, path: str) -> str:
        try:
            with open(path, "r", encoding=self.encoding, newline="") as handle:
                return handle.read()
        except UnicodeDecodeError as exc:
            raise DocumentIOError(f"{path}: not valid UTF-8", path=path) from exc
        except OSError as exc:
            raise DocumentIOError(f"{path}: {exc.strerror or exc}", path=path) from exc

    def write_text(self, path: str, content: str) -> None:
        try:
            with open(path, "w", encoding=self.encoding, newline="") as handle:
                handle.write(content)
        except OSError as exc:
            raise DocumentIOError(f"{path}: {exc.strerror or exc}", path=path) from exc
