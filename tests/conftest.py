from __future__ import annotations

import os
from typing import Dict, Iterable, Optional

import pytest

os.environ.setdefault("SODIUM_LOG_PRESET", "quiet")

from sodium.buffer import DocumentIOError  # noqa: E402


class MemoryFiles:
    """In-memory ``FileSurface`` with switchable failures."""

    def __init__(
        self,
        files: Optional[Dict[str, str]] = None,
        *,
        unreadable: Iterable[str] = (),
        fail_writes: bool = False,
    ) -> None:
        self.files: Dict[str, str] = dict(files or {})
        self.unreadable = set(unreadable)
        self.fail_writes = fail_writes
        self.writes: list[str] = []

    def exists(self, path: str) -> bool:
        return path in self.files or path in self.unreadable

    def read_text(self, path: str) -> str:
        if path in self.unreadable or path not in self.files:
            raise DocumentIOError(f"{path}: cannot read", path=path)
        return self.files[path]

    def write_text(self, path: str, content: str) -> None:
        self.writes.append(path)
        if self.fail_writes:
            raise DocumentIOError(f"{path}: disk full", path=path)
        self.files[path] = content


@pytest.fixture
def memory_files() -> MemoryFiles:
    return MemoryFiles()
