"""Ordered rows of ``Line`` objects plus file identity and dirty state."""

from __future__ import annotations

from typing import Iterable, Iterator, List, Optional

from sodium.runtime import telemetry

from .files import FileSurface, LocalFiles
from .line import Line
from .position import Position, SearchDirection


class Document:
    """The whole file being edited.

    Structural edits take a ``Position``. A row index equal to
    ``line_count()`` addresses the append row; anything past it is ignored.
    """

    def __init__(
        self,
        lines: Optional[Iterable[Line]] = None,
        *,
        file_name: Optional[str] = None,
        has_pending_name: bool = False,
        files: Optional[FileSurface] = None,
    ) -> None:
        self._rows: List[Line] = list(lines or [])
        self._file_name = file_name
        self._has_pending_name = has_pending_name
        self._dirty = False
        self._files: FileSurface = files or LocalFiles()

    @classmethod
    def from_text(
        cls,
        text: str,
        *,
        file_name: Optional[str] = None,
        files: Optional[FileSurface] = None,
    ) -> "Document":
        rows = text.split("\n")
        # A terminating newline closes the last row rather than opening one.
        if rows[-1] == "":
            rows.pop()
        return cls((Line(row) for row in rows), file_name=file_name, files=files)

    @classmethod
    def open(cls, path: str, *, files: Optional[FileSurface] = None) -> "Document":
        """Load ``path``; raises ``DocumentIOError`` if it cannot be read."""

        files = files or LocalFiles()
        with telemetry.span("document::open", metadata={"path": path}) as handle:
            text = files.read_text(path)
            document = cls.from_text(text, file_name=path, files=files)
            handle.add_metadata("lines", document.line_count())
        return document

    @classmethod
    def create(cls, path: str, *, files: Optional[FileSurface] = None) -> "Document":
        """Empty document bound to a file that does not exist yet."""

        return cls(file_name=path, has_pending_name=True, files=files)

    @property
    def file_name(self) -> Optional[str]:
        return self._file_name

    @property
    def has_pending_name(self) -> bool:
        return self._has_pending_name

    def save(self, files: Optional[FileSurface] = None) -> None:
        """Write every row followed by ``\\n``; a document without a name is left alone."""

        if self._file_name is None:
            return
        sink = files or self._files
        content = "".join(f"{line.text}\n" for line in self._rows)
        metadata = {"path": self._file_name}
        with telemetry.span("document::save", metadata=metadata) as handle:
            sink.write_text(self._file_name, content)
            handle.add_metadata("lines", len(self._rows))
        self._dirty = False

    def save_as(self, path: str, files: Optional[FileSurface] = None) -> None:
        self._file_name = path
        self._has_pending_name = False
        self.save(files)

    def insert(self, at: Position, char: str) -> None:
        if at.y > len(self._rows):
            return
        self._dirty = True
        if char == "\n":
            self._insert_newline(at)
        elif at.y == len(self._rows):
            self._rows.append(Line(char))
        else:
            self._rows[at.y].insert(at.x, char)

    def _insert_newline(self, at: Position) -> None:
        if at.y == len(self._rows):
            self._rows.append(Line())
        remainder = self._rows[at.y].split(at.x)
        self._rows.insert(at.y + 1, remainder)

    def delete(self, at: Position) -> None:
        if at.y >= len(self._rows):
            return
        self._dirty = True
        row = self._rows[at.y]
        if at.x == row.length() and at.y + 1 < len(self._rows):
            row.append(self._rows.pop(at.y + 1))
        else:
            row.delete(at.x)

    def find(
        self,
        query: str,
        at: Position,
        direction: SearchDirection = SearchDirection.FORWARD,
    ) -> Optional[Position]:
        """Scan rows from ``at`` in ``direction`` without wrapping.

        Forward matches start at or after ``at.x`` on the first row; backward
        matches end at or before it. Later rows are scanned whole. A backward
        search from the append row starts at the end of the last row.
        """

        forward = direction is SearchDirection.FORWARD
        x, y = at.x, at.y
        if not forward and y == len(self._rows) and self._rows:
            y -= 1
            x = self._rows[y].length()
        if y >= len(self._rows):
            return None
        remaining = len(self._rows) - y if forward else y + 1
        for _ in range(remaining):
            line = self._rows[y]
            column = line.find(query, x) if forward else line.rfind(query, x)
            if column is not None:
                return Position(column, y)
            if forward:
                y, x = y + 1, 0
            else:
                y -= 1
                if y < 0:
                    break
                x = self._rows[y].length()
        return None

    def line(self, index: int) -> Optional[Line]:
        if 0 <= index < len(self._rows):
            return self._rows[index]
        return None

    def rows(self) -> Iterator[Line]:
        return iter(self._rows)

    def line_count(self) -> int:
        return len(self._rows)

    def is_empty(self) -> bool:
        return not self._rows

    def is_dirty(self) -> bool:
        return self._dirty

    def __len__(self) -> int:
        return len(self._rows)
