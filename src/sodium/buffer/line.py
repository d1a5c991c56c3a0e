"""Single editable line addressed by grapheme cluster."""

from __future__ import annotations

from typing import List, Optional

import grapheme

TAB_WIDTH = 4


class Line:
    """One row of text plus a cached grapheme count.

    Every index accepted or returned here is a grapheme index. Out-of-range
    indices clamp or turn the call into a no-op; nothing raises.
    """

    __slots__ = ("_string", "_length")

    def __init__(self, text: str = "") -> None:
        self._string = text
        self._length = grapheme.length(text)

    @classmethod
    def from_text(cls, text: str) -> "Line":
        return cls(text)

    @property
    def text(self) -> str:
        return self._string

    def length(self) -> int:
        return self._length

    def is_empty(self) -> bool:
        return self._length == 0

    def render(self, start: int, end: int, *, tab_width: int = TAB_WIDTH) -> str:
        """Return the visible slice ``[start, end)`` with tabs expanded."""

        end = max(0, min(end, self._length))
        start = max(0, min(start, end))
        visible = grapheme.slice(self._string, start, end)
        return visible.replace("\t", " " * tab_width)

    def insert(self, at: int, char: str) -> None:
        if at >= self._length:
            self._string += char
        else:
            at = max(at, 0)
            result: List[str] = []
            for index, cluster in enumerate(self._clusters()):
                if index == at:
                    result.append(char)
                result.append(cluster)
            self._string = "".join(result)
        self._recount()

    def delete(self, at: int) -> None:
        if at < 0 or at >= self._length:
            return
        self._string = "".join(
            cluster for index, cluster in enumerate(self._clusters()) if index != at
        )
        self._recount()

    def append(self, other: "Line") -> None:
        self._string += other._string
        self._recount()

    def split(self, at: int) -> "Line":
        """Keep ``[0, at)`` in place and return a new line holding the rest."""

        clusters = self._clusters()
        at = max(0, min(at, len(clusters)))
        remainder = Line("".join(clusters[at:]))
        self._string = "".join(clusters[:at])
        self._recount()
        return remainder

    def find(self, query: str, after: int) -> Optional[int]:
        """Grapheme index of the first ``query`` match starting at or after ``after``."""

        if after > self._length:
            return None
        offset = self._string.find(query, self._offset_of(max(after, 0)))
        if offset == -1:
            return None
        return self._index_of(offset)

    def rfind(self, query: str, before: int) -> Optional[int]:
        """Grapheme index of the last ``query`` match lying inside ``[0, before)``."""

        before = max(0, min(before, self._length))
        offset = self._string.rfind(query, 0, self._offset_of(before))
        if offset == -1:
            return None
        return self._index_of(offset)

    def _clusters(self) -> List[str]:
        return list(grapheme.graphemes(self._string))

    def _recount(self) -> None:
        self._length = grapheme.length(self._string)

    def _offset_of(self, index: int) -> int:
        offset = 0
        for position, cluster in enumerate(grapheme.graphemes(self._string)):
            if position >= index:
                break
            offset += len(cluster)
        return offset

    def _index_of(self, offset: int) -> int:
        running = 0
        for index, cluster in enumerate(grapheme.graphemes(self._string)):
            if offset < running + len(cluster):
                return index
            running += len(cluster)
        return self._length

    def __len__(self) -> int:
        return self._length

    def __str__(self) -> str:
        return self._string

    def __repr__(self) -> str:
        return f"Line({self._string!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Line):
            return NotImplemented
        return self._string == other._string

    __hash__ = None  # type: ignore[assignment]
