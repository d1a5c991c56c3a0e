"""Interactive, direction-aware search over a document."""

from __future__ import annotations

from typing import Optional

from sodium.buffer import TAB_WIDTH, Document, Position, SearchDirection, Size
from sodium.runtime import telemetry
from sodium.view import CursorState, Movement, move


class SearchSession:
    """One search prompt's worth of state.

    The cursor is snapshotted when the session starts. Each ``update`` moves
    the cursor to the next match (scrolling the viewport after it) or leaves
    it where it is. ``cancel`` puts the snapshot back; ``accept`` keeps the
    cursor wherever the last match left it.
    """

    def __init__(
        self,
        document: Document,
        cursor: CursorState,
        size: Size,
        *,
        tab_width: int = TAB_WIDTH,
    ) -> None:
        self.document = document
        self.cursor = cursor
        self.size = size
        self.tab_width = tab_width
        self.query = ""
        self.direction = SearchDirection.FORWARD
        self.last_match: Optional[Position] = None
        self.accepted: Optional[bool] = None
        self._snapshot = cursor.snapshot()
        self.logger = telemetry.get_logger("sodium.search")

    @property
    def active(self) -> bool:
        return self.accepted is None

    def update(
        self,
        query: str,
        direction: SearchDirection = SearchDirection.FORWARD,
        *,
        step: bool = False,
    ) -> Optional[Position]:
        """Search for ``query`` from the cursor.

        ``step`` asks for the next match rather than re-checking the current
        one; forward steps start one cell to the right of the cursor, backward
        searches never include the cursor cell.
        """

        if not self.active:
            return None
        self.query = query
        self.direction = direction
        if not query:
            return None

        start = self.cursor.position
        if step and direction is SearchDirection.FORWARD:
            start = move(start, Movement.RIGHT, self.document, self.size)

        found = self.document.find(query, start, direction)
        if found is not None:
            self.cursor.place(found)
            self.cursor.scroll(self.size, self.document, tab_width=self.tab_width)
            self.last_match = found
        self.logger.debug(
            f"search query={query!r} direction={direction.value} found={found}"
        )
        return found

    def next(self) -> Optional[Position]:
        return self.update(self.query, SearchDirection.FORWARD, step=True)

    def previous(self) -> Optional[Position]:
        return self.update(self.query, SearchDirection.BACKWARD, step=True)

    def accept(self) -> None:
        if not self.active:
            return
        self.accepted = True
        telemetry.record_event(
            "search.accept",
            data={"query": self.query, "match": self.last_match},
        )

    def cancel(self) -> None:
        if not self.active:
            return
        self.cursor.restore(self._snapshot)
        self.accepted = False
        telemetry.record_event("search.cancel", data={"query": self.query})


__all__ = ["SearchSession"]
