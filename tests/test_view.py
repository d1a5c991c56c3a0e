from __future__ import annotations

import itertools

import pytest

from sodium.buffer import Document, Position, Size
from sodium.view import CursorState, Movement, move, scroll, scroll_rendered

WINDOW = Size(width=10, height=2)


def make_document() -> Document:
    return Document.from_text("hello\nhi\n\nworld!")


def step(x: int, y: int, movement: Movement, size: Size = WINDOW) -> Position:
    return move(Position(x, y), movement, make_document(), size)


def test_right_wraps_to_next_row() -> None:
    assert step(5, 0, Movement.RIGHT) == Position(0, 1)
    assert step(6, 3, Movement.RIGHT) == Position(0, 4)
    assert step(0, 4, Movement.RIGHT) == Position(0, 4)


def test_left_wraps_to_previous_row_end() -> None:
    assert step(0, 1, Movement.LEFT) == Position(5, 0)
    assert step(0, 0, Movement.LEFT) == Position(0, 0)
    assert step(3, 0, Movement.LEFT) == Position(2, 0)


def test_vertical_moves_clamp_column_and_row() -> None:
    assert step(5, 0, Movement.DOWN) == Position(2, 1)
    assert step(4, 3, Movement.DOWN) == Position(0, 4)
    assert step(0, 4, Movement.DOWN) == Position(0, 4)
    assert step(0, 0, Movement.UP) == Position(0, 0)


def test_page_moves_by_window_height() -> None:
    assert step(0, 0, Movement.PAGE_DOWN) == Position(0, 2)
    assert step(0, 3, Movement.PAGE_DOWN) == Position(0, 4)
    assert step(0, 3, Movement.PAGE_UP) == Position(0, 1)
    assert step(0, 1, Movement.PAGE_UP) == Position(0, 0)


def test_home_and_end() -> None:
    assert step(3, 3, Movement.END) == Position(6, 3)
    assert step(3, 3, Movement.HOME) == Position(0, 3)


def test_move_on_empty_document_stays_at_origin() -> None:
    document = Document()

    for movement in Movement:
        assert move(Position(), movement, document, WINDOW) == Position(0, 0)


def test_scroll_leaves_offset_when_cursor_visible() -> None:
    assert scroll(Position(3, 1), Size(10, 5), Position(0, 0)) == Position(0, 0)


def test_scroll_advances_by_overshoot() -> None:
    assert scroll(Position(0, 10), Size(80, 5), Position(0, 0)) == Position(0, 6)
    assert scroll(Position(100, 0), Size(80, 5), Position(0, 0)) == Position(21, 0)


def test_scroll_snaps_back_to_cursor() -> None:
    assert scroll(Position(2, 2), Size(80, 5), Position(7, 6)) == Position(2, 2)


@pytest.mark.parametrize(
    "cursor, offset",
    list(itertools.product([0, 3, 9, 40], [0, 5, 30])),
)
def test_scroll_keeps_cursor_in_window_and_is_idempotent(cursor: int, offset: int) -> None:
    size = Size(8, 4)
    position = Position(cursor, cursor)

    once = scroll(position, size, Position(offset, offset))
    twice = scroll(position, size, once)

    assert once == twice
    assert once.x <= position.x < once.x + size.width
    assert once.y <= position.y < once.y + size.height


def test_scroll_with_degenerate_window_is_idempotent() -> None:
    once = scroll(Position(4, 7), Size(0, 0), Position(0, 0))

    assert once == Position(4, 7)
    assert scroll(Position(4, 7), Size(0, 0), once) == once


def test_cursor_state_moves_scrolls_and_restores() -> None:
    document = Document.from_text("\n".join(str(n) for n in range(10)))
    state = CursorState()
    saved = state.snapshot()

    for _ in range(5):
        state.move(Movement.DOWN, document, WINDOW)
    state.scroll(WINDOW)

    assert state.position == Position(0, 5)
    assert state.offset == Position(0, 4)
    assert state.screen_position == Position(0, 1)

    state.restore(saved)
    assert state.snapshot() == (Position(0, 0), Position(0, 0))


def test_scroll_rendered_counts_tab_cells() -> None:
    document = Document.from_text("\t\t\t\tx")
    cursor, size = Position(4, 0), Size(10, 2)

    assert scroll(cursor, size, Position(0, 0)) == Position(0, 0)
    once = scroll_rendered(cursor, size, Position(0, 0), document, tab_width=4)

    assert once == Position(2, 0)
    assert scroll_rendered(cursor, size, once, document, tab_width=4) == once


def test_scroll_rendered_matches_scroll_without_tabs() -> None:
    document = Document.from_text("abcdefghijklmnop")
    size = Size(10, 2)

    for x in range(document.line(0).length() + 1):
        cursor = Position(x, 0)
        expected = scroll(cursor, size, Position(0, 0))
        assert scroll_rendered(cursor, size, Position(0, 0), document) == expected


def test_cursor_state_scroll_with_document_uses_rendered_cells() -> None:
    document = Document.from_text("\t\tab")
    state = CursorState(position=Position(3, 0))

    state.scroll(Size(6, 2), document, tab_width=4)

    assert state.offset == Position(1, 0)
