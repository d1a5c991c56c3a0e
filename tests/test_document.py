from __future__ import annotations

from pathlib import Path

import pytest

from sodium.buffer import Document, DocumentIOError, Position, SearchDirection

from conftest import MemoryFiles

SAMPLE = "a\nbb\nccc"


def make_document(text: str = SAMPLE) -> Document:
    return Document.from_text(text)


def rows(document: Document) -> list[str]:
    return [line.text for line in document.rows()]


def test_open_splits_rows(tmp_path: Path) -> None:
    path = tmp_path / "sample.txt"
    path.write_text(SAMPLE, encoding="utf-8")

    document = Document.open(str(path))

    assert document.line_count() == 3
    assert document.line(1).length() == 2
    assert document.file_name == str(path)
    assert not document.has_pending_name
    assert not document.is_dirty()


def test_trailing_newline_terminates_last_row() -> None:
    assert rows(make_document("a\nb\n")) == ["a", "b"]
    assert rows(make_document("a\n\n")) == ["a", ""]
    assert make_document("").is_empty()


def test_carriage_returns_are_preserved() -> None:
    assert rows(make_document("a\r\nb\r\n")) == ["a\r", "b\r"]


def test_open_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(DocumentIOError) as info:
        Document.open(str(tmp_path / "missing.txt"))

    assert info.value.path == str(tmp_path / "missing.txt")


def test_open_invalid_utf8_raises(tmp_path: Path) -> None:
    path = tmp_path / "binary.txt"
    path.write_bytes(b"ok\n\xff\xfe\n")

    with pytest.raises(DocumentIOError):
        Document.open(str(path))


def test_create_binds_pending_name() -> None:
    document = Document.create("new.txt")

    assert document.file_name == "new.txt"
    assert document.has_pending_name
    assert document.is_empty()
    assert not document.is_dirty()


def test_line_out_of_range_returns_none() -> None:
    document = make_document()

    assert document.line(3) is None
    assert document.line(-1) is None


def test_insert_newline_splits_row() -> None:
    document = make_document("ab")

    document.insert(Position(1, 0), "\n")

    assert rows(document) == ["a", "b"]
    assert document.is_dirty()


def test_insert_newline_on_append_row_adds_split_rows() -> None:
    document = make_document("ab")

    document.insert(Position(0, 1), "\n")

    assert rows(document) == ["ab", "", ""]


def test_insert_character_on_append_row_adds_row() -> None:
    document = make_document("ab")

    document.insert(Position(0, 1), "c")

    assert rows(document) == ["ab", "c"]


def test_insert_character_within_row() -> None:
    document = make_document()

    document.insert(Position(1, 1), "x")

    assert rows(document) == ["a", "bxb", "ccc"]


def test_insert_beyond_append_row_is_noop() -> None:
    document = make_document()

    document.insert(Position(0, 5), "x")

    assert rows(document) == ["a", "bb", "ccc"]
    assert not document.is_dirty()


def test_delete_at_row_end_merges_next_row() -> None:
    document = make_document("ab\ncd\nef")

    document.delete(Position(2, 0))

    assert rows(document) == ["abcd", "ef"]
    assert document.line_count() == 2


def test_delete_within_row() -> None:
    document = make_document()

    document.delete(Position(0, 2))

    assert rows(document) == ["a", "bb", "cc"]


def test_delete_at_end_of_last_row_keeps_content() -> None:
    document = make_document()

    document.delete(Position(3, 2))

    assert rows(document) == ["a", "bb", "ccc"]


def test_delete_out_of_range_is_noop() -> None:
    document = make_document()

    document.delete(Position(0, 3))

    assert rows(document) == ["a", "bb", "ccc"]
    assert not document.is_dirty()


def test_find_forward_across_rows() -> None:
    document = make_document()

    assert document.find("bb", Position(0, 0), SearchDirection.FORWARD) == Position(0, 1)
    assert document.find("zz", Position(0, 0), SearchDirection.FORWARD) is None
    assert document.find("a", Position(0, 3)) is None


def test_find_forward_starts_at_column_on_first_row_only() -> None:
    document = make_document("foo\nbar\nfoo")

    assert document.find("foo", Position(0, 0)) == Position(0, 0)
    assert document.find("foo", Position(1, 0)) == Position(0, 2)


def test_find_backward_scans_upwards() -> None:
    document = make_document("foo\nbar\nfoo")

    found = document.find("foo", Position(0, 2), SearchDirection.BACKWARD)

    assert found == Position(0, 0)


def test_find_does_not_wrap() -> None:
    document = make_document("foo\nbar\nfoo")

    assert document.find("foo", Position(1, 2), SearchDirection.FORWARD) is None
    assert document.find("bar", Position(0, 0), SearchDirection.BACKWARD) is None


def test_find_backward_from_append_row_starts_at_last_row_end() -> None:
    document = make_document("foo\nbar")
    append_row = Position(0, document.line_count())

    assert document.find("foo", append_row, SearchDirection.BACKWARD) == Position(0, 0)
    assert document.find("bar", append_row, SearchDirection.BACKWARD) == Position(0, 1)
    assert document.find("foo", append_row, SearchDirection.FORWARD) is None
    assert Document().find("foo", Position(0, 0), SearchDirection.BACKWARD) is None


def test_save_then_open_round_trip(tmp_path: Path) -> None:
    path = tmp_path / "round.txt"
    path.write_text(SAMPLE, encoding="utf-8")
    document = Document.open(str(path))
    document.insert(Position(1, 0), "!")

    document.save()

    assert not document.is_dirty()
    assert path.read_text(encoding="utf-8") == "a!\nbb\nccc\n"
    assert rows(Document.open(str(path))) == rows(document)


def test_save_without_identity_is_noop(memory_files: MemoryFiles) -> None:
    document = Document(files=memory_files)
    document.insert(Position(0, 0), "x")

    document.save()

    assert memory_files.writes == []
    assert document.is_dirty()


def test_save_as_confirms_name(memory_files: MemoryFiles) -> None:
    document = Document.create("draft.txt", files=memory_files)
    document.insert(Position(0, 0), "x")

    document.save_as("final.txt")

    assert memory_files.files == {"final.txt": "x\n"}
    assert document.file_name == "final.txt"
    assert not document.has_pending_name
    assert not document.is_dirty()


def test_save_failure_propagates_and_keeps_dirty() -> None:
    files = MemoryFiles(fail_writes=True)
    document = Document.from_text("x", file_name="out.txt", files=files)
    document.insert(Position(0, 0), "y")

    with pytest.raises(DocumentIOError):
        document.save()

    assert document.is_dirty()
