from __future__ import annotations

import dataclasses

import pytest

from ed_engine.buffer import EditError, Editor, EmptySearchText, NoMarkSet, TextNotFound
from ed_engine.operations import (
    MoveBy,
    Operation,
    ReplaceRegion,
    SearchForward,
    move_by,
    move_to_start,
    replace_region,
    search_forward,
    set_mark,
)


def make_editor(text: str, position: int = 0) -> Editor:
    editor = Editor.from_text(text)
    editor.move_to(position)
    return editor


def test_move_to_start_is_idempotent() -> None:
    editor = make_editor("hello", 4)

    move_to_start().apply(editor)
    assert editor.position == 0
    move_to_start().apply(editor)
    assert editor.position == 0


@pytest.mark.parametrize(
    ("start", "offset", "expected"),
    [
        (0, 3, 3),
        (3, -2, 1),
        (0, 10, 5),
        (4, -10, 0),
        (2, 0, 2),
    ],
)
def test_move_by_clamps(start: int, offset: int, expected: int) -> None:
    editor = make_editor("hello", start)

    move_by(offset).apply(editor)

    assert editor.position == expected


def test_move_by_rejects_non_integers() -> None:
    with pytest.raises(TypeError):
        move_by(1.5)  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        MoveBy(True)


@pytest.mark.parametrize(
    ("initial", "needle", "expected"),
    [
        (0, ",", 5),
        (3, "world", 7),
        (7, "world", 7),
        (0, "hello", 0),
    ],
)
def test_search_forward_moves_to_match_start(
    initial: int, needle: str, expected: int
) -> None:
    editor = make_editor("hello, world!", initial)

    search_forward(needle).apply(editor)

    assert editor.position == expected


@pytest.mark.parametrize(
    ("initial", "needle", "error_type", "message"),
    [
        (0, "xyz", TextNotFound, "text not found: xyz"),
        (0, "", EmptySearchText, "search text cannot be empty"),
        (8, "hello", TextNotFound, "text not found: hello"),
    ],
)
def test_search_forward_failures_keep_position(
    initial: int, needle: str, error_type: type[EditError], message: str
) -> None:
    editor = make_editor("hello, world!", initial)

    with pytest.raises(error_type) as excinfo:
        search_forward(needle).apply(editor)

    assert excinfo.value.message == message
    assert excinfo.value.operation == "search_forward"
    assert excinfo.value.position == initial
    assert editor.position == initial


def test_search_forward_matches_on_bytes() -> None:
    editor = make_editor("naïve café")

    search_forward("café").apply(editor)

    assert editor.position == 7
    search_forward(b"\xc3\xa9").apply(editor)
    assert editor.position == 10


def test_set_mark_overwrites_previous_mark() -> None:
    editor = make_editor("hello", 1)
    set_mark().apply(editor)
    move_by(3).apply(editor)
    set_mark().apply(editor)

    assert tuple(editor.mark) == (4, True)


@pytest.mark.parametrize(
    ("content", "mark", "cursor", "replacement", "expected", "position"),
    [
        ("hello, world!", 5, 12, " WORLD", "hello WORLD!", 11),
        ("hello, world!", 12, 5, " WORLD", "hello WORLD!", 11),
        ("hello, world!", 5, 7, "", "helloworld!", 5),
        ("hello", 0, 5, "world", "world", 5),
        ("hello, world!", 5, 5, "X", "helloX, world!", 6),
    ],
)
def test_replace_region(
    content: str,
    mark: int,
    cursor: int,
    replacement: str,
    expected: str,
    position: int,
) -> None:
    editor = make_editor(content, mark)
    set_mark().apply(editor)
    editor.move_to(cursor)

    replace_region(replacement).apply(editor)

    assert editor.text == expected
    assert editor.position == position
    assert editor.marked is False


def test_replace_region_without_mark_fails() -> None:
    editor = make_editor("hello, world!", 5)

    with pytest.raises(NoMarkSet) as excinfo:
        replace_region("test").apply(editor)

    assert excinfo.value.message == "no mark set"
    assert excinfo.value.kind == "no_mark_set"
    assert str(excinfo.value) == "ed: replace_region at position 5: no mark set"
    assert editor.text == "hello, world!"
    assert editor.position == 5
    assert editor.version == 0


def test_replace_region_mark_cleared_even_when_mark_was_shifted() -> None:
    editor = make_editor("abcdef", 4)
    set_mark().apply(editor)
    editor.move_to(1)

    replace_region("ZZZZ").apply(editor)

    assert editor.text == "aZZZZef"
    assert editor.position == 5
    assert editor.marked is False


def test_operations_are_reusable_values() -> None:
    search = search_forward("o")
    first = make_editor("foo")
    second = make_editor("hello")

    search.apply(first)
    search.apply(second)

    assert (first.position, second.position) == (1, 4)
    assert search == SearchForward("o")
    with pytest.raises(dataclasses.FrozenInstanceError):
        search.needle = "x"  # type: ignore[misc]


def test_operation_descriptions() -> None:
    assert move_to_start().describe() == "move_to_start()"
    assert move_by(-2).describe() == "move_by(-2)"
    assert search_forward(",").describe() == "search_forward(',')"
    assert set_mark().describe() == "set_mark()"
    assert ReplaceRegion("x").describe() == "replace_region('x')"


def test_text_arguments_are_type_checked() -> None:
    with pytest.raises(TypeError):
        search_forward(3)  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        replace_region(None)  # type: ignore[arg-type]
    assert replace_region(bytearray(b"ab")).replacement == b"ab"


@pytest.mark.parametrize("needle", ["", b""])
def test_empty_needle_fails_before_encoding(needle: str | bytes) -> None:
    editor = Editor.from_text("ab", encoding="latin-1")
    editor.move_to(1)

    with pytest.raises(EmptySearchText):
        search_forward(needle).apply(editor)

    assert editor.position == 1


def test_needles_and_replacements_use_editor_encoding() -> None:
    editor = Editor.from_text("señor año", encoding="latin-1")

    search_forward("ñ").apply(editor)
    assert editor.position == 2
    move_by(1).apply(editor)
    search_forward("ñ").apply(editor)
    assert editor.position == 7

    set_mark().apply(editor)
    move_by(1).apply(editor)
    replace_region("n").apply(editor)
    assert editor.content == "señor ano".encode("latin-1")


def test_base_operation_cannot_be_instantiated() -> None:
    with pytest.raises(TypeError, match="abstract"):
        Operation()
