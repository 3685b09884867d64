"""Operation variants applied to an :class:`~ed_engine.buffer.Editor`.

Each variant is an immutable value that captures its arguments and does
nothing until :meth:`Operation.apply` is called, so one instance can be
reused across many editors. Failures surface as
:class:`~ed_engine.buffer.EditError` raised before any state is touched.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from ed_engine.buffer import EmptySearchText, NoMarkSet, TextNotFound
from ed_engine.buffer.editor import Editor


def _ensure_text(value: object, field_name: str) -> str | bytes:
    if isinstance(value, bytearray):
        return bytes(value)
    if not isinstance(value, (str, bytes)):
        raise TypeError(f"{field_name} must be str or bytes, not {type(value).__name__}")
    return value


@dataclass(frozen=True, slots=True)
class Operation:
    """Base class of every operation variant."""

    name: ClassVar[str] = "operation"

    def __post_init__(self) -> None:
        if type(self) is Operation:
            raise TypeError("Operation is abstract; build one of its variants")

    def apply(self, editor: Editor) -> None:  # pragma: no cover - abstract override
        raise NotImplementedError

    def describe(self) -> str:
        return f"{self.name}()"


@dataclass(frozen=True, slots=True)
class MoveToStart(Operation):
    name: ClassVar[str] = "move_to_start"

    def apply(self, editor: Editor) -> None:
        editor.move_to(0)


@dataclass(frozen=True, slots=True)
class MoveBy(Operation):
    """Move the cursor ``offset`` bytes, clamping at either end."""

    name: ClassVar[str] = "move_by"
    offset: int = 0

    def __post_init__(self) -> None:
        if isinstance(self.offset, bool) or not isinstance(self.offset, int):
            raise TypeError(
                f"offset must be an int, not {type(self.offset).__name__}"
            )

    def apply(self, editor: Editor) -> None:
        editor.move_to(editor.position + self.offset)

    def describe(self) -> str:
        return f"{self.name}({self.offset})"


@dataclass(frozen=True, slots=True)
class SearchForward(Operation):
    """Jump to the start of the next literal ``needle`` at or after the cursor."""

    name: ClassVar[str] = "search_forward"
    needle: str | bytes = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "needle", _ensure_text(self.needle, "needle"))

    def apply(self, editor: Editor) -> None:
        if not self.needle:
            raise EmptySearchText(operation=self.name, position=editor.position)
        needle = editor.encode(self.needle)
        index = editor.document.find(needle, editor.position)
        if index == -1:
            raise TextNotFound(
                editor.decode(needle), operation=self.name, position=editor.position
            )
        editor.move_to(index)

    def describe(self) -> str:
        return f"{self.name}({self.needle!r})"


@dataclass(frozen=True, slots=True)
class SetMark(Operation):
    name: ClassVar[str] = "set_mark"

    def apply(self, editor: Editor) -> None:
        editor.state.set_mark()


@dataclass(frozen=True, slots=True)
class ReplaceRegion(Operation):
    """Replace the text between mark and cursor, then clear the mark."""

    name: ClassVar[str] = "replace_region"
    replacement: str | bytes = ""

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "replacement", _ensure_text(self.replacement, "replacement")
        )

    def apply(self, editor: Editor) -> None:
        state = editor.state
        if not state.marked:
            raise NoMarkSet(operation=self.name, position=state.position)
        start = min(state.mark, state.position)
        end = max(state.mark, state.position)
        editor.replace_range(start, end, self.replacement)
        state.clear_mark()

    def describe(self) -> str:
        return f"{self.name}({self.replacement!r})"


__all__ = [
    "Operation",
    "MoveToStart",
    "MoveBy",
    "SearchForward",
    "SetMark",
    "ReplaceRegion",
]
