"""Cursor and mark state for an editor."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True, slots=True)
class MarkView:
    """Read-only view of the mark; unpacks as ``(offset, is_set)``."""

    offset: int
    is_set: bool

    def __iter__(self) -> Iterator[object]:
        yield self.offset
        yield self.is_set


@dataclass(slots=True)
class EditorState:
    """Mutable cursor + mark info. ``mark`` only matters while ``marked``."""

    position: int = 0
    mark: int = 0
    marked: bool = False

    def set_mark(self) -> None:
        self.mark = self.position
        self.marked = True

    def clear_mark(self) -> None:
        self.marked = False

    def mark_view(self) -> MarkView:
        return MarkView(offset=self.mark, is_set=self.marked)


__all__ = ["EditorState", "MarkView"]
