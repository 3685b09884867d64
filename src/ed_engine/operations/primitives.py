"""Constructors for the five primitive operations."""

from __future__ import annotations

from .models import MoveBy, MoveToStart, ReplaceRegion, SearchForward, SetMark

# Argument-free operations carry no state, so one instance serves everyone.
_MOVE_TO_START = MoveToStart()
_SET_MARK = SetMark()


def move_to_start() -> MoveToStart:
    return _MOVE_TO_START


def move_by(offset: int) -> MoveBy:
    """Move ``offset`` bytes forward (negative moves backward)."""

    return MoveBy(offset)


def search_forward(needle: str | bytes) -> SearchForward:
    """Search for the literal ``needle`` from the cursor onwards."""

    return SearchForward(needle)


def set_mark() -> SetMark:
    return _SET_MARK


def replace_region(replacement: str | bytes) -> ReplaceRegion:
    """Replace the marked region with ``replacement``."""

    return ReplaceRegion(replacement)


__all__ = [
    "move_to_start",
    "move_by",
    "search_forward",
    "set_mark",
    "replace_region",
]
