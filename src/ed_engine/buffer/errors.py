"""Failures raised by editor operations."""

from __future__ import annotations


class EditError(RuntimeError):
    """An operation's preconditions were not met.

    Carries the failing operation's name, the human-readable message and the
    cursor position at the moment of failure. The editor is left exactly as
    it was before the failing operation ran.
    """

    kind: str = "edit_error"

    def __init__(self, message: str, *, operation: str, position: int) -> None:
        super().__init__(message)
        self.message = message
        self.operation = operation
        self.position = position

    def __str__(self) -> str:
        return f"ed: {self.operation} at position {self.position}: {self.message}"

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(operation={self.operation!r}, "
            f"message={self.message!r}, position={self.position})"
        )


class EmptySearchText(EditError):
    kind = "empty_search_text"

    def __init__(self, *, operation: str, position: int) -> None:
        super().__init__(
            "search text cannot be empty", operation=operation, position=position
        )


class TextNotFound(EditError):
    """The needle does not occur at or after the cursor."""

    kind = "text_not_found"

    def __init__(self, needle: str, *, operation: str, position: int) -> None:
        super().__init__(
            f"text not found: {needle}", operation=operation, position=position
        )
        self.needle = needle


class NoMarkSet(EditError):
    kind = "no_mark_set"

    def __init__(self, *, operation: str, position: int) -> None:
        super().__init__("no mark set", operation=operation, position=position)


__all__ = ["EditError", "EmptySearchText", "TextNotFound", "NoMarkSet"]
