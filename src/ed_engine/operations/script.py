"""Named, reusable operation sequences and a one-shot runner."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from ed_engine.buffer import DEFAULT_ENCODING, EditError, Editor

from .models import Operation


@dataclass(frozen=True, slots=True)
class Script:
    """Immutable, ordered collection of operations."""

    operations: tuple[Operation, ...] = ()
    name: str = "script"

    def __post_init__(self) -> None:
        operations = tuple(self.operations)
        for operation in operations:
            if not isinstance(operation, Operation):
                raise TypeError(
                    f"Script '{self.name}' expects Operation values, "
                    f"got {type(operation).__name__}"
                )
        object.__setattr__(self, "operations", operations)

    @classmethod
    def of(cls, *operations: Operation, name: str = "script") -> "Script":
        return cls(operations, name=name)

    def append(self, *operations: Operation) -> "Script":
        return Script(self.operations + tuple(operations), name=self.name)

    def extend(self, other: Iterable[Operation]) -> "Script":
        return Script(self.operations + tuple(other), name=self.name)

    def __iter__(self) -> Iterator[Operation]:
        return iter(self.operations)

    def __len__(self) -> int:
        return len(self.operations)

    def describe(self) -> str:
        return "; ".join(operation.describe() for operation in self.operations)


@dataclass(frozen=True, slots=True)
class ScriptResult:
    """Final text and cursor of a run, plus the error that stopped it (if any)."""

    text: str
    position: int
    error: Optional[EditError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def run_script(
    text: str | bytes,
    operations: Iterable[Operation],
    *,
    name: str = "default",
    encoding: str = DEFAULT_ENCODING,
) -> ScriptResult:
    """Run ``operations`` against a fresh editor built from ``text``.

    A failed run still reports the partially edited text.
    """

    editor = Editor.from_text(text, name=name, encoding=encoding)
    error = editor.do(*operations)
    return ScriptResult(text=editor.text, position=editor.position, error=error)


__all__ = ["Script", "ScriptResult", "run_script"]
