"""Editor façade combining the byte document, cursor/mark state and telemetry."""

from __future__ import annotations

import codecs
from dataclasses import dataclass
from typing import Optional, Protocol

from ed_engine.runtime import telemetry

from .document import ByteDocument
from .errors import EditError
from .state import EditorState, MarkView

DEFAULT_ENCODING = "utf-8"
# Keeps decode(encode(x)) lossless when offsets split a multi-byte character.
_ERRORS = "surrogateescape"
_ASCII_SAMPLE = "az AZ 09 \n\t{}()"


class Applicable(Protocol):
    """Anything the sequencer can apply; see ``ed_engine.operations``."""

    name: str

    def apply(self, editor: "Editor") -> None: ...

    def describe(self) -> str: ...


def check_encoding(encoding: str) -> str:
    """Return the canonical codec name, or raise ``ValueError``.

    Only codecs that encode ASCII unchanged and add nothing to empty input
    (no byte-order mark) are accepted: byte-offset search needs each needle
    to encode the same way wherever it sits in the buffer, and
    ``surrogateescape`` only round-trips split characters for such codecs.
    """

    try:
        name = codecs.lookup(encoding).name
        empty = "".encode(name)
        sample = _ASCII_SAMPLE.encode(name)
    except LookupError as exc:
        raise ValueError(f"Unknown text encoding '{encoding}'") from exc
    if empty or sample != _ASCII_SAMPLE.encode("ascii"):
        raise ValueError(
            f"Encoding '{encoding}' is not ASCII-compatible; "
            "byte offsets need one byte per ASCII character and no byte-order mark"
        )
    return name


@dataclass(frozen=True, slots=True)
class EditorView:
    version: int
    text: str
    position: int
    mark: MarkView


class Editor:
    """Single in-memory buffer with a byte-offset cursor and an optional mark.

    Positions are byte offsets into the encoded content and always satisfy
    ``0 <= position <= len(content)``.
    """

    def __init__(
        self,
        *,
        name: str = "default",
        document: Optional[ByteDocument] = None,
        state: Optional[EditorState] = None,
        encoding: str = DEFAULT_ENCODING,
    ) -> None:
        self.name = name
        self.encoding = check_encoding(encoding)
        self.document = document if document is not None else ByteDocument()
        self.state = state if state is not None else EditorState()
        self.state.position = self.clamp_position(self.state.position)

    @classmethod
    def from_text(
        cls,
        text: str | bytes,
        *,
        name: str = "default",
        encoding: str = DEFAULT_ENCODING,
    ) -> "Editor":
        encoding = check_encoding(encoding)
        if isinstance(text, str):
            data = text.encode(encoding, _ERRORS)
        elif isinstance(text, (bytes, bytearray)):
            data = bytes(text)
        else:
            raise TypeError(f"text must be str or bytes, not {type(text).__name__}")
        return cls(name=name, document=ByteDocument.from_bytes(data), encoding=encoding)

    # -- accessors ---------------------------------------------------------

    @property
    def content(self) -> bytes:
        return self.document.snapshot()

    @property
    def text(self) -> str:
        return self.decode(self.document.snapshot())

    @property
    def position(self) -> int:
        return self.state.position

    @property
    def mark(self) -> MarkView:
        return self.state.mark_view()

    @property
    def marked(self) -> bool:
        return self.state.marked

    @property
    def version(self) -> int:
        return self.document.version

    def __len__(self) -> int:
        return len(self.document)

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        return (
            f"Editor(name={self.name!r}, length={len(self)}, "
            f"position={self.position}, mark={tuple(self.mark)!r})"
        )

    def snapshot(self) -> EditorView:
        return EditorView(
            version=self.document.version,
            text=self.text,
            position=self.state.position,
            mark=self.state.mark_view(),
        )

    def encode(self, text: str | bytes) -> bytes:
        if isinstance(text, (bytes, bytearray)):
            return bytes(text)
        return text.encode(self.encoding, _ERRORS)

    def decode(self, data: bytes) -> str:
        return data.decode(self.encoding, _ERRORS)

    # -- buffer primitives -------------------------------------------------

    def clamp_position(self, position: int) -> int:
        if position < 0:
            return 0
        return min(position, len(self.document))

    def move_to(self, position: int) -> int:
        """Set the cursor to ``position`` clamped into bounds; return it."""

        self.state.position = self.clamp_position(position)
        return self.state.position

    def replace_range(self, start: int, end: int, replacement: str | bytes) -> None:
        """Splice ``replacement`` over ``[start:end]`` and move the cursor after it.

        Bounds are clamped and may be given in either order. A set mark
        follows the text it was attached to: marks past the region shift by
        the size delta, marks inside collapse to the region start. The mark
        is never cleared here.
        """

        data = self.encode(replacement)
        start = self.clamp_position(start)
        end = self.clamp_position(end)
        if start > end:
            start, end = end, start

        self.document.splice(start, end, data)
        self.state.position = start + len(data)

        state = self.state
        if state.marked:
            if state.mark > end:
                state.mark += len(data) - (end - start)
            elif state.mark > start:
                state.mark = start

    # -- sequencing --------------------------------------------------------

    def do(self, *operations: Applicable, check: bool = False) -> Optional[EditError]:
        """Apply ``operations`` in order, stopping at the first failure.

        Returns the first :class:`EditError` (or raises it when ``check`` is
        true) and ``None`` when every operation succeeded. Nothing is rolled
        back: the editor keeps what the operations before the failure did.
        """

        with telemetry.span(
            "editor::do",
            component="editor",
            metadata={"editor": self.name, "operations": len(operations)},
        ) as handle:
            failure: Optional[EditError] = None
            for index, operation in enumerate(operations):
                try:
                    operation.apply(self)
                except EditError as error:
                    handle.add_metadata("failed_at", index)
                    telemetry.record_event(
                        "editor.operation_failed",
                        level="warning",
                        data={
                            "editor": self.name,
                            "index": index,
                            "operation": operation.describe(),
                            "kind": error.kind,
                            "position": error.position,
                            "message": error.message,
                        },
                    )
                    failure = error
                    break
                telemetry.record_event(
                    "editor.apply",
                    level="debug",
                    data={
                        "editor": self.name,
                        "operation": operation.describe(),
                        "position": self.state.position,
                    },
                )

        # Raised outside the span: a failed script is not a span failure.
        if failure is not None and check:
            raise failure
        return failure


__all__ = ["Applicable", "Editor", "EditorView", "DEFAULT_ENCODING", "check_encoding"]
