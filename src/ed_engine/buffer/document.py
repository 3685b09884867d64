"""Byte storage backing an editor."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class ByteDocument:
    """Owned, growable byte buffer with explicit splice.

    Every offset handled here is a byte offset. Multi-byte characters are not
    treated specially; callers may split one, and the split survives as-is.
    """

    _data: bytearray = field(default_factory=bytearray)
    version: int = 0

    @classmethod
    def from_bytes(cls, data: bytes | bytearray) -> "ByteDocument":
        return cls(_data=bytearray(data))

    def __len__(self) -> int:
        return len(self._data)

    def snapshot(self) -> bytes:
        """Return the current content without exposing internal mutability."""

        return bytes(self._data)

    def find(self, needle: bytes, start: int) -> int:
        """Offset of the first ``needle`` at or after ``start``, or ``-1``."""

        return self._data.find(needle, start)

    def splice(self, start: int, end: int, replacement: bytes) -> None:
        """Replace ``[start:end]`` with ``replacement`` and bump the version."""

        self._data[start:end] = replacement
        self.version += 1


__all__ = ["ByteDocument"]
