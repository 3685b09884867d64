"""Byte buffer, cursor/mark state, and the editor that owns them."""

from .document import ByteDocument
from .editor import DEFAULT_ENCODING, Applicable, Editor, EditorView, check_encoding
from .errors import EditError, EmptySearchText, NoMarkSet, TextNotFound
from .state import EditorState, MarkView

__all__ = [
    "ByteDocument",
    "EditorState",
    "MarkView",
    "Editor",
    "EditorView",
    "Applicable",
    "DEFAULT_ENCODING",
    "check_encoding",
    "EditError",
    "EmptySearchText",
    "TextNotFound",
    "NoMarkSet",
]
