"""Scripted byte-offset text editing: cursor, search, mark and replace."""

from .buffer import (
    EditError,
    Editor,
    EditorView,
    EmptySearchText,
    MarkView,
    NoMarkSet,
    TextNotFound,
)
from .operations import (
    Operation,
    Script,
    ScriptResult,
    move_by,
    move_to_start,
    replace_region,
    run_script,
    search_forward,
    set_mark,
)

__all__ = [
    "Editor",
    "EditorView",
    "MarkView",
    "EditError",
    "EmptySearchText",
    "TextNotFound",
    "NoMarkSet",
    "Operation",
    "Script",
    "ScriptResult",
    "move_to_start",
    "move_by",
    "search_forward",
    "set_mark",
    "replace_region",
    "run_script",
]

__version__ = "0.1.0"
