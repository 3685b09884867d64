"""Primitive editing operations and the scripts that compose them."""

from .models import (
    MoveBy,
    MoveToStart,
    Operation,
    ReplaceRegion,
    SearchForward,
    SetMark,
)
from .primitives import (
    move_by,
    move_to_start,
    replace_region,
    search_forward,
    set_mark,
)
from .script import Script, ScriptResult, run_script

__all__ = [
    "Operation",
    "MoveToStart",
    "MoveBy",
    "SearchForward",
    "SetMark",
    "ReplaceRegion",
    "move_to_start",
    "move_by",
    "search_forward",
    "set_mark",
    "replace_region",
    "Script",
    "ScriptResult",
    "run_script",
]
