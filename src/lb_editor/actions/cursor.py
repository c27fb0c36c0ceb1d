"""Cursor movement actions.

Horizontal moves wrap across line ends; vertical moves keep the column and
clamp it to the target line. Row ``len(document)`` (the empty row below the
text) is reachable so typing there appends a line.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from lb_editor.buffer import clamp_col
from lb_editor.editor.context import ActionResult, EditorContext

if TYPE_CHECKING:
    from lb_editor.keymaps import ResolutionMatch


def step_left(context: EditorContext) -> None:
    cursor = context.cursor
    if cursor.col > 0:
        cursor.col -= 1
    elif cursor.row > 0:
        cursor.row -= 1
        cursor.col = context.document.line_length(cursor.row)


def step_right(context: EditorContext) -> None:
    cursor = context.cursor
    if cursor.row >= len(context.document):
        return
    if cursor.col < context.current_line_length():
        cursor.col += 1
    else:
        cursor.row += 1
        cursor.col = 0


def step_up(context: EditorContext) -> None:
    if context.cursor.row > 0:
        context.cursor.row -= 1
    clamp_col(context.document, context.cursor)


def step_down(context: EditorContext) -> None:
    if context.cursor.row < len(context.document):
        context.cursor.row += 1
    clamp_col(context.document, context.cursor)


def move_left(context: EditorContext, match: ResolutionMatch) -> ActionResult:
    del match
    step_left(context)
    clamp_col(context.document, context.cursor)
    return ActionResult(status="move")


def move_right(context: EditorContext, match: ResolutionMatch) -> ActionResult:
    del match
    step_right(context)
    clamp_col(context.document, context.cursor)
    return ActionResult(status="move")


def move_up(context: EditorContext, match: ResolutionMatch) -> ActionResult:
    del match
    step_up(context)
    return ActionResult(status="move")


def move_down(context: EditorContext, match: ResolutionMatch) -> ActionResult:
    del match
    step_down(context)
    return ActionResult(status="move")


def move_home(context: EditorContext, match: ResolutionMatch) -> ActionResult:
    del match
    context.cursor.col = 0
    return ActionResult(status="move")


def move_end(context: EditorContext, match: ResolutionMatch) -> ActionResult:
    del match
    if context.cursor.row < len(context.document):
        context.cursor.col = context.current_line_length()
    return ActionResult(status="move")


def page_up(context: EditorContext, match: ResolutionMatch) -> ActionResult:
    del match
    context.cursor.row = context.viewport.row_offset
    for _ in range(context.viewport.visible_rows):
        step_up(context)
    return ActionResult(status="page")


def page_down(context: EditorContext, match: ResolutionMatch) -> ActionResult:
    del match
    viewport = context.viewport
    # Lands one row past the bottom edge before stepping; kept as-is.
    target = viewport.row_offset + viewport.visible_rows + 1
    context.cursor.row = min(target, len(context.document))
    for _ in range(viewport.visible_rows):
        step_down(context)
    return ActionResult(status="page")


__all__ = [
    "move_left",
    "move_right",
    "move_up",
    "move_down",
    "move_home",
    "move_end",
    "page_up",
    "page_down",
    "step_left",
    "step_right",
    "step_up",
    "step_down",
]
