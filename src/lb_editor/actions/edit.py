"""Text mutation actions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from lb_editor.editor.context import ActionResult, EditorContext

from .cursor import step_right

if TYPE_CHECKING:
    from lb_editor.keymaps import ResolutionMatch


def insert_byte(context: EditorContext, code: int) -> ActionResult:
    """Insert ``code`` at the cursor and advance one column."""

    cursor = context.cursor
    cursor.col = context.document.insert_char(cursor.row, cursor.col, code) + 1
    return ActionResult(status="insert")


def insert_newline(context: EditorContext, match: ResolutionMatch) -> ActionResult:
    del match
    cursor = context.cursor
    context.document.insert_newline(cursor.row, cursor.col)
    cursor.set(cursor.row + 1, 0)
    return ActionResult(status="insert")


def delete_backward(context: EditorContext, match: ResolutionMatch) -> ActionResult:
    del match
    cursor = context.cursor
    landed = context.document.delete_char(cursor.row, cursor.col)
    cursor.set(landed.row, landed.col)
    return ActionResult(status="delete")


def delete_forward(context: EditorContext, match: ResolutionMatch) -> ActionResult:
    """Delete the byte under the cursor (joins the next line at end of line)."""

    del match
    cursor = context.cursor
    if cursor.row >= len(context.document):
        return ActionResult(status="noop")
    if (
        cursor.row == len(context.document) - 1
        and cursor.col >= context.current_line_length()
    ):
        return ActionResult(status="noop")
    step_right(context)
    landed = context.document.delete_char(cursor.row, cursor.col)
    cursor.set(landed.row, landed.col)
    return ActionResult(status="delete")


__all__ = ["insert_byte", "insert_newline", "delete_backward", "delete_forward"]
