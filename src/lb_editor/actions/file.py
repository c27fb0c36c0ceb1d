"""File actions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from lb_editor.editor.context import ActionResult, EditorContext
from lb_editor.persistence import PersistenceError, save_document

if TYPE_CHECKING:
    from lb_editor.keymaps import ResolutionMatch


def save(context: EditorContext, match: ResolutionMatch) -> ActionResult:
    del match
    status = context.status
    if status.filename is None:
        status.set_message("ERROR: No file name; nothing saved.")
        return ActionResult(status="save_skipped")

    try:
        written = save_document(status.filename, context.document)
    except PersistenceError as exc:
        status.set_message("ERROR: Can't save! I/O error: %s", exc.reason)
        return ActionResult(status="save_failed", message=exc.reason)

    status.set_message("%d bytes successfully written to disk.", written)
    return ActionResult(status="saved")


__all__ = ["save"]
