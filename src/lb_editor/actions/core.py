"""Session-level actions shared by the default keymap."""

from __future__ import annotations

from typing import TYPE_CHECKING

from lb_editor.editor.context import ActionResult, EditorContext
from lb_editor.runtime import telemetry
from lb_editor.terminal import protocol

if TYPE_CHECKING:
    from lb_editor.keymaps import ResolutionMatch


def quit_editor(context: EditorContext, match: ResolutionMatch) -> ActionResult:
    """Clear the screen and stop the loop; unsaved text is discarded."""

    del match
    context.terminal.write(protocol.clear_screen())
    telemetry.record_event("editor.quit", data={"lines": len(context.document)})
    return ActionResult(status="quit", quit=True)


def noop_action(context: EditorContext, match: ResolutionMatch) -> ActionResult:
    del context, match
    return ActionResult(status="noop")


__all__ = ["quit_editor", "noop_action"]
