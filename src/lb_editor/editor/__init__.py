"""Editor state and the controller loop (``lb_editor.editor.controller``)."""

from .context import ActionResult, EditorContext

__all__ = ["ActionResult", "EditorContext"]
