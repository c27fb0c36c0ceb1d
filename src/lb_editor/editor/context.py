"""Explicitly owned editor state shared by actions and the controller."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from lb_editor.buffer import Cursor, Document
from lb_editor.runtime.config import EditorConfig
from lb_editor.terminal.geometry import WindowSize
from lb_editor.terminal.session import TerminalIO
from lb_editor.view import StatusState, Viewport


@dataclass(slots=True)
class ActionResult:
    """Result returned from every action handler."""

    consumed: bool = True
    status: str = "ok"
    message: Optional[str] = None
    quit: bool = False


@dataclass(slots=True)
class EditorContext:
    """Document, cursor, viewport, and status for one editing session."""

    document: Document
    viewport: Viewport
    terminal: TerminalIO
    config: EditorConfig = field(default_factory=EditorConfig)
    cursor: Cursor = field(default_factory=Cursor)
    status: StatusState = field(default_factory=StatusState)

    @classmethod
    def create(
        cls,
        terminal: TerminalIO,
        size: WindowSize,
        *,
        document: Optional[Document] = None,
        config: Optional[EditorConfig] = None,
        filename: Optional[str] = None,
    ) -> "EditorContext":
        """Build a context for a window of ``size``, reserving the status rows."""

        cfg = config or EditorConfig()
        viewport = Viewport(
            visible_rows=max(1, size.rows - cfg.status_rows),
            visible_cols=max(1, size.cols),
        )
        return cls(
            document=(
                document if document is not None else Document(tab_width=cfg.tab_width)
            ),
            viewport=viewport,
            terminal=terminal,
            config=cfg,
            status=StatusState(filename=filename),
        )

    def current_line_length(self) -> int:
        return self.document.line_length(self.cursor.row)


__all__ = ["ActionResult", "EditorContext"]
