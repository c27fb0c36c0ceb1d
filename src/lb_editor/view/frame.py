"""Whole-screen frame composition.

Each refresh builds every byte of the screen into one :class:`AppendBuffer`
and hands it to the terminal in a single write, so the user never sees a
half-drawn frame.
"""

from __future__ import annotations

from dataclasses import dataclass

from lb_editor.buffer import Cursor, Document
from lb_editor.runtime import telemetry
from lb_editor.runtime.config import VERSION, EditorConfig
from lb_editor.terminal import protocol
from lb_editor.terminal.session import TerminalIO

from .status import StatusState
from .viewport import Viewport, recompute_scroll

NO_NAME = "[New File]"
EMPTY_ROW = b"~"


class AppendBuffer:
    """Append-only byte buffer backing one frame."""

    __slots__ = ("_data",)

    def __init__(self) -> None:
        self._data = bytearray()

    def __len__(self) -> int:
        return len(self._data)

    def append(self, data: bytes) -> None:
        self._data += data

    def getvalue(self) -> bytes:
        return bytes(self._data)


@dataclass(slots=True)
class Frame:
    data: bytes
    render_col: int

    def __len__(self) -> int:
        return len(self.data)


class FrameComposer:
    """Turns document, cursor, viewport, and status into terminal bytes."""

    def __init__(self, config: EditorConfig | None = None) -> None:
        self.config = config or EditorConfig()

    def compose(
        self,
        document: Document,
        cursor: Cursor,
        viewport: Viewport,
        status: StatusState,
    ) -> Frame:
        with telemetry.span(
            "frame::compose",
            component="frame",
            metadata={"rows": viewport.visible_rows, "cols": viewport.visible_cols},
        ) as handle:
            render_col = recompute_scroll(cursor, document, viewport)

            out = AppendBuffer()
            out.append(protocol.HIDE_CURSOR)
            out.append(protocol.CURSOR_HOME)
            self.draw_rows(out, document, viewport)
            self.draw_status_bar(out, document, cursor, viewport, status)
            self.draw_message_bar(out, viewport, status)
            out.append(
                protocol.cursor_to(*viewport.screen_position(cursor.row, render_col))
            )
            out.append(protocol.SHOW_CURSOR)

            handle.add_metadata("bytes", len(out))
            return Frame(data=out.getvalue(), render_col=render_col)

    def refresh(
        self,
        terminal: TerminalIO,
        document: Document,
        cursor: Cursor,
        viewport: Viewport,
        status: StatusState,
    ) -> Frame:
        frame = self.compose(document, cursor, viewport, status)
        terminal.write(frame.data)
        return frame

    def draw_rows(
        self, out: AppendBuffer, document: Document, viewport: Viewport
    ) -> None:
        cols = viewport.visible_cols
        for y in range(viewport.visible_rows):
            file_row = y + viewport.row_offset
            if file_row < len(document):
                render = document[file_row].render
                out.append(render[viewport.col_offset : viewport.col_offset + cols])
            elif len(document) == 0 and y == viewport.visible_rows // 3:
                out.append(self.welcome_banner(cols))
            else:
                out.append(EMPTY_ROW)
            out.append(protocol.ERASE_LINE)
            out.append(protocol.CRLF)

    @staticmethod
    def welcome_banner(cols: int) -> bytes:
        welcome = f"lb editor -- v{VERSION}".encode("ascii")[:cols]
        padding = (cols - len(welcome)) // 2
        banner = bytearray()
        if padding:
            banner += EMPTY_ROW
            padding -= 1
        banner += b" " * padding
        banner += welcome
        return bytes(banner)

    def draw_status_bar(
        self,
        out: AppendBuffer,
        document: Document,
        cursor: Cursor,
        viewport: Viewport,
        status: StatusState,
    ) -> None:
        cols = viewport.visible_cols
        name = status.filename if status.filename is not None else NO_NAME
        left = f"# {name:.20} - {len(document)} lines".encode("utf-8", "replace")
        right = f"{cursor.row + 1}:{cursor.col + 1} {len(document)} ".encode("ascii")

        left = left[:cols]
        out.append(protocol.INVERT_ON)
        out.append(left)
        width = len(left)
        while width < cols:
            if cols - width == len(right):
                out.append(right)
                break
            out.append(b" ")
            width += 1
        out.append(protocol.ATTR_RESET)
        out.append(protocol.CRLF)

    def draw_message_bar(
        self, out: AppendBuffer, viewport: Viewport, status: StatusState
    ) -> None:
        out.append(protocol.ERASE_LINE)
        message = status.visible_message(self.config.message_timeout)
        if message:
            out.append(message.encode("utf-8", "replace")[: viewport.visible_cols])


__all__ = ["AppendBuffer", "Frame", "FrameComposer"]
