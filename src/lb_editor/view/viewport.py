"""Scroll offsets and buffer/render column conversion."""

from __future__ import annotations

from dataclasses import dataclass

from lb_editor.buffer import DEFAULT_TAB_WIDTH, Cursor, Document

TAB = 0x09


def buffer_col_to_render_col(
    content: bytes, col: int, tab_width: int = DEFAULT_TAB_WIDTH
) -> int:
    """Screen column of buffer column ``col`` once tabs are expanded."""

    render_col = 0
    for byte in content[:col]:
        if byte == TAB:
            render_col += (tab_width - 1) - (render_col % tab_width)
        render_col += 1
    return render_col


@dataclass(slots=True)
class Viewport:
    """First visible row/render column plus the visible extent."""

    visible_rows: int
    visible_cols: int
    row_offset: int = 0
    col_offset: int = 0

    def __post_init__(self) -> None:
        if self.visible_rows < 1 or self.visible_cols < 1:
            raise ValueError("viewport needs at least one visible row and column")

    def scroll(self, row: int, render_col: int) -> None:
        """Shift the offsets by the minimum needed to show ``(row, render_col)``."""

        if row < self.row_offset:
            self.row_offset = row
        if row >= self.row_offset + self.visible_rows:
            self.row_offset = row - self.visible_rows + 1

        if render_col < self.col_offset:
            self.col_offset = render_col
        if render_col >= self.col_offset + self.visible_cols:
            self.col_offset = render_col - self.visible_cols + 1

    def contains(self, row: int, render_col: int) -> bool:
        return (
            self.row_offset <= row < self.row_offset + self.visible_rows
            and self.col_offset <= render_col < self.col_offset + self.visible_cols
        )

    def screen_position(self, row: int, render_col: int) -> tuple[int, int]:
        """1-indexed terminal coordinates for a visible buffer position."""

        return (row - self.row_offset + 1, render_col - self.col_offset + 1)


def render_col_for(cursor: Cursor, document: Document) -> int:
    if cursor.row < len(document):
        return buffer_col_to_render_col(
            document[cursor.row].content, cursor.col, document.tab_width
        )
    return 0


def recompute_scroll(cursor: Cursor, document: Document, viewport: Viewport) -> int:
    """Derive the cursor's render column and scroll it into view."""

    render_col = render_col_for(cursor, document)
    viewport.scroll(cursor.row, render_col)
    return render_col


__all__ = [
    "Viewport",
    "buffer_col_to_render_col",
    "recompute_scroll",
    "render_col_for",
]
