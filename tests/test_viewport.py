from __future__ import annotations

import pytest

from lb_editor.buffer import Cursor, Document
from lb_editor.view import Viewport, buffer_col_to_render_col, recompute_scroll


@pytest.mark.parametrize(
    ("col", "expected"),
    [(0, 0), (1, 4), (2, 5)],
)
def test_leading_tab_shifts_render_column(col: int, expected: int) -> None:
    assert buffer_col_to_render_col(b"\tx", col) == expected


def test_render_column_indexes_into_render() -> None:
    document = Document.from_lines([b"ab\tc\t\td"])
    line = document[0]

    for col, byte in enumerate(line.content):
        render_col = buffer_col_to_render_col(line.content, col)
        expected = 0x20 if byte == 0x09 else byte
        assert line.render[render_col] == expected
    assert buffer_col_to_render_col(line.content, len(line)) == len(line.render)


def test_render_column_is_monotonic() -> None:
    content = b"\ta\t\tbc\td"
    columns = [buffer_col_to_render_col(content, col) for col in range(len(content) + 1)]

    assert columns == sorted(columns)
    assert len(set(columns)) == len(columns)


@pytest.mark.parametrize("tab_width", [1, 4, 8])
def test_render_column_is_stable_across_calls(tab_width: int) -> None:
    content = b"\ta\t\tbc\td"

    for col in range(len(content) + 1):
        first = buffer_col_to_render_col(content, col, tab_width)
        assert all(
            buffer_col_to_render_col(content, col, tab_width) == first
            for _ in range(5)
        )


def test_recompute_scroll_is_idempotent() -> None:
    document = Document.from_lines([b"\t\tfar\tright"])
    cursor = Cursor(0, 5)
    viewport = Viewport(visible_rows=2, visible_cols=4)

    first = recompute_scroll(cursor, document, viewport)
    offsets = (viewport.row_offset, viewport.col_offset)

    assert recompute_scroll(cursor, document, viewport) == first
    assert (viewport.row_offset, viewport.col_offset) == offsets
    assert viewport.contains(cursor.row, first)


def test_scroll_minimal_jump_right() -> None:
    viewport = Viewport(visible_rows=5, visible_cols=10)

    viewport.scroll(0, 10)

    assert viewport.col_offset == 1
    assert viewport.contains(0, 10)


def test_scroll_minimal_jump_down_and_back_up() -> None:
    viewport = Viewport(visible_rows=5, visible_cols=10)

    viewport.scroll(7, 0)
    assert viewport.row_offset == 3

    viewport.scroll(1, 0)
    assert viewport.row_offset == 1


def test_scroll_leaves_visible_cursor_alone() -> None:
    viewport = Viewport(visible_rows=5, visible_cols=10, row_offset=2, col_offset=3)

    viewport.scroll(4, 7)

    assert (viewport.row_offset, viewport.col_offset) == (2, 3)


def test_recompute_scroll_uses_render_column() -> None:
    document = Document.from_lines([b"\t\t\tx"])
    viewport = Viewport(visible_rows=3, visible_cols=8)

    render_col = recompute_scroll(Cursor(0, 3), document, viewport)

    assert render_col == 12
    assert viewport.col_offset == 5
    assert viewport.screen_position(0, render_col) == (1, 8)


def test_recompute_scroll_on_virtual_row() -> None:
    document = Document.from_lines([b"abc"])
    viewport = Viewport(visible_rows=1, visible_cols=8)

    render_col = recompute_scroll(Cursor(1, 0), document, viewport)

    assert render_col == 0
    assert viewport.row_offset == 1


def test_viewport_rejects_empty_extent() -> None:
    with pytest.raises(ValueError):
        Viewport(visible_rows=0, visible_cols=10)
