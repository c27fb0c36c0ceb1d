"""ANSI/VT100 control sequences emitted by the editor."""

from __future__ import annotations

HIDE_CURSOR = b"\x1b[?25l"
SHOW_CURSOR = b"\x1b[?25h"
CURSOR_HOME = b"\x1b[H"
ERASE_LINE = b"\x1b[K"
ERASE_SCREEN = b"\x1b[2J"
INVERT_ON = b"\x1b[7m"
ATTR_RESET = b"\x1b[m"
CURSOR_POSITION_QUERY = b"\x1b[6n"
# Terminals clamp the move to the bottom-right corner.
CURSOR_FAR_CORNER = b"\x1b[999C\x1b[999B"
CRLF = b"\r\n"


def cursor_to(row: int, col: int) -> bytes:
    """Absolute cursor position; ``row`` and ``col`` are 1-indexed."""

    return b"\x1b[%d;%dH" % (row, col)


def clear_screen() -> bytes:
    return ERASE_SCREEN + CURSOR_HOME


__all__ = [
    "HIDE_CURSOR",
    "SHOW_CURSOR",
    "CURSOR_HOME",
    "ERASE_LINE",
    "ERASE_SCREEN",
    "INVERT_ON",
    "ATTR_RESET",
    "CURSOR_POSITION_QUERY",
    "CURSOR_FAR_CORNER",
    "CRLF",
    "cursor_to",
    "clear_screen",
]
