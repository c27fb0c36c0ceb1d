"""Validation helpers shared across buffer services."""

from __future__ import annotations

from typing import Sized

from .state import Cursor


class BufferValidationError(RuntimeError):
    """Raised when callers pass a row outside ``[0, line_count]``."""

    def __init__(self, message: str, *, cursor: Cursor | None = None) -> None:
        super().__init__(message)
        self.cursor = cursor


def ensure_row(document: Sized, row: int) -> int:
    if row < 0 or row > len(document):
        raise BufferValidationError("Row out of range", cursor=Cursor(row, 0))
    return row


def clamp_col(document, cursor: Cursor) -> Cursor:
    """Pull ``cursor.col`` back inside its line after a vertical move."""

    length = document.line_length(cursor.row)
    if cursor.col > length:
        cursor.col = length
    return cursor
