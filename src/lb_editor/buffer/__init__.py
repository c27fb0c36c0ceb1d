"""Document model: lines, render projection, and cursor."""

from .document import DEFAULT_TAB_WIDTH, Document, Line, render_bytes
from .state import Cursor
from .validation import BufferValidationError, clamp_col, ensure_row

__all__ = [
    "DEFAULT_TAB_WIDTH",
    "Document",
    "Line",
    "render_bytes",
    "Cursor",
    "BufferValidationError",
    "clamp_col",
    "ensure_row",
]
