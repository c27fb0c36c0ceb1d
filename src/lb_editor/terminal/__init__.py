"""Terminal access: raw mode, window geometry, and control sequences."""

from . import protocol
from .geometry import (
    GeometryError,
    WindowSize,
    parse_cursor_report,
    query_cursor_position,
    resolve_window_size,
)
from .session import RawTerminalSession, TerminalError, TerminalIO

__all__ = [
    "protocol",
    "GeometryError",
    "WindowSize",
    "parse_cursor_report",
    "query_cursor_position",
    "resolve_window_size",
    "RawTerminalSession",
    "TerminalError",
    "TerminalIO",
]
