"""Window size discovery with a cursor-report fallback."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import Callable, Optional

from lb_editor.runtime import telemetry

from . import protocol
from .session import TerminalIO

REPORT_LIMIT = 32
_REPORT_PATTERN = re.compile(rb"^\x1b\[(\d+);(\d+)$")


class GeometryError(RuntimeError):
    """Raised when neither the size query nor the probe yields a size."""


@dataclass(frozen=True, slots=True)
class WindowSize:
    rows: int
    cols: int


SizeQuery = Callable[[], os.terminal_size]


def parse_cursor_report(report: bytes) -> WindowSize:
    """Parse ``ESC [ rows ; cols`` (terminator already stripped)."""

    match = _REPORT_PATTERN.match(report)
    if match is None:
        raise GeometryError(f"Malformed cursor position report {report!r}")
    return WindowSize(rows=int(match.group(1)), cols=int(match.group(2)))


def query_cursor_position(terminal: TerminalIO) -> WindowSize:
    if terminal.write(protocol.CURSOR_POSITION_QUERY) != len(
        protocol.CURSOR_POSITION_QUERY
    ):
        raise GeometryError("Short write while requesting cursor position")

    report = bytearray()
    while len(report) < REPORT_LIMIT - 1:
        byte = terminal.read_byte()
        if not byte or byte == b"R":
            break
        report += byte
    return parse_cursor_report(bytes(report))


def resolve_window_size(
    terminal: TerminalIO,
    *,
    query: Optional[SizeQuery] = None,
    output_fd: int = 1,
) -> WindowSize:
    """Return the terminal extent, probing the cursor when the query fails."""

    size_query = query or (lambda: os.get_terminal_size(output_fd))
    try:
        size = size_query()
    except OSError:
        size = None

    if size is not None and size.columns > 0:
        return WindowSize(rows=size.lines, cols=size.columns)

    telemetry.record_event("terminal.geometry_fallback", level="debug")
    if terminal.write(protocol.CURSOR_FAR_CORNER) != len(protocol.CURSOR_FAR_CORNER):
        raise GeometryError("Short write while probing window size")
    return query_cursor_position(terminal)


__all__ = [
    "GeometryError",
    "WindowSize",
    "parse_cursor_report",
    "query_cursor_position",
    "resolve_window_size",
]
