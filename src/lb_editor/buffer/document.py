"""Line storage with tab-expanded render projections."""

from __future__ import annotations

from typing import Iterable, Iterator, List, Tuple

from .state import Cursor
from .validation import ensure_row

TAB = 0x09
SPACE = 0x20
NEWLINE = b"\n"
DEFAULT_TAB_WIDTH = 4


def render_bytes(
    content: bytes | bytearray, tab_width: int = DEFAULT_TAB_WIDTH
) -> bytes:
    """Expand every tab so the column after it is a multiple of ``tab_width``."""

    if TAB not in content:
        return bytes(content)
    out = bytearray()
    for byte in content:
        if byte == TAB:
            out.append(SPACE)
            while len(out) % tab_width:
                out.append(SPACE)
        else:
            out.append(byte)
    return bytes(out)


class Line:
    """One row of text: raw ``content`` plus its derived ``render`` form.

    Every mutator regenerates ``render`` before returning, so readers never
    see the two out of step.
    """

    __slots__ = ("_content", "_render", "tab_width")

    def __init__(
        self, content: bytes | bytearray = b"", *, tab_width: int = DEFAULT_TAB_WIDTH
    ) -> None:
        self.tab_width = tab_width
        self._content = bytearray(content)
        self._render = b""
        self._update_render()

    def __repr__(self) -> str:
        return f"Line({bytes(self._content)!r})"

    def __len__(self) -> int:
        return len(self._content)

    @property
    def content(self) -> bytes:
        return bytes(self._content)

    @property
    def render(self) -> bytes:
        return self._render

    def insert(self, at: int, byte: int) -> int:
        """Insert ``byte`` at ``at`` (clamped to the line) and return the index."""

        if at < 0 or at > len(self._content):
            at = len(self._content)
        self._content.insert(at, byte)
        self._update_render()
        return at

    def delete(self, at: int) -> None:
        if 0 <= at < len(self._content):
            del self._content[at]
            self._update_render()

    def extend(self, data: bytes | bytearray) -> None:
        self._content.extend(data)
        self._update_render()

    def split(self, at: int) -> bytes:
        """Cut the line at ``at`` and return the removed tail."""

        at = max(0, min(at, len(self._content)))
        tail = bytes(self._content[at:])
        del self._content[at:]
        self._update_render()
        return tail

    def _update_render(self) -> None:
        self._render = render_bytes(self._content, self.tab_width)


class Document:
    """Ordered lines; row ``len(document)`` is the virtual append row."""

    def __init__(self, *, tab_width: int = DEFAULT_TAB_WIDTH) -> None:
        self.tab_width = tab_width
        self._lines: List[Line] = []

    @classmethod
    def from_lines(
        cls, lines: Iterable[bytes], *, tab_width: int = DEFAULT_TAB_WIDTH
    ) -> "Document":
        document = cls(tab_width=tab_width)
        for data in lines:
            document.append_line(data)
        return document

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[Line]:
        return iter(self._lines)

    def __getitem__(self, row: int) -> Line:
        return self._lines[row]

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def line_length(self, row: int) -> int:
        """Content length of ``row``; the virtual append row has length 0."""

        if 0 <= row < len(self._lines):
            return len(self._lines[row])
        return 0

    def append_line(self, data: bytes = b"") -> Line:
        line = Line(data, tab_width=self.tab_width)
        self._lines.append(line)
        return line

    def insert_char(self, row: int, col: int, byte: int) -> int:
        """Insert one byte; returns the column it landed in after clamping."""

        ensure_row(self, row)
        if row == len(self._lines):
            self.append_line(b"")
        return self._lines[row].insert(col, byte)

    def insert_newline(self, row: int, col: int) -> None:
        ensure_row(self, row)
        if row == len(self._lines):
            self.append_line(b"")
            return
        tail = self._lines[row].split(col)
        self._lines.insert(row + 1, Line(tail, tab_width=self.tab_width))

    def delete_char(self, row: int, col: int) -> Cursor:
        """Remove the byte before ``col``; at column 0 join with the line above.

        Returns where the cursor ends up.
        """

        ensure_row(self, row)
        if row == len(self._lines) or (row == 0 and col == 0):
            return Cursor(row, col)
        line = self._lines[row]
        col = min(col, len(line))
        if col > 0:
            line.delete(col - 1)
            return Cursor(row, col - 1)

        above = self._lines[row - 1]
        joined_at = len(above)
        above.extend(line.content)
        del self._lines[row]
        return Cursor(row - 1, joined_at)

    def to_flat_bytes(self) -> Tuple[bytes, int]:
        """Every line followed by a newline, the last one included."""

        data = b"".join(line.content + NEWLINE for line in self._lines)
        return data, len(data)


__all__ = ["Document", "Line", "render_bytes", "DEFAULT_TAB_WIDTH"]
