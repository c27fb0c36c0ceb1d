"""Cursor position in buffer coordinates."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(slots=True)
class Cursor:
    """Mutable ``(row, col)``; the render column is always derived, never kept."""

    row: int = 0
    col: int = 0

    def set(self, row: int, col: int) -> None:
        self.row = row
        self.col = col

    def as_tuple(self) -> Tuple[int, int]:
        return (self.row, self.col)
