"""Logical key events produced by the input decoder."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

BACKSPACE = 0x7F
ENTER = 0x0D
ESCAPE_BYTE = 0x1B

CHAR = "CHAR"


class NamedKey(str, Enum):
    """Keys decoded from escape sequences (plus the bare Escape)."""

    ESCAPE = "ESC"
    ARROW_UP = "ARROW_UP"
    ARROW_DOWN = "ARROW_DOWN"
    ARROW_LEFT = "ARROW_LEFT"
    ARROW_RIGHT = "ARROW_RIGHT"
    HOME = "HOME"
    END = "END"
    PAGE_UP = "PAGE_UP"
    PAGE_DOWN = "PAGE_DOWN"
    DELETE = "DELETE"


def ctrl(letter: str) -> int:
    return ord(letter.upper()) & 0x1F


def byte_token(code: int) -> str:
    """Keymap token for a raw byte: ``"a"``, ``"ctrl+q"``, ``"BACKSPACE"``..."""

    if code == BACKSPACE:
        return "BACKSPACE"
    if code == ENTER:
        return "ENTER"
    if code < 0x20:
        return f"ctrl+{chr(code | 0x60)}"
    return chr(code)


@dataclass(frozen=True, slots=True)
class KeyInput:
    """One decoded key: either a named key or a verbatim byte."""

    key: str
    code: Optional[int] = None

    def __post_init__(self) -> None:
        if self.key == CHAR and (self.code is None or not 0 <= self.code <= 0xFF):
            raise ValueError("character keys carry a single byte code")

    @classmethod
    def byte(cls, code: int) -> "KeyInput":
        return cls(key=CHAR, code=code)

    @classmethod
    def named(cls, key: NamedKey) -> "KeyInput":
        return cls(key=key.value)

    @property
    def is_char(self) -> bool:
        return self.key == CHAR

    @property
    def token(self) -> str:
        if self.is_char:
            assert self.code is not None
            return byte_token(self.code)
        return self.key


ESCAPE = KeyInput.named(NamedKey.ESCAPE)


__all__ = [
    "BACKSPACE",
    "CHAR",
    "ENTER",
    "ESCAPE",
    "ESCAPE_BYTE",
    "KeyInput",
    "NamedKey",
    "byte_token",
    "ctrl",
]
