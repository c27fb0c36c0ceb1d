"""Byte stream to key event decoding.

The decoder is a small state machine fed one byte at a time, so it can be
exercised without a terminal:

``NORMAL`` --ESC--> ``SAW_ESCAPE`` --[--> ``SAW_BRACKET`` --digit-->
``SAW_BRACKET_DIGIT`` --~--> key

``SAW_ESCAPE`` --O--> ``SAW_O`` --letter--> key

A read timeout while a sequence is pending, or any byte that does not fit a
known sequence, degrades to a bare Escape.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Iterator, Mapping, Optional

from lb_editor.runtime import telemetry

from .models import ESCAPE, ESCAPE_BYTE, KeyInput, NamedKey

ByteSource = Callable[[], bytes]

CSI_LETTERS: Mapping[int, NamedKey] = {
    ord("A"): NamedKey.ARROW_UP,
    ord("B"): NamedKey.ARROW_DOWN,
    ord("C"): NamedKey.ARROW_RIGHT,
    ord("D"): NamedKey.ARROW_LEFT,
    ord("H"): NamedKey.HOME,
    ord("F"): NamedKey.END,
}
CSI_TILDE_DIGITS: Mapping[int, NamedKey] = {
    ord("1"): NamedKey.HOME,
    ord("3"): NamedKey.DELETE,
    ord("4"): NamedKey.END,
    ord("5"): NamedKey.PAGE_UP,
    ord("6"): NamedKey.PAGE_DOWN,
    ord("7"): NamedKey.HOME,
    ord("8"): NamedKey.END,
}
SS3_LETTERS: Mapping[int, NamedKey] = {
    ord("H"): NamedKey.HOME,
    ord("F"): NamedKey.END,
}


class DecodeAmbiguity(RuntimeError):
    """An escape sequence timed out or did not match a known key."""

    def __init__(self, message: str, *, sequence: bytes = b"") -> None:
        super().__init__(message)
        self.sequence = sequence


class DecoderState(str, Enum):
    NORMAL = "normal"
    SAW_ESCAPE = "saw_escape"
    SAW_BRACKET = "saw_bracket"
    SAW_BRACKET_DIGIT = "saw_bracket_digit"
    SAW_O = "saw_o"
    SAW_PREFIX = "saw_prefix"


class KeyDecoder:
    """Incremental decoder; ``feed`` returns a key once one is complete."""

    def __init__(self) -> None:
        self.state = DecoderState.NORMAL
        self._sequence = bytearray()

    @property
    def pending(self) -> bool:
        return self.state is not DecoderState.NORMAL

    def reset(self) -> None:
        self.state = DecoderState.NORMAL
        self._sequence.clear()

    def feed(self, byte: int) -> Optional[KeyInput]:
        try:
            return self._step(byte)
        except DecodeAmbiguity as exc:
            telemetry.record_event(
                "keys.decode_ambiguity",
                level="debug",
                data={"reason": str(exc), "sequence": exc.sequence.hex()},
            )
            self.reset()
            return ESCAPE

    def timeout(self) -> Optional[KeyInput]:
        """Resolve a read timeout: bare Escape mid-sequence, else nothing."""

        if not self.pending:
            return None
        sequence = bytes(self._sequence)
        self.reset()
        telemetry.record_event(
            "keys.decode_ambiguity",
            level="debug",
            data={"reason": "timeout", "sequence": sequence.hex()},
        )
        return ESCAPE

    def _step(self, byte: int) -> Optional[KeyInput]:
        state = self.state
        if state is DecoderState.NORMAL:
            if byte == ESCAPE_BYTE:
                self.state = DecoderState.SAW_ESCAPE
                self._sequence.append(byte)
                return None
            return KeyInput.byte(byte)

        self._sequence.append(byte)
        if state is DecoderState.SAW_ESCAPE:
            if byte == ord("["):
                self.state = DecoderState.SAW_BRACKET
                return None
            if byte == ord("O"):
                self.state = DecoderState.SAW_O
                return None
            # Two bytes always follow the Escape before giving up.
            self.state = DecoderState.SAW_PREFIX
            return None

        if state is DecoderState.SAW_PREFIX:
            raise DecodeAmbiguity(
                "unknown escape prefix", sequence=bytes(self._sequence)
            )

        if state is DecoderState.SAW_BRACKET:
            if ord("0") <= byte <= ord("9"):
                self.state = DecoderState.SAW_BRACKET_DIGIT
                return None
            return self._finish(CSI_LETTERS.get(byte))

        if state is DecoderState.SAW_BRACKET_DIGIT:
            if byte != ord("~"):
                raise DecodeAmbiguity(
                    "expected '~' terminator", sequence=bytes(self._sequence)
                )
            return self._finish(CSI_TILDE_DIGITS.get(self._sequence[-2]))

        return self._finish(SS3_LETTERS.get(byte))

    def _finish(self, key: Optional[NamedKey]) -> KeyInput:
        if key is None:
            raise DecodeAmbiguity("unmapped sequence", sequence=bytes(self._sequence))
        self.reset()
        return KeyInput.named(key)


def read_key(read_byte: ByteSource, decoder: Optional[KeyDecoder] = None) -> KeyInput:
    """Block until one key is decoded.

    ``read_byte`` returns ``b""`` on a read timeout. While idle a timeout
    simply retries; mid-sequence it produces a bare Escape.
    """

    machine = decoder or KeyDecoder()
    while True:
        chunk = read_byte()
        if not chunk:
            key = machine.timeout()
        else:
            key = machine.feed(chunk[0])
        if key is not None:
            return key


def iter_keys(read_byte: ByteSource) -> Iterator[KeyInput]:
    """Lazy, endless stream of keys from ``read_byte``."""

    decoder = KeyDecoder()
    while True:
        yield read_key(read_byte, decoder)


__all__ = [
    "ByteSource",
    "DecodeAmbiguity",
    "DecoderState",
    "KeyDecoder",
    "iter_keys",
    "read_key",
]
