from __future__ import annotations

from typing import Callable, List

import pytest

from lb_editor.keys import (
    ESCAPE,
    DecoderState,
    KeyDecoder,
    KeyInput,
    NamedKey,
    iter_keys,
    read_key,
)


def make_source(*chunks: bytes) -> Callable[[], bytes]:
    """Byte reader; ``b""`` entries stand for read timeouts."""

    pending: List[bytes] = []
    for chunk in chunks:
        if chunk:
            pending.extend(bytes([b]) for b in chunk)
        else:
            pending.append(b"")

    def read_byte() -> bytes:
        if not pending:
            raise AssertionError("decoder read past the scripted input")
        return pending.pop(0)

    return read_byte


def decode_all(data: bytes, count: int) -> list[KeyInput]:
    source = make_source(data)
    decoder = KeyDecoder()
    return [read_key(source, decoder) for _ in range(count)]


@pytest.mark.parametrize(
    ("sequence", "expected"),
    [
        (b"\x1b[A", NamedKey.ARROW_UP),
        (b"\x1b[B", NamedKey.ARROW_DOWN),
        (b"\x1b[C", NamedKey.ARROW_RIGHT),
        (b"\x1b[D", NamedKey.ARROW_LEFT),
        (b"\x1b[H", NamedKey.HOME),
        (b"\x1b[F", NamedKey.END),
        (b"\x1bOH", NamedKey.HOME),
        (b"\x1bOF", NamedKey.END),
        (b"\x1b[1~", NamedKey.HOME),
        (b"\x1b[7~", NamedKey.HOME),
        (b"\x1b[3~", NamedKey.DELETE),
        (b"\x1b[4~", NamedKey.END),
        (b"\x1b[8~", NamedKey.END),
        (b"\x1b[5~", NamedKey.PAGE_UP),
        (b"\x1b[6~", NamedKey.PAGE_DOWN),
    ],
)
def test_escape_sequences_map_to_named_keys(sequence: bytes, expected: NamedKey) -> None:
    assert decode_all(sequence, 1) == [KeyInput.named(expected)]


@pytest.mark.parametrize(
    "sequence",
    [b"\x1b[2~", b"\x1b[9~", b"\x1b[Z", b"\x1bOA", b"\x1bxy", b"\x1b[5x"],
)
def test_unrecognized_sequences_collapse_to_escape(sequence: bytes) -> None:
    assert decode_all(sequence, 1) == [ESCAPE]


def test_escape_then_timeout_returns_bare_escape() -> None:
    source = make_source(b"\x1b", b"")

    assert read_key(source) == ESCAPE


def test_timeout_after_bracket_returns_bare_escape() -> None:
    source = make_source(b"\x1b[", b"")

    assert read_key(source) == ESCAPE


def test_timeout_waiting_for_tilde_returns_bare_escape() -> None:
    source = make_source(b"\x1b[5", b"", b"q")
    decoder = KeyDecoder()

    assert read_key(source, decoder) == ESCAPE
    assert read_key(source, decoder) == KeyInput.byte(ord("q"))


def test_idle_timeouts_are_retried() -> None:
    source = make_source(b"", b"", b"a")

    assert read_key(source) == KeyInput.byte(ord("a"))


def test_recognized_sequence_consumes_only_its_bytes() -> None:
    keys = decode_all(b"\x1b[Ab", 2)

    assert keys == [KeyInput.named(NamedKey.ARROW_UP), KeyInput.byte(ord("b"))]


def test_unknown_prefix_swallows_two_bytes() -> None:
    keys = decode_all(b"\x1bxyz", 2)

    assert keys == [ESCAPE, KeyInput.byte(ord("z"))]


def test_control_bytes_pass_through_verbatim() -> None:
    keys = decode_all(b"\x7f\r\x11\t", 4)

    assert [key.code for key in keys] == [127, 13, 17, 9]
    assert [key.token for key in keys] == ["BACKSPACE", "ENTER", "ctrl+q", "ctrl+i"]


def test_decoder_state_machine_transitions() -> None:
    decoder = KeyDecoder()

    assert decoder.feed(0x1B) is None
    assert decoder.state is DecoderState.SAW_ESCAPE
    assert decoder.feed(ord("[")) is None
    assert decoder.state is DecoderState.SAW_BRACKET
    assert decoder.feed(ord("6")) is None
    assert decoder.state is DecoderState.SAW_BRACKET_DIGIT
    assert decoder.feed(ord("~")) == KeyInput.named(NamedKey.PAGE_DOWN)
    assert decoder.state is DecoderState.NORMAL


def test_timeout_while_idle_yields_nothing() -> None:
    decoder = KeyDecoder()

    assert decoder.timeout() is None
    assert not decoder.pending


def test_iter_keys_is_lazy() -> None:
    stream = iter_keys(make_source(b"hi\x1b[C"))

    first = [next(stream), next(stream), next(stream)]

    assert first == [
        KeyInput.byte(ord("h")),
        KeyInput.byte(ord("i")),
        KeyInput.named(NamedKey.ARROW_RIGHT),
    ]


def test_character_key_requires_byte_code() -> None:
    with pytest.raises(ValueError):
        KeyInput(key="CHAR")
