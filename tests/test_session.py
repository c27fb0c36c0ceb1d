from __future__ import annotations

import errno
import os
import termios
from typing import Any, List

import pytest

from lb_editor.terminal import RawTerminalSession, TerminalError, protocol
from lb_editor.terminal import session as session_module


def make_attrs() -> List[Any]:
    return [
        termios.BRKINT | termios.ICRNL | termios.IXON,
        termios.OPOST,
        0,
        termios.ECHO | termios.ICANON | termios.ISIG | termios.IEXTEN,
        38400,
        38400,
        [0] * 32,
    ]


@pytest.fixture
def fake_termios(monkeypatch):
    calls: dict[str, list] = {"set": [], "atexit": []}
    original = make_attrs()

    monkeypatch.setattr(termios, "tcgetattr", lambda fd: original)
    monkeypatch.setattr(
        termios, "tcsetattr", lambda fd, when, attrs: calls["set"].append(attrs)
    )
    monkeypatch.setattr(
        session_module.atexit, "register", lambda fn: calls["atexit"].append(fn)
    )
    calls["original"] = original
    return calls


def test_enable_switches_to_raw_mode(fake_termios) -> None:
    session = RawTerminalSession(read_timeout_ds=7)

    session.enable()

    raw = fake_termios["set"][0]
    assert raw[0] & (termios.BRKINT | termios.ICRNL | termios.IXON) == 0
    assert raw[1] & termios.OPOST == 0
    assert raw[2] & termios.CS8 == termios.CS8
    assert raw[3] & (termios.ECHO | termios.ICANON | termios.ISIG) == 0
    assert raw[6][termios.VMIN] == 0
    assert raw[6][termios.VTIME] == 7
    # The captured attributes are left untouched for restoration.
    assert fake_termios["original"][6][termios.VTIME] == 0
    assert session.active


def test_disable_restores_original_once(fake_termios) -> None:
    session = RawTerminalSession()

    with session:
        assert session.active

    assert fake_termios["set"][-1] is fake_termios["original"]
    session.disable()
    assert len(fake_termios["set"]) == 2
    assert not session.active


def test_exit_hook_registered_once(fake_termios) -> None:
    session = RawTerminalSession()

    session.enable()
    session.disable()
    session.enable()

    assert fake_termios["atexit"] == [session.disable]


def test_enable_without_tty_raises(monkeypatch) -> None:
    def failing(fd: int) -> list:
        raise termios.error(errno.ENOTTY, "Inappropriate ioctl for device")

    monkeypatch.setattr(termios, "tcgetattr", failing)

    with pytest.raises(TerminalError) as excinfo:
        RawTerminalSession().enable()

    assert "tcgetattr" in str(excinfo.value)
    assert excinfo.value.cause is not None
    assert excinfo.value.cause.errno == errno.ENOTTY


def test_read_byte_reads_one_byte_from_pipe() -> None:
    read_fd, write_fd = os.pipe()
    try:
        os.write(write_fd, b"qz")
        session = RawTerminalSession(input_fd=read_fd)

        assert session.read_byte() == b"q"
        assert session.read_byte() == b"z"
    finally:
        os.close(read_fd)
        os.close(write_fd)


@pytest.mark.parametrize("code", [errno.EAGAIN, errno.EINTR])
def test_read_byte_treats_retryable_errors_as_timeout(monkeypatch, code: int) -> None:
    def failing(fd: int, size: int) -> bytes:
        raise OSError(code, os.strerror(code))

    monkeypatch.setattr(session_module.os, "read", failing)

    assert RawTerminalSession().read_byte() == b""


def test_read_byte_other_errors_are_fatal(monkeypatch) -> None:
    def failing(fd: int, size: int) -> bytes:
        raise OSError(errno.EIO, os.strerror(errno.EIO))

    monkeypatch.setattr(session_module.os, "read", failing)

    with pytest.raises(TerminalError):
        RawTerminalSession().read_byte()


def test_write_retries_partial_writes(monkeypatch) -> None:
    chunks: list[bytes] = []

    def partial(fd: int, data) -> int:
        chunk = bytes(data[:2])
        chunks.append(chunk)
        return len(chunk)

    monkeypatch.setattr(session_module.os, "write", partial)

    assert RawTerminalSession().write(b"hello") == 5
    assert chunks == [b"he", b"ll", b"o"]


def test_die_clears_screen_and_restores(fake_termios) -> None:
    read_fd, write_fd = os.pipe()
    try:
        session = RawTerminalSession(output_fd=write_fd)
        session.enable()

        session.die()

        assert os.read(read_fd, 64) == protocol.clear_screen()
    finally:
        os.close(read_fd)
        os.close(write_fd)
    assert fake_termios["set"][-1] is fake_termios["original"]
    assert not session.active
