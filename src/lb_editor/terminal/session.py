"""Raw-mode terminal session with guaranteed restoration."""

from __future__ import annotations

import atexit
import errno
import os
import termios
from contextlib import AbstractContextManager, suppress
from typing import Any, List, Optional, Protocol

from lb_editor.runtime import telemetry

from . import protocol


class TerminalError(RuntimeError):
    """Raised when raw mode cannot be entered, left, or read from."""

    def __init__(self, message: str, *, cause: OSError | None = None) -> None:
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
        self.cause = cause


class TerminalIO(Protocol):
    """Byte-level surface the decoder, geometry probe, and controller use."""

    def read_byte(self) -> bytes:
        """Return one byte, or ``b""`` when the read timed out."""
        ...

    def write(self, data: bytes) -> int:
        """Write ``data`` in full and return the byte count."""
        ...


class RawTerminalSession(AbstractContextManager["RawTerminalSession"]):
    """Owns the controlling terminal while the editor runs.

    ``enable`` captures the current attributes and registers ``disable`` with
    :mod:`atexit`; ``disable`` is idempotent so the ``with`` block and the
    exit hook can both run without restoring twice.
    """

    def __init__(
        self,
        *,
        input_fd: int = 0,
        output_fd: int = 1,
        read_timeout_ds: int = 10,
    ) -> None:
        self.input_fd = input_fd
        self.output_fd = output_fd
        self.read_timeout_ds = read_timeout_ds
        self._original: Optional[List[Any]] = None
        self._atexit_registered = False

    @property
    def active(self) -> bool:
        return self._original is not None

    def enable(self) -> None:
        try:
            original = termios.tcgetattr(self.input_fd)
        except (termios.error, OSError) as exc:
            raise TerminalError("tcgetattr failed", cause=_as_os_error(exc)) from exc

        self._original = original
        if not self._atexit_registered:
            atexit.register(self.disable)
            self._atexit_registered = True

        raw = [*original[:6], list(original[6])]
        raw[0] &= ~(
            termios.BRKINT
            | termios.ICRNL
            | termios.INPCK
            | termios.ISTRIP
            | termios.IXON
        )
        raw[1] &= ~termios.OPOST
        raw[2] |= termios.CS8
        raw[3] &= ~(termios.ECHO | termios.ICANON | termios.IEXTEN | termios.ISIG)
        raw[6][termios.VMIN] = 0
        raw[6][termios.VTIME] = self.read_timeout_ds

        try:
            termios.tcsetattr(self.input_fd, termios.TCSAFLUSH, raw)
        except (termios.error, OSError) as exc:
            raise TerminalError("tcsetattr failed", cause=_as_os_error(exc)) from exc

        telemetry.record_event(
            "terminal.raw_enabled",
            data={"fd": self.input_fd, "vtime": self.read_timeout_ds},
        )

    def disable(self) -> None:
        if self._original is None:
            return
        original, self._original = self._original, None
        try:
            termios.tcsetattr(self.input_fd, termios.TCSAFLUSH, original)
        except (termios.error, OSError) as exc:
            raise TerminalError("tcsetattr failed", cause=_as_os_error(exc)) from exc

    def __enter__(self) -> "RawTerminalSession":
        self.enable()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.disable()
        return False

    def read_byte(self) -> bytes:
        try:
            return os.read(self.input_fd, 1)
        except OSError as exc:
            if exc.errno in (errno.EAGAIN, errno.EINTR):
                return b""
            raise TerminalError("read failed", cause=exc) from exc

    def write(self, data: bytes) -> int:
        view = memoryview(data)
        written = 0
        while written < len(view):
            written += os.write(self.output_fd, view[written:])
        return written

    def die(self) -> None:
        """Wipe the screen and restore cooked mode ahead of a fatal exit."""

        with suppress(OSError):
            self.write(protocol.clear_screen())
        self.disable()


def _as_os_error(exc: BaseException) -> OSError | None:
    if isinstance(exc, OSError):
        return exc
    args = getattr(exc, "args", ())
    if len(args) >= 2 and isinstance(args[0], int):
        return OSError(args[0], str(args[1]))
    return None


__all__ = ["RawTerminalSession", "TerminalError", "TerminalIO"]
