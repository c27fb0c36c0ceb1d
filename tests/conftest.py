from __future__ import annotations

from typing import Callable, List

import pytest


class FakeTerminal:
    """Scripted byte source plus a record of every write."""

    def __init__(self, incoming: bytes = b"") -> None:
        self.incoming = bytearray(incoming)
        self.writes: List[bytes] = []

    def read_byte(self) -> bytes:
        if not self.incoming:
            return b""
        byte = bytes(self.incoming[:1])
        del self.incoming[:1]
        return byte

    def write(self, data: bytes) -> int:
        self.writes.append(bytes(data))
        return len(data)

    @property
    def output(self) -> bytes:
        return b"".join(self.writes)


@pytest.fixture
def make_terminal() -> Callable[..., FakeTerminal]:
    return FakeTerminal
