"""Filename and transient message shown below the text area."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable, Optional

Clock = Callable[[], float]

MESSAGE_LIMIT = 80


@dataclass(slots=True)
class StatusMessage:
    text: str = ""
    timestamp: float = 0.0

    def is_visible(self, now: float, timeout: float) -> bool:
        return bool(self.text) and now - self.timestamp < timeout


@dataclass(slots=True)
class StatusState:
    filename: Optional[str] = None
    message: StatusMessage = field(default_factory=StatusMessage)
    clock: Clock = time.time

    def set_message(self, text: str, *args: object) -> None:
        """printf-style message, capped like a fixed 80-byte buffer."""

        formatted = text % args if args else text
        self.message = StatusMessage(
            text=formatted[: MESSAGE_LIMIT - 1], timestamp=self.clock()
        )

    def visible_message(self, timeout: float) -> str:
        if self.message.is_visible(self.clock(), timeout):
            return self.message.text
        return ""


__all__ = ["Clock", "StatusMessage", "StatusState"]
