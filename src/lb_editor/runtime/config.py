"""Editor configuration and constants."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from .telemetry import ENV_PREFIX

VERSION = "0.0.1"

KeyOverrides = Tuple[Tuple[str, str], ...]


def parse_key_overrides(spec: str) -> KeyOverrides:
    """Parse ``"quit=ctrl+x,save=ctrl+w"`` into ``(binding_id, token)`` pairs."""

    pairs = []
    for item in spec.split(","):
        item = item.strip()
        if not item:
            continue
        binding_id, sep, token = item.partition("=")
        if not sep or not binding_id.strip() or not token.strip():
            raise ValueError(f"key override '{item}' must look like id=token")
        pairs.append((binding_id.strip(), token.strip()))
    return tuple(pairs)


@dataclass(frozen=True, slots=True)
class EditorConfig:
    """Tunables shared by the decoder, document, and frame composer."""

    tab_width: int = 4
    message_timeout: float = 5.0
    # Raw-mode read timeout in tenths of a second (termios VTIME).
    read_timeout_ds: int = 10
    # Status bar + message bar.
    status_rows: int = 2
    # Replacement tokens for default bindings, by binding id.
    key_overrides: KeyOverrides = ()

    def __post_init__(self) -> None:
        if self.tab_width <= 0:
            raise ValueError("tab_width must be positive")
        if self.message_timeout <= 0:
            raise ValueError("message_timeout must be positive")
        if not 0 < self.read_timeout_ds <= 255:
            raise ValueError("read_timeout_ds must be within 1..255")
        if self.status_rows < 0:
            raise ValueError("status_rows cannot be negative")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EditorConfig":
        env = os.environ if environ is None else environ

        def lookup(name: str) -> Optional[str]:
            value = env.get(f"{ENV_PREFIX}{name}")
            return value.strip() if value else None

        defaults = cls()
        tab_width = lookup("TAB_WIDTH")
        message_timeout = lookup("MESSAGE_TIMEOUT")
        read_timeout = lookup("READ_TIMEOUT")
        keys = lookup("KEYS")
        return cls(
            tab_width=int(tab_width) if tab_width else defaults.tab_width,
            message_timeout=(
                float(message_timeout) if message_timeout else defaults.message_timeout
            ),
            read_timeout_ds=(
                int(read_timeout) if read_timeout else defaults.read_timeout_ds
            ),
            key_overrides=parse_key_overrides(keys) if keys else (),
        )


__all__ = ["EditorConfig", "KeyOverrides", "VERSION", "parse_key_overrides"]
