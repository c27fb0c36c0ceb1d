"""Key events and the raw-byte decoder."""

from .decoder import DecodeAmbiguity, DecoderState, KeyDecoder, iter_keys, read_key
from .models import (
    BACKSPACE,
    CHAR,
    ENTER,
    ESCAPE,
    KeyInput,
    NamedKey,
    byte_token,
    ctrl,
)

__all__ = [
    "BACKSPACE",
    "CHAR",
    "ENTER",
    "ESCAPE",
    "KeyInput",
    "NamedKey",
    "byte_token",
    "ctrl",
    "DecodeAmbiguity",
    "DecoderState",
    "KeyDecoder",
    "iter_keys",
    "read_key",
]
