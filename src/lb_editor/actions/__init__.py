"""Editing verbs bound to keys by the default keymap."""

from .core import noop_action, quit_editor
from .cursor import (
    move_down,
    move_end,
    move_home,
    move_left,
    move_right,
    move_up,
    page_down,
    page_up,
)
from .edit import delete_backward, delete_forward, insert_byte, insert_newline
from .file import save

__all__ = [
    "noop_action",
    "quit_editor",
    "move_down",
    "move_end",
    "move_home",
    "move_left",
    "move_right",
    "move_up",
    "page_down",
    "page_up",
    "delete_backward",
    "delete_forward",
    "insert_byte",
    "insert_newline",
    "save",
]
