"""Viewport engine, status line state, and frame composition."""

from .frame import AppendBuffer, Frame, FrameComposer
from .status import StatusMessage, StatusState
from .viewport import (
    Viewport,
    buffer_col_to_render_col,
    recompute_scroll,
    render_col_for,
)

__all__ = [
    "AppendBuffer",
    "Frame",
    "FrameComposer",
    "StatusMessage",
    "StatusState",
    "Viewport",
    "buffer_col_to_render_col",
    "recompute_scroll",
    "render_col_for",
]
