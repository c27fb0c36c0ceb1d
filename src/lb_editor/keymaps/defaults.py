"""Built-in key bindings."""

from __future__ import annotations

import dataclasses
from typing import Mapping

from lb_editor.actions import core as core_actions
from lb_editor.actions import cursor as cursor_actions
from lb_editor.actions import edit as edit_actions
from lb_editor.actions import file as file_actions
from lb_editor.keys import NamedKey

from .models import ActionRef, Binding
from .registry import KeymapRegistry

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef(
        id="session.quit",
        handler=core_actions.quit_editor,
        description="Clear the screen and exit",
    ),
    ActionRef(
        id="core.noop",
        handler=core_actions.noop_action,
        description="Do nothing (the frame is redrawn anyway)",
    ),
    ActionRef(id="file.save", handler=file_actions.save, description="Write to disk"),
    ActionRef(id="cursor.left", handler=cursor_actions.move_left),
    ActionRef(id="cursor.right", handler=cursor_actions.move_right),
    ActionRef(id="cursor.up", handler=cursor_actions.move_up),
    ActionRef(id="cursor.down", handler=cursor_actions.move_down),
    ActionRef(
        id="cursor.home",
        handler=cursor_actions.move_home,
        description="Start of line",
    ),
    ActionRef(
        id="cursor.end",
        handler=cursor_actions.move_end,
        description="End of line",
    ),
    ActionRef(
        id="cursor.page_up",
        handler=cursor_actions.page_up,
        description="Scroll one screen up",
    ),
    ActionRef(
        id="cursor.page_down",
        handler=cursor_actions.page_down,
        description="Scroll one screen down",
    ),
    ActionRef(
        id="edit.newline",
        handler=edit_actions.insert_newline,
        description="Split the line at the cursor",
    ),
    ActionRef(
        id="edit.delete_backward",
        handler=edit_actions.delete_backward,
        description="Delete the byte before the cursor",
    ),
    ActionRef(
        id="edit.delete_forward",
        handler=edit_actions.delete_forward,
        description="Delete the byte under the cursor",
    ),
)

DEFAULT_BINDINGS: tuple[Binding, ...] = (
    Binding(id="quit", token="ctrl+q", action_id="session.quit"),
    Binding(id="save", token="ctrl+s", action_id="file.save"),
    Binding(id="redraw", token="ctrl+l", action_id="core.noop"),
    Binding(id="escape", token=NamedKey.ESCAPE.value, action_id="core.noop"),
    Binding(id="arrow_left", token=NamedKey.ARROW_LEFT.value, action_id="cursor.left"),
    Binding(
        id="arrow_right", token=NamedKey.ARROW_RIGHT.value, action_id="cursor.right"
    ),
    Binding(id="arrow_up", token=NamedKey.ARROW_UP.value, action_id="cursor.up"),
    Binding(id="arrow_down", token=NamedKey.ARROW_DOWN.value, action_id="cursor.down"),
    Binding(id="home", token=NamedKey.HOME.value, action_id="cursor.home"),
    Binding(id="home_ctrl", token="ctrl+a", action_id="cursor.home"),
    Binding(id="end", token=NamedKey.END.value, action_id="cursor.end"),
    Binding(id="end_ctrl", token="ctrl+e", action_id="cursor.end"),
    Binding(id="page_up", token=NamedKey.PAGE_UP.value, action_id="cursor.page_up"),
    Binding(
        id="page_down", token=NamedKey.PAGE_DOWN.value, action_id="cursor.page_down"
    ),
    Binding(id="enter", token="ENTER", action_id="edit.newline"),
    Binding(id="backspace", token="BACKSPACE", action_id="edit.delete_backward"),
    Binding(id="backspace_ctrl", token="ctrl+h", action_id="edit.delete_backward"),
    Binding(
        id="delete", token=NamedKey.DELETE.value, action_id="edit.delete_forward"
    ),
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    overrides: Mapping[str, str] | None = None,
) -> KeymapRegistry:
    """Populate ``registry`` with the stock actions and bindings.

    ``overrides`` maps a binding id (``"quit"``, ``"save"``...) to a
    replacement token; an id that names no default binding is a
    ``ValueError``.
    """

    remapped = dict(overrides or {})
    unknown = sorted(set(remapped) - {binding.id for binding in DEFAULT_BINDINGS})
    if unknown:
        raise ValueError(f"Unknown key binding(s): {', '.join(unknown)}")

    for action in DEFAULT_ACTIONS:
        registry.register_action(action, replace=True)
    for binding in DEFAULT_BINDINGS:
        if binding.id in remapped:
            binding = dataclasses.replace(binding, token=remapped[binding.id])
        registry.register_binding(binding, replace=True)
    return registry


__all__ = ["DEFAULT_ACTIONS", "DEFAULT_BINDINGS", "load_default_keymaps"]
