"""Top-level read → dispatch → redraw loop."""

from __future__ import annotations

from typing import Iterable

from lb_editor.actions import edit as edit_actions
from lb_editor.keymaps import KeymapRegistry, KeymapResolver, load_default_keymaps
from lb_editor.keys import KeyInput
from lb_editor.runtime import telemetry
from lb_editor.view import Frame, FrameComposer

from .context import ActionResult, EditorContext


class EditorController:
    """Owns the editing loop for one :class:`EditorContext`.

    Keys resolve through the keymap first; an unbound byte is inserted as
    text, an unbound named key is ignored.
    """

    def __init__(
        self,
        context: EditorContext,
        *,
        keymap_registry: KeymapRegistry | None = None,
        keymap_resolver: KeymapResolver | None = None,
        composer: FrameComposer | None = None,
        load_defaults: bool = True,
    ) -> None:
        self.context = context
        self.keymap_registry = keymap_registry or KeymapRegistry(
            logger_name="lb_editor.keymaps"
        )
        if load_defaults and keymap_registry is None:
            load_default_keymaps(
                self.keymap_registry, overrides=dict(context.config.key_overrides)
            )
        self.keymap_resolver = keymap_resolver or KeymapResolver(self.keymap_registry)
        self.composer = composer or FrameComposer(context.config)

    def refresh(self) -> Frame:
        ctx = self.context
        return self.composer.refresh(
            ctx.terminal, ctx.document, ctx.cursor, ctx.viewport, ctx.status
        )

    def process_keypress(self, key: KeyInput) -> ActionResult:
        with telemetry.span(
            "editor::keypress",
            component="editor",
            metadata={"key": key.token},
        ) as handle:
            result = self.keymap_resolver.resolve(key.token)
            if result.status == "match" and result.match:
                handle.add_metadata("action", result.match.action.id)
                outcome = result.match.action(self.context, result.match)
                if isinstance(outcome, ActionResult):
                    return outcome
                return ActionResult()

            if key.is_char and key.code is not None:
                return edit_actions.insert_byte(self.context, key.code)

            handle.add_metadata("status", "unbound")
            return ActionResult(consumed=False, status="unbound")

    def run(self, keys: Iterable[KeyInput]) -> ActionResult:
        """Redraw, then handle keys until an action asks to quit."""

        self.refresh()
        for key in keys:
            result = self.process_keypress(key)
            if result.quit:
                return result
            self.refresh()
        return ActionResult(status="input_closed")


__all__ = ["EditorController"]
