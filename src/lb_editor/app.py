"""Command-line entry point: terminal setup, the editing loop, fatal exits."""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence, TextIO

from lb_editor.buffer import Document
from lb_editor.editor import EditorContext
from lb_editor.editor.controller import EditorController
from lb_editor.keymaps import KeymapRegistry, load_default_keymaps
from lb_editor.keys import iter_keys
from lb_editor.persistence import PersistenceError, load_document
from lb_editor.runtime import telemetry
from lb_editor.runtime.config import VERSION, EditorConfig
from lb_editor.terminal import (
    GeometryError,
    RawTerminalSession,
    TerminalError,
    resolve_window_size,
)

HELP_MESSAGE = "lb help: Ctrl-S to save | Ctrl-Q to quit"

FATAL_ERRORS = (TerminalError, GeometryError, PersistenceError)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="lb", description="Terminal text editor.")
    parser.add_argument("file", nargs="?", help="file to open")
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    return parser


def build_keymaps(config: EditorConfig) -> KeymapRegistry:
    """Default bindings with ``LB_EDITOR_KEYS`` applied; unknown ids raise ValueError."""

    return load_default_keymaps(
        KeymapRegistry(logger_name="lb_editor.keymaps"),
        overrides=dict(config.key_overrides),
    )


def run_editor(
    session: RawTerminalSession,
    filename: Optional[str],
    config: EditorConfig,
    keymaps: Optional[KeymapRegistry] = None,
) -> None:
    size = resolve_window_size(session, output_fd=session.output_fd)
    if filename:
        document = load_document(filename, tab_width=config.tab_width)
    else:
        document = Document(tab_width=config.tab_width)

    context = EditorContext.create(
        session, size, document=document, config=config, filename=filename
    )
    context.status.set_message(HELP_MESSAGE)
    telemetry.record_event(
        "editor.start",
        data={"file": filename or "", "rows": size.rows, "cols": size.cols},
    )
    registry = keymaps if keymaps is not None else build_keymaps(config)
    EditorController(context, keymap_registry=registry).run(
        iter_keys(session.read_byte)
    )


def die(
    session: RawTerminalSession, error: Exception, *, stream: TextIO | None = None
) -> int:
    """Single fatal path: wipe the screen, restore the terminal, report."""

    session.die()
    telemetry.record_event("editor.fatal", level="error", data={"error": str(error)})
    print(f"lb: {error}", file=stream or sys.stderr)
    return 1


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = EditorConfig.from_env()
        telemetry.configure_from_env()
        keymaps = build_keymaps(config)
    except ValueError as exc:
        parser.error(str(exc))

    session = RawTerminalSession(read_timeout_ds=config.read_timeout_ds)
    try:
        with session:
            try:
                run_editor(session, args.file, config, keymaps)
            except FATAL_ERRORS as exc:
                return die(session, exc)
    except TerminalError as exc:
        return die(session, exc)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
