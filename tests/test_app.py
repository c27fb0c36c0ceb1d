from __future__ import annotations

from typing import Iterator

import pytest

from lb_editor import app
from lb_editor.terminal import RawTerminalSession, TerminalError, WindowSize, protocol


class ScriptedTerminal:
    """Stands in for the tty behind :class:`RawTerminalSession`."""

    def __init__(self, keys: bytes = b"") -> None:
        self._keys: Iterator[int] = iter(keys)
        self.writes: list[bytes] = []
        self.enabled = 0
        self.disabled = 0

    def install(self, monkeypatch) -> "ScriptedTerminal":
        terminal = self

        def enable(session: RawTerminalSession) -> None:
            terminal.enabled += 1

        def disable(session: RawTerminalSession) -> None:
            terminal.disabled += 1

        def read_byte(session: RawTerminalSession) -> bytes:
            code = next(terminal._keys, None)
            return b"" if code is None else bytes([code])

        def write(session: RawTerminalSession, data: bytes) -> int:
            terminal.writes.append(bytes(data))
            return len(data)

        monkeypatch.setattr(RawTerminalSession, "enable", enable)
        monkeypatch.setattr(RawTerminalSession, "disable", disable)
        monkeypatch.setattr(RawTerminalSession, "read_byte", read_byte)
        monkeypatch.setattr(RawTerminalSession, "write", write)
        monkeypatch.setattr(
            app, "resolve_window_size", lambda session, **_: WindowSize(24, 80)
        )
        return self


def test_missing_file_is_fatal(tmp_path, monkeypatch, capsys) -> None:
    terminal = ScriptedTerminal().install(monkeypatch)
    missing = tmp_path / "missing.txt"

    assert app.main([str(missing)]) == 1

    err = capsys.readouterr().err
    assert err.startswith(f"lb: Cannot open {missing}")
    assert terminal.writes == [protocol.clear_screen()]
    assert terminal.disabled >= 1


def test_edit_save_and_quit(tmp_path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    path = tmp_path / "notes.txt"
    path.write_bytes(b"world\n")
    terminal = ScriptedTerminal(b"hello \x13\x11").install(monkeypatch)

    assert app.main(["notes.txt"]) == 0

    assert path.read_bytes() == b"hello world\n"
    assert terminal.enabled == 1
    assert b"lb help: Ctrl-S to save | Ctrl-Q to quit" in terminal.writes[0]
    assert b"# notes.txt - 1 lines" in terminal.writes[0]
    assert terminal.writes[-1] == protocol.clear_screen()


def test_new_buffer_without_filename(monkeypatch) -> None:
    terminal = ScriptedTerminal(b"\x11").install(monkeypatch)

    assert app.main([]) == 0

    assert b"lb editor -- v0.0.1" in terminal.writes[0]
    assert b"# [New File] - 0 lines" in terminal.writes[0]


def test_raw_mode_failure_is_fatal(monkeypatch, capsys) -> None:
    ScriptedTerminal().install(monkeypatch)

    def refuse(session: RawTerminalSession) -> None:
        raise TerminalError("tcgetattr failed")

    monkeypatch.setattr(RawTerminalSession, "enable", refuse)

    assert app.main([]) == 1
    assert capsys.readouterr().err == "lb: tcgetattr failed\n"


def test_invalid_environment_is_a_usage_error(monkeypatch, capsys) -> None:
    monkeypatch.setenv("LB_EDITOR_TAB_WIDTH", "0")

    with pytest.raises(SystemExit) as excinfo:
        app.main([])

    assert excinfo.value.code == 2
    assert "tab_width" in capsys.readouterr().err


def test_version_flag(capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        app.main(["--version"])

    assert excinfo.value.code == 0
    assert capsys.readouterr().out.strip() == "lb 0.0.1"


def test_bad_log_preset_is_a_usage_error(monkeypatch, capsys) -> None:
    monkeypatch.setenv("LB_EDITOR_LOG_PRESET", "verbose")

    with pytest.raises(SystemExit) as excinfo:
        app.main([])

    assert excinfo.value.code == 2
    assert "Unknown log preset 'verbose'" in capsys.readouterr().err


def test_unknown_key_override_is_a_usage_error(monkeypatch, capsys) -> None:
    monkeypatch.setenv("LB_EDITOR_KEYS", "teleport=ctrl+t")

    with pytest.raises(SystemExit) as excinfo:
        app.main([])

    assert excinfo.value.code == 2
    assert "teleport" in capsys.readouterr().err


def test_key_override_applies_to_session(monkeypatch) -> None:
    monkeypatch.setenv("LB_EDITOR_KEYS", "quit=ctrl+x")
    terminal = ScriptedTerminal(b"\x11\x18").install(monkeypatch)

    assert app.main([]) == 0

    # Ctrl-Q is no longer bound, so it lands in the buffer.
    assert b"# [New File] - 1 lines" in terminal.writes[-2]
    assert terminal.writes[-1] == protocol.clear_screen()
