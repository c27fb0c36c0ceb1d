"""Editor logging on top of telelog.

The terminal is the editor's screen, so nothing is logged to the console
unless ``LB_EDITOR_LOG_CONSOLE`` is set. Point ``LB_EDITOR_LOG_FILE`` at a
path to keep a log of a session, or pick one of the canned setups with
``LB_EDITOR_LOG_PRESET`` (``development``, ``production``, ``performance``).

``configure_from_env()`` is called once by the CLI; until then (tests, library
use) the environment defaults are built lazily on first use.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, MutableMapping, Optional, Tuple, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "LB_EDITOR_"
DEFAULT_LOGGER_NAME = "lb_editor"

# preset -> (min level, default log file, json, buffered, profiling)
PRESETS: Dict[str, Tuple[str, str, bool, bool, bool]] = {
    "development": ("DEBUG", "lb_editor-debug.log", False, False, False),
    "production": ("INFO", "lb_editor.log", False, True, False),
    "performance": ("DEBUG", "lb_editor-performance.log", True, True, True),
}

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None


def _env(name: str) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}") or None


def _env_flag(name: str) -> bool:
    return (_env(name) or "").lower() in {"1", "true", "yes", "on"}


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("latin-1")
    return repr(value) if isinstance(value, (dict, list, tuple, set)) else str(value)


def _pairs(data: Dict[str, Any]) -> list[tuple[str, str]]:
    return [(str(key), _stringify(value)) for key, value in data.items()]


def _preset_config(preset: str) -> Any:
    try:
        level, log_file, json_format, buffered, profiling = PRESETS[preset.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown log preset '{preset}' (choose from {', '.join(PRESETS)})"
        ) from None

    config = tl.Config()
    config.with_min_level(level)
    config.with_console_output(False)
    config.with_json_format(json_format)
    config.with_file_output(_env("LOG_FILE") or log_file)
    config.with_buffering(buffered)
    config.with_profiling(profiling)
    return config


def _env_config() -> Any:
    config = tl.Config()
    config.with_min_level((_env("LOG_LEVEL") or "INFO").upper())
    config.with_console_output(_env_flag("LOG_CONSOLE"))
    config.with_json_format(_env_flag("LOG_JSON"))
    log_file = _env("LOG_FILE")
    if log_file:
        config.with_file_output(log_file)
    config.with_profiling(_env_flag("PROFILE"))
    return config


def configure(*, config: Optional[Any] = None, preset: Optional[str] = None) -> None:
    """Swap the active telelog configuration and drop cached loggers.

    ``config`` adopts an explicit ``tl.Config``; ``preset`` names one of
    :data:`PRESETS`. With neither, the ``LB_EDITOR_LOG_*`` variables decide.
    """

    global _ACTIVE_CONFIG
    if config is not None and preset:
        raise ValueError("Provide either `config` or `preset`, not both.")

    if preset:
        config = _preset_config(preset)
    elif config is None:
        config = _env_config()

    _ACTIVE_CONFIG = config
    _LOGGER_CACHE.clear()


def configure_from_env() -> None:
    """Apply ``LB_EDITOR_LOG_PRESET`` if set, else the individual variables."""

    configure(preset=_env("LOG_PRESET"))


def get_logger(name: Optional[str] = None) -> Any:
    global _ACTIVE_CONFIG
    if _ACTIVE_CONFIG is None:
        _ACTIVE_CONFIG = _env_config()

    logger_name = name or DEFAULT_LOGGER_NAME
    if logger_name not in _LOGGER_CACHE:
        _LOGGER_CACHE[logger_name] = tl.Logger.with_config(logger_name, _ACTIVE_CONFIG)
    return _LOGGER_CACHE[logger_name]


def _level_method(logger: Any, level: str) -> Tuple[Any, bool]:
    """Pick ``<level>_with`` (structured) when telelog has it, else ``<level>``."""

    name = str(level).lower()
    structured = getattr(logger, f"{name}_with", None)
    if structured is not None:
        return structured, True
    plain = getattr(logger, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    return plain, False


def _emit(logger: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    method, structured = _level_method(logger, level)
    if structured:
        method(message, _pairs(payload))
    else:
        method(f"{message} {payload}")


def record_event(
    name: str, *, level: str = "info", data: Optional[Dict[str, Any]] = None
) -> None:
    """Log ``event::<name>`` with ``data`` as key/value pairs."""

    _emit(get_logger(), level, f"event::{name}", {"event": name, **(data or {})})


@dataclass
class SpanHandle:
    """Yielded by :func:`span`; collects metadata reported on failure."""

    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _stringify(value)

    def fail(self, reason: str) -> None:
        payload = {"span": self.span_name, **self.metadata, "reason": reason}
        if self.component_name:
            payload["component"] = self.component_name
        _emit(self.logger, "error", "span::fail", payload)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a block under ``name``.

    ``component`` is tracked for the duration of the block and ``metadata``
    is pushed as logger context, then removed again on the way out. An
    exception escaping the block is logged through :meth:`SpanHandle.fail`
    and re-raised.
    """

    log = get_logger(logger_name)
    context = {key: _stringify(value) for key, value in (metadata or {}).items()}
    for key, value in context.items():
        log.add_context(key, value)

    with ExitStack() as stack:
        if component:
            stack.enter_context(log.track_component(component))
        stack.enter_context(log.profile(name))
        handle = SpanHandle(
            logger=log, span_name=name, component_name=component, metadata=dict(context)
        )
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise
        finally:
            for key in context:
                log.remove_context(key)


__all__ = [
    "PRESETS",
    "SpanHandle",
    "configure",
    "configure_from_env",
    "get_logger",
    "record_event",
    "span",
]
