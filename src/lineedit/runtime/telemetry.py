"""Logging and profiling for the line editor, backed by telelog.

Everything else in the package talks to telelog through four calls:
:func:`configure`, :func:`get_logger`, :func:`record_event` and
:func:`span`. Defaults come from ``LINEEDIT_*`` environment variables;
the level is WARNING unless ``LINEEDIT_LOG_LEVEL`` says otherwise, so a
host application sees nothing per keystroke by default.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, MutableMapping, Optional, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "LINEEDIT_"
DEFAULT_LOGGER_NAME = os.getenv(f"{ENV_PREFIX}LOGGER", "lineedit")

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None


@dataclass(frozen=True, slots=True)
class _Preset:
    min_level: str
    console: bool
    json: bool = False
    buffered: bool = False
    log_file: str = ""


PRESETS: Dict[str, _Preset] = {
    "development": _Preset("DEBUG", console=True),
    "production": _Preset(
        "INFO", console=False, buffered=True, log_file="lineedit.log"
    ),
    "performance": _Preset(
        "DEBUG",
        console=False,
        json=True,
        buffered=True,
        log_file="lineedit-performance.log",
    ),
}
PRESETS["performance_analysis"] = PRESETS["performance"]


def _env(name: str) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}")


def _env_flag(name: str) -> bool:
    return (_env(name) or "").strip().lower() in {"1", "true", "yes", "on"}


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray, dict, list, tuple, set)):
        return repr(value)
    return str(value)


def _config_for_preset(name: str) -> Any:
    preset = PRESETS.get(name.lower())
    if preset is None:
        raise ValueError(f"Unknown telemetry preset '{name}'.")

    config = tl.Config()
    config.with_min_level(preset.min_level)
    config.with_console_output(preset.console)
    if preset.console:
        config.with_colored_output(True)
    config.with_json_format(preset.json)
    if preset.buffered:
        config.with_buffering(True)
    if preset.log_file:
        config.with_file_output(_env("LOG_FILE") or preset.log_file)
    return config


def _config_from_env() -> Any:
    config = tl.Config()
    config.with_min_level((_env("LOG_LEVEL") or "WARNING").upper())

    console = not _env_flag("DISABLE_CONSOLE")
    config.with_console_output(console)
    if console:
        config.with_colored_output(not _env_flag("NO_COLOR"))
    if _env_flag("LOG_JSON"):
        config.with_json_format(True)

    log_file = _env("LOG_FILE")
    if log_file:
        config.with_file_output(log_file)
    if _env_flag("LOG_BUFFERED"):
        config.with_buffering(True)
        config.with_buffer_size(int(_env("LOG_BUFFER_SIZE") or "2048"))
    return config


def configure(*, config: Optional[Any] = None, preset: Optional[str] = None) -> None:
    """Replace the active telelog configuration.

    Parameters
    ----------
    config:
        Explicit ``telelog.Config`` to adopt.
    preset:
        ``"development"``, ``"production"`` or ``"performance"``. Mutually
        exclusive with ``config``.
    """

    global _ACTIVE_CONFIG
    if config is not None and preset:
        raise ValueError("Provide either `config` or `preset`, not both.")

    if preset:
        config = _config_for_preset(preset)
    elif config is None:
        config = _config_from_env()

    # Spans rely on telelog's profiler.
    config.with_profiling(True)
    _ACTIVE_CONFIG = config
    _LOGGER_CACHE.clear()


def get_logger(name: Optional[str] = None) -> Any:
    """Return the cached ``telelog.Logger`` for ``name``."""

    if _ACTIVE_CONFIG is None:
        configure()
    logger_name = name or DEFAULT_LOGGER_NAME
    logger = _LOGGER_CACHE.get(logger_name)
    if logger is None:
        logger = tl.Logger.with_config(logger_name, _ACTIVE_CONFIG)
        _LOGGER_CACHE[logger_name] = logger
    return logger


def _emit(log: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    """Log ``payload`` as key/value pairs when telelog offers ``<level>_with``."""

    name = str(level).lower()
    structured = getattr(log, f"{name}_with", None)
    if structured is not None:
        structured(message, [(str(k), _stringify(v)) for k, v in payload.items()])
        return
    plain = getattr(log, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {payload}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Emit a structured ``event::<name>`` record."""

    payload = {"event": name, **(data or {})}
    _emit(get_logger(logger_name), level, f"event::{name}", payload)


@dataclass
class SpanHandle:
    """Yielded by :func:`span` so callers can attach metadata mid-flight."""

    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _stringify(value)

    def fail(self, reason: str) -> None:
        self._log("error", "span::fail", reason=reason)

    def _log(self, level: str, message: str, **extra: Any) -> None:
        payload: Dict[str, Any] = {"span": self.span_name, **self.metadata}
        if self.component_name:
            payload["component"] = self.component_name
        payload.update(extra)
        _emit(self.logger, level, message, payload)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a block and optionally track it as a telelog component.

    ``component=True`` reuses ``name`` as the component id; a string names
    the component explicitly. ``metadata`` is pushed as logger context for
    the duration of the block. An exception leaving the block is logged
    through :meth:`SpanHandle.fail` and re-raised.
    """

    log = get_logger(logger_name)
    component_name = name if component is True else component or None
    context = {key: _stringify(value) for key, value in (metadata or {}).items()}

    with ExitStack() as stack:
        for key, value in context.items():
            log.add_context(key, value)
            stack.callback(log.remove_context, key)
        if component_name:
            stack.enter_context(log.track_component(component_name))
        stack.enter_context(log.profile(name))
        handle = SpanHandle(
            logger=log,
            span_name=name,
            component_name=cast(Optional[str], component_name),
            metadata=dict(context),
        )
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise


configure()
logger = get_logger()

__all__ = [
    "PRESETS",
    "SpanHandle",
    "configure",
    "get_logger",
    "record_event",
    "span",
    "logger",
]
