"""Telelog-backed logging for utf8kit.

Text operations report through three entry points: ``record_event`` for
one-off facts (buffer growth, rejected arguments, failed snapshots),
``span`` for profiled work (pattern compilation and scanning) and
``get_logger`` for anything else. The telelog configuration is read from
``UTF8KIT_*`` variables the first time a logger is needed; ``configure``
swaps in an explicit one.
"""

from __future__ import annotations

from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, MutableMapping, Optional, cast

import telelog  # type: ignore[import]

from .config import env_flag, env_int, env_value

tl = cast(Any, telelog)

DEFAULT_LOGGER_NAME = env_value("LOGGER") or "utf8kit"

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray, memoryview)):
        # Raw payloads may be invalid UTF-8, so they are logged as hex.
        return bytes(value).hex()
    return repr(value) if isinstance(value, (dict, list, tuple, set)) else str(value)


def config_from_env() -> Any:
    """Build a ``telelog.Config`` from the ``UTF8KIT_LOG_*`` variables."""

    config = tl.Config()
    config.with_min_level((env_value("LOG_LEVEL") or "INFO").upper())

    console = not env_flag("DISABLE_CONSOLE", False)
    config.with_console_output(console)
    if console:
        config.with_colored_output(not env_flag("NO_COLOR", False))

    config.with_json_format(env_flag("LOG_JSON", False))

    log_file = env_value("LOG_FILE")
    if log_file:
        config.with_file_output(log_file)

    if env_flag("LOG_BUFFERED", False):
        config.with_buffering(True)
        config.with_buffer_size(env_int("LOG_BUFFER_SIZE", 2048, minimum=1))

    return config


def configure(config: Optional[Any] = None) -> None:
    """Adopt ``config`` (or a fresh environment config) for new loggers.

    Profiling is always switched on since ``span`` relies on it. Loggers
    created under the previous configuration are discarded.
    """

    global _ACTIVE_CONFIG
    if config is None:
        config = config_from_env()
    config.with_profiling(True)
    _ACTIVE_CONFIG = config
    _LOGGER_CACHE.clear()


def get_logger(name: Optional[str] = None) -> Any:
    logger_name = name or DEFAULT_LOGGER_NAME
    logger = _LOGGER_CACHE.get(logger_name)
    if logger is None:
        if _ACTIVE_CONFIG is None:
            configure()
        logger = tl.Logger.with_config(logger_name, _ACTIVE_CONFIG)
        _LOGGER_CACHE[logger_name] = logger
    return logger


def _emit(logger: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    name = str(level).lower()
    structured = getattr(logger, f"{name}_with", None)
    if structured is not None:
        structured(message, [(str(key), _stringify(val)) for key, val in payload.items()])
        return
    plain = getattr(logger, name, None)
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
    """Emit ``event::<name>`` with ``data`` attached as key/value pairs."""

    _emit(get_logger(logger_name), level, f"event::{name}", {"event": name, **(data or {})})


@dataclass
class SpanHandle:
    """Yielded by ``span``; metadata added here rides along on a failure."""

    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _stringify(value)

    def fail(self, reason: str) -> None:
        payload: Dict[str, Any] = {"span": self.span_name, **self.metadata}
        if self.component_name:
            payload["component"] = self.component_name
        payload["reason"] = reason
        _emit(self.logger, "error", "span::fail", payload)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a block and optionally track it as a component.

    ``component=True`` reuses ``name`` as the component id. ``metadata`` is
    pushed as logger context for the duration of the block. An exception
    escaping the block is reported through ``SpanHandle.fail`` and re-raised
    unchanged.
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

        handle = SpanHandle(log, name, component_name, dict(context))
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise


__all__ = [
    "DEFAULT_LOGGER_NAME",
    "SpanHandle",
    "config_from_env",
    "configure",
    "get_logger",
    "record_event",
    "span",
]
