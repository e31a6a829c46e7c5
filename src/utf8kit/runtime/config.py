"""Environment-driven settings shared by the text services."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from utf8kit.errors import InvalidArgument

ENV_PREFIX = "UTF8KIT_"

DEFAULT_BUFFER_MIN_CAPACITY = 16
DEFAULT_PATTERN_CACHE_SIZE = 64

_SETTINGS: Optional["Settings"] = None


def env_value(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def env_flag(name: str, default: bool) -> bool:
    raw = env_value(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def env_int(name: str, default: int, *, minimum: int = 0) -> int:
    raw = env_value(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise InvalidArgument(
            f"{ENV_PREFIX}{name} must be an integer, got {raw!r}",
            argument=f"{ENV_PREFIX}{name}",
        ) from exc
    if value < minimum:
        raise InvalidArgument(
            f"{ENV_PREFIX}{name} must be >= {minimum}, got {value}",
            argument=f"{ENV_PREFIX}{name}",
        )
    return value


@dataclass(frozen=True, slots=True)
class Settings:
    """Tunables read once from ``UTF8KIT_*`` variables."""

    buffer_min_capacity: int = DEFAULT_BUFFER_MIN_CAPACITY
    pattern_cache_size: int = DEFAULT_PATTERN_CACHE_SIZE


def load_settings() -> Settings:
    return Settings(
        buffer_min_capacity=env_int(
            "BUFFER_MIN_CAPACITY", DEFAULT_BUFFER_MIN_CAPACITY, minimum=1
        ),
        pattern_cache_size=env_int("PATTERN_CACHE_SIZE", DEFAULT_PATTERN_CACHE_SIZE),
    )


def get_settings() -> Settings:
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = load_settings()
    return _SETTINGS


def reset_settings() -> None:
    """Forget cached settings so the environment is read again."""

    global _SETTINGS
    _SETTINGS = None


__all__ = [
    "ENV_PREFIX",
    "Settings",
    "env_flag",
    "env_int",
    "env_value",
    "get_settings",
    "load_settings",
    "reset_settings",
]
