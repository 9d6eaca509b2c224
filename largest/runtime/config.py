"""Run configuration plus persistent JSON defaults.

Defaults for ``lines``, ``dir``, ``binary`` and ``workers`` may be stored in
the user config file. All access is defensive: malformed or missing config
falls back to built-in defaults, and CLI flags always win.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "largest"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH

DEFAULT_LINES = 1


@dataclass(frozen=True)
class RunDefaults:
    """Option defaults resolved from the config file."""

    lines: int = DEFAULT_LINES
    include_dirs: bool = False
    binary: bool = False
    max_workers: int | None = None


@dataclass(frozen=True)
class RunConfig:
    """Fully resolved options for one listing run."""

    target: Path
    lines: int = DEFAULT_LINES
    include_dirs: bool = False
    binary: bool = False
    max_workers: int | None = None
    debug: bool = False


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def _coerce_bool(value: object, fallback: bool) -> bool:
    return value if isinstance(value, bool) else fallback


def _coerce_int(value: object, *, minimum: int) -> int | None:
    """Accept plain integers ``>= minimum``; booleans and others are invalid."""
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    if value < minimum:
        return None
    return value


def load_defaults() -> RunDefaults:
    """Build ``RunDefaults`` from config, ignoring keys with invalid values."""
    data = load_config()
    lines = _coerce_int(data.get("lines"), minimum=0)
    return RunDefaults(
        lines=DEFAULT_LINES if lines is None else lines,
        include_dirs=_coerce_bool(data.get("dir"), False),
        binary=_coerce_bool(data.get("binary"), False),
        max_workers=_coerce_int(data.get("workers"), minimum=1),
    )


__all__ = [
    "CONFIG_PATH",
    "RunConfig",
    "RunDefaults",
    "load_config",
    "load_defaults",
]
