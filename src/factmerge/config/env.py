"""Typed readers for ``FACTMERGE_*`` environment variables.

Blank values count as unset everywhere, so an empty line in a ``.env`` file
falls back to the built-in default.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Final

from .errors import ConfigurationError

ENV_PREFIX: Final[str] = "FACTMERGE_"


def env_value(name: str) -> str | None:
    value = os.getenv(ENV_PREFIX + name)
    if value is None or not value.strip():
        return None
    return value.strip()


def env_float(name: str) -> float | None:
    raw = env_value(name)
    if raw is None:
        return None
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{ENV_PREFIX}{name} is not a number: {raw}") from exc


def env_path(name: str) -> Path | None:
    raw = env_value(name)
    return Path(raw).expanduser() if raw is not None else None
