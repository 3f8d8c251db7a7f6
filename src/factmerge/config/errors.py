"""Errors raised while resolving settings and lookup tables."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


class ConfigurationError(RuntimeError):
    """A setting or a table override is malformed."""


class MissingConfigurationError(ConfigurationError):
    """A configured file does not exist."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Configuration file not found: {path}")
