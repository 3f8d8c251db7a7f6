"""Application configuration helpers."""

from __future__ import annotations

from .env import ENV_PREFIX, env_float, env_path, env_value
from .errors import ConfigurationError, MissingConfigurationError
from .logging import configure_logging
from .reconcile import (
    DEFAULT_FUZZY_THRESHOLD,
    DEFAULT_REGION,
    ReconcileSettings,
    get_reconcile_settings,
)
from .tables import DEFAULT_TABLES, ReconciliationTables, load_tables

__all__ = [
    "DEFAULT_FUZZY_THRESHOLD",
    "DEFAULT_REGION",
    "DEFAULT_TABLES",
    "ENV_PREFIX",
    "ConfigurationError",
    "MissingConfigurationError",
    "ReconcileSettings",
    "ReconciliationTables",
    "configure_logging",
    "env_float",
    "env_path",
    "env_value",
    "get_reconcile_settings",
    "load_tables",
]
