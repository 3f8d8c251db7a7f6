"""Reconciliation settings resolved from the environment."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from .env import env_float, env_path, env_value
from .errors import ConfigurationError

if TYPE_CHECKING:
    from pathlib import Path

DEFAULT_REGION: Final[str] = "US"
DEFAULT_FUZZY_THRESHOLD: Final[float] = 0.85


@dataclass(frozen=True, slots=True)
class ReconcileSettings:
    default_region: str = DEFAULT_REGION
    fuzzy_threshold: float = DEFAULT_FUZZY_THRESHOLD
    tables_path: Path | None = None

    def __post_init__(self) -> None:
        if not 0.0 < self.fuzzy_threshold <= 1.0:
            raise ConfigurationError(
                f"Fuzzy threshold must be within (0, 1], got {self.fuzzy_threshold}"
            )


def get_reconcile_settings() -> ReconcileSettings:
    """Build settings from ``FACTMERGE_*`` variables, defaulting whatever is unset."""

    region = env_value("DEFAULT_REGION")
    threshold = env_float("FUZZY_THRESHOLD")
    return ReconcileSettings(
        default_region=region.upper() if region else DEFAULT_REGION,
        fuzzy_threshold=DEFAULT_FUZZY_THRESHOLD if threshold is None else threshold,
        tables_path=env_path("TABLES_FILE"),
    )
