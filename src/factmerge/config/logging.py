"""Logging setup for command-line runs."""

from __future__ import annotations

import logging
import sys
from typing import Final

LOG_FORMAT: Final[str] = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(*, level: int | str = logging.INFO, force: bool = False) -> None:
    """Send records to stderr, leaving stdout free for the JSON report.

    ``level`` accepts a number or a level name such as ``"DEBUG"``. The root
    logger is only configured once unless ``force`` is set.
    """

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
        stream=sys.stderr,
        force=force,
    )
