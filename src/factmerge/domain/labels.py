"""Field label normalization shared by the canonicalizer and the lookup tables."""

from __future__ import annotations

import re

_SEPARATOR_RE = re.compile(r"[_\s]+")


def normalize_label(label: str) -> str:
    """Lowercase, trim and collapse whitespace/underscore runs to ``_``."""

    return _SEPARATOR_RE.sub("_", label.strip().lower())
