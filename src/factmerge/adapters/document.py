"""Extract raw observations from key/value lines of plain-text documents.

Pages are separated by form feeds, the convention text extraction tools use
when flattening paginated documents.
"""

from __future__ import annotations

import re
from typing import Final

from factmerge.domain.model import OriginKind, RawObservation, Source

DOCUMENT_CONFIDENCE: Final[float] = 0.9
PAGE_SEPARATOR: Final[str] = "\f"
MIN_KEY_LENGTH: Final[int] = 2
MAX_KEY_LENGTH: Final[int] = 100
MAX_VALUE_LENGTH: Final[int] = 500

_KEY_VALUE_PATTERNS: Final[tuple[re.Pattern[str], ...]] = (
    re.compile(r"^(.+?)\s*:\s*(.+)$", re.MULTILINE),
    re.compile(r"^(.+?)\s*=\s*(.+)$", re.MULTILINE),
    re.compile(r"^(.+?)\s*\|\s*(.+)$", re.MULTILINE),
)
_HEADING_KEY_RE = re.compile(r"^(page|section|chapter|appendix|table|figure|note)", re.IGNORECASE)


def extract_key_values(text: str, *, origin: str) -> list[RawObservation]:
    """Return one observation per key/value pair found on each page of ``text``."""

    observations: list[RawObservation] = []
    for page_number, page_text in enumerate(text.split(PAGE_SEPARATOR), start=1):
        observations.extend(_page_observations(page_text, page_number=page_number, origin=origin))
    return observations


def _page_observations(page_text: str, *, page_number: int, origin: str) -> list[RawObservation]:
    source = Source(
        origin=origin,
        kind=OriginKind.DOCUMENT,
        location=f"page {page_number}",
        confidence=DOCUMENT_CONFIDENCE,
    )
    seen: set[tuple[str, str]] = set()
    observations: list[RawObservation] = []

    for pattern in _KEY_VALUE_PATTERNS:
        for match in pattern.finditer(page_text):
            key = match.group(1).strip()
            value = match.group(2).strip()
            if not _is_plausible_pair(key, value):
                continue
            if (key, value) in seen:
                continue
            seen.add((key, value))
            if _HEADING_KEY_RE.match(key):
                continue
            observations.append(RawObservation(label=key, value=value, source=source))

    return observations


def _is_plausible_pair(key: str, value: str) -> bool:
    if not key or not value:
        return False
    return MIN_KEY_LENGTH <= len(key) <= MAX_KEY_LENGTH and len(value) <= MAX_VALUE_LENGTH
