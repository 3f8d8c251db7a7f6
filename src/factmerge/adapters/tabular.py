"""Extract raw observations from CSV rows."""

from __future__ import annotations

import csv
import logging
from typing import TYPE_CHECKING, Final

from factmerge.domain.model import OriginKind, RawObservation, Source

from .errors import ExtractionError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

TABULAR_CONFIDENCE: Final[float] = 1.0

log = logging.getLogger(__name__)


def extract_csv(lines: Iterable[str], *, origin: str) -> list[RawObservation]:
    """Turn every non-blank cell of a CSV document into one observation.

    The first row is the header and names the fields. Cells are paired with
    header labels by position, so repeated labels keep every column. Locations
    count the header as row 1, so the first data row is ``row 2``.
    """

    rows = _non_blank_rows(csv.reader(lines), origin=origin)
    headers = next(rows, None)
    if not headers:
        raise ExtractionError("CSV file has no header row", origin=origin)

    observations: list[RawObservation] = []
    for row_number, row in enumerate(rows, start=2):
        if len(row) > len(headers):
            log.warning("%s row %s has more columns than the header", origin, row_number)
        source = Source(
            origin=origin,
            kind=OriginKind.TABULAR,
            location=f"row {row_number}",
            confidence=TABULAR_CONFIDENCE,
        )
        for label, value in zip(headers, row, strict=False):
            if not value.strip() or not label.strip():
                continue
            observations.append(RawObservation(label=label, value=value, source=source))

    return observations


def _non_blank_rows(reader: Iterator[list[str]], *, origin: str) -> Iterator[list[str]]:
    try:
        for row in reader:
            if row:
                yield row
    except csv.Error as exc:
        raise ExtractionError(f"malformed CSV: {exc}", origin=origin) from exc
