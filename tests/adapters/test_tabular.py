from __future__ import annotations

import io
import logging

import pytest

from factmerge.adapters import ExtractionError, extract_csv
from factmerge.domain.model import OriginKind


def test_extracts_one_observation_per_non_blank_cell() -> None:
    content = io.StringIO(
        "Name,Phone,Email\n"
        "John Doe,(555) 123-4567,john@example.com\n"
        "Jane Roe,,  \n"
    )

    observations = extract_csv(content, origin="people.csv")

    assert [(item.label, item.value) for item in observations] == [
        ("Name", "John Doe"),
        ("Phone", "(555) 123-4567"),
        ("Email", "john@example.com"),
        ("Name", "Jane Roe"),
    ]
    first_source = observations[0].source
    assert first_source.origin == "people.csv"
    assert first_source.kind is OriginKind.TABULAR
    assert first_source.location == "row 2"
    assert first_source.confidence == 1.0
    assert observations[-1].source.location == "row 3"


def test_blank_lines_are_skipped() -> None:
    content = io.StringIO("Invoice\n\nINV-001\n\n\nINV-002\n")

    observations = extract_csv(content, origin="invoices.csv")

    assert [item.value for item in observations] == ["INV-001", "INV-002"]


def test_extra_columns_are_logged(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.WARNING)

    observations = extract_csv(io.StringIO("City\nParis,extra\n"), origin="cities.csv")

    assert [item.value for item in observations] == ["Paris"]
    assert "more columns than the header" in caplog.text


def test_missing_header_raises() -> None:
    with pytest.raises(ExtractionError) as exc_info:
        extract_csv(io.StringIO(""), origin="empty.csv")

    assert exc_info.value.origin == "empty.csv"


def test_repeated_header_labels_keep_every_column() -> None:
    observations = extract_csv(io.StringIO("name,name\nAlice,Bob\n"), origin="dup.csv")

    assert [(item.label, item.value) for item in observations] == [
        ("name", "Alice"),
        ("name", "Bob"),
    ]
    assert [item.source.location for item in observations] == ["row 2", "row 2"]


def test_short_rows_only_yield_present_cells() -> None:
    observations = extract_csv(io.StringIO("City,Zip\nParis\n"), origin="short.csv")

    assert [(item.label, item.value) for item in observations] == [("City", "Paris")]
