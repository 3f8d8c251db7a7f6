from __future__ import annotations

import logging

import pytest

from factmerge.config import ReconciliationTables
from factmerge.domain.canonicalization import FieldCanonicalizer
from factmerge.domain.model import FieldCategory
from factmerge.domain.normalization import (
    ValueNormalizer,
    normalize_address,
    normalize_basic,
    normalize_currency,
    normalize_date,
    normalize_identifier,
    normalize_name,
    normalize_phone,
)

_ABBREVIATIONS = ReconciliationTables().abbreviations
_FIELD_BY_CATEGORY = {
    FieldCategory.NAME: "full_name",
    FieldCategory.ADDRESS: "street_address",
    FieldCategory.ID: "invoice_number",
    FieldCategory.EMAIL: "email_address",
    FieldCategory.PHONE: "phone_number",
    FieldCategory.DATE: "date_of_birth",
    FieldCategory.CURRENCY: "amount",
    FieldCategory.GENERIC: "unknown_field",
}


def test_basic_normalization_trims_and_lowercases() -> None:
    assert normalize_basic("  Hello World  ") == "hello world"
    assert normalize_basic("MiXeD CaSe") == "mixed case"


@pytest.mark.parametrize(
    "raw",
    ["(555) 123-4567", "555-123-4567", "555.123.4567", "5551234567", "+1 555 123 4567"],
)
def test_phone_numbers_format_with_country_code(raw: str) -> None:
    assert normalize_phone(raw) == "+15551234567"


def test_phone_numbers_respect_default_region() -> None:
    assert normalize_phone("020 7946 0958", region="GB") == "+442079460958"


def test_international_phone_number_ignores_default_region() -> None:
    assert normalize_phone("+44 20 7946 0958") == "+442079460958"


def test_unparseable_phone_number_keeps_alphanumerics() -> None:
    assert normalize_phone("not-a-phone") == "notaphone"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("2024-01-15", "2024-01-15"),
        ("01/15/2024", "2024-01-15"),
        ("15/01/2024", "2024-01-15"),
        ("01-15-2024", "2024-01-15"),
        ("15-01-2024", "2024-01-15"),
        ("2024/01/15", "2024-01-15"),
        ("Jan 15, 2024", "2024-01-15"),
        ("January 15, 2024", "2024-01-15"),
        ("15 Jan 2024", "2024-01-15"),
        ("15 January 2024", "2024-01-15"),
        ("  2024-01-15  ", "2024-01-15"),
    ],
)
def test_dates_normalize_to_iso(raw: str, expected: str) -> None:
    assert normalize_date(raw) == expected


def test_ambiguous_dates_read_month_first() -> None:
    assert normalize_date("03/04/2024") == "2024-03-04"


def test_free_form_dates_fall_back_to_general_parser() -> None:
    assert normalize_date("Monday, January 15th 2024") == "2024-01-15"


def test_unparseable_date_falls_back_to_basic_form() -> None:
    assert normalize_date("Not-A-Date") == "not-a-date"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("$100.50", "100.50"),
        ("€1,234.56", "1234.56"),
        ("£99.99", "99.99"),
        ("1234", "1234.00"),
        ("$1,000,000.99", "1000000.99"),
        ("$50", "50.00"),
        ("  $ 7.5 ", "7.50"),
        ("-12.345", "-12.35"),
    ],
)
def test_currency_formats_two_fraction_digits(raw: str, expected: str) -> None:
    assert normalize_currency(raw) == expected


@pytest.mark.parametrize(("raw", "expected"), [("$12abc", "12abc"), ("NaN", "NaN"), ("$", "")])
def test_unparseable_currency_returns_stripped_text(raw: str, expected: str) -> None:
    assert normalize_currency(raw) == expected


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("123 Main St", "123 main street"),
        ("456 Oak Ave", "456 oak avenue"),
        ("789 Elm Blvd", "789 elm boulevard"),
        ("Apt 5B", "apartment 5b"),
        ("123  Main   St", "123 main street"),
        ("  123 MAIN ST  ", "123 main street"),
        ("1 Stone Rd, Ste 4, Fl 2", "1 stone road, suite 4, floor 2"),
    ],
)
def test_address_expands_whole_word_abbreviations(raw: str, expected: str) -> None:
    assert normalize_address(raw, _ABBREVIATIONS) == expected


def test_name_keeps_token_boundaries() -> None:
    assert normalize_name("  John   DOE ") == "john doe"
    assert normalize_name("Mary-Jane O'Neil") == "mary-jane o'neil"


def test_identifier_drops_whitespace_and_hyphens_only() -> None:
    assert normalize_identifier(" INV-001 ") == "inv001"
    assert normalize_identifier("AB 12/34-x") == "ab12/34x"


@pytest.mark.parametrize(
    ("value", "canonical_field", "expected"),
    [
        ("(555) 123-4567", "phone_number", "+15551234567"),
        ("01/15/2024", "date_of_birth", "2024-01-15"),
        ("$100.50", "amount", "100.50"),
        ("123 Main St", "street_address", "123 main street"),
        ("  John@Example.COM ", "email_address", "john@example.com"),
        ("INV-001", "invoice_number", "inv001"),
        ("John  Doe", "full_name", "john doe"),
        ("  Some Value  ", "unknown_field", "some value"),
    ],
)
def test_normalize_dispatches_by_category(
    normalizer: ValueNormalizer, value: str, canonical_field: str, expected: str
) -> None:
    assert normalizer.normalize(value, canonical_field) == expected


@pytest.mark.parametrize("category", list(FieldCategory))
@pytest.mark.parametrize("blank", ["", "   ", "\t\n"])
def test_blank_values_normalize_to_empty_string(
    normalizer: ValueNormalizer, category: FieldCategory, blank: str
) -> None:
    assert normalizer.normalize(blank, _FIELD_BY_CATEGORY[category]) == ""


def test_every_category_has_a_strategy(normalizer: ValueNormalizer) -> None:
    for category in FieldCategory:
        assert callable(normalizer.strategy_for(category))


def test_normalizer_uses_configured_region(canonicalizer: FieldCanonicalizer) -> None:
    normalizer = ValueNormalizer(canonicalizer, default_region="GB")

    assert normalizer.normalize("020 7946 0958", "phone_number") == "+442079460958"


def test_normalizer_uses_injected_abbreviations() -> None:
    tables = ReconciliationTables.build(abbreviations={"Pkwy": "Parkway"})
    normalizer = ValueNormalizer(FieldCanonicalizer(tables))

    assert normalizer.normalize("9 Lake Pkwy", "street_address") == "9 lake parkway"


@pytest.mark.parametrize(
    ("value", "canonical_field"),
    [
        ("☎ call me", "phone_number"),
        ("32/13/9999", "date"),
        ("1e999999999", "amount"),
        ("\x00\x01", "street_address"),
        ("99999999999999999999999999999999", "date_of_birth"),
    ],
)
def test_normalize_never_raises(
    normalizer: ValueNormalizer, value: str, canonical_field: str
) -> None:
    assert isinstance(normalizer.normalize(value, canonical_field), str)


def test_unparseable_values_are_logged_at_debug(
    normalizer: ValueNormalizer, caplog: pytest.LogCaptureFixture
) -> None:
    caplog.set_level(logging.DEBUG, logger="factmerge.domain.normalization")

    normalizer.normalize("not-a-phone", "phone_number")

    assert "Unparseable phone number" in caplog.text
