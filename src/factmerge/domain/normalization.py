"""Category-aware value normalization.

Responsibilities of this stage:
- turn a raw value into a comparable string, dispatched by field category
- never raise: a value that cannot be parsed degrades to a cleaned string
- stay pure, so equal inputs always produce equal normalized values
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from functools import cache
from types import MappingProxyType
from typing import Final, TypeAlias

import phonenumbers
from dateutil import parser as date_parser

from factmerge.config.reconcile import DEFAULT_REGION
from factmerge.domain.canonicalization import FieldCanonicalizer
from factmerge.domain.model import FieldCategory

Strategy: TypeAlias = Callable[[str], str]

log = logging.getLogger(__name__)

_PHONE_FORMATTING_RE = re.compile(r"[\s\-().]")
_CURRENCY_NOISE_RE = re.compile(r"[$€£¥₹₩₽¢,\s]")
_ID_NOISE_RE = re.compile(r"[\s\-]")
_WHITESPACE_RE = re.compile(r"\s+")
_CENTS: Final[Decimal] = Decimal("0.01")

# Order matters: the first format yielding a valid date wins, so month-first
# readings take precedence over day-first ones for ambiguous values.
DATE_FORMATS: Final[tuple[str, ...]] = (
    "%Y-%m-%d",
    "%m/%d/%Y",
    "%d/%m/%Y",
    "%m-%d-%Y",
    "%d-%m-%Y",
    "%Y/%m/%d",
    "%b %d, %Y",
    "%B %d, %Y",
    "%d %b %Y",
    "%d %B %Y",
)
# Fills components missing from free-form dates so results never depend on today.
_FREE_FORM_DEFAULT: Final[datetime] = datetime(2000, 1, 1)  # noqa: DTZ001


def normalize_basic(value: str) -> str:
    return value.strip().lower()


def normalize_name(value: str) -> str:
    return " ".join(value.lower().split())


def normalize_identifier(value: str) -> str:
    return _ID_NOISE_RE.sub("", value.strip().lower())


def normalize_currency(value: str) -> str:
    """Format an amount with exactly two fraction digits.

    Currency symbols, thousands separators and whitespace are removed first;
    when the remainder is not a finite number it is returned as is.
    """

    cleaned = _CURRENCY_NOISE_RE.sub("", value)
    try:
        amount = Decimal(cleaned)
        if not amount.is_finite():
            return cleaned
        return f"{amount.quantize(_CENTS, rounding=ROUND_HALF_UP):f}"
    except InvalidOperation:
        return cleaned


def normalize_date(value: str) -> str:
    """Return ``YYYY-MM-DD`` for any recognised date, else the basic form."""

    text = value.strip()
    for date_format in DATE_FORMATS:
        try:
            return datetime.strptime(text, date_format).date().isoformat()  # noqa: DTZ007
        except ValueError:
            continue

    try:
        return date_parser.parse(text, default=_FREE_FORM_DEFAULT).date().isoformat()
    except (ValueError, OverflowError):
        log.debug("Unparseable date kept as text: %r", value)
        return normalize_basic(value)


def normalize_phone(value: str, *, region: str = DEFAULT_REGION) -> str:
    """Format a phone number as ``+<country code><national number>``.

    The number is read in ``region`` first, then as an international number.
    Values that cannot be read as a phone number lose every non-alphanumeric
    character instead.
    """

    cleaned = _PHONE_FORMATTING_RE.sub("", value)
    for candidate_region in (region, None):
        try:
            parsed = phonenumbers.parse(cleaned, candidate_region)
        except phonenumbers.NumberParseException:
            continue
        if phonenumbers.is_possible_number(parsed):
            return phonenumbers.format_number(parsed, phonenumbers.PhoneNumberFormat.E164)

    log.debug("Unparseable phone number kept as text: %r", value)
    return "".join(character for character in value if character.isalnum())


def normalize_address(value: str, abbreviations: Mapping[str, str]) -> str:
    normalized = normalize_basic(value)
    if abbreviations:
        pattern = _abbreviation_pattern(tuple(abbreviations))
        normalized = pattern.sub(lambda match: abbreviations[match.group(0)], normalized)
    return _WHITESPACE_RE.sub(" ", normalized)


@cache
def _abbreviation_pattern(abbreviations: tuple[str, ...]) -> re.Pattern[str]:
    alternatives = "|".join(re.escape(abbreviation) for abbreviation in abbreviations)
    return re.compile(rf"\b(?:{alternatives})\b")


@dataclass(frozen=True, slots=True)
class ValueNormalizer:
    """Dispatch values to the normalization strategy of their field's category."""

    canonicalizer: FieldCanonicalizer = field(default_factory=FieldCanonicalizer)
    default_region: str = DEFAULT_REGION
    _strategies: Mapping[FieldCategory, Strategy] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        abbreviations = self.canonicalizer.tables.abbreviations
        strategies: dict[FieldCategory, Strategy] = {
            FieldCategory.PHONE: lambda value: normalize_phone(value, region=self.default_region),
            FieldCategory.DATE: normalize_date,
            FieldCategory.CURRENCY: normalize_currency,
            FieldCategory.ADDRESS: lambda value: normalize_address(value, abbreviations),
            FieldCategory.EMAIL: normalize_basic,
            FieldCategory.NAME: normalize_name,
            FieldCategory.ID: normalize_identifier,
            FieldCategory.GENERIC: normalize_basic,
        }
        missing = set(FieldCategory) - set(strategies)
        if missing:
            raise TypeError(f"No normalization strategy for categories: {sorted(missing)}")
        object.__setattr__(self, "_strategies", MappingProxyType(strategies))

    def strategy_for(self, category: FieldCategory) -> Strategy:
        return self._strategies.get(category, normalize_basic)

    def normalize(self, value: str, canonical_field: str) -> str:
        if not value or not value.strip():
            return ""
        category = self.canonicalizer.category_of(canonical_field)
        return self.strategy_for(category)(value)
