"""Lookup tables driving field canonicalization and value normalization.

The tables are built once at process start and never mutated afterwards, so a
single ``ReconciliationTables`` instance can be shared by concurrent
reconciliations without locking.
"""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Final, TypeAlias, TypeVar

from factmerge.domain.labels import normalize_label
from factmerge.domain.model import FieldCategory

from .errors import ConfigurationError, MissingConfigurationError

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

log = logging.getLogger(__name__)

SynonymTable: TypeAlias = "Mapping[str, tuple[str, ...]]"
CategoryTable: TypeAlias = "Mapping[str, FieldCategory]"
AbbreviationTable: TypeAlias = "Mapping[str, str]"

K = TypeVar("K")
V = TypeVar("V")


_DEFAULT_SYNONYMS: Final[dict[str, tuple[str, ...]]] = {
    "date_of_birth": ("dob", "birth_date", "birthdate", "date of birth", "birth date", "birthday"),
    "phone_number": (
        "phone",
        "tel",
        "telephone",
        "mobile",
        "cell",
        "contact_number",
        "contact number",
    ),
    "email_address": ("email", "e-mail", "mail", "email address"),
    "first_name": ("fname", "first name", "firstname", "given name", "givenname"),
    "last_name": ("lname", "last name", "lastname", "surname", "family name", "familyname"),
    "full_name": ("name", "full name", "fullname", "customer name", "client name"),
    "street_address": ("address", "street", "address line 1", "address1", "street address"),
    "city": ("town", "locality", "city name"),
    "state": ("province", "region", "state/province"),
    "zip_code": ("zip", "postal_code", "postal code", "postcode", "zipcode"),
    "country": ("country name", "nation"),
    "invoice_number": ("invoice", "invoice #", "invoice no", "invoice_id", "inv_number"),
    "order_number": ("order", "order #", "order no", "order_id"),
    "customer_id": ("customer id", "client id", "cust_id", "customerid"),
    "amount": ("total", "price", "cost", "sum", "value"),
    "date": ("transaction_date", "purchase_date", "order_date", "invoice_date"),
}

_DEFAULT_CATEGORIES: Final[dict[str, FieldCategory]] = {
    "first_name": FieldCategory.NAME,
    "last_name": FieldCategory.NAME,
    "full_name": FieldCategory.NAME,
    "street_address": FieldCategory.ADDRESS,
    "city": FieldCategory.ADDRESS,
    "invoice_number": FieldCategory.ID,
    "order_number": FieldCategory.ID,
    "customer_id": FieldCategory.ID,
    "zip_code": FieldCategory.ID,
    "email_address": FieldCategory.EMAIL,
    "phone_number": FieldCategory.PHONE,
    "date_of_birth": FieldCategory.DATE,
    "date": FieldCategory.DATE,
    "amount": FieldCategory.CURRENCY,
}

_DEFAULT_ABBREVIATIONS: Final[dict[str, str]] = {
    "st": "street",
    "ave": "avenue",
    "blvd": "boulevard",
    "dr": "drive",
    "rd": "road",
    "ln": "lane",
    "ct": "court",
    "cir": "circle",
    "apt": "apartment",
    "ste": "suite",
    "fl": "floor",
    "bldg": "building",
}


def _freeze(values: dict[K, V]) -> Mapping[K, V]:
    return MappingProxyType(dict(values))


@dataclass(frozen=True, slots=True, kw_only=True)
class ReconciliationTables:
    """Read-only synonym, category and abbreviation tables."""

    synonyms: SynonymTable = field(default_factory=lambda: _freeze(_DEFAULT_SYNONYMS))
    categories: CategoryTable = field(default_factory=lambda: _freeze(_DEFAULT_CATEGORIES))
    abbreviations: AbbreviationTable = field(
        default_factory=lambda: _freeze(_DEFAULT_ABBREVIATIONS)
    )

    @classmethod
    def build(
        cls,
        *,
        synonyms: Mapping[str, tuple[str, ...] | list[str]] | None = None,
        categories: Mapping[str, FieldCategory] | None = None,
        abbreviations: Mapping[str, str] | None = None,
    ) -> ReconciliationTables:
        """Return tables with the given overrides layered over the defaults."""

        merged_synonyms = dict(_DEFAULT_SYNONYMS)
        for canonical, variants in (synonyms or {}).items():
            key = _canonical_key(canonical, section="synonyms")
            if any(not variant.strip() for variant in variants):
                raise ConfigurationError(f"[synonyms].{canonical} has a blank label")
            merged_synonyms[key] = tuple(variants)
        merged_categories = dict(_DEFAULT_CATEGORIES)
        for canonical, category in (categories or {}).items():
            merged_categories[_canonical_key(canonical, section="categories")] = category
        merged_abbreviations = dict(_DEFAULT_ABBREVIATIONS)
        for short, expansion in (abbreviations or {}).items():
            # addresses are lowercased before expansion
            key = short.strip().lower()
            if not key:
                raise ConfigurationError("[abbreviations] keys must not be blank")
            merged_abbreviations[key] = expansion.strip().lower()
        return cls(
            synonyms=_freeze(merged_synonyms),
            categories=_freeze(merged_categories),
            abbreviations=_freeze(merged_abbreviations),
        )


DEFAULT_TABLES: Final[ReconciliationTables] = ReconciliationTables()


def load_tables(path: Path) -> ReconciliationTables:
    """Load table overrides from a TOML file.

    Recognised sections are ``[synonyms]`` (canonical field -> list of labels),
    ``[categories]`` (canonical field -> category name) and ``[abbreviations]``
    (short form -> expansion). Anything else in the document is ignored.
    """

    try:
        with path.open("rb") as handle:
            document = tomllib.load(handle)
    except FileNotFoundError as exc:
        raise MissingConfigurationError(path) from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigurationError(f"Tables file is not valid TOML: {path}: {exc}") from exc

    synonyms = _string_lists(document.get("synonyms", {}), section="synonyms")
    categories = _categories(document.get("categories", {}))
    abbreviations = _strings(document.get("abbreviations", {}), section="abbreviations")
    log.info(
        "Loaded tables from %s: synonyms=%s, categories=%s, abbreviations=%s",
        path,
        len(synonyms),
        len(categories),
        len(abbreviations),
    )
    return ReconciliationTables.build(
        synonyms=synonyms,
        categories=categories,
        abbreviations=abbreviations,
    )


def _section(value: object, *, section: str) -> dict[str, object]:
    if not isinstance(value, dict):
        raise ConfigurationError(f"[{section}] must be a table")
    return {str(key): item for key, item in value.items()}


def _string_lists(value: object, *, section: str) -> dict[str, tuple[str, ...]]:
    result: dict[str, tuple[str, ...]] = {}
    for key, item in _section(value, section=section).items():
        if not isinstance(item, list) or not all(isinstance(label, str) for label in item):
            raise ConfigurationError(f"[{section}].{key} must be a list of strings")
        result[key] = tuple(item)
    return result


def _strings(value: object, *, section: str) -> dict[str, str]:
    result: dict[str, str] = {}
    for key, item in _section(value, section=section).items():
        if not isinstance(item, str):
            raise ConfigurationError(f"[{section}].{key} must be a string")
        result[key] = item
    return result


def _categories(value: object) -> dict[str, FieldCategory]:
    result: dict[str, FieldCategory] = {}
    for key, item in _strings(value, section="categories").items():
        try:
            result[key] = FieldCategory(item.strip().lower())
        except ValueError as exc:
            raise ConfigurationError(f"[categories].{key} has unknown category: {item}") from exc
    return result


def _canonical_key(canonical: str, *, section: str) -> str:
    key = normalize_label(canonical)
    if not key:
        raise ConfigurationError(f"[{section}] keys must not be blank")
    return key
