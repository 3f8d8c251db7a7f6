"""Map raw field labels to canonical field ids and categories."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from factmerge.config.tables import DEFAULT_TABLES
from factmerge.domain.labels import normalize_label
from factmerge.domain.model import FUZZY_CATEGORIES, FieldCategory

if TYPE_CHECKING:
    from factmerge.config.tables import ReconciliationTables


@dataclass(frozen=True, slots=True)
class FieldCanonicalizer:
    """Resolve field labels against the synonym and category tables.

    Unknown labels are not an error: their normalized form becomes their own
    canonical id and they fall into the generic category.
    """

    tables: ReconciliationTables = DEFAULT_TABLES
    _synonym_index: dict[str, str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        index: dict[str, str] = {}
        for canonical, variants in self.tables.synonyms.items():
            for variant in variants:
                # first canonical id listing a variant wins, as in a linear scan
                index.setdefault(normalize_label(variant), canonical)
        object.__setattr__(self, "_synonym_index", index)

    def canonicalize(self, label: str) -> str:
        normalized = normalize_label(label)
        if normalized in self.tables.synonyms:
            return normalized
        return self._synonym_index.get(normalized, normalized)

    def category_of(self, canonical_field: str) -> FieldCategory:
        return self.tables.categories.get(canonical_field, FieldCategory.GENERIC)

    def fuzzy_eligible(self, canonical_field: str) -> bool:
        return self.category_of(canonical_field) in FUZZY_CATEGORIES
