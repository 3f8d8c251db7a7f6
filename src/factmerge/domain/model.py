"""Domain types shared by every reconciliation stage (pure, dependency-light)."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class FieldCategory(StrEnum):
    """Semantic class of a canonical field.

    The category selects the normalization strategy and decides whether values
    may be merged by similarity instead of strict equality.
    """

    NAME = "name"
    ADDRESS = "address"
    ID = "id"
    EMAIL = "email"
    PHONE = "phone"
    DATE = "date"
    CURRENCY = "currency"
    GENERIC = "generic"


FUZZY_CATEGORIES: frozenset[FieldCategory] = frozenset({FieldCategory.NAME, FieldCategory.ADDRESS})


class OriginKind(StrEnum):
    TABULAR = "tabular"
    DOCUMENT = "document"


class EmptySourcesError(ValueError):
    """Raised when a fact is built without any provenance."""

    def __init__(self, *, canonical_field: str) -> None:
        self.canonical_field = canonical_field
        super().__init__(f"Fact for field {canonical_field!r} must carry at least one source")


class InvalidSourceError(ValueError):
    """Raised when a source carries an out-of-range confidence."""


@dataclass(frozen=True, slots=True, kw_only=True)
class Source:
    """Provenance of one raw observation."""

    origin: str
    kind: OriginKind
    location: str
    confidence: float = 1.0

    def __post_init__(self) -> None:
        if not 0.0 <= self.confidence <= 1.0:
            raise InvalidSourceError(
                f"Source confidence must be within [0, 1], got {self.confidence} for {self.origin}"
            )


@dataclass(frozen=True, slots=True, kw_only=True)
class RawObservation:
    """Upstream triple handed to the core by an extraction collaborator."""

    label: str
    value: str
    source: Source


@dataclass(frozen=True, slots=True, kw_only=True)
class Fact:
    """One field/value observation plus every source that reported it."""

    original_field: str
    canonical_field: str
    value: str
    normalized_value: str
    sources: tuple[Source, ...]

    def __post_init__(self) -> None:
        if not self.sources:
            raise EmptySourcesError(canonical_field=self.canonical_field)

    def merged_with(self, other: Fact) -> Fact:
        """Return a copy of this fact whose sources are extended by ``other``'s."""

        return Fact(
            original_field=self.original_field,
            canonical_field=self.canonical_field,
            value=self.value,
            normalized_value=self.normalized_value,
            sources=(*self.sources, *other.sources),
        )


@dataclass(frozen=True, slots=True, kw_only=True)
class ConflictValue:
    value: str
    normalized_value: str
    sources: tuple[Source, ...]


@dataclass(frozen=True, slots=True, kw_only=True)
class Conflict:
    """Mutually non-matching values observed for one canonical field."""

    canonical_field: str
    values: tuple[ConflictValue, ...]


@dataclass(frozen=True, slots=True, kw_only=True)
class ReconciliationResult:
    merged_facts: tuple[Fact, ...] = ()
    conflicts: tuple[Conflict, ...] = ()
    total_facts_extracted: int = 0
    total_facts_merged: int = 0
