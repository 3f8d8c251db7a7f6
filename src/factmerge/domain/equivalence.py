"""Single-pass merging of equivalent facts and conflict bookkeeping.

Responsibilities of this stage:
- merge each incoming fact into the first accumulated fact it matches
- record every distinct normalized value seen for a field once the field
  turns out to carry values that do not match each other
- stay deterministic and total: any well-formed batch, including an empty
  one, yields a result

The pass is order-sensitive. Similarity is not transitive, so when A~B and
B~C but not A~C, the grouping depends on which of them arrives first. Merging
always targets the first match in accumulation order, never the best one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

from factmerge.config.reconcile import DEFAULT_FUZZY_THRESHOLD
from factmerge.domain.canonicalization import FieldCanonicalizer
from factmerge.domain.model import Conflict, ConflictValue
from factmerge.domain.similarity import bigram_similarity

if TYPE_CHECKING:
    from collections.abc import Iterable

    from factmerge.domain.model import Fact

log = logging.getLogger(__name__)


class MatchKind(StrEnum):
    """How an incoming fact matched an accumulated one."""

    EXACT = "exact"
    FUZZY = "fuzzy"


@dataclass(slots=True)
class EquivalenceResult:
    merged_facts: list[Fact] = field(default_factory=list["Fact"])
    conflicts: list[Conflict] = field(default_factory=list[Conflict])


class ConflictLedger:
    """Two-level ordered index: canonical field -> normalized value -> value record.

    Both levels keep first-seen order, which is the order conflicts and their
    values are reported in.
    """

    __slots__ = ("_values_by_field",)

    def __init__(self) -> None:
        self._values_by_field: dict[str, dict[str, ConflictValue]] = {}

    def __contains__(self, canonical_field: object) -> bool:
        return canonical_field in self._values_by_field

    def add_if_absent(self, fact: Fact) -> None:
        values = self._values_by_field.setdefault(fact.canonical_field, {})
        if fact.normalized_value not in values:
            values[fact.normalized_value] = _value_record(fact)

    def add_or_merge(self, fact: Fact) -> None:
        values = self._values_by_field.setdefault(fact.canonical_field, {})
        existing = values.get(fact.normalized_value)
        if existing is None:
            values[fact.normalized_value] = _value_record(fact)
            return
        values[fact.normalized_value] = ConflictValue(
            value=existing.value,
            normalized_value=existing.normalized_value,
            sources=(*existing.sources, *fact.sources),
        )

    def values_for(self, canonical_field: str) -> tuple[ConflictValue, ...]:
        return tuple(self._values_by_field.get(canonical_field, {}).values())

    def conflicts(self) -> list[Conflict]:
        """Return one conflict per field holding at least two distinct values."""

        return [
            Conflict(canonical_field=canonical_field, values=tuple(values.values()))
            for canonical_field, values in self._values_by_field.items()
            if len(values) > 1
        ]


class _MergedFacts:
    """Accumulated facts in arrival order, indexed by canonical field."""

    __slots__ = ("_facts", "_positions_by_field")

    def __init__(self) -> None:
        self._facts: list[Fact] = []
        self._positions_by_field: dict[str, list[int]] = {}

    def positions_for(self, canonical_field: str) -> list[int]:
        return self._positions_by_field.get(canonical_field, [])

    def __getitem__(self, position: int) -> Fact:
        return self._facts[position]

    def replace(self, position: int, fact: Fact) -> None:
        self._facts[position] = fact

    def append(self, fact: Fact) -> None:
        self._positions_by_field.setdefault(fact.canonical_field, []).append(len(self._facts))
        self._facts.append(fact)

    def to_list(self) -> list[Fact]:
        return list(self._facts)


@dataclass(slots=True, kw_only=True)
class EquivalenceEngine:
    """Merge equivalent facts of one batch and surface conflicting values."""

    canonicalizer: FieldCanonicalizer = field(default_factory=FieldCanonicalizer)
    fuzzy_threshold: float = DEFAULT_FUZZY_THRESHOLD

    def match(self, existing: Fact, candidate: Fact) -> MatchKind | None:
        """Return how ``candidate`` matches ``existing``, or ``None``."""

        if existing.canonical_field != candidate.canonical_field:
            return None
        if existing.normalized_value == candidate.normalized_value:
            return MatchKind.EXACT
        if not self.canonicalizer.fuzzy_eligible(candidate.canonical_field):
            return None
        score = bigram_similarity(existing.normalized_value, candidate.normalized_value)
        if score >= self.fuzzy_threshold:
            return MatchKind.FUZZY
        return None

    def merge(self, facts: Iterable[Fact]) -> EquivalenceResult:
        merged = _MergedFacts()
        ledger = ConflictLedger()
        processed = 0

        for fact in facts:
            processed += 1
            positions = merged.positions_for(fact.canonical_field)
            if self._merge_into_first_match(fact, merged=merged, positions=positions):
                continue
            if positions:
                # field already holds a value this fact does not match
                ledger.add_if_absent(merged[positions[0]])
                ledger.add_or_merge(fact)
            merged.append(fact)

        result = EquivalenceResult(merged_facts=merged.to_list(), conflicts=ledger.conflicts())
        log.info(
            "Merged facts: input=%s, merged=%s, conflicts=%s",
            processed,
            len(result.merged_facts),
            len(result.conflicts),
        )
        return result

    def _merge_into_first_match(
        self,
        fact: Fact,
        *,
        merged: _MergedFacts,
        positions: list[int],
    ) -> bool:
        for position in positions:
            existing = merged[position]
            match_kind = self.match(existing, fact)
            if match_kind is None:
                continue
            if match_kind is MatchKind.FUZZY:
                log.debug(
                    "Fuzzy merge on %s: %r ~ %r",
                    fact.canonical_field,
                    existing.normalized_value,
                    fact.normalized_value,
                )
            merged.replace(position, existing.merged_with(fact))
            return True
        return False


def merge_facts(
    facts: Iterable[Fact],
    *,
    canonicalizer: FieldCanonicalizer | None = None,
    fuzzy_threshold: float = DEFAULT_FUZZY_THRESHOLD,
) -> EquivalenceResult:
    """Merge ``facts`` with a default-configured engine."""

    engine = EquivalenceEngine(
        canonicalizer=canonicalizer or FieldCanonicalizer(),
        fuzzy_threshold=fuzzy_threshold,
    )
    return engine.merge(facts)


def _value_record(fact: Fact) -> ConflictValue:
    return ConflictValue(
        value=fact.value,
        normalized_value=fact.normalized_value,
        sources=fact.sources,
    )
