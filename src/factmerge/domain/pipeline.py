"""Compose canonicalization, normalization, merging and ordering.

The pipeline is one sequential in-memory computation per batch. It holds no
mutable state between calls, so a single instance may serve concurrent
requests; the only shared data are the read-only lookup tables.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from factmerge.config.reconcile import ReconcileSettings
from factmerge.config.tables import DEFAULT_TABLES, load_tables
from factmerge.domain.canonicalization import FieldCanonicalizer
from factmerge.domain.equivalence import EquivalenceEngine
from factmerge.domain.model import Fact, ReconciliationResult
from factmerge.domain.normalization import ValueNormalizer
from factmerge.domain.ordering import sort_facts

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from factmerge.config.tables import ReconciliationTables
    from factmerge.domain.model import RawObservation

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, kw_only=True)
class ReconciliationPipeline:
    canonicalizer: FieldCanonicalizer
    normalizer: ValueNormalizer
    engine: EquivalenceEngine

    @classmethod
    def from_settings(
        cls,
        settings: ReconcileSettings | None = None,
        *,
        tables: ReconciliationTables | None = None,
    ) -> ReconciliationPipeline:
        """Build a pipeline from settings, loading tables from disk when configured."""

        effective_settings = settings or ReconcileSettings()
        effective_tables = tables
        if effective_tables is None:
            effective_tables = (
                load_tables(effective_settings.tables_path)
                if effective_settings.tables_path is not None
                else DEFAULT_TABLES
            )
        canonicalizer = FieldCanonicalizer(effective_tables)
        return cls(
            canonicalizer=canonicalizer,
            normalizer=ValueNormalizer(
                canonicalizer,
                default_region=effective_settings.default_region,
            ),
            engine=EquivalenceEngine(
                canonicalizer=canonicalizer,
                fuzzy_threshold=effective_settings.fuzzy_threshold,
            ),
        )

    def build_fact(self, observation: RawObservation) -> Fact:
        canonical_field = self.canonicalizer.canonicalize(observation.label)
        return Fact(
            original_field=observation.label,
            canonical_field=canonical_field,
            value=observation.value,
            normalized_value=self.normalizer.normalize(observation.value, canonical_field),
            sources=(observation.source,),
        )

    def build_facts(self, observations: Iterable[RawObservation]) -> list[Fact]:
        return [self.build_fact(observation) for observation in observations]

    def reconcile_facts(self, facts: Sequence[Fact]) -> ReconciliationResult:
        """Merge already-built facts and return them in presentation order."""

        equivalence = self.engine.merge(facts)
        merged_facts = sort_facts(equivalence.merged_facts)
        return ReconciliationResult(
            merged_facts=tuple(merged_facts),
            conflicts=tuple(equivalence.conflicts),
            total_facts_extracted=len(facts),
            total_facts_merged=len(merged_facts),
        )

    def reconcile(self, observations: Iterable[RawObservation]) -> ReconciliationResult:
        facts = self.build_facts(observations)
        result = self.reconcile_facts(facts)
        log.info(
            "Reconciled batch: extracted=%s, merged=%s, conflicts=%s",
            result.total_facts_extracted,
            result.total_facts_merged,
            len(result.conflicts),
        )
        return result


def reconcile(
    observations: Iterable[RawObservation],
    *,
    pipeline: ReconciliationPipeline | None = None,
) -> ReconciliationResult:
    """Reconcile raw observations with the given or a default pipeline."""

    effective_pipeline = pipeline or ReconciliationPipeline.from_settings()
    return effective_pipeline.reconcile(observations)
