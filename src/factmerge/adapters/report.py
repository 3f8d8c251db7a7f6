"""Pydantic models describing the JSON reconciliation report."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from factmerge.domain.model import (
    Conflict,
    ConflictValue,
    Fact,
    OriginKind,
    ReconciliationResult,
    Source,
)


class ReportBaseModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class SourcePayload(ReportBaseModel):
    file_name: str = Field(alias="fileName")
    file_type: OriginKind = Field(alias="fileType")
    location: str
    confidence: float = Field(ge=0.0, le=1.0)

    @classmethod
    def from_source(cls, source: Source) -> SourcePayload:
        return cls(
            file_name=source.origin,
            file_type=source.kind,
            location=source.location,
            confidence=source.confidence,
        )


class FactPayload(ReportBaseModel):
    field: str
    canonical_field: str = Field(alias="canonicalField")
    value: str
    normalized_value: str = Field(alias="normalizedValue")
    sources: list[SourcePayload] = Field(min_length=1)

    @classmethod
    def from_fact(cls, fact: Fact) -> FactPayload:
        return cls(
            field=fact.original_field,
            canonical_field=fact.canonical_field,
            value=fact.value,
            normalized_value=fact.normalized_value,
            sources=[SourcePayload.from_source(source) for source in fact.sources],
        )


class ConflictValuePayload(ReportBaseModel):
    value: str
    normalized_value: str = Field(alias="normalizedValue")
    sources: list[SourcePayload]

    @classmethod
    def from_value(cls, conflict_value: ConflictValue) -> ConflictValuePayload:
        return cls(
            value=conflict_value.value,
            normalized_value=conflict_value.normalized_value,
            sources=[SourcePayload.from_source(source) for source in conflict_value.sources],
        )


class ConflictPayload(ReportBaseModel):
    canonical_field: str = Field(alias="canonicalField")
    values: list[ConflictValuePayload] = Field(min_length=2)

    @classmethod
    def from_conflict(cls, conflict: Conflict) -> ConflictPayload:
        return cls(
            canonical_field=conflict.canonical_field,
            values=[ConflictValuePayload.from_value(value) for value in conflict.values],
        )


class ReconciliationReport(ReportBaseModel):
    merged_facts: list[FactPayload] = Field(alias="mergedFacts")
    conflicts: list[ConflictPayload]
    total_files_processed: int = Field(alias="totalFilesProcessed", ge=0)
    total_facts_extracted: int = Field(alias="totalFactsExtracted", ge=0)
    total_facts_merged: int = Field(alias="totalFactsMerged", ge=0)

    def to_json(self, *, indent: int | None = 2) -> str:
        return self.model_dump_json(by_alias=True, indent=indent)


def build_report(result: ReconciliationResult, *, files_processed: int) -> ReconciliationReport:
    return ReconciliationReport(
        merged_facts=[FactPayload.from_fact(fact) for fact in result.merged_facts],
        conflicts=[ConflictPayload.from_conflict(conflict) for conflict in result.conflicts],
        total_files_processed=files_processed,
        total_facts_extracted=result.total_facts_extracted,
        total_facts_merged=result.total_facts_merged,
    )
