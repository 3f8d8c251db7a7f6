"""Application orchestration entry points."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING

from factmerge.adapters import ExtractionError, build_report, extract_csv, extract_key_values
from factmerge.domain.pipeline import ReconciliationPipeline

if TYPE_CHECKING:
    from collections.abc import Sequence

    from factmerge.adapters import ReconciliationReport
    from factmerge.config import ReconcileSettings
    from factmerge.domain.model import RawObservation

TABULAR_SUFFIXES = frozenset({".csv"})
DOCUMENT_SUFFIXES = frozenset({".txt", ".text"})

log = getLogger(__name__)


@dataclass(slots=True)
class FileReconciliation:
    report: ReconciliationReport
    processed: list[Path] = field(default_factory=list[Path])
    skipped: list[Path] = field(default_factory=list[Path])


def extract_file(path: Path) -> list[RawObservation]:
    """Read one input file and return its raw observations."""

    suffix = path.suffix.lower()
    if suffix in TABULAR_SUFFIXES:
        with path.open("r", encoding="utf-8-sig", newline="") as handle:
            return extract_csv(handle, origin=path.name)
    if suffix in DOCUMENT_SUFFIXES:
        return extract_key_values(path.read_text(encoding="utf-8"), origin=path.name)
    raise ExtractionError(f"unsupported file type: {suffix or '<none>'}", origin=path.name)


def reconcile_files(
    paths: Sequence[Path],
    *,
    settings: ReconcileSettings | None = None,
    pipeline: ReconciliationPipeline | None = None,
) -> FileReconciliation:
    """Extract observations from ``paths`` and reconcile them as one batch.

    Files that cannot be read are logged and skipped so one bad upload does not
    sink the whole batch.
    """

    effective_pipeline = pipeline or ReconciliationPipeline.from_settings(settings)
    log.info("Starting reconciliation: files=%s", len(paths))

    observations: list[RawObservation] = []
    processed: list[Path] = []
    skipped: list[Path] = []
    for path in paths:
        try:
            extracted = extract_file(path)
        except (ExtractionError, OSError, UnicodeDecodeError):
            log.warning("Skipping unreadable input %s", path, exc_info=True)
            skipped.append(path)
            continue
        log.info("Extracted %s observations from %s", len(extracted), path.name)
        observations.extend(extracted)
        processed.append(path)

    result = effective_pipeline.reconcile(observations)
    report = build_report(result, files_processed=len(processed))

    log.info(
        f"Finished reconciliation: processed={len(processed)}, skipped={len(skipped)}, "
        f"merged={result.total_facts_merged}, conflicts={len(result.conflicts)}"
    )
    return FileReconciliation(report=report, processed=processed, skipped=skipped)
