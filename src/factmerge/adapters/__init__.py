"""Extraction collaborators and report serialization around the reconciliation core."""

from __future__ import annotations

from .document import extract_key_values
from .errors import ExtractionError
from .report import ReconciliationReport, build_report
from .tabular import extract_csv

__all__ = [
    "ExtractionError",
    "ReconciliationReport",
    "build_report",
    "extract_csv",
    "extract_key_values",
]
