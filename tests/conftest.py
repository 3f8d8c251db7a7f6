from __future__ import annotations

import pytest

from factmerge.config import DEFAULT_TABLES, ReconcileSettings
from factmerge.domain.canonicalization import FieldCanonicalizer
from factmerge.domain.equivalence import EquivalenceEngine
from factmerge.domain.normalization import ValueNormalizer
from factmerge.domain.pipeline import ReconciliationPipeline


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("FACTMERGE_DEFAULT_REGION", "FACTMERGE_FUZZY_THRESHOLD", "FACTMERGE_TABLES_FILE"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def canonicalizer() -> FieldCanonicalizer:
    return FieldCanonicalizer(DEFAULT_TABLES)


@pytest.fixture
def normalizer(canonicalizer: FieldCanonicalizer) -> ValueNormalizer:
    return ValueNormalizer(canonicalizer)


@pytest.fixture
def engine(canonicalizer: FieldCanonicalizer) -> EquivalenceEngine:
    return EquivalenceEngine(canonicalizer=canonicalizer)


@pytest.fixture
def pipeline() -> ReconciliationPipeline:
    return ReconciliationPipeline.from_settings(ReconcileSettings())
