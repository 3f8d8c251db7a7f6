"""Presentation ordering for merged facts."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from factmerge.domain.model import Fact


def fact_sort_key(fact: Fact) -> tuple[str, str]:
    return fact.canonical_field, fact.normalized_value


def sort_facts(facts: Iterable[Fact]) -> list[Fact]:
    """Return a new list ordered by canonical field, then normalized value.

    Runs after merging and never feeds back into it; the input is left as is.
    """

    return sorted(facts, key=fact_sort_key)
