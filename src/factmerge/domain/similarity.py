"""Bigram-overlap (Dice) similarity used for fuzzy fact matching."""

from __future__ import annotations

from collections import Counter


def bigrams(text: str) -> Counter[str]:
    """Return the multiset of overlapping two-character windows of ``text``."""

    return Counter(text[index : index + 2] for index in range(len(text) - 1))


def bigram_similarity(first: str, second: str) -> float:
    """Score two strings in ``[0, 1]`` by shared bigrams.

    The score is ``2 * |shared| / (|bigrams(first)| + |bigrams(second)|)`` with
    bigrams counted as multisets. Identical non-empty strings score 1.0; two
    empty strings score 0.0 so blank values never look alike. Strings too short
    to have a bigram only match when identical.
    """

    if not first and not second:
        return 0.0
    if first == second:
        return 1.0
    if len(first) < 2 or len(second) < 2:
        return 0.0

    first_bigrams = bigrams(first)
    second_bigrams = bigrams(second)
    shared = sum((first_bigrams & second_bigrams).values())
    total = (len(first) - 1) + (len(second) - 1)
    return 2.0 * shared / total
