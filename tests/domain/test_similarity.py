from __future__ import annotations

from collections import Counter

import pytest

from factmerge.domain.similarity import bigram_similarity, bigrams


def test_bigrams_are_overlapping_windows_counted_as_multiset() -> None:
    assert bigrams("aaaa") == Counter({"aa": 3})
    assert bigrams("night") == Counter({"ni": 1, "ig": 1, "gh": 1, "ht": 1})
    assert bigrams("x") == Counter()


@pytest.mark.parametrize(
    ("first", "second", "expected"),
    [
        ("john doe", "john doe", 1.0),
        ("john doe", "john  doe", 14 / 15),
        ("night", "nacht", 0.25),
        ("aaaa", "aa", 0.5),
        ("a", "a", 1.0),
        ("a", "b", 0.0),
        ("ab", "cd", 0.0),
    ],
)
def test_bigram_similarity_scores(first: str, second: str, expected: float) -> None:
    assert bigram_similarity(first, second) == pytest.approx(expected)


def test_two_empty_strings_do_not_match() -> None:
    assert bigram_similarity("", "") == 0.0


def test_empty_and_non_empty_do_not_match() -> None:
    assert bigram_similarity("", "ab") == 0.0
    assert bigram_similarity("ab", "") == 0.0


def test_bigram_similarity_is_symmetric() -> None:
    pairs = [("123 main street", "123 main st"), ("jon smith", "john smith"), ("abc", "abcd")]

    for first, second in pairs:
        assert bigram_similarity(first, second) == bigram_similarity(second, first)


def test_small_edits_stay_above_merge_threshold() -> None:
    assert bigram_similarity("christopher robinson", "christopher robinsen") >= 0.85
    assert bigram_similarity("john doe", "jane doe") < 0.85
