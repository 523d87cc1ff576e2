"""Tests for Levenshtein distance and similarity ratio."""

import pytest

from docsorter.utils.similarity import levenshtein_distance, similarity


class TestLevenshteinDistance:
    @pytest.mark.parametrize(
        "a, b, expected",
        [
            ("kitten", "sitting", 3),
            ("", "", 0),
            ("", "abc", 3),
            ("abc", "", 3),
            ("flaw", "lawn", 2),
            ("same", "same", 0),
            ("Invoice", "invoice", 1),
        ],
    )
    def test_known_distances(self, a: str, b: str, expected: int) -> None:
        assert levenshtein_distance(a, b) == expected

    def test_symmetric(self) -> None:
        assert levenshtein_distance("contract", "contact") == levenshtein_distance(
            "contact", "contract"
        )


class TestSimilarity:
    def test_both_empty_is_identical(self) -> None:
        assert similarity("", "") == 1.0

    def test_identical_strings(self) -> None:
        assert similarity("report.pdf", "report.pdf") == 1.0

    def test_one_empty_string(self) -> None:
        assert similarity("", "abcd") == 0.0

    def test_partial_similarity(self) -> None:
        assert similarity("abc", "abd") == pytest.approx(2 / 3)

    def test_uses_longest_length(self) -> None:
        # distance("kitten", "sitting") == 3, longest == 7
        assert similarity("kitten", "sitting") == pytest.approx(4 / 7)
