"""Tests for positional similarity and symbol frequency."""

from __future__ import annotations

import pytest

from passwarden.analyzers.similarity import SimilarityScorer
from passwarden.core.exceptions import InvalidArgumentError


class TestSimilarity:
    def test_partial_overlap(self):
        assert SimilarityScorer.similarity("abcd", "abxy") == 0.5

    def test_length_mismatch_uses_longest(self):
        assert SimilarityScorer.similarity("abc", "abcdef") == 0.5

    def test_no_overlap(self):
        assert SimilarityScorer.similarity("abc", "xyz") == 0.0

    def test_identical(self):
        assert SimilarityScorer.similarity("secret", "secret") == 1.0

    def test_symmetric(self):
        assert SimilarityScorer.similarity("hunter2", "hunter") == SimilarityScorer.similarity("hunter", "hunter2")

    def test_suffix_does_not_align(self):
        assert SimilarityScorer.similarity("test1234", "test") == 0.5
        assert SimilarityScorer.similarity("1234", "test1234") == 0.0

    def test_one_empty(self):
        assert SimilarityScorer.similarity("", "abc") == 0.0

    def test_both_empty(self):
        assert SimilarityScorer.similarity("", "") == 1.0

    def test_none_rejected(self):
        with pytest.raises(InvalidArgumentError):
            SimilarityScorer.similarity(None, "abc")


class TestSymbolFrequency:
    def test_counts_in_first_seen_order(self):
        frequency = SimilarityScorer.symbol_frequency("hello")
        assert frequency == {"h": 1, "e": 1, "l": 2, "o": 1}
        assert list(frequency) == ["h", "e", "l", "o"]

    def test_counts_sum_to_length(self):
        password = "P@ssw0rd!!"
        assert sum(SimilarityScorer.symbol_frequency(password).values()) == len(password)

    @pytest.mark.parametrize("password", [None, ""])
    def test_invalid_input(self, password):
        with pytest.raises(InvalidArgumentError):
            SimilarityScorer.symbol_frequency(password)
