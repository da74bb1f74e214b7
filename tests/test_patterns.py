"""Tests for the pattern detector."""

from __future__ import annotations

import pytest

from passwarden.analyzers.patterns import PatternDetector, is_sequential
from passwarden.core.exceptions import InvalidArgumentError
from passwarden.core.models import Pattern


class TestIsSequential:
    @pytest.mark.parametrize("chars", ["abc", "cba", "123", "987", "XYZ"])
    def test_sequential(self, chars):
        assert is_sequential(chars)

    @pytest.mark.parametrize("chars", ["ab", "abd", "aab", "135", "a-b", ""])
    def test_not_sequential(self, chars):
        assert not is_sequential(chars)

    def test_direction_must_not_change(self):
        assert not is_sequential("abcba")


class TestDetect:
    @pytest.mark.parametrize(
        "password, pattern",
        [
            ("bbbcccddd", Pattern.REPEATING_CHARACTERS),
            ("123xyz", Pattern.SEQUENTIAL_NUMBERS),
            ("ABCDE", Pattern.SEQUENTIAL_LETTERS),
            ("--**--**--**", Pattern.REPEATED_PATTERN),
            ("abcababababdef", Pattern.ALTERNATING_PATTERN),
            ("aabbaabb", Pattern.LOW_DIVERSITY),
            ("pass2023-05-17", Pattern.DATE_FORMAT),
            ("17/05/2023x", Pattern.DATE_FORMAT),
            ("20230517", Pattern.DATE_FORMAT),
            ("on1999.12.31", Pattern.DATE_FORMAT),
        ],
    )
    def test_pattern_detected(self, password, pattern):
        assert pattern in PatternDetector.detect(password)

    def test_clean_password_reports_none(self):
        assert PatternDetector.detect("Kx9!mP2@") == [Pattern.NONE]

    def test_detection_order(self):
        assert PatternDetector.detect("aaaaaa") == [
            Pattern.REPEATING_CHARACTERS,
            Pattern.ALTERNATING_PATTERN,
            Pattern.LOW_DIVERSITY,
            Pattern.REPEATED_PATTERN,
        ]

    def test_digits_must_be_sequential_overall(self):
        assert Pattern.SEQUENTIAL_NUMBERS not in PatternDetector.detect("x124")

    def test_digit_run_required(self):
        assert Pattern.SEQUENTIAL_NUMBERS not in PatternDetector.detect("a1b2c3")

    def test_letters_considered_across_digits(self):
        assert Pattern.SEQUENTIAL_LETTERS in PatternDetector.detect("abc1d")
        assert Pattern.SEQUENTIAL_LETTERS not in PatternDetector.detect("abcx")

    def test_invalid_month_is_not_a_date(self):
        assert Pattern.DATE_FORMAT not in PatternDetector.detect("2023-13-01")

    def test_date_touching_digits_is_ignored(self):
        assert Pattern.DATE_FORMAT not in PatternDetector.detect("920230517")

    def test_short_prefix_repeat_is_not_alternating(self):
        found = PatternDetector.detect("abab")
        assert Pattern.ALTERNATING_PATTERN not in found
        assert Pattern.REPEATED_PATTERN in found

    @pytest.mark.parametrize("password", [None, "", "   "])
    def test_invalid_input(self, password):
        with pytest.raises(InvalidArgumentError):
            PatternDetector.detect(password)
