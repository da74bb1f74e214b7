"""
Pattern Detector
=================

Scans a password for a fixed catalogue of weak structural patterns.  Every
check is an explicit scan over the character sequence; all checks run and
each one that fires is reported, in this order:

1. Repeating characters   -- one character three or more times in a row.
2. Sequential numbers     -- a run of 3+ digits, and the password's digits
                             taken together step by exactly +1 or -1.
3. Date format            -- YYYY[sep]MM[sep]DD or DD[sep]MM[sep]YYYY not
                             touching other digits; separators ``- . / \\``
                             are optional.
4. Alternating pattern    -- a block of one or two characters repeated
                             three times back to back (``ababab``).
5. Low diversity          -- fewer distinct characters than half the length.
6. Repeated pattern       -- the whole password is a prefix of length two
                             or more repeated to fill it (``abcabc``).
7. Sequential letters     -- a run of 3+ letters, and the password's
                             non-digit characters step by exactly +1 or -1.

When nothing fires the result is ``[Pattern.NONE]``.

References:
    - Weir, M. et al. (2009). Password Cracking Using Probabilistic
      Context-Free Grammars. IEEE S&P.
    - Ur, B. et al. (2015). Measuring Real-World Accuracies and Biases in
      Modeling Password Guessability. USENIX Security.
"""

from __future__ import annotations

import string
from typing import Callable, Iterable, Optional

from passwarden.analyzers.charset import is_letter_or_digit
from passwarden.core.exceptions import InvalidArgumentError
from passwarden.core.models import Pattern

_MIN_RUN = 3
_DATE_SEPARATORS = frozenset("-./\\")
_ASCII_DIGITS = frozenset(string.digits)
_ASCII_LETTERS = frozenset(string.ascii_letters)

# field name -> (width, lowest value, highest value)
_DATE_FIELDS: dict[str, tuple[int, int, int]] = {
    "year": (4, 1000, 2099),
    "month": (2, 1, 12),
    "day": (2, 1, 31),
}
_DATE_LAYOUTS: tuple[tuple[str, ...], ...] = (
    ("year", "month", "day"),
    ("day", "month", "year"),
)


# ===================================================================== #
#  Shared sequence test
# ===================================================================== #


def is_sequential(chars: Iterable[str]) -> bool:
    """True when *chars* step by exactly +1 (or exactly -1) code point.

    The sequence must hold at least three characters, all of them letters
    or digits, and keep the same direction throughout.
    """
    seq = list(chars)
    if len(seq) < _MIN_RUN:
        return False
    if not all(is_letter_or_digit(c) for c in seq):
        return False
    steps = {ord(b) - ord(a) for a, b in zip(seq, seq[1:])}
    return steps == {1} or steps == {-1}


def _has_run(password: str, accept: Callable[[str], bool], length: int = _MIN_RUN) -> bool:
    """True when *length* consecutive characters all satisfy *accept*."""
    run = 0
    for char in password:
        run = run + 1 if accept(char) else 0
        if run >= length:
            return True
    return False


# ===================================================================== #
#  Individual checks
# ===================================================================== #


def has_repeating_characters(password: str) -> bool:
    return any(
        password[i] == password[i + 1] == password[i + 2]
        for i in range(len(password) - 2)
    )


def has_sequential_numbers(password: str) -> bool:
    if not _has_run(password, str.isdecimal):
        return False
    return is_sequential(c for c in password if c.isnumeric())


def _date_field_ok(name: str, text: str) -> bool:
    width, low, high = _DATE_FIELDS[name]
    if len(text) != width or not all(c in _ASCII_DIGITS for c in text):
        return False
    return low <= int(text) <= high


def _date_matches(password: str, pos: int, fields: tuple[str, ...]) -> bool:
    name = fields[0]
    width = _DATE_FIELDS[name][0]
    if not _date_field_ok(name, password[pos:pos + width]):
        return False
    pos += width

    rest = fields[1:]
    if not rest:
        return pos >= len(password) or not password[pos].isdecimal()
    if _date_matches(password, pos, rest):
        return True
    if pos < len(password) and password[pos] in _DATE_SEPARATORS:
        return _date_matches(password, pos + 1, rest)
    return False


def has_date_format(password: str) -> bool:
    for start in range(len(password)):
        if start > 0 and password[start - 1].isdecimal():
            continue
        for layout in _DATE_LAYOUTS:
            if _date_matches(password, start, layout):
                return True
    return False


def has_alternating_pattern(password: str) -> bool:
    for block in (1, 2):
        for i in range(len(password) - 3 * block + 1):
            unit = password[i:i + block]
            if password[i:i + 3 * block] == unit * 3:
                return True
    return False


def has_low_diversity(password: str) -> bool:
    return len(set(password)) < len(password) // 2


def has_repeated_pattern(password: str) -> bool:
    length = len(password)
    for width in range(2, length // 2 + 1):
        if length % width == 0 and password[:width] * (length // width) == password:
            return True
    return False


def has_sequential_letters(password: str) -> bool:
    if not _has_run(password, _ASCII_LETTERS.__contains__):
        return False
    return is_sequential(c for c in password if not c.isnumeric())


# ===================================================================== #
#  Detector
# ===================================================================== #

_CHECKS: tuple[tuple[Pattern, Callable[[str], bool]], ...] = (
    (Pattern.REPEATING_CHARACTERS, has_repeating_characters),
    (Pattern.SEQUENTIAL_NUMBERS, has_sequential_numbers),
    (Pattern.DATE_FORMAT, has_date_format),
    (Pattern.ALTERNATING_PATTERN, has_alternating_pattern),
    (Pattern.LOW_DIVERSITY, has_low_diversity),
    (Pattern.REPEATED_PATTERN, has_repeated_pattern),
    (Pattern.SEQUENTIAL_LETTERS, has_sequential_letters),
)


class PatternDetector:
    """Runs every pattern check against a password."""

    @staticmethod
    def detect(password: Optional[str]) -> list[Pattern]:
        """Patterns found in *password*, in detection order.

        Raises:
            InvalidArgumentError: If *password* is ``None``, empty, or
                whitespace only.
        """
        if password is None or not password.strip():
            raise InvalidArgumentError("password", "must contain non-whitespace characters")

        found = [pattern for pattern, check in _CHECKS if check(password)]
        return found or [Pattern.NONE]
