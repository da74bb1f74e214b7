"""
Entropy Model
==============

Converts alphabet size and length into a combinatorial entropy estimate
and maps it onto a five-step strength scale.

    H = log2(N) * L

where N is the presence-based alphabet size from
:class:`~passwarden.analyzers.charset.CharacterClassifier` and L is the
password length.  This is an upper bound on randomness, not the Shannon
entropy of the characters actually used.

Score thresholds (bits, strictly less than, first match wins):

    ======  =====  ============
    < 28    1      Super Weak
    < 36    2      Weak
    < 60    3      Regular
    < 128   4      Strong
    else    5      Super Strong
    ======  =====  ============

References:
    - NIST SP 800-63B (2017). Digital Identity Guidelines.
    - Shannon, C. E. (1948). A Mathematical Theory of Communication.
"""

from __future__ import annotations

import math
from typing import Optional

from passwarden.analyzers.charset import CharacterClassifier
from passwarden.core.exceptions import InvalidArgumentError
from passwarden.core.models import PasswordGrade, StrengthResult

_THRESHOLDS: tuple[tuple[float, int, PasswordGrade], ...] = (
    (28.0, 1, PasswordGrade.SUPER_WEAK),
    (36.0, 2, PasswordGrade.WEAK),
    (60.0, 3, PasswordGrade.REGULAR),
    (128.0, 4, PasswordGrade.STRONG),
)


class EntropyModel:
    """Entropy estimate and strength grading for single passwords."""

    @staticmethod
    def entropy(password: Optional[str]) -> float:
        """Combinatorial entropy in bits.

        Returns ``0.0`` for ``None`` or empty input, and for input whose
        characters fall in no category (caseless letters only).
        """
        if not password:
            return 0.0
        size = CharacterClassifier.char_set_size(password)
        if size == 0:
            return 0.0
        return math.log2(size) * len(password)

    @staticmethod
    def grade_for_entropy(entropy: float) -> tuple[int, PasswordGrade]:
        """Map an entropy value onto ``(score, grade)``."""
        for limit, score, grade in _THRESHOLDS:
            if entropy < limit:
                return score, grade
        return 5, PasswordGrade.SUPER_STRONG

    @classmethod
    def strength(cls, password: Optional[str]) -> StrengthResult:
        """Score, entropy and grade of *password*.

        Raises:
            InvalidArgumentError: If *password* is ``None`` or empty.
        """
        if not password:
            raise InvalidArgumentError("password", "must be a non-empty string")
        entropy = cls.entropy(password)
        score, grade = cls.grade_for_entropy(entropy)
        return StrengthResult(score=score, entropy=entropy, grade=grade)
