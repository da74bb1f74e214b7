"""
Similarity and Symbol Frequency
================================

Positional overlap between two passwords and per-character occurrence
counts.  Similarity is purely positional: no alignment or edit distance.

    similarity(a, b) = |{i < min(|a|, |b|) : a[i] == b[i]}| / max(|a|, |b|)
"""

from __future__ import annotations

from collections import Counter
from typing import Optional

from passwarden.core.exceptions import InvalidArgumentError


class SimilarityScorer:

    @staticmethod
    def similarity(first: Optional[str], second: Optional[str]) -> float:
        """Fraction of positions where both passwords hold the same character.

        Two empty strings are identical and score ``1.0``.

        Raises:
            InvalidArgumentError: If either argument is ``None``.
        """
        if first is None or second is None:
            raise InvalidArgumentError("password", "both passwords are required")

        longest = max(len(first), len(second))
        if longest == 0:
            return 1.0
        matches = sum(1 for a, b in zip(first, second) if a == b)
        return matches / longest

    @staticmethod
    def symbol_frequency(password: Optional[str]) -> dict[str, int]:
        """Occurrences of each character, keyed in first-seen order.

        Raises:
            InvalidArgumentError: If *password* is ``None`` or empty.
        """
        if not password:
            raise InvalidArgumentError("password", "must be a non-empty string")
        return dict(Counter(password))
