"""
Character Classifier
=====================

Sorts characters into the four alphabet categories and derives the
presence-based alphabet size used by the entropy and brute-force models.

Each category adds its full size to the alphabet as soon as one character
of it appears: any lowercase letter adds 26, any uppercase letter 26, any
decimal digit 10, and any character that is neither a letter nor a digit
32.  The result estimates the search space an attacker must cover, not the
number of distinct characters actually used.

References:
    - NIST SP 800-63B (2017), Appendix A -- Strength of Memorized Secrets.
"""

from __future__ import annotations

from passwarden.core.models import CharacterClass


def is_letter_or_digit(char: str) -> bool:
    """Letter-or-digit test shared by every analyzer and generator."""
    return char.isalpha() or char.isdecimal()


class CharacterClassifier:
    """Presence-based character classification."""

    @staticmethod
    def classify(char: str) -> CharacterClass | None:
        """Return the category of one character.

        Letters without case (e.g. CJK ideographs) belong to no category
        and return ``None``.
        """
        if char.islower():
            return CharacterClass.LOWER
        if char.isupper():
            return CharacterClass.UPPER
        if char.isdecimal():
            return CharacterClass.DIGIT
        if not is_letter_or_digit(char):
            return CharacterClass.SPECIAL
        return None

    @classmethod
    def classes(cls, password: str) -> list[CharacterClass]:
        """Categories present in *password*, in canonical order."""
        found = {cls.classify(c) for c in password}
        return [c for c in CharacterClass if c in found]

    @classmethod
    def char_set_size(cls, password: str) -> int:
        """Alphabet size implied by the categories present in *password*."""
        return sum(c.alphabet_size for c in cls.classes(password))
