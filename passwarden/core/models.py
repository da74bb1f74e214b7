"""
PassWarden Core Data Models
============================

Pydantic models and enumerations for password analysis and generation
results.  Every result is created fresh per call and is immutable; the
models serialise to JSON for the report generators.

References:
    - NIST SP 800-63B (2017). Digital Identity Guidelines --
      Authentication and Lifecycle Management.
"""

from __future__ import annotations

import enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# ===================================================================== #
#  Enumerations
# ===================================================================== #


class CharacterClass(str, enum.Enum):
    """Character categories used for alphabet sizing.

    A character is exactly one of lowercase, uppercase or digit, or it is
    special (anything that is neither a letter nor a digit).  Letters that
    are neither lowercase nor uppercase belong to no class.
    """

    LOWER = "lower"
    UPPER = "upper"
    DIGIT = "digit"
    SPECIAL = "special"

    @property
    def alphabet_size(self) -> int:
        """Search-space contribution of this class when present."""
        return _CLASS_SIZES[self]


_CLASS_SIZES: dict[CharacterClass, int] = {
    CharacterClass.LOWER: 26,
    CharacterClass.UPPER: 26,
    CharacterClass.DIGIT: 10,
    CharacterClass.SPECIAL: 32,
}


class PasswordGrade(str, enum.Enum):
    """Discrete strength bucket, derived from the 1-5 score."""

    SUPER_WEAK = "super_weak"
    WEAK = "weak"
    REGULAR = "regular"
    STRONG = "strong"
    SUPER_STRONG = "super_strong"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()


class Pattern(str, enum.Enum):
    """Weak structural patterns reported by the pattern detector.

    Members are declared in detection order.
    """

    REPEATING_CHARACTERS = "repeating_characters"
    SEQUENTIAL_NUMBERS = "sequential_numbers"
    DATE_FORMAT = "date_format"
    ALTERNATING_PATTERN = "alternating_pattern"
    LOW_DIVERSITY = "low_diversity"
    REPEATED_PATTERN = "repeated_pattern"
    SEQUENTIAL_LETTERS = "sequential_letters"
    NONE = "none"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()


class HashAlgorithm(str, enum.Enum):
    """Hash algorithms with a configurable brute-force speed."""

    MD5 = "MD5"
    SHA1 = "SHA1"
    SHA2_224 = "SHA2_224"
    SHA3_224 = "SHA3_224"
    BCRYPT = "BCRYPT"
    SCRYPT = "SCRYPT"


class TimeUnit(str, enum.Enum):
    """Units a crack-time estimate can be expressed in."""

    YEARS = "years"
    MONTHS = "months"
    WEEKS = "weeks"
    DAYS = "days"
    HOURS = "hours"
    MINUTES = "minutes"
    SECONDS = "seconds"

    @property
    def seconds(self) -> int:
        """Length of one unit in seconds (a year is 365.25 days)."""
        return _UNIT_SECONDS[self]


_UNIT_SECONDS: dict[TimeUnit, int] = {
    TimeUnit.YEARS: 31_557_600,
    TimeUnit.MONTHS: 2_629_743,
    TimeUnit.WEEKS: 604_800,
    TimeUnit.DAYS: 86_400,
    TimeUnit.HOURS: 3_600,
    TimeUnit.MINUTES: 60,
    TimeUnit.SECONDS: 1,
}


class NamingConvention(str, enum.Enum):
    """Text layouts a mnemonic phrase can be rendered in."""

    CAMEL = "camel"
    PASCAL = "pascal"
    SNAKE = "snake"
    SCREAMING_SNAKE = "screaming_snake"
    KEBAB = "kebab"
    TRAIN = "train"
    DOT = "dot"
    UPPER = "upper"
    LOWER = "lower"


class WordCategory(str, enum.Enum):
    """Word lists backing mnemonic generation."""

    NOUNS = "nouns"
    ADJECTIVES = "adjectives"
    VERBS = "verbs"


# ===================================================================== #
#  Analysis Models
# ===================================================================== #


class StrengthResult(BaseModel):
    """Score, entropy and grade of a single password.

    Attributes:
        score: Integer 1-5; a step function of *entropy*.
        entropy: ``log2(alphabet_size) * length`` in bits.
        grade: Qualitative bucket; a function of *score*.
    """

    model_config = ConfigDict(frozen=True)

    score: int = Field(ge=1, le=5)
    entropy: float = Field(ge=0.0)
    grade: PasswordGrade


class CrackTimeEstimate(BaseModel):
    """Exhaustive-search time for one password at one attack speed.

    Attributes:
        combinations: ``alphabet_size ** length`` as an exact integer.
        attempts_per_second: Attack speed used for the estimate.
        algorithm: Hash algorithm the speed was looked up for, if any.
        unit: Unit of *value*.
        value: Time to exhaust the search space, in *unit*.
    """

    model_config = ConfigDict(frozen=True)

    combinations: int
    attempts_per_second: float
    algorithm: Optional[HashAlgorithm] = None
    unit: TimeUnit = TimeUnit.DAYS
    value: float


class PasswordAnalysis(BaseModel):
    """Complete analysis of a single password.

    Attributes:
        password_masked: First and last character with asterisks between.
        length: Character length.
        char_set_size: Presence-based alphabet size.
        character_classes: Classes present, in canonical order.
        strength: Score / entropy / grade.
        patterns: Detected patterns in detection order.
        symbol_frequency: Occurrences per character, first-seen order.
        compromised: Breach-corpus verdict; ``None`` when not checked.
        crack_time: Brute-force estimate at the default algorithm speed.
    """

    password_masked: str = ""
    length: int = 0
    char_set_size: int = 0
    character_classes: list[CharacterClass] = Field(default_factory=list)
    strength: StrengthResult
    patterns: list[Pattern] = Field(default_factory=list)
    symbol_frequency: dict[str, int] = Field(default_factory=dict)
    compromised: Optional[bool] = None
    crack_time: Optional[CrackTimeEstimate] = None


# ===================================================================== #
#  Rule Models
# ===================================================================== #


class GenerationRules(BaseModel):
    """Exact per-category character counts for rule-based generation.

    Counts are checked by the generator, which rejects negatives with
    :class:`~passwarden.core.exceptions.InvalidArgumentError`.
    """

    lowercase: int = 0
    uppercase: int = 0
    digits: int = 0
    special: int = 0

    @property
    def length(self) -> int:
        return self.lowercase + self.uppercase + self.digits + self.special


class ValidationRules(BaseModel):
    """Length bounds and required character classes for validation.

    ``min_length`` must be strictly below ``max_length``; the validator
    rejects the rules otherwise.
    """

    min_length: int = 8
    max_length: int = 64
    require_lowercase: bool = False
    require_uppercase: bool = False
    require_digit: bool = False
    require_special: bool = False


class MnemonicData(BaseModel):
    """Noun, adjective and verb lists for mnemonic generation."""

    model_config = ConfigDict(frozen=True)

    nouns: list[str] = Field(default_factory=list)
    adjectives: list[str] = Field(default_factory=list)
    verbs: list[str] = Field(default_factory=list)

    def words(self, category: WordCategory) -> list[str]:
        return getattr(self, category.value)
