"""
PassWarden Core Module
=======================

Data models, error taxonomy and hashers shared by every PassWarden
component.  The engine lives in :mod:`passwarden.core.engine`.
"""

from passwarden.core.exceptions import (
    BreachLookupError,
    GenerationExhaustedError,
    InvalidArgumentError,
    PassWardenError,
    UnconfiguredAlgorithmError,
)
from passwarden.core.models import (
    CharacterClass,
    CrackTimeEstimate,
    GenerationRules,
    HashAlgorithm,
    MnemonicData,
    NamingConvention,
    PasswordAnalysis,
    PasswordGrade,
    Pattern,
    StrengthResult,
    TimeUnit,
    ValidationRules,
    WordCategory,
)

__all__ = [
    "BreachLookupError",
    "CharacterClass",
    "CrackTimeEstimate",
    "GenerationExhaustedError",
    "GenerationRules",
    "HashAlgorithm",
    "InvalidArgumentError",
    "MnemonicData",
    "NamingConvention",
    "PassWardenError",
    "PasswordAnalysis",
    "PasswordGrade",
    "Pattern",
    "StrengthResult",
    "TimeUnit",
    "UnconfiguredAlgorithmError",
    "ValidationRules",
    "WordCategory",
]
