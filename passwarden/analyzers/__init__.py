"""
PassWarden Analyzers
=====================

Individual analysis modules.  Each analyzer is a pure function of its
input except the breach checker, which performs one outbound lookup.
"""

from passwarden.analyzers.breach import BreachChecker, PwnedPasswordsChecker
from passwarden.analyzers.brute_force import BruteForceEstimator
from passwarden.analyzers.charset import CharacterClassifier
from passwarden.analyzers.patterns import PatternDetector
from passwarden.analyzers.similarity import SimilarityScorer
from passwarden.analyzers.strength import EntropyModel
from passwarden.analyzers.validator import PasswordValidator

__all__ = [
    "BreachChecker",
    "BruteForceEstimator",
    "CharacterClassifier",
    "EntropyModel",
    "PasswordValidator",
    "PatternDetector",
    "PwnedPasswordsChecker",
    "SimilarityScorer",
]
