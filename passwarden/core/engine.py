"""
PassWarden Engine
==================

Central orchestrator for the PassWarden toolkit.  The engine wires the
analyzers, the generator context, the breach checker, the hasher and the
configured speed table together and exposes every operation behind one
object.  Full analyses come back as :class:`~shared.models.ScanResult`
objects for the console and report layers.

Architecture follows the Facade pattern (Gamma et al., 1994).

References:
    - Gamma, E., Helm, R., Johnson, R., & Vlissides, J. (1994).
      Design Patterns: Elements of Reusable Object-Oriented Software.
    - NIST SP 800-63B (2017). Digital Identity Guidelines.
"""

from __future__ import annotations

import asyncio
import random
import re
from typing import Iterable, Optional, Union

from passwarden import __tool_name__
from passwarden.analyzers.breach import BreachChecker, PwnedPasswordsChecker
from passwarden.analyzers.brute_force import (
    AlgorithmName,
    BruteForceEstimator,
    UnitName,
    format_combinations,
)
from passwarden.analyzers.charset import CharacterClassifier
from passwarden.analyzers.patterns import PatternDetector
from passwarden.analyzers.similarity import SimilarityScorer
from passwarden.analyzers.strength import EntropyModel
from passwarden.analyzers.validator import PasswordValidator
from passwarden.core.exceptions import BreachLookupError, InvalidArgumentError, UnconfiguredAlgorithmError
from passwarden.core.hashing import BcryptHasher, Hasher
from passwarden.core.models import (
    CharacterClass,
    CrackTimeEstimate,
    GenerationRules,
    NamingConvention,
    PasswordAnalysis,
    PasswordGrade,
    Pattern,
    StrengthResult,
    ValidationRules,
)
from passwarden.generators.password_generator import PasswordGenerator
from passwarden.generators.words import WordSource
from shared.config import PassWardenConfig
from shared.logger import get_logger
from shared.models import Finding, ScanResult, Severity

_PATTERN_ADVICE: dict[Pattern, str] = {
    Pattern.REPEATING_CHARACTERS: "The same character appears three or more times in a row.",
    Pattern.SEQUENTIAL_NUMBERS: "The digits form an ascending or descending run such as 123.",
    Pattern.DATE_FORMAT: "The password contains something that looks like a calendar date.",
    Pattern.ALTERNATING_PATTERN: "A one- or two-character block repeats back to back (e.g. ababab).",
    Pattern.LOW_DIVERSITY: "Fewer than half of the characters are distinct.",
    Pattern.REPEATED_PATTERN: "The whole password is one short chunk repeated.",
    Pattern.SEQUENTIAL_LETTERS: "The letters form an alphabetic run such as abc.",
}

_NIST_REFERENCE = "NIST SP 800-63B (2017). Digital Identity Guidelines."


def mask_password(password: str) -> str:
    """Keep the first and last characters, star out the rest."""
    if len(password) <= 2:
        return "*" * len(password)
    return password[0] + "*" * (len(password) - 2) + password[-1]


class PassWardenEngine:
    """Orchestrates all PassWarden analysis and generation operations.

    Usage::

        engine = PassWardenEngine()
        result = await engine.analyze_password("P@ssw0rd!")
        engine.generate(GenerationRules(lowercase=4, digits=2))

    Args:
        config:         Configuration; defaults apply when omitted.
        breach_checker: Breach lookup capability.  A
                        :class:`PwnedPasswordsChecker` is opened per call
                        when omitted.
        hasher:         Hashing capability; bcrypt by default.
        word_source:    Mnemonic word lists for the generator.
        rng:            Explicit random source for the generator.
    """

    def __init__(
        self,
        config: Optional[PassWardenConfig] = None,
        *,
        breach_checker: Optional[BreachChecker] = None,
        hasher: Optional[Hasher] = None,
        word_source: Optional[WordSource] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config or PassWardenConfig()
        self.logger = get_logger("engine", self.config)

        self._breach_checker = breach_checker
        self._hasher: Hasher = hasher or BcryptHasher()
        self._estimator = BruteForceEstimator(self.config.crack_speeds)
        self._generator = PasswordGenerator(
            self.config.generator,
            breach_checker=breach_checker,
            breach_config=self.config.breach,
            word_source=word_source,
            rng=rng,
            logger=get_logger("generator", self.config),
        )

    @property
    def generator(self) -> PasswordGenerator:
        return self._generator

    @property
    def estimator(self) -> BruteForceEstimator:
        return self._estimator

    @property
    def hasher(self) -> Hasher:
        return self._hasher

    # ------------------------------------------------------------------ #
    #  Analysis
    # ------------------------------------------------------------------ #

    @staticmethod
    def char_set_size(password: str) -> int:
        return CharacterClassifier.char_set_size(password)

    @staticmethod
    def character_classes(password: str) -> list[CharacterClass]:
        return CharacterClassifier.classes(password)

    @staticmethod
    def entropy(password: Optional[str]) -> float:
        return EntropyModel.entropy(password)

    @staticmethod
    def strength(password: Optional[str]) -> StrengthResult:
        return EntropyModel.strength(password)

    @staticmethod
    def detect_patterns(password: Optional[str]) -> list[Pattern]:
        return PatternDetector.detect(password)

    @staticmethod
    def similarity(first: Optional[str], second: Optional[str]) -> float:
        return SimilarityScorer.similarity(first, second)

    @staticmethod
    def symbol_frequency(password: Optional[str]) -> dict[str, int]:
        return SimilarityScorer.symbol_frequency(password)

    def estimate_crack_time(
        self,
        password: Optional[str],
        attempts_per_second: float,
        time_unit: Optional[UnitName] = None,
    ) -> float:
        """Crack time at a raw speed; the unit defaults to ``[estimator]``."""
        unit = time_unit or self.config.estimator.default_time_unit
        return self._estimator.estimate_crack_time(password, attempts_per_second, unit)

    def crack_time_estimate(
        self,
        password: Optional[str],
        algorithm: Optional[AlgorithmName] = None,
        time_unit: Optional[UnitName] = None,
    ) -> CrackTimeEstimate:
        """Crack time at the configured speed for *algorithm*.

        Algorithm and unit default to the ``[estimator]`` section.

        Raises:
            UnconfiguredAlgorithmError: If the algorithm has no speed.
        """
        return self._estimator.estimate_for_algorithm(
            password,
            algorithm or self.config.estimator.default_algorithm,
            time_unit or self.config.estimator.default_time_unit,
        )

    def estimate_crack_time_for_algorithm(
        self,
        password: Optional[str],
        algorithm: Optional[AlgorithmName] = None,
        time_unit: Optional[UnitName] = None,
    ) -> float:
        return self.crack_time_estimate(password, algorithm, time_unit).value

    async def is_compromised(self, password: str) -> bool:
        """Breach-corpus lookup through the configured checker.

        Raises:
            BreachLookupError: If the lookup fails.
        """
        if self._breach_checker is not None:
            return await self._breach_checker.is_compromised(password)
        async with PwnedPasswordsChecker(self.config.breach) as checker:
            return await checker.is_compromised(password)

    async def analyze(self, password: str, *, check_breach: bool = True) -> PasswordAnalysis:
        """Run every analysis on *password* and collect the results.

        A failed breach lookup leaves ``compromised`` as ``None``; an
        unconfigured default algorithm leaves ``crack_time`` as ``None``.

        Raises:
            InvalidArgumentError: If *password* is ``None``, empty or blank.
        """
        if password is None or not password.strip():
            raise InvalidArgumentError("password", "must contain non-whitespace characters")

        compromised: Optional[bool] = None
        if check_breach:
            try:
                compromised = await self.is_compromised(password)
            except BreachLookupError as exc:
                self.logger.warning("Breach lookup failed: %s", exc)

        crack_time: Optional[CrackTimeEstimate] = None
        try:
            crack_time = self.crack_time_estimate(password)
        except UnconfiguredAlgorithmError as exc:
            self.logger.warning("Crack time skipped: %s", exc)

        return PasswordAnalysis(
            password_masked=mask_password(password),
            length=len(password),
            char_set_size=self.char_set_size(password),
            character_classes=self.character_classes(password),
            strength=self.strength(password),
            patterns=self.detect_patterns(password),
            symbol_frequency=self.symbol_frequency(password),
            compromised=compromised,
            crack_time=crack_time,
        )

    async def analyze_password(self, password: str, check_breach: bool = True) -> ScanResult:
        """Analyse *password* and report the outcome as findings.

        Args:
            password:     The password to analyse.
            check_breach: Whether to query the breach corpus.

        Returns:
            ScanResult with strength, pattern, breach and crack-time
            findings; ``metadata`` holds the full
            :class:`~passwarden.core.models.PasswordAnalysis`.
        """
        result = ScanResult(tool_name=__tool_name__, target="[password]")

        with (
            self.logger.operation("analyze_password"),
            self.logger.redacting(password),
            self.logger.timed("password analysis"),
        ):
            self.logger.info("Starting password analysis (length=%d)", len(password or ""))
            analysis = await self.analyze(password, check_breach=check_breach)
            result.metadata = analysis.model_dump()

            strength = analysis.strength
            result.add_finding(Finding(
                severity=self._grade_severity(strength.grade),
                title=f"Password Strength: {strength.grade.label}",
                description=(
                    f"Entropy {strength.entropy:.2f} bits over a character set of "
                    f"{analysis.char_set_size} and length {analysis.length}. "
                    f"Score: {strength.score}/5."
                ),
                evidence={
                    "entropy_bits": round(strength.entropy, 4),
                    "char_set_size": analysis.char_set_size,
                    "length": analysis.length,
                    "score": strength.score,
                },
                recommendation=(
                    "" if strength.score >= 4
                    else "Use a longer password that mixes lowercase, uppercase, digits and symbols."
                ),
                references=[_NIST_REFERENCE],
            ))

            for pattern in analysis.patterns:
                if pattern is Pattern.NONE:
                    continue
                result.add_finding(Finding(
                    severity=Severity.LOW,
                    title=f"Pattern Detected: {pattern.label}",
                    description=_PATTERN_ADVICE[pattern],
                    recommendation="Avoid predictable structure; attackers try these shapes first.",
                ))

            if check_breach:
                result.add_finding(self._breach_finding(analysis.compromised))

            if analysis.crack_time is not None:
                estimate = analysis.crack_time
                algorithm = estimate.algorithm.value if estimate.algorithm else "custom"
                result.add_finding(Finding(
                    severity=Severity.INFO,
                    title="Brute-Force Estimate",
                    description=(
                        f"Exhausting {format_combinations(estimate.combinations)} combinations at "
                        f"{estimate.attempts_per_second:.3e} {algorithm} guesses/s takes "
                        f"{estimate.value:.4g} {estimate.unit.value}."
                    ),
                    evidence=estimate.model_dump(),
                ))

            result.finalize(
                f"Password analysis: {strength.grade.label}, "
                f"entropy={strength.entropy:.1f} bits, score={strength.score}/5"
            )
        self.logger.info("Password analysis complete: %d findings", len(result.findings))
        return result

    @staticmethod
    def _breach_finding(compromised: Optional[bool]) -> Finding:
        if compromised is None:
            return Finding(
                severity=Severity.MEDIUM,
                title="Breach Lookup Failed",
                description="The breach corpus could not be queried; exposure is unknown.",
            )
        if compromised:
            return Finding(
                severity=Severity.CRITICAL,
                title="Password Found in Breach Corpus",
                description="This password appears in known data breaches.",
                recommendation="Never use this password. Pick a new, unique one.",
                references=["https://haveibeenpwned.com/Passwords"],
            )
        return Finding(
            severity=Severity.INFO,
            title="Not Found in Breach Corpus",
            description="No breach record matches this password.",
        )

    @staticmethod
    def _grade_severity(grade: PasswordGrade) -> Severity:
        mapping = {
            PasswordGrade.SUPER_WEAK: Severity.CRITICAL,
            PasswordGrade.WEAK: Severity.HIGH,
            PasswordGrade.REGULAR: Severity.MEDIUM,
            PasswordGrade.STRONG: Severity.LOW,
            PasswordGrade.SUPER_STRONG: Severity.INFO,
        }
        return mapping.get(grade, Severity.MEDIUM)

    # ------------------------------------------------------------------ #
    #  Validation
    # ------------------------------------------------------------------ #

    @staticmethod
    def validate(password: Optional[str], rules: ValidationRules) -> bool:
        return PasswordValidator.validate(password, rules)

    @staticmethod
    def validate_pattern(password: Optional[str], pattern: Union[str, re.Pattern[str]]) -> bool:
        return PasswordValidator.validate_pattern(password, pattern)

    @staticmethod
    def validate_stop_list(password: Optional[str], stop_list: Iterable[str]) -> bool:
        return PasswordValidator.validate_stop_list(password, stop_list)

    # ------------------------------------------------------------------ #
    #  Hashing
    # ------------------------------------------------------------------ #

    def hash_password(self, password: str) -> str:
        return self._hasher.hash(password)

    def verify_password(self, password: str, hashed: str) -> bool:
        return self._hasher.verify(password, hashed)

    # ------------------------------------------------------------------ #
    #  Generation
    # ------------------------------------------------------------------ #

    def generate(self, rules: GenerationRules) -> str:
        return self._generator.generate(rules)

    async def generate_reliable_random(self, cancel_event: Optional[asyncio.Event] = None) -> str:
        return await self._generator.generate_reliable_random(cancel_event)

    def generate_random(self) -> str:
        return self._generator.generate_random()

    def generate_from_phrase(self, phrase: Optional[str]) -> str:
        return self._generator.generate_from_phrase(phrase)

    def generate_mnemonic(
        self, convention: Union[NamingConvention, str] = NamingConvention.CAMEL
    ) -> str:
        return self._generator.generate_mnemonic(convention)
