"""
Password Generator
===================

Four ways to build a password, all drawing from one random source owned
by the generator instance:

- **Rule-based** -- exact counts of lowercase, uppercase, digit and special
  characters.  Each pass visits the categories in that order and, for every
  category still below its target, flips a fair coin; heads appends one
  random character of that category.  Passes repeat until the target
  length is reached, so counts are exact and the interleaving is random.
- **Reliable random** -- 20 characters, each position choosing one of the
  four categories uniformly and then a character within it.  Candidates
  are drawn until one scores the maximum strength and is absent from the
  breach corpus.  The loop is unbounded unless ``max_attempts`` is
  configured and stops on cancellation or a failed lookup.
- **Phrase substitution** -- every letter of a letters-only phrase is
  replaced by one of its leetspeak-style candidates.
- **Mnemonic** -- ``"{adjective} {noun} {verb} {special}{digit}"`` laid
  out in a naming convention.

The random source is ``secrets.SystemRandom`` unless a seed is configured,
in which case a seeded ``random.Random`` makes output reproducible.

References:
    - NIST SP 800-63B (2017), Section 5.1.1.2 -- Memorized Secret
      Verifiers.
    - Munroe, R. (2011). xkcd #936: Password Strength.
"""

from __future__ import annotations

import asyncio
import random
import secrets
import string
from typing import Optional, Union

from passwarden.analyzers.breach import BreachChecker, PwnedPasswordsChecker
from passwarden.analyzers.charset import is_letter_or_digit
from passwarden.analyzers.strength import EntropyModel
from passwarden.core.exceptions import GenerationExhaustedError, InvalidArgumentError
from passwarden.core.models import CharacterClass, GenerationRules, NamingConvention, WordCategory
from passwarden.generators.naming import apply_convention
from passwarden.generators.words import JsonWordSource, WordSource
from shared.config import BreachConfig, GeneratorConfig
from shared.logger import WardenLogger, get_logger

SPECIAL_CHARACTERS = "!@#$%^&*()-_=+[]{};:'\"\\|,<.>/?"

ALPHABETS: dict[CharacterClass, str] = {
    CharacterClass.LOWER: string.ascii_lowercase,
    CharacterClass.UPPER: string.ascii_uppercase,
    CharacterClass.DIGIT: string.digits,
    CharacterClass.SPECIAL: SPECIAL_CHARACTERS,
}

SUBSTITUTIONS: dict[str, tuple[str, ...]] = {
    "a": ("@", "4", "A"),
    "b": ("8", "B"),
    "c": ("(", "{", "C"),
    "d": ("D", "|)", "cl"),
    "e": ("3", "E"),
    "f": ("F", "|="),
    "g": ("9", "G", "&"),
    "h": ("H", "#", "|-|"),
    "i": ("1", "!", "I"),
    "j": ("J", "_|"),
    "k": ("K", "|<"),
    "l": ("1", "|", "L"),
    "m": ("M", "|\\/|"),
    "n": ("N", "|\\|"),
    "o": ("0", "O", "()"),
    "p": ("P", "|*"),
    "q": ("Q", "9"),
    "r": ("R", "|2"),
    "s": ("5", "$", "S"),
    "t": ("7", "+", "T"),
    "u": ("U", "|_|"),
    "v": ("V", "\\/"),
    "w": ("W", "\\/\\/", "VV"),
    "x": ("X", "><"),
    "y": ("Y", "`/"),
    "z": ("2", "Z"),
}


class PasswordGenerator:
    """Generation context: random source, breach checker and word lists.

    Args:
        config:         ``[generator]`` section.
        breach_checker: Checker for the reliable-random path.  When
                        omitted a :class:`PwnedPasswordsChecker` built from
                        *breach_config* is opened per call.
        breach_config:  ``[breach]`` section for that default checker.
        word_source:    Mnemonic word lists.  Defaults to the bundled JSON
                        lists, or ``config.word_list`` when set.
        rng:            Explicit random source; overrides ``config.seed``.
        logger:         Logger; one is created when omitted.
    """

    def __init__(
        self,
        config: Optional[GeneratorConfig] = None,
        *,
        breach_checker: Optional[BreachChecker] = None,
        breach_config: Optional[BreachConfig] = None,
        word_source: Optional[WordSource] = None,
        rng: Optional[random.Random] = None,
        logger: Optional[WardenLogger] = None,
    ) -> None:
        self._config = config or GeneratorConfig()
        self._breach_checker = breach_checker
        self._breach_config = breach_config or BreachConfig()
        self._word_source = word_source or JsonWordSource(self._config.word_list or None)
        if rng is not None:
            self._rng = rng
        elif self._config.seed is not None:
            self._rng = random.Random(self._config.seed)
        else:
            self._rng = secrets.SystemRandom()
        self._log = logger or get_logger("generator")

    @property
    def rng(self) -> random.Random:
        return self._rng

    @property
    def word_source(self) -> WordSource:
        return self._word_source

    # ------------------------------------------------------------------ #
    #  Rule-based
    # ------------------------------------------------------------------ #

    def generate(self, rules: GenerationRules) -> str:
        """Build a password with exactly the counts in *rules*.

        Raises:
            InvalidArgumentError: If any count is negative.
        """
        targets = {
            CharacterClass.LOWER: rules.lowercase,
            CharacterClass.UPPER: rules.uppercase,
            CharacterClass.DIGIT: rules.digits,
            CharacterClass.SPECIAL: rules.special,
        }
        for cls, count in targets.items():
            if count < 0:
                raise InvalidArgumentError(cls.value, "count must not be negative")

        length = rules.length
        counts = dict.fromkeys(targets, 0)
        chars: list[str] = []
        while len(chars) < length:
            for cls, target in targets.items():
                if counts[cls] < target and self._rng.randrange(2) == 0:
                    chars.append(self._rng.choice(ALPHABETS[cls]))
                    counts[cls] += 1
        return "".join(chars)

    # ------------------------------------------------------------------ #
    #  Reliable random
    # ------------------------------------------------------------------ #

    def random_candidate(self, length: Optional[int] = None) -> str:
        """One uniformly drawn candidate for the reliable-random loop."""
        size = self._config.reliable_length if length is None else length
        alphabets = list(ALPHABETS.values())
        return "".join(
            self._rng.choice(self._rng.choice(alphabets)) for _ in range(size)
        )

    async def generate_reliable_random(
        self, cancel_event: Optional[asyncio.Event] = None
    ) -> str:
        """Draw candidates until one is strong enough and not breached.

        Args:
            cancel_event: Optional event; setting it stops the loop.
                Cancelling the awaiting task works as well.

        Raises:
            asyncio.CancelledError: When cancelled.
            BreachLookupError: When a lookup fails; never retried here.
            GenerationExhaustedError: When ``max_attempts`` is configured
                and used up.
        """
        if self._breach_checker is not None:
            return await self._reliable_loop(self._breach_checker, cancel_event)
        async with PwnedPasswordsChecker(self._breach_config) as checker:
            return await self._reliable_loop(checker, cancel_event)

    async def _reliable_loop(
        self, checker: BreachChecker, cancel_event: Optional[asyncio.Event]
    ) -> str:
        limit = self._config.max_attempts
        attempts = 0
        with self._log.operation("reliable_random"):
            while True:
                if cancel_event is not None and cancel_event.is_set():
                    self._log.info("Reliable random generation cancelled after %d attempts", attempts)
                    raise asyncio.CancelledError()
                if limit and attempts >= limit:
                    raise GenerationExhaustedError(
                        f"No acceptable password after {attempts} attempts"
                    )
                attempts += 1
                await asyncio.sleep(0)

                candidate = self.random_candidate()
                if EntropyModel.strength(candidate).score < self._config.required_score:
                    self._log.debug("Attempt %d rejected: below required score", attempts)
                    continue
                if await self._lookup(checker, candidate, cancel_event):
                    self._log.debug("Attempt %d rejected: found in breach corpus", attempts)
                    continue

                self._log.debug("Accepted candidate after %d attempts", attempts)
                return candidate

    @staticmethod
    async def _lookup(
        checker: BreachChecker, candidate: str, cancel_event: Optional[asyncio.Event]
    ) -> bool:
        if cancel_event is None:
            return await checker.is_compromised(candidate)

        lookup = asyncio.ensure_future(checker.is_compromised(candidate))
        waiter = asyncio.ensure_future(cancel_event.wait())
        try:
            done, _ = await asyncio.wait(
                {lookup, waiter}, return_when=asyncio.FIRST_COMPLETED
            )
        finally:
            for task in (lookup, waiter):
                if not task.done():
                    task.cancel()
        if lookup in done:
            return lookup.result()
        raise asyncio.CancelledError()

    def generate_random(self) -> str:
        """Blocking wrapper around :meth:`generate_reliable_random`."""
        return asyncio.run(self.generate_reliable_random())

    # ------------------------------------------------------------------ #
    #  Phrase substitution
    # ------------------------------------------------------------------ #

    def generate_from_phrase(self, phrase: Optional[str]) -> str:
        """Replace each letter of *phrase* with a random substitution.

        Only letters are accepted.  Spaces count as disallowed characters,
        so multi-word phrases are rejected.

        Raises:
            InvalidArgumentError: If *phrase* is ``None`` or empty, contains
                a digit or any other non-letter, or contains a letter with
                no substitutions.
        """
        if not phrase:
            raise InvalidArgumentError("phrase", "must be a non-empty string")
        if any(c.isdecimal() for c in phrase):
            raise InvalidArgumentError("phrase", "must not contain digits")
        if not all(is_letter_or_digit(c) for c in phrase):
            raise InvalidArgumentError("phrase", "must not contain special characters")

        parts: list[str] = []
        for letter in phrase.lower():
            candidates = SUBSTITUTIONS.get(letter)
            if candidates is None:
                raise InvalidArgumentError("phrase", f"no substitution for {letter!r}")
            parts.append(self._rng.choice(candidates))
        return "".join(parts)

    # ------------------------------------------------------------------ #
    #  Mnemonic
    # ------------------------------------------------------------------ #

    def generate_mnemonic(
        self, convention: Union[NamingConvention, str] = NamingConvention.CAMEL
    ) -> str:
        """Adjective, noun, verb, special and digit in *convention* layout."""
        noun = self._word_source.sample(WordCategory.NOUNS, self._rng)
        adjective = self._word_source.sample(WordCategory.ADJECTIVES, self._rng)
        verb = self._word_source.sample(WordCategory.VERBS, self._rng)
        special = self._rng.choice(SPECIAL_CHARACTERS)
        digit = self._rng.choice(string.digits)
        return apply_convention(f"{adjective} {noun} {verb} {special}{digit}", convention)
