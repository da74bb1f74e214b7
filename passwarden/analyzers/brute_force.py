"""
Brute-Force Estimator
======================

Time an exhaustive search needs to cover a password's search space.

    combinations = N ** L        (exact integer)
    seconds      = combinations / attempts_per_second
    result       = seconds / seconds_per_unit

N is the presence-based alphabet size and L the length.  The combination
count is an exact Python integer so long passwords never lose precision;
the final division is carried out on :class:`fractions.Fraction` and only
rounded to ``float`` at the end.  Values beyond the float range are
reported as infinity.

The attack speed is either passed directly or looked up from the
configured speed table (``[crack_speeds]``) by hash algorithm name.

References:
    - hashcat v6.2.6 benchmark results (RTX 4090).
    - NIST SP 800-63B (2017), Section 5.1.1.2.
"""

from __future__ import annotations

import math
from fractions import Fraction
from typing import Mapping, Optional, Union

from passwarden.analyzers.charset import CharacterClassifier
from passwarden.core.exceptions import InvalidArgumentError, UnconfiguredAlgorithmError
from passwarden.core.models import CrackTimeEstimate, HashAlgorithm, TimeUnit

AlgorithmName = Union[HashAlgorithm, str]
UnitName = Union[TimeUnit, str]


def format_combinations(count: int) -> str:
    """Scientific notation for an exact integer of any size."""
    digits = str(count)
    if len(digits) <= 6:
        return digits
    return f"{digits[0]}.{digits[1:4]}e+{len(digits) - 1:02d}"


def _algorithm_key(algorithm: AlgorithmName) -> str:
    if isinstance(algorithm, HashAlgorithm):
        return algorithm.value
    return str(algorithm).strip().upper()


def _time_unit(unit: UnitName) -> TimeUnit:
    if isinstance(unit, TimeUnit):
        return unit
    try:
        return TimeUnit(str(unit).strip().lower())
    except ValueError as exc:
        raise InvalidArgumentError("time_unit", f"unknown unit {unit!r}") from exc


class BruteForceEstimator:
    """Crack-time estimation against a configurable speed table.

    Args:
        speeds: Mapping of hash algorithm name to attempts per second.
            Algorithms missing from the mapping are unconfigured.
    """

    def __init__(self, speeds: Optional[Mapping[str, float]] = None) -> None:
        self._speeds: dict[str, float] = {
            _algorithm_key(k): float(v) for k, v in (speeds or {}).items()
        }

    @property
    def speeds(self) -> dict[str, float]:
        return dict(self._speeds)

    def attempts_per_second(self, algorithm: AlgorithmName) -> float:
        """Configured speed for *algorithm*.

        Raises:
            UnconfiguredAlgorithmError: If the table has no entry for it.
        """
        key = _algorithm_key(algorithm)
        try:
            return self._speeds[key]
        except KeyError:
            raise UnconfiguredAlgorithmError(key) from None

    # ------------------------------------------------------------------ #
    #  Raw speed
    # ------------------------------------------------------------------ #

    @staticmethod
    def estimate(
        password: Optional[str],
        attempts_per_second: float,
        time_unit: UnitName = TimeUnit.DAYS,
    ) -> CrackTimeEstimate:
        """Full estimate for *password* at a raw attack speed.

        Raises:
            InvalidArgumentError: If *password* is ``None`` or blank, or
                *attempts_per_second* is not a positive finite number.
        """
        if password is None or not password.strip():
            raise InvalidArgumentError("password", "must contain non-whitespace characters")
        if not attempts_per_second > 0 or math.isinf(attempts_per_second):
            raise InvalidArgumentError("attempts_per_second", "must be a finite number greater than zero")

        unit = _time_unit(time_unit)
        combinations = CharacterClassifier.char_set_size(password) ** len(password)
        exact = Fraction(combinations) / (Fraction(attempts_per_second) * unit.seconds)
        try:
            value = float(exact)
        except OverflowError:
            value = math.inf

        return CrackTimeEstimate(
            combinations=combinations,
            attempts_per_second=float(attempts_per_second),
            unit=unit,
            value=value,
        )

    def estimate_crack_time(
        self,
        password: Optional[str],
        attempts_per_second: float,
        time_unit: UnitName = TimeUnit.DAYS,
    ) -> float:
        """Time to exhaust the search space of *password*, in *time_unit*."""
        return self.estimate(password, attempts_per_second, time_unit).value

    # ------------------------------------------------------------------ #
    #  Speed looked up by algorithm
    # ------------------------------------------------------------------ #

    def estimate_for_algorithm(
        self,
        password: Optional[str],
        algorithm: AlgorithmName = HashAlgorithm.SHA1,
        time_unit: UnitName = TimeUnit.DAYS,
    ) -> CrackTimeEstimate:
        """Full estimate using the configured speed for *algorithm*.

        Raises:
            UnconfiguredAlgorithmError: If no speed is configured.
            InvalidArgumentError: If *password* is ``None`` or blank.
        """
        speed = self.attempts_per_second(algorithm)
        result = self.estimate(password, speed, time_unit)
        key = _algorithm_key(algorithm)
        known = key in HashAlgorithm._value2member_map_
        return result.model_copy(
            update={"algorithm": HashAlgorithm(key) if known else None}
        )

    def estimate_crack_time_for_algorithm(
        self,
        password: Optional[str],
        algorithm: AlgorithmName = HashAlgorithm.SHA1,
        time_unit: UnitName = TimeUnit.DAYS,
    ) -> float:
        return self.estimate_for_algorithm(password, algorithm, time_unit).value
