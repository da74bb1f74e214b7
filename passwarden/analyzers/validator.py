"""
Password Validator
===================

Policy checks against caller-supplied rules: length bounds and required
character classes, a regular expression, and a stop list of forbidden
substrings.
"""

from __future__ import annotations

import re
from typing import Iterable, Optional, Union

from passwarden.analyzers.charset import CharacterClassifier
from passwarden.core.exceptions import InvalidArgumentError
from passwarden.core.models import CharacterClass, ValidationRules


class PasswordValidator:

    @staticmethod
    def validate(password: Optional[str], rules: ValidationRules) -> bool:
        """Check length bounds and required classes.

        Args:
            password: Candidate password.
            rules:    Bounds (inclusive) and class requirements.

        Returns:
            ``True`` when every rule holds.

        Raises:
            InvalidArgumentError: If *password* is ``None``, or if
                ``rules.min_length >= rules.max_length``.
        """
        if rules.min_length >= rules.max_length:
            raise InvalidArgumentError(
                "rules", "min_length must be strictly less than max_length"
            )
        if password is None:
            raise InvalidArgumentError("password", "is required")

        if not rules.min_length <= len(password) <= rules.max_length:
            return False

        present = set(CharacterClassifier.classes(password))
        required = {
            CharacterClass.LOWER: rules.require_lowercase,
            CharacterClass.UPPER: rules.require_uppercase,
            CharacterClass.DIGIT: rules.require_digit,
            CharacterClass.SPECIAL: rules.require_special,
        }
        return all(cls in present for cls, needed in required.items() if needed)

    @staticmethod
    def validate_pattern(password: Optional[str], pattern: Union[str, re.Pattern[str]]) -> bool:
        """``True`` when *pattern* matches anywhere in *password*.

        Raises:
            InvalidArgumentError: If *password* is ``None`` or empty, or
                *pattern* does not compile.
        """
        if not password:
            raise InvalidArgumentError("password", "must be a non-empty string")
        try:
            compiled = re.compile(pattern)
        except re.error as exc:
            raise InvalidArgumentError("pattern", f"invalid regular expression: {exc}") from exc
        return compiled.search(password) is not None

    @staticmethod
    def validate_stop_list(password: Optional[str], stop_list: Iterable[str]) -> bool:
        """``False`` when any non-empty stop word occurs in *password*.

        Raises:
            InvalidArgumentError: If *password* is ``None`` or empty.
        """
        if not password:
            raise InvalidArgumentError("password", "must be a non-empty string")
        return not any(word and word in password for word in stop_list)
