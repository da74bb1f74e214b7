"""
Password Hashers
=================

Hashing and verification behind a small protocol so callers can swap
schemes.  :class:`BcryptHasher` is the default for storage;
:class:`Sha1Hasher` reproduces the unsalted scheme the breach corpus is
indexed with.

References:
    - Provos, N. & Mazieres, D. (1999). A Future-Adaptable Password
      Scheme. USENIX Annual Technical Conference.
    - OWASP Password Storage Cheat Sheet.
"""

from __future__ import annotations

import hashlib
from typing import Optional, Protocol, runtime_checkable

import bcrypt

from passwarden.core.exceptions import InvalidArgumentError


@runtime_checkable
class Hasher(Protocol):
    def hash(self, password: str) -> str: ...

    def verify(self, password: str, hashed: str) -> bool: ...


def sha1_hex(password: str) -> str:
    """Upper-case hex SHA-1 of the UTF-8 encoded password."""
    return hashlib.sha1(password.encode("utf-8")).hexdigest().upper()


def _require(password: Optional[str]) -> str:
    if not password:
        raise InvalidArgumentError("password", "must be a non-empty string")
    return password


class BcryptHasher:
    """Salted bcrypt hashing.

    Args:
        rounds: bcrypt cost factor (log2 of the iteration count).
    """

    def __init__(self, rounds: int = 12) -> None:
        if not 4 <= rounds <= 31:
            raise InvalidArgumentError("rounds", "must be between 4 and 31")
        self._rounds = rounds

    def hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self._rounds)
        try:
            hashed = bcrypt.hashpw(_require(password).encode("utf-8"), salt)
        except ValueError as exc:
            raise InvalidArgumentError("password", str(exc)) from exc
        return hashed.decode("utf-8")

    def verify(self, password: str, hashed: str) -> bool:
        """Re-hash *password* with the salt stored in *hashed* and compare.

        A malformed *hashed* value verifies as ``False``.
        """
        if not hashed:
            return False
        try:
            return bcrypt.checkpw(_require(password).encode("utf-8"), hashed.encode("utf-8"))
        except ValueError:
            return False


class Sha1Hasher:
    """Unsalted upper-case hex SHA-1, as used by the breach corpus."""

    def hash(self, password: str) -> str:
        return sha1_hex(_require(password))

    def verify(self, password: str, hashed: str) -> bool:
        return self.hash(password) == hashed
