"""
PassWarden Exceptions
======================

Every failure the library reports is synchronous and typed:

- :class:`InvalidArgumentError` -- the caller passed something the
  operation cannot work with. Never retried.
- :class:`UnconfiguredAlgorithmError` -- no brute-force speed is
  configured for the requested hash algorithm.
- :class:`BreachLookupError` -- the breach-corpus lookup itself failed,
  as opposed to reporting a compromised password.

Cancellation is not wrapped; :class:`asyncio.CancelledError` propagates
to the caller unchanged.
"""

from __future__ import annotations


class PassWardenError(Exception):
    """Base class for all PassWarden errors."""


class InvalidArgumentError(PassWardenError, ValueError):
    """Null, empty or otherwise disallowed input."""

    def __init__(self, argument: str, reason: str) -> None:
        self.argument = argument
        self.reason = reason
        super().__init__(f"{argument}: {reason}")


class UnconfiguredAlgorithmError(PassWardenError, LookupError):
    """The speed table has no entry for the requested hash algorithm."""

    def __init__(self, algorithm: str) -> None:
        self.algorithm = algorithm
        super().__init__(
            f"No attempts-per-second value configured for algorithm {algorithm!r}"
        )


class BreachLookupError(PassWardenError):
    """The breach-corpus range lookup could not be completed."""


class GenerationExhaustedError(PassWardenError):
    """A bounded generation loop used up its attempts without a result."""
