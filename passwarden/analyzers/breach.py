"""
Breach-Corpus Checker
======================

k-anonymity lookup against the Pwned Passwords range API.

The password is hashed with SHA-1 and only the first five hex characters
of the digest are sent upstream (``GET /range/<prefix>``).  The service
answers with every known suffix sharing that prefix, one per line as
``SUFFIX:COUNT``; the remaining 35 characters are matched locally.  With
``Add-Padding`` enabled the response also carries decoy lines whose count
is zero; those never count as a match.

References:
    - Hunt, T. (2018). I've Just Launched "Pwned Passwords" V2 With Half
      a Billion Passwords for Download.
    - Li, L. et al. (2019). Protocols for Checking Compromised
      Credentials. ACM CCS.
"""

from __future__ import annotations

from typing import Any, Optional, Protocol, runtime_checkable

import httpx

from passwarden.core.exceptions import BreachLookupError, InvalidArgumentError
from passwarden.core.hashing import sha1_hex
from shared.config import BreachConfig
from shared.network import WardenHTTP, WardenHTTPError

_PREFIX_LENGTH = 5


@runtime_checkable
class BreachChecker(Protocol):
    """Anything that can tell whether a password appears in a breach corpus."""

    async def is_compromised(self, password: str) -> bool: ...


def suffix_in_range(body: str, suffix: str) -> bool:
    """True when *body* lists *suffix* with a non-zero count."""
    wanted = suffix.upper()
    for line in body.splitlines():
        candidate, _, count = line.strip().partition(":")
        if candidate.upper() != wanted:
            continue
        if count.strip() == "0":
            continue
        return True
    return False


class PwnedPasswordsChecker:
    """:class:`BreachChecker` backed by the Pwned Passwords range API.

    Usage::

        async with PwnedPasswordsChecker() as checker:
            if await checker.is_compromised("hunter2"):
                ...

    Args:
        config:    ``[breach]`` section; defaults apply when omitted.
        http:      Pre-built client.  When omitted one is created from
                   *config* and closed by :meth:`close`.
        transport: Optional httpx transport for the created client.
    """

    def __init__(
        self,
        config: Optional[BreachConfig] = None,
        *,
        http: Optional[WardenHTTP] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._config = config or BreachConfig()
        self._owns_http = http is None
        if http is None:
            headers = {"Add-Padding": "true"} if self._config.add_padding else None
            http = WardenHTTP(
                base_url=self._config.api_url,
                timeout=self._config.request_timeout,
                max_retries=self._config.max_retries,
                backoff_base=self._config.backoff_base,
                backoff_max=self._config.backoff_max,
                headers=headers,
                user_agent=self._config.user_agent,
                transport=transport,
            )
        self._http = http

    async def __aenter__(self) -> PwnedPasswordsChecker:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()

    async def close(self) -> None:
        if self._owns_http:
            await self._http.close()

    async def is_compromised(self, password: str) -> bool:
        """Look *password* up in the breach corpus.

        Raises:
            InvalidArgumentError: If *password* is ``None`` or empty.
            BreachLookupError: If the range lookup fails.
        """
        if not password:
            raise InvalidArgumentError("password", "must be a non-empty string")

        digest = sha1_hex(password)
        prefix, suffix = digest[:_PREFIX_LENGTH], digest[_PREFIX_LENGTH:]
        try:
            body = await self._http.fetch_text(f"/range/{prefix}")
        except WardenHTTPError as exc:
            raise BreachLookupError(f"Range lookup for prefix {prefix} failed: {exc}") from exc
        return suffix_in_range(body, suffix)
