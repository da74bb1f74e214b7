"""
PassWarden Async Network Client
================================

Small httpx-based client for the breach-corpus range API.  Range bodies
are plain text, so the client deals in text only:

- Transient failures (transport errors, 429 and 5xx) are retried with
  capped exponential backoff and full jitter.
- Bodies are cached per path in a bounded LRU with a TTL; the range API
  answers the same prefix identically for hours.
- A circuit breaker fails calls fast while the upstream keeps failing.

Every failure surfaces as :class:`WardenHTTPError`; cancellation of the
awaiting task is never caught.

References:
    - Nygard, M. T. (2018). Release It! 2nd ed. Chapter 5: Stability
      Patterns.
    - AWS Architecture Blog (2015). Exponential Backoff and Jitter.
"""

from __future__ import annotations

import asyncio
import logging
import random
import time
from collections import OrderedDict
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

import httpx

logger = logging.getLogger("passwarden.network")


class WardenHTTPError(Exception):
    """A range request failed: transport, status, retries or open breaker."""


# ========================== Circuit Breaker ================================


class BreakerState(str, Enum):
    CLOSED = "CLOSED"
    OPEN = "OPEN"
    HALF_OPEN = "HALF_OPEN"


@dataclass
class CircuitBreaker:
    """Opens after *threshold* consecutive failures for *cooldown* seconds.

    Once the cooldown has passed the breaker is half-open: one request is
    let through and its outcome closes or re-opens the circuit.
    """

    threshold: int = 5
    cooldown: float = 30.0
    failures: int = 0
    opened_at: Optional[float] = None

    @property
    def state(self) -> BreakerState:
        if self.opened_at is None:
            return BreakerState.CLOSED
        if time.monotonic() - self.opened_at < self.cooldown:
            return BreakerState.OPEN
        return BreakerState.HALF_OPEN

    def check(self, url: str) -> None:
        """Raise :class:`WardenHTTPError` while the circuit is open."""
        if self.state is BreakerState.OPEN:
            raise WardenHTTPError(f"Circuit open; not requesting {url}")

    def succeeded(self) -> None:
        self.failures = 0
        self.opened_at = None

    def failed(self) -> None:
        self.failures += 1
        if self.failures >= self.threshold:
            self.opened_at = time.monotonic()
            logger.warning("Circuit opened after %d consecutive failures", self.failures)


# ========================== Range Cache ====================================


@dataclass
class RangeCache:
    """Bounded LRU of response bodies keyed by request path.

    A *ttl* of zero disables caching.
    """

    ttl: float = 300.0
    max_entries: int = 256
    _entries: OrderedDict[str, tuple[float, str]] = field(default_factory=OrderedDict, repr=False)

    @property
    def enabled(self) -> bool:
        return self.ttl > 0 and self.max_entries > 0

    def get(self, key: str) -> Optional[str]:
        hit = self._entries.get(key)
        if hit is None:
            return None
        expires_at, body = hit
        if time.monotonic() >= expires_at:
            del self._entries[key]
            return None
        self._entries.move_to_end(key)
        return body

    def put(self, key: str, body: str) -> None:
        if not self.enabled:
            return
        self._entries[key] = (time.monotonic() + self.ttl, body)
        self._entries.move_to_end(key)
        while len(self._entries) > self.max_entries:
            self._entries.popitem(last=False)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


# ========================== HTTP Client ====================================


class WardenHTTP:
    """Async text client with retry, caching and a circuit breaker.

    Usage::

        async with WardenHTTP(base_url="https://api.pwnedpasswords.com") as http:
            body = await http.fetch_text("/range/21BD1")

    Args:
        base_url:             Prefix for every relative path.
        timeout:              Per-request timeout in seconds.
        max_retries:          Retries after the first attempt.
        backoff_base:         First backoff ceiling in seconds.
        backoff_max:          Upper bound of any backoff ceiling.
        cache_ttl:            Seconds a body stays cached; ``0`` disables.
        cache_size:           Maximum cached bodies.
        breaker_threshold:    Consecutive failures that open the circuit.
        breaker_cooldown:     Seconds the circuit stays open.
        headers:              Extra headers sent with every request.
        user_agent:           ``User-Agent`` header value.
        transport:            httpx transport override (tests pass an
                              :class:`httpx.MockTransport`).
    """

    RETRYABLE_STATUS: frozenset[int] = frozenset({429, 500, 502, 503, 504})

    def __init__(
        self,
        *,
        base_url: str = "",
        timeout: float = 10.0,
        max_retries: int = 3,
        backoff_base: float = 0.5,
        backoff_max: float = 8.0,
        cache_ttl: float = 300.0,
        cache_size: int = 256,
        breaker_threshold: int = 5,
        breaker_cooldown: float = 30.0,
        headers: Optional[dict[str, str]] = None,
        user_agent: str = "PassWarden/1.0",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._max_retries = max(0, max_retries)
        self._backoff_base = backoff_base
        self._backoff_max = backoff_max
        self.cache = RangeCache(ttl=cache_ttl, max_entries=cache_size)
        self.breaker = CircuitBreaker(threshold=breaker_threshold, cooldown=breaker_cooldown)
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=httpx.Timeout(timeout),
            headers={"User-Agent": user_agent, **(headers or {})},
            transport=transport,
        )

    async def __aenter__(self) -> WardenHTTP:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    def backoff_delay(self, attempt: int) -> float:
        """Full-jitter delay before retry number *attempt* (0-based)."""
        ceiling = min(self._backoff_max, self._backoff_base * 2 ** attempt)
        return random.uniform(0, ceiling)

    async def fetch_text(self, path: str) -> str:
        """GET *path* and return the body text.

        Raises:
            WardenHTTPError: Open circuit, non-retryable status, or
                retries used up.
        """
        cached = self.cache.get(path)
        if cached is not None:
            logger.debug("Cache hit for %s", path)
            return cached

        self.breaker.check(path)
        attempts = self._max_retries + 1
        for attempt in range(attempts):
            try:
                response = await self._client.get(path)
            except httpx.TransportError as exc:
                problem: str = f"{type(exc).__name__}: {exc}"
            else:
                if response.status_code not in self.RETRYABLE_STATUS:
                    return self._accept(path, response)
                problem = f"HTTP {response.status_code}"

            logger.warning("GET %s failed (%s), attempt %d/%d", path, problem, attempt + 1, attempts)
            if attempt + 1 < attempts:
                await asyncio.sleep(self.backoff_delay(attempt))

        self.breaker.failed()
        raise WardenHTTPError(f"GET {path} failed after {attempts} attempts: {problem}")

    def _accept(self, path: str, response: httpx.Response) -> str:
        if response.is_error:
            self.breaker.failed()
            raise WardenHTTPError(f"GET {path} returned HTTP {response.status_code}")
        self.breaker.succeeded()
        body = response.text
        self.cache.put(path, body)
        return body
