"""Shared fixtures and fakes for the PassWarden test suite."""

from __future__ import annotations

import asyncio
import json
import random
from pathlib import Path
from typing import Iterable, Optional

import pytest

from passwarden.core.exceptions import BreachLookupError


class FakeBreachChecker:
    """In-memory breach checker recording every lookup."""

    def __init__(
        self,
        compromised: Iterable[str] = (),
        *,
        verdicts: Optional[list[bool]] = None,
        error: Optional[Exception] = None,
    ) -> None:
        self.compromised = set(compromised)
        self.verdicts = list(verdicts or [])
        self.error = error
        self.calls: list[str] = []

    async def is_compromised(self, password: str) -> bool:
        self.calls.append(password)
        if self.error is not None:
            raise self.error
        if self.verdicts:
            return self.verdicts.pop(0)
        return password in self.compromised


class HangingBreachChecker:
    """Checker whose lookups never finish; records cancellation."""

    def __init__(self) -> None:
        self.started = asyncio.Event()
        self.cancelled = False

    async def is_compromised(self, password: str) -> bool:
        self.started.set()
        try:
            await asyncio.sleep(3600)
        except asyncio.CancelledError:
            self.cancelled = True
            raise
        return False


class FirstChoiceRandom(random.Random):
    """Random source whose ``choice`` always returns the first element."""

    def choice(self, seq):
        return seq[0]


@pytest.fixture
def fake_checker() -> FakeBreachChecker:
    return FakeBreachChecker()


@pytest.fixture
def failing_checker() -> FakeBreachChecker:
    return FakeBreachChecker(error=BreachLookupError("range lookup failed"))


@pytest.fixture
def word_file(tmp_path: Path) -> Path:
    path = tmp_path / "words.json"
    path.write_text(
        json.dumps(
            {
                "nouns": ["nounzero", "nounone", "nountwo"],
                "adjectives": ["adjzero", "adjone", "adjtwo"],
                "verbs": ["verbzero", "verbone", "verbtwo"],
            }
        ),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def quiet_config_file(tmp_path: Path) -> Path:
    path = tmp_path / "config.toml"
    path.write_text('[global]\nlog_level = "WARNING"\n', encoding="utf-8")
    return path
