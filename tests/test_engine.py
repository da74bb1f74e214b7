"""Tests for the PassWarden engine facade."""

from __future__ import annotations

import math
import random

import pytest

from passwarden.core.engine import PassWardenEngine, mask_password
from passwarden.core.exceptions import InvalidArgumentError, UnconfiguredAlgorithmError
from passwarden.core.hashing import Sha1Hasher
from passwarden.core.models import GenerationRules, HashAlgorithm, Pattern, TimeUnit, ValidationRules
from shared.config import GlobalConfig, PassWardenConfig
from shared.models import Severity
from tests.conftest import FakeBreachChecker


def _engine(checker=None, **config) -> PassWardenEngine:
    settings = PassWardenConfig(global_settings=GlobalConfig(log_level="WARNING"), **config)
    return PassWardenEngine(settings, breach_checker=checker, rng=random.Random(99))


def _titles(result) -> list[str]:
    return [f.title for f in result.findings]


class TestMask:
    @pytest.mark.parametrize(
        "password, masked",
        [("password", "p******d"), ("ab", "**"), ("x", "*")],
    )
    def test_mask(self, password, masked):
        assert mask_password(password) == masked


class TestAnalyze:
    @pytest.mark.asyncio
    async def test_full_analysis(self):
        checker = FakeBreachChecker(compromised={"password"})
        analysis = await _engine(checker).analyze("password")
        assert analysis.password_masked == "p******d"
        assert analysis.length == 8
        assert analysis.char_set_size == 26
        assert analysis.compromised is True
        assert analysis.crack_time.algorithm is HashAlgorithm.SHA1
        assert analysis.crack_time.unit is TimeUnit.DAYS
        assert analysis.symbol_frequency["s"] == 2

    @pytest.mark.asyncio
    async def test_skip_breach(self):
        checker = FakeBreachChecker()
        analysis = await _engine(checker).analyze("password", check_breach=False)
        assert analysis.compromised is None
        assert checker.calls == []

    @pytest.mark.asyncio
    async def test_lookup_failure_is_unknown(self, failing_checker):
        analysis = await _engine(failing_checker).analyze("password")
        assert analysis.compromised is None

    @pytest.mark.asyncio
    async def test_unconfigured_default_algorithm(self):
        analysis = await _engine(FakeBreachChecker(), crack_speeds={}).analyze("password")
        assert analysis.crack_time is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("password", [None, "", "   "])
    async def test_blank_password(self, password):
        with pytest.raises(InvalidArgumentError):
            await _engine(FakeBreachChecker()).analyze(password)


class TestAnalyzePassword:
    @pytest.mark.asyncio
    async def test_breached_password_findings(self):
        checker = FakeBreachChecker(compromised={"password"})
        result = await _engine(checker).analyze_password("password")

        assert result.tool_name == "passwarden"
        assert result.target == "[password]"
        assert result.end_time is not None
        assert result.highest_severity is Severity.CRITICAL
        titles = _titles(result)
        assert "Password Strength: Regular" in titles
        assert "Password Found in Breach Corpus" in titles
        assert "Brute-Force Estimate" in titles
        assert result.metadata["password_masked"] == "p******d"
        assert all("password" not in f.evidence for f in result.findings)

    @pytest.mark.asyncio
    async def test_pattern_findings(self):
        result = await _engine(FakeBreachChecker()).analyze_password("abc123", check_breach=False)
        pattern_titles = [t for t in _titles(result) if t.startswith("Pattern Detected")]
        assert f"Pattern Detected: {Pattern.SEQUENTIAL_NUMBERS.label}" in pattern_titles
        assert all(f.severity is Severity.LOW for f in result.findings if f.title in pattern_titles)

    @pytest.mark.asyncio
    async def test_clean_password(self):
        result = await _engine(FakeBreachChecker()).analyze_password("aB1!" * 8)
        titles = _titles(result)
        assert "Password Strength: Super Strong" in titles
        assert "Not Found in Breach Corpus" in titles

    @pytest.mark.asyncio
    async def test_failed_lookup_finding(self, failing_checker):
        result = await _engine(failing_checker).analyze_password("Kx9!mP2@")
        failed = [f for f in result.findings if f.title == "Breach Lookup Failed"]
        assert len(failed) == 1
        assert failed[0].severity is Severity.MEDIUM

    @pytest.mark.asyncio
    async def test_no_breach_finding_when_skipped(self):
        result = await _engine(FakeBreachChecker()).analyze_password("Kx9!mP2@", check_breach=False)
        assert not any("Breach" in t for t in _titles(result))


class TestCrackTime:
    def test_default_algorithm_and_unit(self):
        engine = _engine()
        expected = 26**6 / engine.config.crack_speeds["SHA1"] / 86_400
        assert engine.estimate_crack_time_for_algorithm("abcdef") == pytest.approx(expected)

    def test_raw_speed(self):
        value = _engine().estimate_crack_time("abcdef", 1e9, TimeUnit.SECONDS)
        assert value == pytest.approx(26**6 / 1e9)

    def test_configured_unit(self):
        config_unit = PassWardenConfig(global_settings=GlobalConfig(log_level="WARNING"))
        config_unit.estimator.default_time_unit = "years"
        engine = PassWardenEngine(config_unit)
        assert engine.crack_time_estimate("abcdef").unit is TimeUnit.YEARS

    def test_unconfigured(self):
        with pytest.raises(UnconfiguredAlgorithmError):
            _engine(crack_speeds={"SHA1": 1.0}).crack_time_estimate("abc", HashAlgorithm.SCRYPT)

    def test_infinite_estimate(self):
        assert math.isinf(_engine().estimate_crack_time("aB1!" * 100, 1.0))


class TestDelegates:
    def test_validation(self):
        engine = _engine()
        assert engine.validate("Secret#42", ValidationRules(require_digit=True))
        assert engine.validate_pattern("Secret#42", r"#\d")
        assert not engine.validate_stop_list("Secret#42", ["Secret"])

    def test_hashing(self):
        engine = PassWardenEngine(
            PassWardenConfig(global_settings=GlobalConfig(log_level="WARNING")),
            hasher=Sha1Hasher(),
        )
        hashed = engine.hash_password("password")
        assert hashed == "5BAA61E4C9B93F3F0682250B6CF8331B7EE68FD8"
        assert engine.verify_password("password", hashed)

    def test_generation(self):
        engine = _engine(FakeBreachChecker())
        assert len(engine.generate(GenerationRules(lowercase=3, digits=2))) == 5
        assert engine.generate_from_phrase("abc")
        assert len(engine.generate_mnemonic("kebab").split("-")) >= 4

    @pytest.mark.asyncio
    async def test_reliable_random(self):
        checker = FakeBreachChecker()
        password = await _engine(checker).generate_reliable_random()
        assert checker.calls == [password]
