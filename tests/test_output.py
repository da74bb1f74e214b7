"""Tests for the report generator and console display helpers."""

from __future__ import annotations

import json
import math

import pytest

from passwarden.core.engine import PassWardenEngine
from passwarden.core.models import PasswordGrade, StrengthResult
from passwarden.output.console import PassWardenConsoleOutput
from passwarden.output.report import PassWardenReportGenerator
from shared.config import GlobalConfig, PassWardenConfig
from shared.console import WardenConsole
from shared.models import ScanResult
from tests.conftest import FakeBreachChecker


class TestReportGenerator:
    @pytest.mark.asyncio
    async def test_html(self, tmp_path):
        engine = PassWardenEngine(
            PassWardenConfig(global_settings=GlobalConfig(log_level="WARNING")),
            breach_checker=FakeBreachChecker(compromised={"letmein2024"}),
        )
        result = await engine.analyze_password("letmein2024")
        path = PassWardenReportGenerator("1.0.0").generate_html(result, tmp_path / "out" / "r.html")

        page = path.read_text(encoding="utf-8")
        assert "PassWarden Report" in page
        assert "l*********4" in page
        assert "letmein2024" not in page
        assert "severity-critical" in page
        assert 'class="gauge"' in page

    def test_html_without_analysis(self, tmp_path):
        result = ScanResult(tool_name="passwarden", target="[password]").finalize()
        page = PassWardenReportGenerator("1.0.0").generate_html(result, tmp_path / "r.html").read_text(encoding="utf-8")
        assert "No findings." in page
        assert 'class="gauge"' not in page

    @pytest.mark.asyncio
    async def test_json(self, tmp_path):
        engine = PassWardenEngine(
            PassWardenConfig(global_settings=GlobalConfig(log_level="WARNING")),
            breach_checker=FakeBreachChecker(),
        )
        result = await engine.analyze_password("Kx9!mP2@")
        path = PassWardenReportGenerator("2.0.0").generate_json(result, tmp_path / "r.json")

        report = json.loads(path.read_text(encoding="utf-8"))
        assert report["report_metadata"]["version"] == "2.0.0"
        assert report["summary"]["total_findings"] == len(result.findings)
        assert report["metadata"]["patterns"] == ["none"]


class TestConsoleOutput:
    def test_strength_meter(self):
        strength = StrengthResult(score=3, entropy=40.0, grade=PasswordGrade.REGULAR)
        meter = PassWardenConsoleOutput.strength_meter(strength, width=10)
        assert "3/5" in meter.plain
        assert meter.plain.count("█") == 6
        assert "REGULAR" in meter.plain

    @pytest.mark.parametrize(
        "value, expected",
        [
            (1.5, "1.5000 days"),
            (2_000_000.0, "2.000e+06 days"),
            (math.inf, "more than 1.8e+308 days"),
        ],
    )
    def test_format_duration(self, value, expected):
        assert PassWardenConsoleOutput.format_duration(value, "days") == expected

    @pytest.mark.asyncio
    async def test_display_analysis_renders(self):
        engine = PassWardenEngine(
            PassWardenConfig(global_settings=GlobalConfig(log_level="WARNING")),
            breach_checker=FakeBreachChecker(),
        )
        analysis = await engine.analyze("abc123")
        console = WardenConsole()
        display = PassWardenConsoleOutput(console)
        with console.rich.capture() as capture:
            display.display_analysis(analysis)
        text = capture.get()
        assert "a****3" in text
        assert "Sequential Numbers" in text
