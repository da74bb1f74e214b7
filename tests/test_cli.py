"""Tests for the Click command-line interface."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from passwarden import __version__
from passwarden.cli import cli


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def run(runner, quiet_config_file):
    def _invoke(*args: str):
        return runner.invoke(cli, ["-c", str(quiet_config_file), *args], obj={})

    return _invoke


def _json(result) -> dict:
    return json.loads(result.stdout)


class TestGroup:
    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_missing_config_file(self, runner, tmp_path):
        result = runner.invoke(cli, ["-c", str(tmp_path / "nope.toml"), "patterns", "abc"])
        assert result.exit_code != 0

    def test_invalid_generator_config(self, runner, tmp_path):
        config = tmp_path / "bad.toml"
        config.write_text("[generator]\nreliable_length = 8\n", encoding="utf-8")
        result = runner.invoke(cli, ["-c", str(config), "generate", "random"])
        assert result.exit_code == 1
        assert "reliable_length" in result.output


class TestAnalysisCommands:
    def test_analyze_json(self, run):
        result = run("-o", "json", "analyze", "pass", "--no-breach")
        assert result.exit_code == 0, result.output
        report = _json(result)
        assert report["report_metadata"]["tool"] == "passwarden"
        assert report["metadata"]["password_masked"] == "p**s"
        assert report["metadata"]["compromised"] is None
        assert report["summary"]["highest_severity"] == "CRITICAL"

    def test_analyze_html(self, run, tmp_path):
        target = tmp_path / "report.html"
        result = run("-o", "html", "-f", str(target), "analyze", "Kx9!mP2@", "--no-breach")
        assert result.exit_code == 0, result.output
        assert "PassWarden Report" in target.read_text(encoding="utf-8")

    def test_analyze_console(self, run):
        result = run("-q", "analyze", "Kx9!mP2@", "--no-breach")
        assert result.exit_code == 0, result.output

    def test_analyze_blank_password(self, run):
        result = run("-o", "json", "analyze", "   ", "--no-breach")
        assert result.exit_code == 1

    def test_patterns(self, run):
        result = run("-o", "json", "patterns", "aaa")
        assert result.exit_code == 0
        assert "repeating_characters" in _json(result)["patterns"]

    def test_similarity(self, run):
        result = run("-o", "json", "similarity", "abcd", "abxy")
        assert _json(result) == {"similarity": 0.5}

    def test_crack_time_raw_speed(self, run):
        result = run("-o", "json", "crack-time", "abcdef", "--speed", "1e9", "--unit", "seconds")
        payload = _json(result)
        assert payload["combinations"] == 26**6
        assert payload["unit"] == "seconds"
        assert payload["value"] == pytest.approx(26**6 / 1e9)

    def test_crack_time_infinite_speed(self, run):
        result = run("-o", "json", "crack-time", "abcdef", "--speed", "inf")
        assert result.exit_code == 1
        assert "attempts_per_second" in result.output

    def test_crack_time_unconfigured(self, runner, tmp_path):
        config = tmp_path / "speeds.toml"
        config.write_text('[global]\nlog_level = "WARNING"\n[crack_speeds]\nSHA1 = 1e9\n', encoding="utf-8")
        result = runner.invoke(cli, ["-c", str(config), "-o", "json", "crack-time", "abc", "-a", "MD5"])
        assert result.exit_code == 1
        assert "MD5" in result.output


class TestHashCommands:
    def test_sha1(self, run):
        result = run("-o", "json", "hash", "password", "--scheme", "sha1")
        assert _json(result)["hash"] == "5BAA61E4C9B93F3F0682250B6CF8331B7EE68FD8"

    def test_verify_match(self, run):
        result = run("-o", "json", "verify", "password", "5BAA61E4C9B93F3F0682250B6CF8331B7EE68FD8", "-s", "sha1")
        assert result.exit_code == 0
        assert _json(result) == {"match": True}

    def test_verify_mismatch(self, run):
        result = run("-o", "json", "verify", "hunter2", "5BAA61E4C9B93F3F0682250B6CF8331B7EE68FD8", "-s", "sha1")
        assert result.exit_code == 1

    def test_bcrypt_rounds(self, run):
        result = run("-o", "json", "hash", "hunter2", "--rounds", "4")
        assert _json(result)["hash"].startswith("$2b$04$")


class TestValidateCommand:
    def test_valid(self, run):
        result = run("-o", "json", "validate", "Secret#42", "--require-digit", "--stop-word", "admin")
        assert result.exit_code == 0
        assert _json(result) == {"valid": True, "checks": {"rules": True, "stop_list": True}}

    def test_invalid(self, run):
        result = run("-o", "json", "validate", "short", "--pattern", r"\d")
        assert result.exit_code == 1
        assert _json(result)["checks"] == {"rules": False, "pattern": False}

    def test_inverted_bounds(self, run):
        result = run("validate", "whatever", "--min-length", "10", "--max-length", "5")
        assert result.exit_code == 1


class TestGenerateCommands:
    def test_rules(self, run):
        result = run("-o", "json", "generate", "rules", "--lower", "4", "--digits", "3")
        payload = _json(result)
        assert payload["kind"] == "rules"
        assert len(payload["password"]) == 7

    def test_phrase(self, run):
        result = run("-o", "json", "generate", "phrase", "swordfish")
        assert result.exit_code == 0
        assert len(_json(result)["password"]) >= len("swordfish")

    def test_phrase_with_digits(self, run):
        result = run("-o", "json", "generate", "phrase", "sword5")
        assert result.exit_code == 1

    def test_mnemonic(self, run):
        result = run("-o", "json", "generate", "mnemonic", "--convention", "screaming_snake")
        password = _json(result)["password"]
        assert password == password.upper()
        assert password.count("_") >= 3

    def test_rules_console(self, run):
        result = run("-q", "generate", "rules", "--upper", "2")
        assert result.exit_code == 0
