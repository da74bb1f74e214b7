"""
PassWarden CLI
===============

Click-based command-line interface for PassWarden.  Provides subcommands
for full password analysis, pattern detection, similarity, crack-time
estimation, breach lookups, hashing, validation and the four generators.

Usage::

    python -m passwarden analyze "MyP@ssw0rd!"
    python -m passwarden patterns "abc123"
    python -m passwarden similarity "test1234" "test"
    python -m passwarden crack-time "aaaaaa" --speed 1e9 --unit seconds
    python -m passwarden breach "hunter2"
    python -m passwarden hash "secret" --scheme sha1
    python -m passwarden verify "secret" '$2b$12$...'
    python -m passwarden validate "Secret1!" --min-length 8 --require-digit
    python -m passwarden generate rules --lower 4 --upper 2 --digits 2 --special 2
    python -m passwarden generate random
    python -m passwarden generate phrase "swordfish"
    python -m passwarden generate mnemonic --convention kebab

References:
    - Click Documentation. https://click.palletsprojects.com/
"""

from __future__ import annotations

import asyncio
import json
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, Iterator, Optional

import click

from passwarden import __version__
from passwarden.core.engine import PassWardenEngine
from passwarden.core.exceptions import PassWardenError
from passwarden.core.hashing import BcryptHasher, Hasher, Sha1Hasher
from passwarden.core.models import (
    GenerationRules,
    HashAlgorithm,
    NamingConvention,
    PasswordAnalysis,
    TimeUnit,
    ValidationRules,
)
from passwarden.output.console import PassWardenConsoleOutput
from passwarden.output.report import PassWardenReportGenerator
from shared.config import PassWardenConfig
from shared.console import WardenConsole
from shared.models import ScanResult


# ===================================================================== #
#  Helpers
# ===================================================================== #

def _run_async(coro):
    """Run an async coroutine from synchronous Click handlers."""
    return asyncio.run(coro)


@contextmanager
def _errors() -> Iterator[None]:
    """Turn library errors into Click usage failures."""
    try:
        yield
    except PassWardenError as exc:
        raise click.ClickException(str(exc)) from exc


def _emit(ctx: click.Context, payload: dict[str, Any], render: Callable[[], None]) -> None:
    """Render to the console, or print *payload* as JSON."""
    output_format = ctx.obj["output_format"]
    if output_format == "console":
        render()
        return
    if output_format == "html":
        ctx.obj["console"].warning("HTML reports are only produced by 'analyze'; printing JSON")
    text = json.dumps(payload, indent=2, ensure_ascii=False, default=str)
    output_file = ctx.obj["output_file"]
    if output_file:
        Path(output_file).write_text(text, encoding="utf-8")
        ctx.obj["console"].success(f"JSON saved to: {output_file}")
    else:
        click.echo(text)


def _handle_output(ctx: click.Context, result: ScanResult) -> None:
    """Write a JSON or HTML report for *result*."""
    output_format = ctx.obj["output_format"]
    output_file = ctx.obj["output_file"]
    reporter: PassWardenReportGenerator = ctx.obj["reporter"]
    console: WardenConsole = ctx.obj["console"]

    if output_format == "json":
        if output_file:
            path = reporter.generate_json(result, Path(output_file))
            console.success(f"JSON report saved to: {path}")
        else:
            click.echo(json.dumps(reporter.build_json(result), indent=2, ensure_ascii=False, default=str))
    elif output_format == "html":
        config: PassWardenConfig = ctx.obj["config"]
        default_path = Path(config.global_settings.output_dir) / "passwarden_report.html"
        path = reporter.generate_html(result, Path(output_file) if output_file else default_path)
        console.success(f"HTML report saved to: {path}")


# ===================================================================== #
#  CLI Group
# ===================================================================== #

@click.group()
@click.version_option(__version__, prog_name="passwarden")
@click.option(
    "--config", "-c",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Path to a PassWarden configuration file (TOML).",
)
@click.option(
    "--output", "-o",
    type=click.Choice(["console", "json", "html"]),
    default="console",
    help="Output format.",
)
@click.option(
    "--output-file", "-f",
    type=click.Path(dir_okay=False),
    default=None,
    help="Output file path (for JSON/HTML output).",
)
@click.option(
    "--quiet", "-q",
    is_flag=True,
    default=False,
    help="Suppress banner and informational output.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[str],
    output: str,
    output_file: Optional[str],
    quiet: bool,
) -> None:
    """PassWarden -- password analysis and generation.

    Measure entropy and strength, detect weak patterns, estimate crack
    time, check breach exposure, and generate passwords.
    """
    ctx.ensure_object(dict)

    try:
        warden_config = PassWardenConfig.load(config)
    except (FileNotFoundError, ValueError) as exc:
        raise click.ClickException(str(exc)) from exc
    ctx.obj["config"] = warden_config
    ctx.obj["output_format"] = output
    ctx.obj["output_file"] = output_file
    ctx.obj["quiet"] = quiet

    console = WardenConsole(quiet=quiet)
    ctx.obj["console"] = console
    ctx.obj["engine"] = PassWardenEngine(warden_config)
    ctx.obj["display"] = PassWardenConsoleOutput(console)
    ctx.obj["reporter"] = PassWardenReportGenerator(version=__version__)

    if not quiet and output == "console":
        console.banner(version=__version__)


# ===================================================================== #
#  Analysis commands
# ===================================================================== #

@cli.command()
@click.argument("password")
@click.option("--no-breach", is_flag=True, default=False, help="Skip the breach-corpus lookup.")
@click.pass_context
def analyze(ctx: click.Context, password: str, no_breach: bool) -> None:
    """Full analysis: strength, patterns, frequency, breach and crack time."""
    engine: PassWardenEngine = ctx.obj["engine"]
    display: PassWardenConsoleOutput = ctx.obj["display"]

    with _errors():
        result = _run_async(engine.analyze_password(password, check_breach=not no_breach))

    if ctx.obj["output_format"] == "console":
        display.display_analysis(PasswordAnalysis.model_validate(result.metadata))
        display.display_findings(result)
    else:
        _handle_output(ctx, result)


@cli.command()
@click.argument("password")
@click.pass_context
def patterns(ctx: click.Context, password: str) -> None:
    """Detect weak structural patterns."""
    engine: PassWardenEngine = ctx.obj["engine"]
    with _errors():
        found = engine.detect_patterns(password)
    _emit(ctx, {"patterns": [p.value for p in found]}, lambda: ctx.obj["display"].display_patterns(found))


@cli.command()
@click.argument("first")
@click.argument("second")
@click.pass_context
def similarity(ctx: click.Context, first: str, second: str) -> None:
    """Positional similarity between two passwords."""
    engine: PassWardenEngine = ctx.obj["engine"]
    with _errors():
        score = engine.similarity(first, second)
    _emit(ctx, {"similarity": score}, lambda: ctx.obj["display"].display_similarity(score))


@cli.command("crack-time")
@click.argument("password")
@click.option(
    "--algorithm", "-a",
    type=click.Choice([a.value for a in HashAlgorithm], case_sensitive=False),
    default=None,
    help="Hash algorithm whose configured speed to use.",
)
@click.option("--speed", type=float, default=None, help="Raw attempts per second (overrides --algorithm).")
@click.option(
    "--unit", "-u",
    type=click.Choice([u.value for u in TimeUnit], case_sensitive=False),
    default=None,
    help="Time unit of the result.",
)
@click.pass_context
def crack_time(
    ctx: click.Context,
    password: str,
    algorithm: Optional[str],
    speed: Optional[float],
    unit: Optional[str],
) -> None:
    """Estimate exhaustive brute-force time."""
    engine: PassWardenEngine = ctx.obj["engine"]
    time_unit = unit or engine.config.estimator.default_time_unit
    with _errors():
        if speed is not None:
            estimate = engine.estimator.estimate(password, speed, time_unit)
        else:
            estimate = engine.crack_time_estimate(password, algorithm, time_unit)
    _emit(ctx, estimate.model_dump(), lambda: ctx.obj["display"].display_crack_time(estimate))


@cli.command()
@click.argument("password")
@click.pass_context
def breach(ctx: click.Context, password: str) -> None:
    """Check the password against the breach corpus."""
    engine: PassWardenEngine = ctx.obj["engine"]
    console: WardenConsole = ctx.obj["console"]
    with _errors():
        with console.status("Querying breach corpus..."):
            compromised = _run_async(engine.is_compromised(password))
    _emit(ctx, {"compromised": compromised}, lambda: ctx.obj["display"].display_breach(compromised))


# ===================================================================== #
#  Hashing and validation
# ===================================================================== #

def _hasher(engine: PassWardenEngine, scheme: str, rounds: int) -> Hasher:
    if scheme == "sha1":
        return Sha1Hasher()
    if rounds != 12:
        return BcryptHasher(rounds=rounds)
    return engine.hasher


_SCHEME_OPTION = click.option(
    "--scheme", "-s",
    type=click.Choice(["bcrypt", "sha1"]),
    default="bcrypt",
    help="Hashing scheme.",
)
_ROUNDS_OPTION = click.option("--rounds", type=int, default=12, help="bcrypt cost factor.")


@cli.command("hash")
@click.argument("password")
@_SCHEME_OPTION
@_ROUNDS_OPTION
@click.pass_context
def hash_command(ctx: click.Context, password: str, scheme: str, rounds: int) -> None:
    """Hash a password."""
    with _errors():
        hashed = _hasher(ctx.obj["engine"], scheme, rounds).hash(password)
    _emit(ctx, {"scheme": scheme, "hash": hashed}, lambda: click.echo(hashed))


@cli.command()
@click.argument("password")
@click.argument("hashed")
@_SCHEME_OPTION
@click.pass_context
def verify(ctx: click.Context, password: str, hashed: str, scheme: str) -> None:
    """Verify a password against a stored hash."""
    with _errors():
        ok = _hasher(ctx.obj["engine"], scheme, 12).verify(password, hashed)

    def render() -> None:
        console: WardenConsole = ctx.obj["console"]
        if ok:
            console.success("Password matches the hash")
        else:
            console.error("Password does not match the hash")

    _emit(ctx, {"match": ok}, render)
    if not ok:
        ctx.exit(1)


@cli.command()
@click.argument("password")
@click.option("--min-length", type=int, default=8, show_default=True)
@click.option("--max-length", type=int, default=64, show_default=True)
@click.option("--require-lower", is_flag=True, default=False)
@click.option("--require-upper", is_flag=True, default=False)
@click.option("--require-digit", is_flag=True, default=False)
@click.option("--require-special", is_flag=True, default=False)
@click.option("--pattern", "regex", default=None, help="Regular expression the password must match.")
@click.option("--stop-word", "stop_words", multiple=True, help="Forbidden substring (repeatable).")
@click.pass_context
def validate(
    ctx: click.Context,
    password: str,
    min_length: int,
    max_length: int,
    require_lower: bool,
    require_upper: bool,
    require_digit: bool,
    require_special: bool,
    regex: Optional[str],
    stop_words: tuple[str, ...],
) -> None:
    """Validate a password against a policy."""
    engine: PassWardenEngine = ctx.obj["engine"]
    rules = ValidationRules(
        min_length=min_length,
        max_length=max_length,
        require_lowercase=require_lower,
        require_uppercase=require_upper,
        require_digit=require_digit,
        require_special=require_special,
    )
    checks: dict[str, bool] = {}
    with _errors():
        checks["rules"] = engine.validate(password, rules)
        if regex is not None:
            checks["pattern"] = engine.validate_pattern(password, regex)
        if stop_words:
            checks["stop_list"] = engine.validate_stop_list(password, stop_words)

    valid = all(checks.values())
    _emit(
        ctx,
        {"valid": valid, "checks": checks},
        lambda: ctx.obj["display"].display_checks("Validation", checks),
    )
    if not valid:
        ctx.exit(1)


# ===================================================================== #
#  Generation
# ===================================================================== #

@cli.group()
def generate() -> None:
    """Generate passwords."""


def _show_generated(ctx: click.Context, password: str, kind: str) -> None:
    _emit(
        ctx,
        {"kind": kind, "password": password},
        lambda: ctx.obj["display"].display_generated(password, f"Generated ({kind})"),
    )


@generate.command("rules")
@click.option("--lower", type=int, default=0, help="Number of lowercase letters.")
@click.option("--upper", type=int, default=0, help="Number of uppercase letters.")
@click.option("--digits", type=int, default=0, help="Number of digits.")
@click.option("--special", type=int, default=0, help="Number of special characters.")
@click.pass_context
def generate_rules(ctx: click.Context, lower: int, upper: int, digits: int, special: int) -> None:
    """Exact character counts per category."""
    engine: PassWardenEngine = ctx.obj["engine"]
    with _errors():
        password = engine.generate(
            GenerationRules(lowercase=lower, uppercase=upper, digits=digits, special=special)
        )
    _show_generated(ctx, password, "rules")


@generate.command("random")
@click.pass_context
def generate_random(ctx: click.Context) -> None:
    """Maximum-strength random password absent from the breach corpus."""
    engine: PassWardenEngine = ctx.obj["engine"]
    console: WardenConsole = ctx.obj["console"]
    with _errors():
        with console.status("Generating and checking candidates..."):
            password = _run_async(engine.generate_reliable_random())
    _show_generated(ctx, password, "random")


@generate.command("phrase")
@click.argument("phrase")
@click.pass_context
def generate_phrase(ctx: click.Context, phrase: str) -> None:
    """Leetspeak substitution of a single-word phrase."""
    engine: PassWardenEngine = ctx.obj["engine"]
    with _errors():
        password = engine.generate_from_phrase(phrase)
    _show_generated(ctx, password, "phrase")


@generate.command("mnemonic")
@click.option(
    "--convention", "-n",
    type=click.Choice([c.value for c in NamingConvention], case_sensitive=False),
    default=NamingConvention.CAMEL.value,
    show_default=True,
    help="Naming convention for the phrase.",
)
@click.pass_context
def generate_mnemonic(ctx: click.Context, convention: str) -> None:
    """Adjective, noun, verb, symbol and digit in a naming convention."""
    engine: PassWardenEngine = ctx.obj["engine"]
    with _errors():
        password = engine.generate_mnemonic(convention)
    _show_generated(ctx, password, "mnemonic")


# ===================================================================== #
#  Entry Point
# ===================================================================== #

def main() -> None:
    """Main entry point for the PassWarden CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
