"""
PassWarden Console Output
==========================

Rich-based displays for PassWarden results: a strength meter, property
and frequency tables, crack-time and breach panels, and generated
passwords.  Built on the shared :class:`~shared.console.WardenConsole`
so every command is styled the same way.

References:
    - Rich Library Documentation. https://rich.readthedocs.io/
"""

from __future__ import annotations

import math
import sys
from typing import Mapping, Optional

from rich.panel import Panel
from rich.text import Text

from passwarden.analyzers.brute_force import format_combinations
from passwarden.core.models import CrackTimeEstimate, PasswordAnalysis, Pattern, StrengthResult
from shared.console import WardenConsole
from shared.models import ScanResult


# ===================================================================== #
#  Colour Maps
# ===================================================================== #

_GRADE_COLOURS: dict[str, str] = {
    "super_weak": "bold white on red",
    "weak": "bold red",
    "regular": "bold yellow",
    "strong": "bold green",
    "super_strong": "bold bright_green",
}

_METER_COLOURS: tuple[str, ...] = ("red", "dark_orange", "yellow", "green", "bright_green")


class PassWardenConsoleOutput:
    """Renders PassWarden results to the terminal."""

    def __init__(self, console: Optional[WardenConsole] = None) -> None:
        self.console = console or WardenConsole()
        self._rich = self.console.rich

    # ------------------------------------------------------------------ #
    #  Strength
    # ------------------------------------------------------------------ #

    @staticmethod
    def strength_meter(strength: StrengthResult, width: int = 40) -> Text:
        """Five-step coloured bar for a strength score."""
        filled = width * strength.score // 5
        meter = Text()
        meter.append("Score: ", style="bold")
        meter.append(f"{strength.score}/5  ")
        meter.append("[", style="dim")
        for i in range(width):
            if i < filled:
                meter.append("█", style=_METER_COLOURS[i * 5 // width])
            else:
                meter.append("░", style="dim")
        meter.append("]  ", style="dim")
        meter.append(
            strength.grade.label.upper(),
            style=_GRADE_COLOURS.get(strength.grade.value, "white"),
        )
        return meter

    def display_strength(self, strength: StrengthResult) -> None:
        self._rich.print(Panel(self.strength_meter(strength), title="Strength Meter", border_style="cyan"))

    def display_analysis(self, analysis: PasswordAnalysis) -> None:
        """Full analysis: meter, properties, patterns, frequency, crack time."""
        self.console.section("Password Analysis")
        self.display_strength(analysis.strength)

        tbl = self.console.new_table()
        tbl.add_column("Property", style="bold")
        tbl.add_column("Value")
        tbl.add_row("Password", analysis.password_masked)
        tbl.add_row("Length", str(analysis.length))
        tbl.add_row("Character Set", str(analysis.char_set_size))
        tbl.add_row("Classes", ", ".join(c.value for c in analysis.character_classes) or "-")
        tbl.add_row("Entropy", f"{analysis.strength.entropy:.2f} bits")
        if analysis.compromised is None:
            tbl.add_row("Breached", "[dim]not checked[/dim]")
        else:
            tbl.add_row("Breached", "[bold red]YES[/bold red]" if analysis.compromised else "[green]no[/green]")
        self._rich.print(tbl)

        self.display_patterns(analysis.patterns)
        self.display_frequency(analysis.symbol_frequency)
        if analysis.crack_time is not None:
            self.display_crack_time(analysis.crack_time)

    # ------------------------------------------------------------------ #
    #  Patterns / frequency / similarity
    # ------------------------------------------------------------------ #

    def display_patterns(self, patterns: list[Pattern]) -> None:
        if patterns == [Pattern.NONE]:
            self.console.success("No weak patterns detected")
            return
        self._rich.print("[bold]Patterns Detected:[/bold]")
        for pattern in patterns:
            self._rich.print(f"  [yellow]⚠[/yellow] {pattern.label}")

    def display_frequency(self, frequency: Mapping[str, int]) -> None:
        rows = [(repr(char), count) for char, count in frequency.items()]
        self.console.table("Symbol Frequency", ["Symbol", "Count"], rows)

    def display_similarity(self, score: float) -> None:
        colour = "red" if score >= 0.5 else "yellow" if score > 0 else "green"
        self._rich.print(
            Panel(
                Text(f"{score:.2%} positional overlap", style=f"bold {colour}"),
                title="Similarity",
                border_style="cyan",
            )
        )

    # ------------------------------------------------------------------ #
    #  Crack time / breach
    # ------------------------------------------------------------------ #

    @staticmethod
    def format_duration(value: float, unit: str) -> str:
        if math.isinf(value):
            return f"more than {sys.float_info.max:.1e} {unit}"
        if value >= 1e6:
            return f"{value:.3e} {unit}"
        return f"{value:,.4f} {unit}"

    def display_crack_time(self, estimate: CrackTimeEstimate) -> None:
        tbl = self.console.new_table("Brute-Force Estimate")
        tbl.add_column("Algorithm", style="bold")
        tbl.add_column("Combinations", justify="right")
        tbl.add_column("Speed", justify="right")
        tbl.add_column("Estimated Time", justify="right")
        tbl.add_row(
            estimate.algorithm.value if estimate.algorithm else "custom",
            format_combinations(estimate.combinations),
            f"{estimate.attempts_per_second:.2e} g/s",
            self.format_duration(estimate.value, estimate.unit.value),
        )
        self._rich.print(tbl)

    def display_breach(self, compromised: bool) -> None:
        if compromised:
            self.console.error("Password found in the breach corpus -- do not use it")
        else:
            self.console.success("Password not found in the breach corpus")

    # ------------------------------------------------------------------ #
    #  Misc
    # ------------------------------------------------------------------ #

    def display_generated(self, password: str, title: str = "Generated Password") -> None:
        self._rich.print(Panel(Text(password, style="bold bright_green"), title=title, border_style="green"))

    def display_checks(self, title: str, checks: Mapping[str, bool]) -> None:
        rows = [(name, "[green]pass[/green]" if ok else "[red]fail[/red]") for name, ok in checks.items()]
        self.console.table(title, ["Check", "Result"], rows)

    def display_findings(self, result: ScanResult) -> None:
        self.console.findings_table(result.findings)
        self.console.info(result.summary)
