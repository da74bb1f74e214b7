"""
PassWarden Console Interface
=============================

Rich-powered presentation layer shared by every PassWarden command:
banner, section rules, tagged status messages, a house table style, the
findings table and a spinner.

References:
    - Rich library: https://github.com/Textualize/rich
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterable, Iterator, Sequence

from rich.align import Align
from rich.console import Console, RenderableType
from rich.panel import Panel
from rich.status import Status
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

from shared.models import Finding, Severity

_WARDEN_THEME = Theme(
    {
        "warden.banner": "bold bright_cyan",
        "warden.section": "bold bright_magenta",
        "warden.success": "bold green",
        "warden.warning": "bold yellow",
        "warden.error": "bold red",
        "warden.info": "bold bright_blue",
        "warden.dim": "dim white",
        "severity.critical": "bold white on red",
        "severity.high": "bold red",
        "severity.medium": "bold yellow",
        "severity.low": "bold bright_cyan",
        "severity.info": "bold bright_blue",
    }
)

_BANNER_ART = r"""[bright_cyan]
  ___              __      __          _
 | _ \__ _ ______ \ \    / /_ _ _ _ __| |___ _ _
 |  _/ _` (_-<_-<  \ \/\/ / _` | '_/ _` / -_) ' \
 |_| \__,_/__/__/   \_/\_/\__,_|_| \__,_\___|_||_|
[/bright_cyan]"""

_TAGLINE = "Password analysis and generation toolkit"

# kind -> (icon, label)
_MESSAGE_TAGS: dict[str, tuple[str, str]] = {
    "success": ("✔", "OK"),
    "warning": ("⚠", "WARNING"),
    "error": ("✘", "ERROR"),
    "info": ("ℹ", "INFO"),
}


def severity_style(severity: Severity) -> str:
    return f"severity.{severity.value.lower()}"


class WardenConsole:
    """Presentation helpers over one themed :class:`rich.console.Console`.

    Args:
        quiet: Suppress all output.
    """

    def __init__(self, *, quiet: bool = False) -> None:
        self._console = Console(theme=_WARDEN_THEME, quiet=quiet, highlight=False)

    @property
    def rich(self) -> Console:
        return self._console

    def print(self, *renderables: RenderableType, **kwargs: Any) -> None:
        self._console.print(*renderables, **kwargs)

    # ------------------------------------------------------------------ #
    #  Banner and headers
    # ------------------------------------------------------------------ #

    def banner(self, version: str) -> None:
        subtitle = (
            f"[warden.banner]{_TAGLINE}[/warden.banner]\n"
            f"[warden.dim]v{version}[/warden.dim]"
        )
        body = Align.center(Text.from_markup(f"{_BANNER_ART}\n{subtitle}"))
        self._console.print(Panel(body, border_style="bright_cyan", padding=(0, 2)))

    def section(self, title: str) -> None:
        self._console.rule(f"  {title}  ", style="warden.section")

    # ------------------------------------------------------------------ #
    #  Messages
    # ------------------------------------------------------------------ #

    def _message(self, kind: str, message: str) -> None:
        icon, label = _MESSAGE_TAGS[kind]
        tag = Text(f"[{icon}] {label}: ", style=f"warden.{kind}")
        self._console.print(tag + Text(message))

    def success(self, message: str) -> None:
        self._message("success", message)

    def warning(self, message: str) -> None:
        self._message("warning", message)

    def error(self, message: str) -> None:
        self._message("error", message)

    def info(self, message: str) -> None:
        self._message("info", message)

    # ------------------------------------------------------------------ #
    #  Tables
    # ------------------------------------------------------------------ #

    @staticmethod
    def new_table(title: str | None = None, columns: Iterable[str] = ()) -> Table:
        """Empty table in the house style with *columns* added."""
        tbl = Table(
            title=title,
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            show_lines=True,
        )
        for column in columns:
            tbl.add_column(column)
        return tbl

    def table(self, title: str, columns: Sequence[str], rows: Iterable[Sequence[Any]]) -> None:
        """Print a house-style table; cells may be markup strings or values."""
        tbl = self.new_table(title, columns)
        for row in rows:
            tbl.add_row(*(cell if isinstance(cell, str) else str(cell) for cell in row))
        self._console.print(tbl)

    def findings_table(self, findings: Sequence[Finding]) -> None:
        tbl = self.new_table("Findings")
        tbl.add_column("#", style="dim", justify="right")
        tbl.add_column("Severity")
        tbl.add_column("Title")
        tbl.add_column("Description", ratio=2)
        for idx, finding in enumerate(findings, start=1):
            tbl.add_row(
                str(idx),
                Text(finding.severity.value, style=severity_style(finding.severity)),
                finding.title,
                finding.description,
            )
        self._console.print(tbl)

    # ------------------------------------------------------------------ #
    #  Spinner
    # ------------------------------------------------------------------ #

    @contextmanager
    def status(self, message: str) -> Iterator[Status]:
        with self._console.status(
            f"[warden.info]{message}[/warden.info]", spinner="dots"
        ) as spinner:
            yield spinner
