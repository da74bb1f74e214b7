"""
PassWarden Structured Logger
=============================

Provides :class:`WardenLogger`, a component-scoped logging facade with
colour Rich output on stderr and optional JSON-lines or plain-text files
with rotation.

Passwords must never reach a log sink.  Callers log lengths, counts and
outcomes; as a second line, :meth:`WardenLogger.redacting` registers the
secrets of the current operation and a logger-level filter masks any
occurrence of them in rendered messages before a handler sees the record.

References:
    - Python logging HOWTO. https://docs.python.org/3/howto/logging.html
    - Rich library. https://github.com/Textualize/rich
    - OWASP Logging Cheat Sheet -- data to exclude.
"""

from __future__ import annotations

import json
import logging
import time
from contextlib import contextmanager
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Iterator, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

_LOG_THEME = Theme(
    {
        "log.level.debug": "dim cyan",
        "log.level.info": "bold bright_blue",
        "log.level.warning": "bold yellow",
        "log.level.error": "bold red",
        "log.level.critical": "bold white on red",
    }
)

_REDACTED = "[REDACTED]"
_TEXT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def _level(name: str) -> int:
    return getattr(logging, name.upper(), logging.WARNING)


# ========================== Formatting =====================================


class _JSONFormatter(logging.Formatter):
    """One JSON object per record::

        {"timestamp": "...", "level": "DEBUG", "component": "generator",
         "operation": "reliable_random", "message": "...", "fields": {...}}
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "component": getattr(record, "component", record.name),
            "operation": getattr(record, "operation", None),
            "message": record.getMessage(),
        }
        fields = getattr(record, "fields", None)
        if fields:
            entry["fields"] = fields
        if record.exc_info and record.exc_info[1] is not None:
            entry["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


class _RedactingFilter(logging.Filter):
    """Masks registered secrets in the rendered message of every record."""

    def __init__(self) -> None:
        super().__init__()
        self._secrets: list[str] = []

    def push(self, secrets: list[str]) -> None:
        self._secrets.extend(secrets)

    def pop(self, count: int) -> None:
        if count:
            del self._secrets[-count:]

    def filter(self, record: logging.LogRecord) -> bool:
        if not self._secrets:
            return True
        message = record.getMessage()
        # longest first so a secret containing another is masked whole
        for secret in sorted(self._secrets, key=len, reverse=True):
            message = message.replace(secret, _REDACTED)
        record.msg, record.args = message, None
        return True


def _shared_redactor(logger: logging.Logger) -> _RedactingFilter:
    """The redactor attached to *logger*, shared by every WardenLogger of that name."""
    for existing in logger.filters:
        if isinstance(existing, _RedactingFilter):
            return existing
    redactor = _RedactingFilter()
    logger.addFilter(redactor)
    return redactor


# ========================== Handlers =======================================


def _console_handler(level: int) -> logging.Handler:
    return RichHandler(
        level=level,
        console=Console(theme=_LOG_THEME, stderr=True),
        show_path=False,
        rich_tracebacks=True,
        markup=False,
    )


def _file_handler(
    path: Path, level: int, json_lines: bool, max_bytes: int, backup_count: int
) -> logging.Handler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        filename=str(path), maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
    )
    handler.setLevel(level)
    handler.setFormatter(
        _JSONFormatter() if json_lines
        else logging.Formatter(fmt=_TEXT_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S%z")
    )
    return handler


# ========================== WardenLogger ===================================


class WardenLogger:
    """Logger bound to one PassWarden component.

    Usage::

        log = WardenLogger("generator", log_level="DEBUG")
        with log.operation("reliable_random"):
            log.debug("Attempt %d rejected", attempt, reason="score")

    Keyword arguments other than ``exc_info`` are collected into a
    ``fields`` mapping on the record (and into the JSON output).

    Args:
        component:      Name bound into every record (``passwarden.<component>``).
        log_level:      Minimum severity name.
        log_file:       Rotating log file; ``None`` disables file logging.
        json_logs:      Write JSON lines instead of plain text to *log_file*.
        max_bytes:      Rotation size of *log_file*.
        backup_count:   Rotated files kept.
        console_output: Attach the Rich stderr handler.
    """

    def __init__(
        self,
        component: str,
        *,
        log_level: str = "WARNING",
        log_file: str | Path | None = None,
        json_logs: bool = False,
        max_bytes: int = 10_485_760,
        backup_count: int = 5,
        console_output: bool = True,
    ) -> None:
        self._component = component
        self._operation: Optional[str] = None
        level = _level(log_level)
        self._logger = logging.getLogger(f"passwarden.{component}")
        self._logger.setLevel(level)
        self._logger.propagate = False
        self._logger.handlers.clear()
        self._redactor = _shared_redactor(self._logger)

        if console_output:
            self._logger.addHandler(_console_handler(level))
        if log_file:
            self._logger.addHandler(
                _file_handler(Path(log_file), level, json_logs, max_bytes, backup_count)
            )

    # ------------------------------------------------------------------ #
    #  Emitting
    # ------------------------------------------------------------------ #

    def _log(self, level: int, msg: str, args: tuple[Any, ...], kwargs: dict[str, Any]) -> None:
        exc_info = kwargs.pop("exc_info", None)
        extra = {"component": self._component, "operation": self._operation, "fields": kwargs}
        self._logger.log(level, msg, *args, exc_info=exc_info, extra=extra)

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.DEBUG, msg, args, kwargs)

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.INFO, msg, args, kwargs)

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.WARNING, msg, args, kwargs)

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.ERROR, msg, args, kwargs)

    # ------------------------------------------------------------------ #
    #  Scopes
    # ------------------------------------------------------------------ #

    @contextmanager
    def operation(self, name: str) -> Iterator[WardenLogger]:
        """Tag every record emitted inside the block with *name*."""
        previous, self._operation = self._operation, name
        try:
            yield self
        finally:
            self._operation = previous

    @contextmanager
    def timed(self, label: str) -> Iterator[None]:
        """Log the elapsed time of the block at DEBUG level."""
        start = time.perf_counter()
        try:
            yield
        finally:
            self.debug("Completed: %s (%.3f sec)", label, time.perf_counter() - start)

    @contextmanager
    def redacting(self, *secrets: Optional[str]) -> Iterator[None]:
        """Mask *secrets* in every message logged inside the block."""
        active = [s for s in secrets if s]
        self._redactor.push(active)
        try:
            yield
        finally:
            self._redactor.pop(len(active))

    # ------------------------------------------------------------------ #
    #  Properties
    # ------------------------------------------------------------------ #

    @property
    def component(self) -> str:
        return self._component

    @property
    def underlying(self) -> logging.Logger:
        """The stdlib :class:`logging.Logger` behind this facade."""
        return self._logger


def get_logger(component: str, config: Any = None) -> WardenLogger:
    """Build a :class:`WardenLogger` from the ``[global]`` config section.

    Args:
        component: Component name bound into every record.
        config:    Optional :class:`~shared.config.PassWardenConfig`.
    """
    if config is None:
        return WardenLogger(component)
    settings = config.global_settings
    return WardenLogger(
        component,
        log_level="DEBUG" if settings.debug else settings.log_level,
        log_file=settings.log_file or None,
        json_logs=settings.log_json,
    )
