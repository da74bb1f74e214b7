"""
Naming Conventions
===================

Deterministic text layouts applied to space-separated phrases.

    ===============  ======================
    camel            correctHorseBattery#7
    pascal           CorrectHorseBattery#7
    snake            correct_horse_battery_#7
    screaming_snake  CORRECT_HORSE_BATTERY_#7
    kebab            correct-horse-battery-#7
    train            Correct-Horse-Battery-#7
    dot              correct.horse.battery.#7
    upper            CORRECTHORSEBATTERY#7
    lower            correcthorsebattery#7
    ===============  ======================
"""

from __future__ import annotations

from typing import Callable, Union

from passwarden.core.exceptions import InvalidArgumentError
from passwarden.core.models import NamingConvention


def _camel(words: list[str]) -> str:
    head, *tail = words
    return head.lower() + "".join(w.capitalize() for w in tail)


_FORMATTERS: dict[NamingConvention, Callable[[list[str]], str]] = {
    NamingConvention.CAMEL: _camel,
    NamingConvention.PASCAL: lambda ws: "".join(w.capitalize() for w in ws),
    NamingConvention.SNAKE: lambda ws: "_".join(w.lower() for w in ws),
    NamingConvention.SCREAMING_SNAKE: lambda ws: "_".join(w.upper() for w in ws),
    NamingConvention.KEBAB: lambda ws: "-".join(w.lower() for w in ws),
    NamingConvention.TRAIN: lambda ws: "-".join(w.capitalize() for w in ws),
    NamingConvention.DOT: lambda ws: ".".join(w.lower() for w in ws),
    NamingConvention.UPPER: lambda ws: "".join(w.upper() for w in ws),
    NamingConvention.LOWER: lambda ws: "".join(w.lower() for w in ws),
}


def parse_convention(value: Union[NamingConvention, str]) -> NamingConvention:
    """Accept an enum member or its name in any case, with ``-`` or ``_``."""
    if isinstance(value, NamingConvention):
        return value
    key = str(value).strip().lower().replace("-", "_")
    try:
        return NamingConvention(key)
    except ValueError as exc:
        raise InvalidArgumentError("convention", f"unknown naming convention {value!r}") from exc


def apply_convention(phrase: str, convention: Union[NamingConvention, str]) -> str:
    """Re-lay *phrase* according to *convention*.

    Raises:
        InvalidArgumentError: If *phrase* has no words or the convention
            is unknown.
    """
    formatter = _FORMATTERS[parse_convention(convention)]
    words = phrase.split() if phrase else []
    if not words:
        raise InvalidArgumentError("phrase", "must contain at least one word")
    return formatter(words)
