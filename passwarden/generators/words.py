"""
Mnemonic Word Source
=====================

Noun, adjective and verb lists for mnemonic generation.  The bundled lists
live in ``passwarden/data/mnemonic_words.json``; a deployment can point
``[generator] word_list`` at its own file with the same shape::

    {"nouns": [...], "adjectives": [...], "verbs": [...]}

The file is read at most once per source instance and the parsed lists are
read-only afterwards.
"""

from __future__ import annotations

import json
import random
import threading
from importlib import resources
from pathlib import Path
from typing import Optional, Protocol, Union, runtime_checkable

from pydantic import ValidationError

from passwarden.core.exceptions import InvalidArgumentError, PassWardenError
from passwarden.core.models import MnemonicData, WordCategory


@runtime_checkable
class WordSource(Protocol):
    def sample(self, category: WordCategory, rng: random.Random) -> str: ...


class JsonWordSource:
    """Lazily loaded JSON word lists.

    Sampling draws an index from ``[1, len(words))``: the first entry of
    every list is never selected.

    Args:
        path: Alternative word-list file.  The bundled lists are used
            when omitted.
    """

    def __init__(self, path: Union[str, Path, None] = None) -> None:
        self._path = Path(path) if path else None
        self._data: Optional[MnemonicData] = None
        self._lock = threading.Lock()

    @property
    def loaded(self) -> bool:
        return self._data is not None

    @property
    def data(self) -> MnemonicData:
        if self._data is None:
            with self._lock:
                if self._data is None:
                    self._data = self._load()
        return self._data

    def _read(self) -> str:
        if self._path is not None:
            return self._path.read_text(encoding="utf-8")
        bundled = resources.files("passwarden") / "data" / "mnemonic_words.json"
        return bundled.read_text(encoding="utf-8")

    def _load(self) -> MnemonicData:
        try:
            return MnemonicData.model_validate(json.loads(self._read()))
        except (OSError, ValueError, ValidationError) as exc:
            raise PassWardenError(f"Could not load mnemonic word lists: {exc}") from exc

    def sample(self, category: WordCategory, rng: random.Random) -> str:
        """Pick one word of *category*.

        Raises:
            InvalidArgumentError: If the list holds fewer than two words.
        """
        words = self.data.words(category)
        if len(words) < 2:
            raise InvalidArgumentError(category.value, "word list needs at least two entries")
        return words[rng.randrange(1, len(words))]
