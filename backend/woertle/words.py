"""German five-letter vocabulary: the pool of daily words and the set of
acceptable guesses."""

from __future__ import annotations

import logging
import re
import unicodedata
from pathlib import Path

from . import config
from .errors import ConfigurationError

logger = logging.getLogger(__name__)

ALPHABET = "abcdefghijklmnopqrstuvwxyzäöü"

_WORD_RE = re.compile(rf"^[{ALPHABET}]{{{config.WORD_LENGTH}}}$")


def normalize(word: str) -> str:
    """NFC-normalize and lowercase, keeping umlauts intact."""
    return unicodedata.normalize("NFC", word.strip()).lower()


def is_valid_word(word: str) -> bool:
    """Return True if *word* (already normalized) has the right shape."""
    return bool(_WORD_RE.match(word))


class WordList:
    """Ordered, de-duplicated vocabulary.

    Order matters: daily selection draws from the words in list order, so two
    installations with the same file pick the same word for the same day.
    """

    def __init__(self, words):
        seen: set[str] = set()
        ordered: list[str] = []
        for raw in words:
            word = normalize(raw)
            if not is_valid_word(word):
                raise ConfigurationError(f"Not a {config.WORD_LENGTH}-letter word: {raw!r}")
            if word not in seen:
                seen.add(word)
                ordered.append(word)
        if not ordered:
            raise ConfigurationError("Word list is empty")
        self._words = tuple(ordered)
        self._index = frozenset(ordered)

    @classmethod
    def from_file(cls, path: str) -> WordList:
        """Load one word per line; '#' comments and blank lines are ignored."""
        lines = [
            line.strip()
            for line in Path(path).read_text(encoding="utf-8").splitlines()
            if line.strip() and not line.startswith("#")
        ]
        if not lines:
            raise ConfigurationError(f"Word list file has no words: {path}")
        word_list = cls(lines)
        logger.info("[words] Loaded %d words from %s", len(word_list), path)
        return word_list

    @property
    def words(self) -> tuple[str, ...]:
        return self._words

    def is_known(self, word: str) -> bool:
        """Return True if *word* is an acceptable guess."""
        return normalize(word) in self._index

    def __contains__(self, word: str) -> bool:
        return self.is_known(word)

    def __iter__(self):
        return iter(self._words)

    def __len__(self) -> int:
        return len(self._words)
