"""Word list preprocessing: normalisation and crossability ordering."""

from __future__ import annotations

from collections import Counter
from typing import Iterable, List, Sequence

from ..core.exceptions import WordListError
from ..utils.logger import get_logger

LOGGER = get_logger(__name__)


def normalize_word(text: str) -> str:
    """Return ``text`` trimmed and uppercased. Any other token is kept as-is."""

    return text.upper().strip()


def letter_frequency(words: Iterable[str]) -> Counter:
    """Count every letter across the whole word list."""

    frequency: Counter = Counter()
    for word in words:
        frequency.update(word)
    return frequency


def crossability_score(word: str, frequency: Counter) -> int:
    """Sum of ``frequency[letter] - 1`` over the letters of ``word``.

    Letters shared with many other words raise the score, so such words are
    placed first and give later words more anchors to cross.
    """

    return sum(frequency[letter] - 1 for letter in word)


def sort_by_crossability(words: Sequence[str]) -> List[str]:
    """Order words by descending crossability; ties keep their input order."""

    frequency = letter_frequency(words)
    return sorted(words, key=lambda word: -crossability_score(word, frequency))


def preprocess_words(words: Iterable[str]) -> List[str]:
    """Normalise every word and order the list for the search.

    Raises:
        WordListError: if an entry is not a string or is blank once trimmed.
    """

    processed: List[str] = []
    for position, raw in enumerate(words):
        if not isinstance(raw, str):
            raise WordListError(f"Word #{position + 1} is not a string: {raw!r}")
        word = normalize_word(raw)
        if not word:
            raise WordListError(f"Word #{position + 1} is blank")
        processed.append(word)

    ordered = sort_by_crossability(processed)
    LOGGER.debug("Search order: %s", ", ".join(ordered))
    return ordered


__all__ = [
    "crossability_score",
    "letter_frequency",
    "normalize_word",
    "preprocess_words",
    "sort_by_crossability",
]
