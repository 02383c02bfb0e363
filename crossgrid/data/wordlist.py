"""Word source: reads candidate words from a text file."""

from __future__ import annotations

from pathlib import Path
from typing import List, Sequence

from ..core.exceptions import WordListError
from ..utils.logger import get_logger

LOGGER = get_logger(__name__)


def parse_words_file(path: Path | str) -> List[str]:
    """Read words from a file, one entry per line. Blank lines and # comments are skipped."""

    location = Path(path)
    try:
        text = location.read_text(encoding="utf-8")
    except OSError as exc:
        raise WordListError(f"Cannot read word list {location}: {exc}") from exc

    entries: List[str] = []
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        entries.append(line)
    LOGGER.info("Read %d words from %s", len(entries), location)
    return entries


def order_by_length(words: Sequence[str]) -> List[str]:
    """Return words longest first; equal lengths keep their file order."""

    return sorted(words, key=len, reverse=True)
