"""Shared constants and enumerations for the crossword solver."""

from __future__ import annotations

from enum import Enum
from typing import Dict, Tuple


class Direction(str, Enum):
    """Word directions supported by the grid."""

    HORIZONTAL = "HORIZONTAL"
    VERTICAL = "VERTICAL"


DIRECTION_DELTAS: Dict[Direction, Tuple[int, int]] = {
    Direction.HORIZONTAL: (1, 0),
    Direction.VERTICAL: (0, 1),
}

# Neighbours that lie across a word, keyed by the word's direction.
PERPENDICULAR_STEPS: Dict[Direction, Tuple[Tuple[int, int], ...]] = {
    Direction.HORIZONTAL: ((0, -1), (0, 1)),
    Direction.VERTICAL: ((-1, 0), (1, 0)),
}

FILLER = "."
ROW_SEPARATOR = "|"
WORDS_SEPARATOR = "#"
LINE_BREAK = "\n"

INTERSECTION_SCORE = 10

DEFAULT_QUALITY_THRESHOLD = 4.4
DEFAULT_MAX_SOLUTIONS = 1
DEFAULT_SPLIT_DEPTH = 1
DEFAULT_METRIC_WEIGHT = 100.0
