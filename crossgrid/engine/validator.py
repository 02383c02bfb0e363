"""Deterministic rule validation for solved grids."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Set, Tuple

from ..core.constants import DIRECTION_DELTAS, Direction
from ..core.exceptions import ValidationError
from ..core.models import Placement, Point
from ..utils.logger import get_logger
from .grid import Grid


LOGGER = get_logger(__name__)


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str]


class GridValidator:
    """Runs deterministic validation over a completed grid."""

    def validate(self, grid: Grid, expected_words: Optional[Iterable[str]] = None) -> ValidationResult:
        messages: List[str] = []
        try:
            self._check_letters_covered(grid)
            self._check_runs_are_words(grid)
            self._check_connected(grid)
            if expected_words is not None:
                self._check_expected_words(grid, expected_words)
        except ValidationError as exc:
            messages.append(str(exc))
            LOGGER.error("Validation failed: %s", exc)
            return ValidationResult(ok=False, messages=messages)
        return ValidationResult(ok=True, messages=[])

    def _check_letters_covered(self, grid: Grid) -> None:
        covered: Dict[Point, str] = {}
        for placement in grid.placements:
            for point, letter in zip(placement.cells(), placement.word):
                if covered.setdefault(point, letter) != letter:
                    raise ValidationError(
                        f"Placements disagree at ({point.x},{point.y}): "
                        f"{covered[point]!r} vs {letter!r}"
                    )
        cells = grid.cells
        if set(cells) != set(covered):
            stray = sorted(set(cells) ^ set(covered))
            raise ValidationError(f"Cells not matching any placement: {stray[:5]}")
        for point, letter in cells.items():
            if covered[point] != letter:
                raise ValidationError(f"Cell ({point.x},{point.y}) holds {letter!r}, expected {covered[point]!r}")

    def _check_runs_are_words(self, grid: Grid) -> None:
        placed: Set[Tuple[Point, Direction, int]] = {
            (p.origin, p.direction, len(p.word)) for p in grid.placements
        }
        for run in self._runs(grid):
            if run not in placed:
                origin, direction, length = run
                raise ValidationError(
                    f"Unplaced {direction.value.lower()} sequence of {length} letters "
                    f"at ({origin.x},{origin.y})"
                )

    @staticmethod
    def _runs(grid: Grid) -> List[Tuple[Point, Direction, int]]:
        """Maximal horizontal and vertical letter runs of length two or more."""

        cells = grid.cells
        runs: List[Tuple[Point, Direction, int]] = []
        for direction, (dx, dy) in DIRECTION_DELTAS.items():
            for point in cells:
                if point.shifted(-dx, -dy) in cells:
                    continue
                length = 1
                while point.shifted(dx * length, dy * length) in cells:
                    length += 1
                if length >= 2:
                    runs.append((point, direction, length))
        return runs

    def _check_connected(self, grid: Grid) -> None:
        placements: List[Placement] = list(grid.placements)
        if len(placements) < 2:
            return
        cell_sets = [set(p.cells()) for p in placements]
        reached = {0}
        frontier = [0]
        while frontier:
            current = frontier.pop()
            for other, cells in enumerate(cell_sets):
                if other not in reached and cells & cell_sets[current]:
                    reached.add(other)
                    frontier.append(other)
        if len(reached) != len(placements):
            isolated = [placements[i].word for i in range(len(placements)) if i not in reached]
            raise ValidationError(f"Words not connected to the grid: {', '.join(isolated)}")

    def _check_expected_words(self, grid: Grid, expected_words: Iterable[str]) -> None:
        expected = Counter(expected_words)
        placed = Counter(grid.words)
        if expected != placed:
            missing = sorted((expected - placed).elements())
            extra = sorted((placed - expected).elements())
            raise ValidationError(f"Word mismatch: missing {missing}, unexpected {extra}")
