"""Sparse letter grid with placement validation and geometry helpers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, List, Optional, Tuple

from ..core.constants import (
    FILLER,
    INTERSECTION_SCORE,
    LINE_BREAK,
    PERPENDICULAR_STEPS,
    ROW_SEPARATOR,
    WORDS_SEPARATOR,
    Direction,
)
from ..core.models import Placement, Point
from ..utils.logger import get_logger

if TYPE_CHECKING:
    from ..utils.pretty import GridRenderer
    from .metrics import Metric


LOGGER = get_logger(__name__)


class Grid:
    """Unbounded crossword surface holding only occupied cells.

    Empty cells are never stored: a point is empty exactly when it is absent
    from ``_cells``. Placements are kept in the order they were applied.
    Grids compare equal on their cells alone and are mutable, so they are
    not hashable; use :meth:`canonical_hash` as a set or dict key.
    """

    def __init__(self) -> None:
        self._cells: Dict[Point, str] = {}
        self._placements: List[Placement] = []
        self.score: float = 0.0

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def cells(self) -> Dict[Point, str]:
        return dict(self._cells)

    @property
    def placements(self) -> Tuple[Placement, ...]:
        return tuple(self._placements)

    @property
    def words(self) -> List[str]:
        return [placement.word for placement in self._placements]

    @property
    def is_empty(self) -> bool:
        return not self._cells

    def __len__(self) -> int:
        return len(self._cells)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self._cells == other._cells

    __hash__ = None  # type: ignore[assignment]

    def letter_at(self, x: int, y: int) -> Optional[str]:
        return self._cells.get(Point(x, y))

    def has(self, x: int, y: int) -> bool:
        return Point(x, y) in self._cells

    def bounds(self) -> Tuple[int, int, int, int]:
        """Return ``(min_x, max_x, min_y, max_y)`` of the occupied cells."""

        if not self._cells:
            return 0, 0, 0, 0
        xs = [point.x for point in self._cells]
        ys = [point.y for point in self._cells]
        return min(xs), max(xs), min(ys), max(ys)

    def center(self) -> Point:
        # Midpoint in absolute coordinates, not relative to the box corner, so
        # candidate ranking is the same wherever the grid sits on the plane.
        min_x, max_x, min_y, max_y = self.bounds()
        return Point((min_x + max_x) // 2, (min_y + max_y) // 2)

    # ------------------------------------------------------------------
    # Placement rules
    # ------------------------------------------------------------------
    def can_place(self, placement: Placement) -> bool:
        if not placement.word:
            return False
        if placement.before in self._cells or placement.after in self._cells:
            return False

        dx, dy = placement.delta
        steps = PERPENDICULAR_STEPS[placement.direction]
        intersected = False
        for point, letter in zip(placement.cells(), placement.word):
            existing = self._cells.get(point)
            if existing is not None:
                if existing != letter or self._parallel_conflict(point, dx, dy):
                    return False
                intersected = True
                continue
            if any(point.shifted(sx, sy) in self._cells for sx, sy in steps):
                return False

        if self._cells and not intersected:
            return False
        return True

    def _parallel_conflict(self, point: Point, dx: int, dy: int) -> bool:
        return point.shifted(-dx, -dy) in self._cells or point.shifted(dx, dy) in self._cells

    def place_word(self, placement: Placement) -> bool:
        if not self.can_place(placement):
            return False
        for point, letter in zip(placement.cells(), placement.word):
            self._cells[point] = letter
        self._placements.append(placement)
        return True

    def remove_word(self, placement: Placement) -> bool:
        """Undo an applied placement, keeping cells still covered by other words."""

        try:
            self._placements.remove(placement)
        except ValueError:
            return False
        still_covered = {point for other in self._placements for point in other.cells()}
        for point in placement.cells():
            if point not in still_covered:
                self._cells.pop(point, None)
        return True

    # ------------------------------------------------------------------
    # Candidate generation
    # ------------------------------------------------------------------
    def positions_list(self, word: str) -> List[Placement]:
        """Return every legal placement of ``word``, most promising first."""

        if not self._cells:
            return [Placement(word, Point(0, 0), Direction.HORIZONTAL)]

        candidates: Dict[Placement, None] = {}
        for anchor in sorted(self._cells):
            for index in range(len(word)):
                horizontal = Placement(word, anchor.shifted(-index, 0), Direction.HORIZONTAL)
                if self.can_place(horizontal):
                    candidates.setdefault(horizontal, None)
                vertical = Placement(word, anchor.shifted(0, -index), Direction.VERTICAL)
                if self.can_place(vertical):
                    candidates.setdefault(vertical, None)

        center = self.center()
        ordered = sorted(candidates, key=lambda p: -self._position_score(p, center))
        LOGGER.debug("Word %s has %d candidate placements", word, len(ordered))
        return ordered

    def _position_score(self, placement: Placement, center: Point) -> int:
        matched = sum(1 for point in placement.cells() if point in self._cells)
        distance = abs(placement.origin.x - center.x) + abs(placement.origin.y - center.y)
        return INTERSECTION_SCORE * matched - distance

    # ------------------------------------------------------------------
    # Statistics
    # ------------------------------------------------------------------
    def evaluate(self, metric: "Metric") -> float:
        self.score = metric.evaluate(self)
        return self.score

    def area(self) -> int:
        if not self._cells:
            return 0
        min_x, max_x, min_y, max_y = self.bounds()
        return (max_x - min_x + 1) * (max_y - min_y + 1)

    def density(self) -> float:
        if not self._cells:
            return 0.0
        return len(self._cells) / self.area()

    def intersections(self) -> int:
        count = 0
        for point in self._cells:
            horizontal = self.has(point.x - 1, point.y) or self.has(point.x + 1, point.y)
            vertical = self.has(point.x, point.y - 1) or self.has(point.x, point.y + 1)
            if horizontal and vertical:
                count += 1
        return count

    # ------------------------------------------------------------------
    # Canonical forms
    # ------------------------------------------------------------------
    def normalize(self) -> "Grid":
        """Return a translated copy whose bounding box starts at (0, 0)."""

        if not self._cells:
            return self.copy()
        min_x, _, min_y, _ = self.bounds()
        normalized = Grid()
        normalized._cells = {
            point.shifted(-min_x, -min_y): letter for point, letter in self._cells.items()
        }
        normalized._placements = [p.translated(-min_x, -min_y) for p in self._placements]
        normalized.score = self.score
        return normalized

    def canonical_hash(self) -> str:
        """Translation and placement-order independent key for deduplication."""

        if not self._cells:
            return ""
        normalized = self.normalize()
        _, max_x, _, max_y = normalized.bounds()
        parts: List[str] = []
        for y in range(max_y + 1):
            for x in range(max_x + 1):
                parts.append(normalized._cells.get(Point(x, y), FILLER))
            parts.append(ROW_SEPARATOR)
        if normalized._placements:
            parts.append(WORDS_SEPARATOR)
            parts.append(",".join(sorted(normalized.words)))
        return "".join(parts)

    def copy(self) -> "Grid":
        duplicate = Grid()
        duplicate._cells = dict(self._cells)
        duplicate._placements = list(self._placements)
        duplicate.score = self.score
        return duplicate

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def render(self, renderer: "GridRenderer") -> None:
        if not self._cells:
            renderer.finish()
            return
        min_x, max_x, min_y, max_y = self.bounds()
        for y in range(min_y, max_y + 1):
            for x in range(min_x, max_x + 1):
                renderer.draw_cell(x, y, self._cells.get(Point(x, y), FILLER))
            renderer.draw_cell(max_x + 1, y, LINE_BREAK)
        renderer.finish()

    def __repr__(self) -> str:
        return f"Grid(words={self.words!r}, score={self.score:.3f})"
