"""Renderers and pretty-print helpers for crossword grids."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, List, Optional, Protocol, Sequence, TextIO, Tuple

if TYPE_CHECKING:
    from ..engine.grid import Grid


class GridRenderer(Protocol):
    """Capability a grid draws itself through, one cell at a time."""

    def draw_cell(self, x: int, y: int, char: str) -> None:
        ...

    def finish(self) -> None:
        ...


class TextGridRenderer:
    """Writes each drawn character straight to a text stream."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self.stream = stream or sys.stdout

    def draw_cell(self, x: int, y: int, char: str) -> None:
        self.stream.write(char)

    def finish(self) -> None:
        self.stream.write("\n")


class CapturingRenderer:
    """Records draw calls in memory."""

    def __init__(self) -> None:
        self.calls: List[Tuple[int, int, str]] = []
        self.finished = False

    def draw_cell(self, x: int, y: int, char: str) -> None:
        self.calls.append((x, y, char))

    def finish(self) -> None:
        self.finished = True

    @property
    def text(self) -> str:
        return "".join(char for _, _, char in self.calls)


def format_grid(grid: Grid) -> str:
    renderer = CapturingRenderer()
    grid.render(renderer)
    return renderer.text


def pretty_print_grid(grid: Grid, *, label: str | None = None, stream=None) -> None:
    """Print the crossword grid in a human-friendly format."""

    stream = stream or sys.stdout
    if label:
        print(label, file=stream)
    grid.render(TextGridRenderer(stream))


def print_solutions(solutions: Sequence[Grid], *, render: bool = False, stream=None) -> None:
    """Print every solution with its ordinal and canonical hash."""

    stream = stream or sys.stdout
    for index, grid in enumerate(solutions, start=1):
        print(f"=== Solution #{index} ===", file=stream)
        print(grid.canonical_hash(), file=stream)
        if render:
            pretty_print_grid(grid, stream=stream)


def print_grid_stats(grid: Grid, *, stream=None) -> None:
    """Print geometry and score figures for a grid."""

    stream = stream or sys.stdout
    min_x, max_x, min_y, max_y = grid.bounds()
    width = max_x - min_x + 1 if not grid.is_empty else 0
    height = max_y - min_y + 1 if not grid.is_empty else 0
    print("--- Grid ---", file=stream)
    print(f"  Size:          {width} x {height} ({grid.area()} cells)", file=stream)
    print(f"  Letters:       {len(grid)} ({grid.density() * 100:.0f}%)", file=stream)
    print(f"  Intersections: {grid.intersections()}", file=stream)
    print(f"  Words:         {len(grid.placements)}", file=stream)
    print(f"  Score:         {grid.score:.3f}", file=stream)
