"""Crossword layout solver: arranges a word list on one shared letter grid.

This package exposes the public API surface via:

- ``crossgrid.engine.solver.Solver``: backtracking search over placements.
- ``crossgrid.engine.grid.Grid``: sparse letter grid and placement rules.
- ``crossgrid.engine.metrics``: pluggable grid scoring strategies.
"""

from .core.constants import Direction
from .core.models import Placement, Point
from .engine.grid import Grid
from .engine.metrics import DensityAndIntersectionMetric, DensityMetric, Metric, build_metric
from .engine.solver import Solver, SolverConfig

__all__ = [
    "DensityAndIntersectionMetric",
    "DensityMetric",
    "Direction",
    "Grid",
    "Metric",
    "Placement",
    "Point",
    "Solver",
    "SolverConfig",
    "build_metric",
]

__version__ = "0.1.0"
