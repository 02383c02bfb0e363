"""Scoring strategies used to rank and prune grids."""

from __future__ import annotations

import math
import numbers
from typing import TYPE_CHECKING, Protocol

from ..core.constants import DEFAULT_METRIC_WEIGHT
from ..core.exceptions import ConfigurationError

if TYPE_CHECKING:
    from .grid import Grid


class Metric(Protocol):
    def evaluate(self, grid: Grid) -> float:
        ...


class DensityMetric:
    """Fraction of the bounding box covered by letters, in ``[0, 1]``."""

    def evaluate(self, grid: Grid) -> float:
        return grid.density()

    def __repr__(self) -> str:
        return "DensityMetric()"


class DensityAndIntersectionMetric:
    """Weighted blend of density and intersection ratio, scaled to ``[0, 100]``."""

    def __init__(
        self,
        density_weight: float = DEFAULT_METRIC_WEIGHT,
        intersection_weight: float = DEFAULT_METRIC_WEIGHT,
    ) -> None:
        for label, weight in (("density", density_weight), ("intersection", intersection_weight)):
            if isinstance(weight, bool) or not isinstance(weight, numbers.Real):
                raise ConfigurationError(f"{label} weight must be a number, got {weight!r}")
            if not math.isfinite(weight) or weight < 0:
                raise ConfigurationError(
                    f"{label} weight must be a finite non-negative number, got {weight!r}"
                )
        if density_weight + intersection_weight <= 0:
            raise ConfigurationError("Metric weights must have a positive sum")
        self.density_weight = float(density_weight)
        self.intersection_weight = float(intersection_weight)

    def evaluate(self, grid: Grid) -> float:
        area = grid.area()
        if area == 0:
            return 0.0
        density = grid.density()
        intersection_ratio = grid.intersections() / area
        blended = (
            self.density_weight * density + self.intersection_weight * intersection_ratio
        ) / (self.density_weight + self.intersection_weight)
        return blended * 100.0

    def __repr__(self) -> str:
        return (
            f"DensityAndIntersectionMetric(density_weight={self.density_weight}, "
            f"intersection_weight={self.intersection_weight})"
        )


METRIC_NAMES = ("density", "density-intersection")


def build_metric(
    name: str,
    density_weight: float = DEFAULT_METRIC_WEIGHT,
    intersection_weight: float = DEFAULT_METRIC_WEIGHT,
) -> Metric:
    """Return the metric registered under ``name``."""

    if name == "density":
        return DensityMetric()
    if name == "density-intersection":
        return DensityAndIntersectionMetric(density_weight, intersection_weight)
    raise ConfigurationError(
        f"Unknown metric '{name}'. Known metrics: {', '.join(METRIC_NAMES)}"
    )
