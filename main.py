"""CLI entrypoint for the crossword layout solver."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any, Dict

from crossgrid.core.constants import (
    DEFAULT_MAX_SOLUTIONS,
    DEFAULT_METRIC_WEIGHT,
    DEFAULT_QUALITY_THRESHOLD,
    DEFAULT_SPLIT_DEPTH,
)
from crossgrid.core.exceptions import CrosswordError
from crossgrid.data.wordlist import order_by_length, parse_words_file
from crossgrid.engine.grid import Grid
from crossgrid.engine.metrics import METRIC_NAMES, DensityAndIntersectionMetric, build_metric
from crossgrid.engine.solver import Solver, SolverConfig
from crossgrid.engine.validator import GridValidator
from crossgrid.utils.logger import configure_logging
from crossgrid.utils.pretty import pretty_print_grid, print_grid_stats, print_solutions


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Arrange a word list into crossword-style grids",
    )
    parser.add_argument("words_file", type=Path, help="File with one word per line (# comments and blank lines ignored)")
    parser.add_argument(
        "--mqt",
        type=float,
        default=DEFAULT_QUALITY_THRESHOLD,
        help="Quality threshold: branches scoring further than this below the best solution are dropped",
    )
    parser.add_argument("--max", type=int, default=DEFAULT_MAX_SOLUTIONS, help="Maximum number of solutions")
    parser.add_argument("--parallel", action="store_true", help="Explore branches on worker threads")
    parser.add_argument("--workers", type=int, help="Worker thread count for --parallel")
    parser.add_argument(
        "--split-depth",
        type=int,
        default=DEFAULT_SPLIT_DEPTH,
        help="Number of placed words at which --parallel fans branches out",
    )
    parser.add_argument(
        "--metric",
        type=str,
        choices=METRIC_NAMES,
        default="density",
        help="Scoring strategy used for pruning and ranking",
    )
    parser.add_argument("--density-weight", type=float, default=DEFAULT_METRIC_WEIGHT)
    parser.add_argument("--intersection-weight", type=float, default=DEFAULT_METRIC_WEIGHT)
    parser.add_argument("--render", action="store_true", help="Draw every solution grid")
    parser.add_argument("--output", type=Path, help="Optional path to JSON output")
    parser.add_argument("--debug", action="store_true", help="Print the best grid with stats and validation")
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def solution_payload(index: int, grid: Grid) -> Dict[str, Any]:
    return {
        "index": index,
        "score": grid.score,
        "hash": grid.canonical_hash(),
        "placements": [
            {
                "word": placement.word,
                "origin": [placement.origin.x, placement.origin.y],
                "direction": placement.direction.value,
            }
            for placement in grid.normalize().placements
        ],
    }


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = logging.DEBUG if args.debug else getattr(logging, args.log_level.upper(), logging.INFO)
    configure_logging(level)

    try:
        words = order_by_length(parse_words_file(args.words_file))
        metric = build_metric(args.metric, args.density_weight, args.intersection_weight)
        config = SolverConfig(
            quality_threshold=args.mqt,
            max_solutions=args.max,
            parallel=args.parallel,
            workers=args.workers,
            split_depth=args.split_depth,
        )
        solver = Solver(words, config=config, metric=metric)
    except CrosswordError as exc:
        parser.exit(1, f"error: {exc}\n")

    solutions = solver.find_solutions()
    print_solutions(solutions, render=args.render)

    if args.debug and solver.best_grid is not None:
        best = solver.best_grid.copy()
        blended = best.evaluate(DensityAndIntersectionMetric(100, 100))
        pretty_print_grid(best, label=f"Best grid (density+intersection score {blended:.3f})")
        print_grid_stats(best)
        validation = GridValidator().validate(best, expected_words=solver.words)
        print("Validation: " + ("ok" if validation.ok else "; ".join(validation.messages)))

    if args.output:
        payload = {
            "words": solver.words,
            "solutions": [solution_payload(i, grid) for i, grid in enumerate(solutions, start=1)],
        }
        args.output.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
