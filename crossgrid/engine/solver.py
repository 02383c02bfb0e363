"""Backtracking crossword solver with global deduplication and quality pruning.

The search is a depth-first walk over word indices. Each step copies the
parent grid and applies one candidate placement, so sibling branches never
share a grid. Three pieces of state are global to the whole search and live
in :class:`SearchState`:

  1. the set of canonical hashes already explored,
  2. the best score among completed solutions,
  3. the solution list, its cap and the cancellation signal.

In parallel mode the same state is shared by worker threads, so every access
goes through one lock.
"""

from __future__ import annotations

import math
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Set

from ..core.constants import DEFAULT_MAX_SOLUTIONS, DEFAULT_QUALITY_THRESHOLD, DEFAULT_SPLIT_DEPTH
from ..core.exceptions import ConfigurationError
from ..data.preprocess import preprocess_words
from ..utils.logger import get_logger
from .grid import Grid
from .metrics import DensityMetric, Metric


LOGGER = get_logger(__name__)

Dispatch = Callable[[Grid, int], None]


@dataclass
class SolverConfig:
    """Configuration values driving the search."""

    quality_threshold: float = DEFAULT_QUALITY_THRESHOLD
    max_solutions: int = DEFAULT_MAX_SOLUTIONS
    parallel: bool = False
    workers: Optional[int] = None
    split_depth: int = DEFAULT_SPLIT_DEPTH

    def validate(self) -> None:
        threshold = self.quality_threshold
        if isinstance(threshold, bool) or not isinstance(threshold, (int, float)):
            raise ConfigurationError(f"Quality threshold must be a number, got {threshold!r}")
        if not math.isfinite(threshold) or threshold < 0:
            raise ConfigurationError(
                f"Quality threshold must be finite and non-negative, got {threshold!r}"
            )
        if isinstance(self.max_solutions, bool) or not isinstance(self.max_solutions, int):
            raise ConfigurationError(f"max_solutions must be an integer, got {self.max_solutions!r}")
        if self.max_solutions < 1:
            raise ConfigurationError(f"max_solutions must be at least 1, got {self.max_solutions}")
        if isinstance(self.split_depth, bool) or not isinstance(self.split_depth, int):
            raise ConfigurationError(f"split_depth must be an integer, got {self.split_depth!r}")
        if self.split_depth < 1:
            raise ConfigurationError(f"split_depth must be at least 1, got {self.split_depth}")
        if self.workers is not None:
            if isinstance(self.workers, bool) or not isinstance(self.workers, int):
                raise ConfigurationError(f"workers must be an integer, got {self.workers!r}")
            if self.workers < 1:
                raise ConfigurationError(f"workers must be at least 1, got {self.workers}")


@dataclass
class SearchStats:
    explored: int = 0
    duplicates: int = 0
    pruned: int = 0


class SearchState:
    """Search-wide bookkeeping shared by every branch and worker."""

    def __init__(self, max_solutions: int) -> None:
        self.max_solutions = max_solutions
        self.solutions: List[Grid] = []
        self.best_score: Optional[float] = None
        self.stats = SearchStats()
        self.cancelled = threading.Event()
        self._seen: Set[str] = set()
        self._lock = threading.Lock()

    def mark_seen(self, key: str) -> bool:
        """Record ``key``; return ``False`` if another branch got there first."""

        with self._lock:
            if key in self._seen:
                self.stats.duplicates += 1
                return False
            self._seen.add(key)
            self.stats.explored += 1
            return True

    def should_prune(self, score: float, threshold: float) -> bool:
        with self._lock:
            if self.best_score is None or self.best_score - score <= threshold:
                return False
            self.stats.pruned += 1
            return True

    def record_solution(self, grid: Grid, score: float) -> bool:
        """Append a completed grid unless the cap is already reached."""

        with self._lock:
            if len(self.solutions) >= self.max_solutions:
                self.cancelled.set()
                return False
            self.solutions.append(grid)
            if self.best_score is None or score > self.best_score:
                self.best_score = score
                LOGGER.info("Found a better solution, new high score: %f", score)
            if len(self.solutions) >= self.max_solutions:
                LOGGER.info("Reached the cap of %d solutions", self.max_solutions)
                self.cancelled.set()
            return True


class Solver:
    """Finds up to ``max_solutions`` arrangements of every word on one grid."""

    def __init__(
        self,
        words: Iterable[str],
        config: Optional[SolverConfig] = None,
        metric: Optional[Metric] = None,
    ) -> None:
        self.config = config or SolverConfig()
        self.config.validate()
        self.words: List[str] = preprocess_words(words)
        self.metric: Metric = metric if metric is not None else DensityMetric()
        self.solutions: List[Grid] = []
        self.best_grid: Optional[Grid] = None
        self.stats = SearchStats()

    @property
    def best_score(self) -> Optional[float]:
        return self.best_grid.score if self.best_grid is not None else None

    # ------------------------------------------------------------------
    # Public entrypoint
    # ------------------------------------------------------------------
    def find_solutions(self) -> List[Grid]:
        state = SearchState(self.config.max_solutions)
        LOGGER.info(
            "Searching %d words (%s mode, threshold=%.3f, max=%d, metric=%r)",
            len(self.words),
            "parallel" if self.config.parallel else "sequential",
            self.config.quality_threshold,
            self.config.max_solutions,
            self.metric,
        )

        if self.config.parallel:
            self._search_parallel(state)
        else:
            self._search(Grid(), 0, state)

        self.solutions = sorted(
            state.solutions, key=lambda grid: (-grid.score, grid.canonical_hash())
        )
        self.best_grid = self.solutions[0] if self.solutions else None
        self.stats = state.stats

        if self.best_grid is None:
            LOGGER.warning(
                "No arrangement satisfies the placement rules (explored=%d, pruned=%d)",
                state.stats.explored,
                state.stats.pruned,
            )
        else:
            LOGGER.info(
                "Search finished: %d solutions, best score %f (explored=%d, duplicates=%d, pruned=%d)",
                len(self.solutions),
                self.best_grid.score,
                state.stats.explored,
                state.stats.duplicates,
                state.stats.pruned,
            )
        return self.solutions

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------
    def _search(
        self,
        grid: Grid,
        index: int,
        state: SearchState,
        dispatch: Optional[Dispatch] = None,
    ) -> None:
        if state.cancelled.is_set():
            return
        if not state.mark_seen(grid.canonical_hash()):
            return

        score = grid.evaluate(self.metric)
        if index > 0 and state.should_prune(score, self.config.quality_threshold):
            return

        if index >= len(self.words):
            state.record_solution(grid, score)
            return

        fan_out = dispatch is not None and index == self.config.split_depth
        for placement in grid.positions_list(self.words[index]):
            if state.cancelled.is_set():
                return
            child = grid.copy()
            child.place_word(placement)
            if fan_out:
                dispatch(child, index + 1)
            else:
                self._search(child, index + 1, state, dispatch)

    def _search_branch(self, grid: Grid, index: int, state: SearchState) -> None:
        try:
            self._search(grid, index, state)
        except BaseException:
            # Stop sibling workers before the error reaches the caller.
            state.cancelled.set()
            raise

    def _search_parallel(self, state: SearchState) -> None:
        with ThreadPoolExecutor(max_workers=self.config.workers) as executor:
            futures = []

            def dispatch(child: Grid, index: int) -> None:
                futures.append(executor.submit(self._search_branch, child, index, state))

            try:
                self._search(Grid(), 0, state, dispatch)
                LOGGER.debug("Dispatched %d branches to workers", len(futures))
                for future in as_completed(futures):
                    future.result()
            except BaseException:
                LOGGER.error("Parallel search aborted, cancelling %d branches", len(futures))
                state.cancelled.set()
                executor.shutdown(wait=False, cancel_futures=True)
                raise
