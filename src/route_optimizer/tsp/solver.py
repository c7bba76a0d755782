"""Solver facade: validate the cost matrix, build a tour, refine it with 2-opt."""
from __future__ import annotations

import logging
import time

import numpy as np

from .christofides import MATCHING_STRATEGIES, christofides_tour
from .tour import Tour, tour_cost
from .two_opt import two_opt

logger = logging.getLogger(__name__)

MIN_VERTICES = 4
MAX_VERTICES = 2000


class TSPConfigError(ValueError):
    """Vertex count outside the supported range."""


def check_cost_matrix(dist: np.ndarray) -> np.ndarray:
    """Return ``dist`` as an int64 matrix, rejecting shapes/values the solver cannot use."""
    if dist.ndim != 2 or dist.shape[0] != dist.shape[1]:
        raise ValueError(f"Cost matrix must be square, got shape {dist.shape}")
    if not np.issubdtype(dist.dtype, np.integer):
        if not np.all(np.isfinite(dist)) or not np.array_equal(dist, np.round(dist)):
            raise ValueError("Cost matrix must hold integer costs")
    dist = dist.astype(np.int64, copy=False)
    if (dist < 0).any():
        raise ValueError("Cost matrix contains negative costs")
    if not np.array_equal(dist, dist.T):
        raise ValueError("Cost matrix is not symmetric")
    if np.diagonal(dist).any():
        raise ValueError("Cost matrix diagonal must be zero")
    return dist


class TSPSolver:
    """Approximate TSP solver for a fixed number of vertices.

    Parameters:
      n: vertex count, must lie in [MIN_VERTICES, MAX_VERTICES]
      matching: 'greedy' (default) or 'exact' pairing of odd tree vertices
      refine: run 2-opt on the constructed tour
    """

    def __init__(self, n: int, *, matching: str = 'greedy', refine: bool = True):
        if not MIN_VERTICES <= n <= MAX_VERTICES:
            raise TSPConfigError(f"Invalid number of vertices: {n} (expected {MIN_VERTICES}..{MAX_VERTICES})")
        if matching not in MATCHING_STRATEGIES:
            raise ValueError(f"Unknown matching strategy: {matching!r}")
        self.n = n
        self.matching = matching
        self.refine = refine

    def solve(self, cost) -> Tour:
        start_t = time.time()
        dist = np.asarray(cost) if cost is not None else np.empty((0, 0))
        if dist.size == 0 or dist.shape[0] != self.n:
            logger.warning("Cost matrix dimension %s does not match n=%d; no tour", dist.shape, self.n)
            return Tour.empty()
        dist = check_cost_matrix(dist)

        path = christofides_tour(dist, strategy=self.matching)
        base_cost = tour_cost(path, dist)
        logger.debug("constructed tour cost %d", base_cost)

        improvements = passes = 0
        if self.refine:
            result = two_opt(path, dist, base_cost)
            path, improvements, passes = result.path, result.improvements, result.passes

        return Tour(path=tuple(path), cost=tour_cost(path, dist), improvements=improvements,
                    passes=passes, runtime=time.time() - start_t)

    __call__ = solve

    def __repr__(self) -> str:
        return f"TSPSolver(n={self.n}, matching={self.matching!r}, refine={self.refine})"


def solve_tsp(cost, *, matching: str = 'greedy', refine: bool = True) -> Tour:
    """Convenience wrapper: size the solver from the matrix and solve."""
    dist = np.asarray(cost)
    return TSPSolver(dist.shape[0] if dist.ndim else 0, matching=matching, refine=refine).solve(dist)
