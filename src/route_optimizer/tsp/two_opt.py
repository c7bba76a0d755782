"""First-improvement 2-opt over a cyclic tour.

For every position ``i`` the candidate partners ``j > i`` are evaluated
in one numpy expression, but moves are still taken in scan order: the
first strictly improving ``j`` is applied in place and the scan resumes
at ``j + 1`` on the modified tour. Passes repeat until one applies no move.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .tour import tour_cost

logger = logging.getLogger(__name__)


@dataclass
class TwoOptResult:
    path: List[int]
    cost: int
    improvements: int
    passes: int


def two_opt_pass(tour: np.ndarray, cost, best_cost: int) -> Tuple[int, int]:
    """One full scan over all ``(i, j)`` pairs, reversing ``tour[i..j]`` in place.

    Returns ``(best_cost, moves_applied)``.
    """
    dist = np.asarray(cost)
    n = tour.shape[0]
    improvements = 0
    for i in range(n - 1):
        start = i + 1
        # (0, n-1) would reverse the whole cycle
        stop = n - 1 if i == 0 else n
        while start < stop:
            a = tour[i - 1]  # wraps to the last vertex when i == 0
            b = tour[i]
            js = np.arange(start, stop)
            c = tour[js]
            d = tour[(js + 1) % n]
            delta = dist[a, c] + dist[b, d] - dist[a, b] - dist[c, d]
            hits = np.flatnonzero(delta < 0)
            if hits.size == 0:
                break
            j = start + int(hits[0])
            tour[i:j + 1] = tour[i:j + 1][::-1].copy()
            best_cost += int(delta[hits[0]])
            improvements += 1
            start = j + 1
    return best_cost, improvements


def two_opt(path: Sequence[int], cost, best_cost: Optional[int] = None,
            max_passes: Optional[int] = None) -> TwoOptResult:
    """Repeat 2-opt passes until no improving move remains (or ``max_passes``)."""
    dist = np.asarray(cost)
    tour = np.array(path, dtype=np.int64)
    if best_cost is None:
        best_cost = tour_cost(tour, dist)
    start_cost = best_cost
    total = 0
    passes = 0
    while max_passes is None or passes < max_passes:
        passes += 1
        best_cost, moved = two_opt_pass(tour, dist, best_cost)
        total += moved
        logger.debug("2-opt pass %d: %d moves, cost %d", passes, moved, best_cost)
        if moved == 0:
            break
    logger.info("2-opt: cost %d -> %d after %d moves in %d passes", start_cost, best_cost, total, passes)
    return TwoOptResult(path=tour.tolist(), cost=best_cost, improvements=total, passes=passes)
