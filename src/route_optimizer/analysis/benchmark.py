#!/usr/bin/env python3
"""
Construction + 2-opt benchmark on random Euclidean instances.

For every size and run this:
1. Draws distinct integer points on a grid (seeded) and rounds Euclidean costs
2. Builds the Christofides tour and records its cost
3. Applies 2-opt to that tour and records cost, moves, passes and time

Example:
  python -m route_optimizer.analysis.benchmark --sizes 20 50 100 --runs 5 --out results/benchmark.csv
"""

import argparse
import os
import time
from dataclasses import asdict, dataclass
from typing import List, Sequence, Tuple

import numpy as np
import pandas as pd

from ..tsp import MAX_VERTICES, MIN_VERTICES, TSPConfigError, christofides_tour, tour_cost, two_opt


@dataclass
class BenchmarkRecord:
    n: int
    run: int
    seed: int
    matching: str
    construction_cost: int
    final_cost: int
    improvement_percent: float
    improvements: int
    passes: int
    construction_time: float
    ls_time: float
    runtime: float


def random_instance(n: int, seed: int, grid: int = 0) -> Tuple[np.ndarray, np.ndarray]:
    """Return ``(points, cost)`` for ``n`` distinct grid points with rounded Euclidean costs."""
    rng = np.random.default_rng(seed)
    grid = grid or max(100, 4 * n)
    cells = rng.choice(grid * grid, size=n, replace=False)
    points = np.stack(np.divmod(cells, grid), axis=1).astype(float)
    diff = points[:, None, :] - points[None, :, :]
    cost = np.rint(np.sqrt((diff ** 2).sum(axis=2))).astype(np.int64)
    return points, cost


def run_single(n: int, run: int, seed: int, matching: str = 'greedy') -> BenchmarkRecord:
    _, dist = random_instance(n, seed)

    start_t = time.time()
    base_tour = christofides_tour(dist, strategy=matching)
    construction_time = time.time() - start_t
    base_cost = tour_cost(base_tour, dist)

    start_t = time.time()
    result = two_opt(base_tour, dist, base_cost)
    ls_time = time.time() - start_t

    improvement = 100.0 * (base_cost - result.cost) / base_cost if base_cost else 0.0
    return BenchmarkRecord(n=n, run=run, seed=seed, matching=matching, construction_cost=base_cost,
                           final_cost=result.cost, improvement_percent=improvement,
                           improvements=result.improvements, passes=result.passes,
                           construction_time=construction_time, ls_time=ls_time,
                           runtime=construction_time + ls_time)


def run_benchmark(sizes: Sequence[int], runs: int = 3, seed: int = 0, matching: str = 'greedy') -> pd.DataFrame:
    """Run every (size, run) pair; seeds are ``seed + run`` so sizes share a seed sequence."""
    for n in sizes:
        if not MIN_VERTICES <= n <= MAX_VERTICES:
            raise TSPConfigError(f"Invalid number of vertices: {n} (expected {MIN_VERTICES}..{MAX_VERTICES})")
    records: List[BenchmarkRecord] = []
    for n in sizes:
        for run in range(runs):
            rec = run_single(n, run + 1, seed + run, matching)
            print(f"  n={n:5d} run={rec.run} construction={rec.construction_cost} "
                  f"2opt={rec.final_cost} ({rec.improvement_percent:.2f}%) time={rec.runtime:.3f}s")
            records.append(rec)
    return pd.DataFrame([asdict(r) for r in records])


def summarize(df: pd.DataFrame) -> pd.DataFrame:
    """Per-size statistics of improvement and runtime."""
    summary = df.groupby('n').agg({
        'improvement_percent': ['mean', 'std', 'median'],
        'runtime': ['mean', 'std', 'median'],
        'passes': ['mean'],
        'run': ['count'],
    }).round(6)
    summary.columns = ['_'.join(col).strip() for col in summary.columns.values]
    summary = summary.rename(columns={'run_count': 'count'})
    return summary.reset_index()


def main(argv=None):  # pragma: no cover - CLI
    ap = argparse.ArgumentParser(description="Christofides + 2-opt benchmark on random instances")
    ap.add_argument('--sizes', type=int, nargs='+', default=[20, 50, 100])
    ap.add_argument('--runs', type=int, default=3)
    ap.add_argument('--seed', type=int, default=0)
    ap.add_argument('--matching', choices=['greedy', 'exact'], default='greedy')
    ap.add_argument('--out', help='CSV file for per-run records (summary goes next to it)')
    args = ap.parse_args(argv)

    print(f"Sizes: {args.sizes}  runs: {args.runs}  matching: {args.matching}")
    df = run_benchmark(args.sizes, args.runs, args.seed, args.matching)
    summary = summarize(df)
    print("\nSummary:")
    print(summary.to_string(index=False))
    if args.out:
        os.makedirs(os.path.dirname(args.out) or '.', exist_ok=True)
        df.to_csv(args.out, index=False)
        root, ext = os.path.splitext(args.out)
        summary.to_csv(f"{root}_summary{ext or '.csv'}", index=False)
        print(f"\nResults saved to {args.out}")


if __name__ == '__main__':  # pragma: no cover - CLI
    main()
