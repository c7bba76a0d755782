"""Undirected multigraph stored as a flat edge arena.

Each logical edge lives once in the arena; every vertex keeps a list of
edge indices into it. Removing an edge flips a single flag that both
endpoints see, so there are no mirrored records to keep in sync.
"""
from __future__ import annotations

from typing import Iterator, List, Tuple


class Multigraph:
    """Multigraph over vertices ``0..n-1`` (parallel edges allowed)."""

    def __init__(self, n: int):
        self.n = n
        self.v1: List[int] = []
        self.v2: List[int] = []
        self.weight: List[int] = []
        self.removed: List[bool] = []
        self.adj: List[List[int]] = [[] for _ in range(n)]

    def add_edge(self, u: int, v: int, weight: int) -> int:
        """Append edge u-v and return its arena index."""
        idx = len(self.v1)
        self.v1.append(u)
        self.v2.append(v)
        self.weight.append(int(weight))
        self.removed.append(False)
        self.adj[u].append(idx)
        self.adj[v].append(idx)
        return idx

    @property
    def num_edges(self) -> int:
        return len(self.v1)

    def degree(self, v: int) -> int:
        return len(self.adj[v])

    def other_end(self, idx: int, v: int) -> int:
        return self.v2[idx] if self.v1[idx] == v else self.v1[idx]

    def edges_of(self, v: int) -> List[int]:
        return self.adj[v]

    def remove_edge(self, idx: int) -> None:
        self.removed[idx] = True

    def is_removed(self, idx: int) -> bool:
        return self.removed[idx]

    def edges(self) -> Iterator[Tuple[int, int, int]]:
        """Yield ``(v1, v2, weight)`` for every arena edge."""
        return zip(self.v1, self.v2, self.weight)

    def total_weight(self) -> int:
        return sum(self.weight)

    def __repr__(self) -> str:
        return f"Multigraph(n={self.n}, edges={self.num_edges})"
