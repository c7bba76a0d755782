"""Christofides-style tour construction over an integer cost matrix.

Steps:
  1. Minimum spanning tree (Prim, O(n^2))
  2. Vertices of odd degree in the tree
  3. Pair the odd vertices (greedy nearest partner, or exact via networkx)
  4. Tree + matching -> multigraph where every degree is even
  5. Eulerian circuit -> shortcut repeated vertices

The greedy pairing in step 3 is not a minimum-weight perfect matching, so
the 3/2 bound of the textbook algorithm does not formally hold for it.
It is O(k^2) in the number of odd vertices. ``strategy="exact"`` uses the
blossom matching from networkx instead.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

import networkx as nx
import numpy as np

from .graph import Multigraph

logger = logging.getLogger(__name__)

MATCHING_STRATEGIES = ('greedy', 'exact')

_INF = np.iinfo(np.int64).max


def minimum_spanning_tree(cost) -> Multigraph:
    """Prim's algorithm rooted at vertex 0.

    Selection scans the unsorted ``key`` array, so ties go to the lowest
    vertex index. Each non-root vertex contributes one edge to its parent.
    """
    dist = np.asarray(cost)
    n = dist.shape[0]
    tree = Multigraph(n)
    if n == 0:
        return tree

    in_tree = np.zeros(n, dtype=bool)
    key = np.full(n, _INF, dtype=np.int64)
    parent = np.full(n, -1, dtype=np.int64)
    key[0] = 0

    for _ in range(n):
        u = int(np.argmin(np.where(in_tree, _INF, key)))
        in_tree[u] = True
        row = dist[u]
        closer = ~in_tree & (row < key)
        key[closer] = row[closer]
        parent[closer] = u

    for v in range(1, n):
        u = int(parent[v])
        tree.add_edge(v, u, dist[v, u])
    logger.debug("spanning tree: %d vertices, %d edges, weight %d", n, tree.num_edges, tree.total_weight())
    return tree


def odd_degree_vertices(graph: Multigraph) -> List[int]:
    """Vertices with an odd number of incident edges, in index order."""
    return [v for v in range(graph.n) if graph.degree(v) % 2 == 1]


def greedy_pairs(odd: Sequence[int], dist: np.ndarray) -> List[Tuple[int, int]]:
    """Pair each unmatched vertex (in list order) with its cheapest unmatched partner."""
    unmatched = set(odd)
    pairs: List[Tuple[int, int]] = []
    for u in odd:
        if u not in unmatched:
            continue
        unmatched.remove(u)
        candidates = [v for v in odd if v in unmatched]
        # np.argmin keeps the first minimum, i.e. the lowest-index partner on ties
        v = candidates[int(np.argmin(dist[u, candidates]))]
        unmatched.remove(v)
        pairs.append((u, v))
    return pairs


def exact_pairs(odd: Sequence[int], dist: np.ndarray) -> List[Tuple[int, int]]:
    """Minimum-weight perfect matching on the odd vertices (NetworkX blossom)."""
    G = nx.Graph()
    G.add_nodes_from(odd)
    for a in range(len(odd)):
        u = odd[a]
        for b in range(a + 1, len(odd)):
            v = odd[b]
            G.add_edge(u, v, weight=int(dist[u, v]))
    matching = nx.min_weight_matching(G, weight='weight')
    return sorted((min(u, v), max(u, v)) for u, v in matching)


def match_odd_vertices(graph: Multigraph, cost, odd: Optional[Sequence[int]] = None,
                       strategy: str = 'greedy') -> List[Tuple[int, int]]:
    """Add matching edges between odd-degree vertices so every degree becomes even.

    Returns the list of pairs that were added to ``graph``.
    """
    if strategy not in MATCHING_STRATEGIES:
        raise ValueError(f"Unknown matching strategy: {strategy!r} (expected one of {MATCHING_STRATEGIES})")
    dist = np.asarray(cost)
    if odd is None:
        odd = odd_degree_vertices(graph)
    if not odd:
        return []

    if strategy == 'exact':
        pairs = exact_pairs(odd, dist)
    else:
        pairs = greedy_pairs(odd, dist)

    for u, v in pairs:
        graph.add_edge(u, v, dist[u, v])
    logger.debug("matched %d odd vertices into %d pairs (%s)", len(odd), len(pairs), strategy)
    return pairs


def _next_available(graph: Multigraph, cursor: List[int], v: int) -> Optional[int]:
    # cursor[v] walks v's adjacency from the back; consumed edges are skipped for good
    edges = graph.edges_of(v)
    while cursor[v] > 0:
        cursor[v] -= 1
        idx = edges[cursor[v]]
        if not graph.is_removed(idx):
            return idx
    return None


def euler_circuit(graph: Multigraph, start: int = 0) -> List[int]:
    """Closed walk using every edge of an even-degree connected multigraph once.

    Iterative Hierholzer: ``path`` holds the walk being extended and
    ``circuit`` collects vertices as they dead-end. Consumed edges stay
    marked removed in ``graph``.
    """
    if graph.n == 0:
        return []
    cursor = [graph.degree(v) for v in range(graph.n)]
    path = [start]
    circuit: List[int] = []

    while path:
        v = path[-1]
        idx = _next_available(graph, cursor, v)
        if idx is None:
            circuit.append(path.pop())
        else:
            graph.remove_edge(idx)
            path.append(graph.other_end(idx, v))

    circuit.reverse()
    logger.debug("euler circuit: %d steps over %d edges", len(circuit), graph.num_edges)
    return circuit


def shortcut(walk: Sequence[int]) -> List[int]:
    """Shortcut a walk to a Hamiltonian cycle by skipping repeated vertices."""
    seen = set()
    tour: List[int] = []
    for node in walk:
        if node not in seen:
            seen.add(node)
            tour.append(node)
    return tour


def christofides_tour(cost, strategy: str = 'greedy') -> List[int]:
    """Run the construction stages and return the Hamiltonian vertex order."""
    dist = np.asarray(cost)
    if dist.shape[0] == 0:
        return []
    graph = minimum_spanning_tree(dist)
    odd = odd_degree_vertices(graph)
    match_odd_vertices(graph, dist, odd, strategy=strategy)
    walk = euler_circuit(graph, start=0)
    return shortcut(walk)
