from collections import Counter

import networkx as nx
import numpy as np
import pytest

from conftest import euclidean_cost_matrix, random_cost_matrix
from route_optimizer.tsp import (Multigraph, christofides_tour, euler_circuit, match_odd_vertices,
                                 minimum_spanning_tree, odd_degree_vertices, shortcut)


def to_nx(graph):
    G = nx.MultiGraph()
    G.add_nodes_from(range(graph.n))
    for u, v, w in graph.edges():
        G.add_edge(u, v, weight=w)
    return G


def complete_graph(dist):
    n = dist.shape[0]
    G = nx.Graph()
    for i in range(n):
        for j in range(i + 1, n):
            G.add_edge(i, j, weight=int(dist[i, j]))
    return G


@pytest.mark.parametrize('seed', range(5))
def test_spanning_tree_is_minimum_tree(seed):
    dist = random_cost_matrix(25, seed)
    tree = minimum_spanning_tree(dist)
    assert tree.num_edges == 24
    assert nx.is_tree(nx.Graph(to_nx(tree)))
    expected = nx.minimum_spanning_tree(complete_graph(dist)).size(weight='weight')
    assert tree.total_weight() == expected


def test_spanning_tree_edge_weights_come_from_matrix(small_matrix):
    tree = minimum_spanning_tree(small_matrix)
    for u, v, w in tree.edges():
        assert w == small_matrix[u, v]


def test_spanning_tree_ties_go_to_lowest_index():
    dist = np.full((6, 6), 5, dtype=np.int64)
    np.fill_diagonal(dist, 0)
    tree = minimum_spanning_tree(dist)
    # every vertex hangs off the root
    assert sorted((min(u, v), max(u, v)) for u, v, _ in tree.edges()) == [(0, v) for v in range(1, 6)]


@pytest.mark.parametrize('seed', range(5))
def test_matching_makes_every_degree_even(seed):
    dist = euclidean_cost_matrix(40, seed)
    tree = minimum_spanning_tree(dist)
    odd = odd_degree_vertices(tree)
    assert len(odd) % 2 == 0
    pairs = match_odd_vertices(tree, dist, odd)
    assert len(pairs) == len(odd) // 2
    assert sorted(v for pair in pairs for v in pair) == odd
    assert odd_degree_vertices(tree) == []


def test_greedy_matching_pairs_nearest_unmatched_partner():
    # star 0-1, 0-2, 0-3, 0-4 plus 4-5: odd vertices are 1, 2, 3, 5
    g = Multigraph(6)
    for v in (1, 2, 3, 4):
        g.add_edge(0, v, 1)
    g.add_edge(4, 5, 1)
    dist = np.full((6, 6), 50, dtype=np.int64)
    np.fill_diagonal(dist, 0)
    dist[1, 3] = dist[3, 1] = 2
    dist[2, 5] = dist[5, 2] = 3
    assert odd_degree_vertices(g) == [1, 2, 3, 5]
    assert match_odd_vertices(g, dist) == [(1, 3), (2, 5)]


def test_exact_matching_is_never_heavier_than_greedy():
    dist = euclidean_cost_matrix(30, seed=11)
    weights = {}
    for strategy in ('greedy', 'exact'):
        tree = minimum_spanning_tree(dist)
        pairs = match_odd_vertices(tree, dist, strategy=strategy)
        assert odd_degree_vertices(tree) == []
        weights[strategy] = sum(int(dist[u, v]) for u, v in pairs)
    assert weights['exact'] <= weights['greedy']


def test_unknown_matching_strategy_rejected(small_matrix):
    tree = minimum_spanning_tree(small_matrix)
    with pytest.raises(ValueError):
        match_odd_vertices(tree, small_matrix, strategy='blossom')


@pytest.mark.parametrize('seed', range(5))
def test_euler_circuit_uses_every_edge_once(seed):
    dist = euclidean_cost_matrix(50, seed)
    graph = minimum_spanning_tree(dist)
    match_odd_vertices(graph, dist)
    expected = Counter((min(u, v), max(u, v)) for u, v, _ in graph.edges())

    walk = euler_circuit(graph, start=0)
    assert walk[0] == walk[-1] == 0
    assert len(walk) == graph.num_edges + 1
    used = Counter((min(a, b), max(a, b)) for a, b in zip(walk, walk[1:]))
    assert used == expected
    assert all(graph.removed)


def test_euler_circuit_follows_parallel_edges():
    g = Multigraph(3)
    g.add_edge(0, 1, 1)
    g.add_edge(1, 2, 1)
    g.add_edge(1, 2, 1)
    g.add_edge(0, 1, 1)
    walk = euler_circuit(g, 0)
    assert len(walk) == 5
    assert walk[0] == walk[-1] == 0
    assert Counter(walk) == Counter({0: 2, 1: 2, 2: 1})


def test_shortcut_keeps_first_visit_order():
    assert shortcut([0, 3, 1, 3, 2, 1, 0]) == [0, 3, 1, 2]


@pytest.mark.parametrize('seed', range(5))
def test_construction_is_permutation(seed):
    dist = random_cost_matrix(30, seed)
    tour = christofides_tour(dist)
    assert sorted(tour) == list(range(30))
    assert tour[0] == 0


def test_euler_circuit_skips_edges_already_consumed():
    # triangle walked twice over: consuming one copy up front leaves a single triangle
    g = Multigraph(3)
    for u, v in ((0, 1), (1, 2), (2, 0)):
        g.add_edge(u, v, 1)
    extra = [g.add_edge(u, v, 1) for u, v in ((0, 1), (1, 2), (2, 0))]
    for idx in extra:
        g.remove_edge(idx)
    walk = euler_circuit(g, 0)
    assert len(walk) == 4
    assert walk[0] == walk[-1] == 0
    assert sorted(walk[:-1]) == [0, 1, 2]
    assert all(g.is_removed(idx) for v in range(3) for idx in g.edges_of(v))
