import numpy as np
import pytest


def random_cost_matrix(n, seed, low=1, high=100):
    rng = np.random.default_rng(seed)
    upper = rng.integers(low, high, size=(n, n))
    cost = np.triu(upper, 1)
    return cost + cost.T


def euclidean_cost_matrix(n, seed, grid=1000):
    rng = np.random.default_rng(seed)
    cells = rng.choice(grid * grid, size=n, replace=False)
    pts = np.stack(np.divmod(cells, grid), axis=1).astype(float)
    diff = pts[:, None, :] - pts[None, :, :]
    return np.rint(np.sqrt((diff ** 2).sum(axis=2))).astype(np.int64)


@pytest.fixture
def small_matrix():
    return random_cost_matrix(9, seed=7)


@pytest.fixture
def euclid_matrix():
    return euclidean_cost_matrix(60, seed=3)
