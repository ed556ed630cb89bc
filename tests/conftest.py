"""Shared test fixtures."""

import numpy as np
import pytest


def pairwise_euclidean(points: np.ndarray) -> np.ndarray:
    diff = points[:, None, :] - points[None, :, :]
    return np.sqrt(np.sum(diff ** 2, axis=-1))


@pytest.fixture
def two_blocks() -> np.ndarray:
    """Items {0, 1} and {2, 3} are free within a block and cost 10 across."""
    return np.array([
        [0, 0, 10, 10],
        [0, 0, 10, 10],
        [10, 10, 0, 0],
        [10, 10, 0, 0],
    ], dtype=float)


@pytest.fixture
def line_costs() -> np.ndarray:
    """Absolute distances between points 0, 1, 2, 10, 11, 12 on a line."""
    x = np.array([0, 1, 2, 10, 11, 12], dtype=float)
    return np.abs(x[:, None] - x[None, :])


@pytest.fixture
def blobs():
    """Three well separated 2-D blobs of 10 points each and their labels."""
    rng = np.random.default_rng(7)
    centers = np.array([[0.0, 0.0], [20.0, 0.0], [0.0, 20.0]])
    points = np.vstack([c + rng.normal(scale=0.5, size=(10, 2)) for c in centers])
    labels = np.repeat(np.arange(3), 10)
    return pairwise_euclidean(points), labels


@pytest.fixture
def random_costs() -> np.ndarray:
    rng = np.random.default_rng(123)
    return pairwise_euclidean(rng.uniform(size=(40, 2)))
