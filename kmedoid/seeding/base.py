"""Base seeder interface and seed-set validation."""

from abc import ABC, abstractmethod
from typing import Sequence
import numpy as np

from ..core.errors import InvalidConfig
from ..core.matrix import CostMatrixView
from ..core.random import RngLike, resolve_rng
from ..core.types import Medoids


def check_num_clusters(k, n: int, min_k: int = 1) -> int:
    """
    Validate a cluster count against the number of items.

    Args:
        k: Requested number of medoids.
        n: Number of items.
        min_k: Smallest accepted value.

    Returns:
        ``k`` as a Python int.
    """
    if isinstance(k, (bool, np.bool_)) or not isinstance(k, (int, np.integer)):
        raise InvalidConfig(f"K should be an integer, got {k!r}")
    k = int(k)
    if k < min_k:
        raise InvalidConfig(f"K should be at least {min_k}, got {k}")
    if k >= n:
        raise InvalidConfig(
            f"The value of K should be less than the number of samples ({n}), got {k}"
        )
    return k


def check_seeds(seeds: Sequence[int], n: int, min_k: int = 1) -> Medoids:
    """
    Validate an explicit initial medoid set.

    Seeds must be integers, distinct, inside [0, n), and fewer than n.
    """
    arr = np.asarray(seeds)
    if arr.ndim != 1:
        raise InvalidConfig(f"Initial medoids should be a flat sequence, got shape {arr.shape}")
    if arr.size and not np.issubdtype(arr.dtype, np.integer):
        if not (np.issubdtype(arr.dtype, np.floating) and np.all(arr == np.floor(arr))):
            raise InvalidConfig(f"Initial medoids should be integer indices, got {list(seeds)}")
        arr = arr.astype(int)
    check_num_clusters(int(arr.size), n, min_k=min_k)

    out_of_range = [int(s) for s in arr if s < 0 or s >= n]
    if out_of_range:
        raise InvalidConfig(f"Initial medoids {out_of_range} are outside [0, {n})")
    if len(np.unique(arr)) != arr.size:
        raise InvalidConfig(f"Initial medoids contain duplicate indices: {arr.tolist()}")
    return tuple(int(s) for s in arr)


class BaseSeeder(ABC):
    """
    Abstract base class for initial medoid selection.

    Seeders pick K distinct items to start the optimization from.
    All randomness comes from the generator passed to ``seed``.
    """

    def __init__(self, name: str, **kwargs):
        self.name = name
        self.params = kwargs

    @abstractmethod
    def _select(self, view: CostMatrixView, k: int, rng: np.random.Generator) -> np.ndarray:
        """
        Choose ``k`` distinct item indices.

        Args:
            view: Cost matrix view.
            k: Number of medoids, already validated against ``view.n``.
            rng: Random generator.

        Returns:
            Array of ``k`` distinct indices.
        """
        raise NotImplementedError

    def seed(self, cost_matrix, k: int, rng: RngLike = None) -> Medoids:
        """Validate ``k`` and return the chosen medoid indices."""
        view = cost_matrix if isinstance(cost_matrix, CostMatrixView) else CostMatrixView(cost_matrix)
        k = check_num_clusters(k, view.n)
        chosen = self._select(view, k, resolve_rng(rng))
        return tuple(int(i) for i in chosen)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
