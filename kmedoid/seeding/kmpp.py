"""K-means++ style seeding driven by the cost matrix."""

import numpy as np

from .base import BaseSeeder
from ..core.matrix import CostMatrixView
from ..core.registry import get_registry


class KMeansPlusPlusSeeder(BaseSeeder):
    """
    K-means++ seeding.

    The first medoid is drawn uniformly. Each further medoid is drawn
    with probability proportional to the cost from the nearest medoid
    chosen so far, which spreads the seeds over high-cost regions.
    When every remaining candidate has zero cost the draw falls back to
    uniform sampling among the candidates.
    """

    def __init__(self, **kwargs):
        super().__init__("kmpp", **kwargs)

    def _select(self, view: CostMatrixView, k: int, rng: np.random.Generator) -> np.ndarray:
        n = view.n
        chosen = np.empty(k, dtype=int)
        available = np.ones(n, dtype=bool)

        chosen[0] = rng.integers(n)
        available[chosen[0]] = False
        mincost = view.rows([chosen[0]])[0].copy()

        for t in range(1, k):
            weights = np.where(available, mincost, 0.0)
            total = weights.sum()
            if total > 0:
                nxt = rng.choice(n, p=weights / total)
            else:
                nxt = rng.choice(np.flatnonzero(available))
            chosen[t] = nxt
            available[nxt] = False
            np.minimum(mincost, view.rows([nxt])[0], out=mincost)

        return chosen


get_registry("seeders").register("kmpp", KMeansPlusPlusSeeder)
