"""Uniform seeding without replacement."""

import numpy as np

from .base import BaseSeeder
from ..core.matrix import CostMatrixView
from ..core.registry import get_registry


class UniformSeeder(BaseSeeder):
    """Pick K distinct items uniformly at random."""

    def __init__(self, **kwargs):
        super().__init__("rand", **kwargs)

    def _select(self, view: CostMatrixView, k: int, rng: np.random.Generator) -> np.ndarray:
        return rng.choice(view.n, size=k, replace=False)


get_registry("seeders").register("rand", UniformSeeder)
