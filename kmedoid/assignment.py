"""Nearest-medoid assignment."""

from typing import Sequence
import numpy as np

from .core.matrix import CostMatrixView
from .core.types import Assignment


def assign(view: CostMatrixView, medoids: Sequence[int]) -> Assignment:
    """
    Assign every item to its cheapest medoid.

    For item ``j`` the chosen position is ``argmin_p C[medoids[p], j]``;
    on ties the lowest position wins. This is a full dense scan over
    all ``n * K`` costs.

    Args:
        view: Cost matrix view.
        medoids: Medoid item indices, one per cluster position.

    Returns:
        Assignment with labels (positions), per-item costs and objective.
    """
    sub = view.rows(list(medoids))
    labels = np.argmin(sub, axis=0)
    costs = sub[labels, np.arange(view.n)]
    return Assignment(labels=labels, costs=costs, objective=float(costs.sum()))
