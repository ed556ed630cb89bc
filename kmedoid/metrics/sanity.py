"""Sanity checks for k-medoid results."""

from typing import Dict
import numpy as np

from ..core.matrix import CostMatrixView
from ..core.types import KMedoidResult


def run_sanity_checks(
    cost_matrix,
    result: KMedoidResult,
    atol: float = 1e-9,
) -> Dict[str, bool]:
    """
    Run consistency checks on a result against its cost matrix.

    Catches issues like:
    - Duplicate or out-of-range medoids
    - Labels that do not point at the cheapest medoid
    - Medoids assigned away from their own cluster
    - Costs or counts that disagree with the labels
    - An objective that increased between iterations

    Args:
        cost_matrix: The matrix the result was computed from.
        result: The k-medoid result.
        atol: Absolute tolerance for floating point comparisons.

    Returns:
        Dict of check names to pass/fail booleans.
    """
    view = cost_matrix if isinstance(cost_matrix, CostMatrixView) else CostMatrixView(cost_matrix)
    C = view.to_numpy()
    n = view.n
    medoids = np.asarray(result.medoids, dtype=int)
    k = medoids.size
    labels = np.asarray(result.labels)
    costs = np.asarray(result.costs, dtype=float)

    checks = {}
    checks["medoids_unique"] = len(np.unique(medoids)) == k
    checks["medoids_in_range"] = bool(k > 0 and medoids.min() >= 0 and medoids.max() < n)
    checks["labels_cover_all_items"] = labels.shape == (n,) and costs.shape == (n,)
    checks["labels_in_range"] = bool(
        checks["labels_cover_all_items"] and labels.min() >= 0 and labels.max() < k
    )

    if checks["medoids_in_range"] and checks["labels_in_range"]:
        sub = C[medoids, :]
        assigned = sub[labels, np.arange(n)]
        checks["costs_match_labels"] = bool(np.allclose(costs, assigned, atol=atol))
        checks["labels_are_nearest"] = bool(np.all(assigned <= sub.min(axis=0) + atol))
        checks["counts_match_labels"] = bool(
            np.array_equal(np.bincount(labels, minlength=k), np.asarray(result.counts))
        )
        # a medoid that is its own cheapest center belongs to its own cluster
        own = C[medoids, medoids]
        is_min = own <= sub[:, medoids].min(axis=0) + atol
        chosen = sub[labels[medoids], medoids]
        checks["medoids_label_themselves"] = bool(np.all(
            ~is_min | (labels[medoids] == np.arange(k)) | (np.abs(chosen - own) <= atol)
        ))
    else:
        checks["costs_match_labels"] = False
        checks["labels_are_nearest"] = False
        checks["counts_match_labels"] = False
        checks["medoids_label_themselves"] = False

    checks["objective_is_total_cost"] = bool(
        np.isclose(result.objective, costs.sum(), atol=atol * max(n, 1))
    )

    history = np.asarray(result.history, dtype=float)
    checks["objective_non_increasing"] = bool(
        history.size < 2 or np.all(np.diff(history) <= atol * max(n, 1))
    )

    checks["all_passed"] = all(checks.values())

    return checks
