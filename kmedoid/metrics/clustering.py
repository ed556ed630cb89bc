"""Agreement between a k-medoid labeling and reference labels."""

from typing import Dict, Sequence
import numpy as np


def _comb2(counts: np.ndarray) -> float:
    """Sum of n choose 2 over an array of counts."""
    counts = np.asarray(counts, dtype=float)
    return float(np.sum(counts * (counts - 1) / 2))


def _contingency(true_labels: Sequence, pred_labels: Sequence) -> np.ndarray:
    _, t_idx = np.unique(np.asarray(true_labels), return_inverse=True)
    _, p_idx = np.unique(np.asarray(pred_labels), return_inverse=True)
    table = np.zeros((t_idx.max() + 1, p_idx.max() + 1), dtype=int)
    np.add.at(table, (t_idx.ravel(), p_idx.ravel()), 1)
    return table


def adjusted_rand_index(true_labels: Sequence, pred_labels: Sequence) -> float:
    """
    Adjusted Rand Index between two labelings of the same items.

    Returns:
        ARI in [-1, 1]; 0.0 when fewer than two items are given.
    """
    if len(true_labels) < 2:
        return 0.0

    table = _contingency(true_labels, pred_labels)
    sum_comb = _comb2(table.ravel())
    sum_true = _comb2(table.sum(axis=1))
    sum_pred = _comb2(table.sum(axis=0))

    total = _comb2([table.sum()])
    expected = sum_true * sum_pred / total
    denom = 0.5 * (sum_true + sum_pred) - expected
    if denom == 0.0:
        return 1.0 if sum_comb == expected else 0.0
    return float((sum_comb - expected) / denom)


def b3_scores(true_labels: Sequence, pred_labels: Sequence) -> tuple:
    """
    B-cubed precision, recall and F1.

    Per-item precision is the fraction of its predicted cluster sharing
    its reference label; recall is the fraction of its reference class
    landing in its predicted cluster.
    """
    table = _contingency(true_labels, pred_labels).astype(float)
    n = table.sum()
    if n == 0:
        return 0.0, 0.0, 0.0

    pred_sizes = table.sum(axis=0)
    true_sizes = table.sum(axis=1)
    precision = float(np.sum(table ** 2 / pred_sizes[None, :]) / n)
    recall = float(np.sum(table ** 2 / true_sizes[:, None]) / n)

    if precision + recall > 0:
        f1 = 2 * precision * recall / (precision + recall)
    else:
        f1 = 0.0
    return precision, recall, f1


def compute_clustering_metrics(
    true_labels: Sequence,
    pred_labels: Sequence
) -> Dict[str, float]:
    """
    Compare a labeling against reference labels.

    Args:
        true_labels: Reference class of each item.
        pred_labels: Cluster of each item (e.g. ``result.labels``).

    Returns:
        Dict with ARI, B³ precision/recall/F1 and cluster counts.
    """
    true_labels = np.asarray(true_labels).reshape(-1)
    pred_labels = np.asarray(pred_labels).reshape(-1)
    if true_labels.shape != pred_labels.shape:
        raise ValueError(
            f"Label arrays differ in length: {true_labels.size} vs {pred_labels.size}"
        )

    b3_p, b3_r, b3_f1 = b3_scores(true_labels, pred_labels)
    return {
        "ari": adjusted_rand_index(true_labels, pred_labels),
        "b3_precision": b3_p,
        "b3_recall": b3_r,
        "b3_f1": b3_f1,
        "n_true_clusters": int(len(np.unique(true_labels))),
        "n_pred_clusters": int(len(np.unique(pred_labels))),
    }
