"""Per-cluster medoid re-selection (the PAM update step)."""

from typing import List, Sequence
import numpy as np

from .core.errors import DegenerateCluster
from .core.matrix import CostMatrixView
from .core.random import RngLike, resolve_rng
from .core.types import UpdateResult, group_members


def best_medoid(view: CostMatrixView, members: np.ndarray) -> int:
    """
    Member minimizing the total cost to all other members.

    Ties go to the lowest item index.
    """
    members = np.sort(np.asarray(members, dtype=int))
    if members.size == 1:
        return int(members[0])
    totals = view.block(members).sum(axis=1)
    return int(members[np.argmin(totals)])


def update_medoids(
    view: CostMatrixView,
    medoids: Sequence[int],
    labels: np.ndarray,
    rng: RngLike = None,
    on_degenerate: str = "reseed",
    iteration: int = None,
) -> UpdateResult:
    """
    Recompute the medoid of every cluster.

    Each cluster keeps its position; only the item serving as its
    medoid may change. A cluster with no members is degenerate: with
    ``on_degenerate="reseed"`` its medoid is replaced by an item drawn
    uniformly from items that are neither a current nor an updated
    medoid; with ``on_degenerate="raise"`` a DegenerateCluster error is
    raised.

    Args:
        view: Cost matrix view.
        medoids: Current medoid item indices.
        labels: Current medoid position of every item.
        rng: Generator used for re-seeding empty clusters.
        on_degenerate: "reseed" or "raise".
        iteration: Iteration number, reported in errors.

    Returns:
        UpdateResult with the new medoids and the positions re-seeded.
    """
    k = len(medoids)
    new_medoids: List[int] = list(medoids)
    degenerate = []

    for p, members in enumerate(group_members(labels, k)):
        if members.size == 0:
            degenerate.append(p)
            continue
        new_medoids[p] = best_medoid(view, members)

    if degenerate:
        if on_degenerate == "raise":
            p = degenerate[0]
            raise DegenerateCluster(p, int(medoids[p]), iteration)
        gen = resolve_rng(rng)
        for p in degenerate:
            others = set(new_medoids[:p] + new_medoids[p + 1:])
            taken = others | set(int(m) for m in medoids)
            candidates = np.array([i for i in range(view.n) if i not in taken])
            if candidates.size == 0:
                # every item is an old or new medoid; only keep the empty one out
                candidates = np.array([
                    i for i in range(view.n) if i not in others and i != medoids[p]
                ])
            new_medoids[p] = int(gen.choice(candidates))

    return UpdateResult(medoids=tuple(new_medoids), degenerate=tuple(degenerate))
