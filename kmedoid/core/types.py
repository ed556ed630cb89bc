"""Core data types shared by the k-medoid components."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Tuple
import numpy as np


Medoids = Tuple[int, ...]


def group_members(labels: np.ndarray, k: int) -> List[np.ndarray]:
    """Item indices grouped by label 0..k-1, each group in ascending order."""
    labels = np.asarray(labels, dtype=int)
    order = np.argsort(labels, kind="stable")
    bounds = np.searchsorted(labels[order], np.arange(k + 1))
    return [order[bounds[p]:bounds[p + 1]] for p in range(k)]


class LoopState(str, Enum):
    """States of the optimization loop."""

    SEEDING = "seeding"
    ITERATING = "iterating"
    CONVERGED = "converged"
    MAX_ITER_REACHED = "max_iter_reached"


@dataclass(frozen=True)
class Assignment:
    """
    Nearest-medoid assignment of every item.

    Args:
        labels: Medoid position (0..K-1) for each item, shape (n,).
        costs: Cost of each item to its assigned medoid, shape (n,).
        objective: Sum of ``costs``.
    """
    labels: np.ndarray
    costs: np.ndarray
    objective: float

    def members(self, k: int) -> List[np.ndarray]:
        """Item indices grouped by medoid position."""
        return group_members(self.labels, k)

    def counts(self, k: int) -> np.ndarray:
        """Number of items assigned to each medoid position."""
        return np.bincount(self.labels, minlength=k)


@dataclass(frozen=True)
class UpdateResult:
    """Output of a medoid-update step."""
    medoids: Medoids
    degenerate: Tuple[int, ...] = ()


@dataclass(frozen=True)
class IterationRecord:
    """One row of the optimization trace."""
    iteration: int
    objective: float
    change: float
    n_changed: int


@dataclass(frozen=True)
class KMedoidResult:
    """
    Final result of a k-medoid run.

    Args:
        labels: Medoid position assigned to each item, shape (n,).
        medoids: Original item index of each medoid, length K.
        objective: Total assignment cost at termination.
        costs: Per-item assignment cost, shape (n,).
        counts: Number of items per medoid position, length K.
        state: Terminal loop state.
        n_iter: Number of completed medoid updates.
        history: Objective value after each assignment pass.
        n_reseeded: Number of empty clusters that were re-seeded.
    """
    labels: np.ndarray
    medoids: Medoids
    objective: float
    costs: np.ndarray
    counts: np.ndarray
    state: LoopState = LoopState.CONVERGED
    n_iter: int = 0
    history: Tuple[float, ...] = ()
    n_reseeded: int = 0
    trace: Tuple[IterationRecord, ...] = field(default=(), repr=False)

    @property
    def converged(self) -> bool:
        return self.state is LoopState.CONVERGED

    @property
    def k(self) -> int:
        return len(self.medoids)

    @property
    def medoid_labels(self) -> np.ndarray:
        """Original item index of the medoid each item is assigned to."""
        return np.asarray(self.medoids, dtype=int)[self.labels]

    def clusters(self) -> List[List[int]]:
        """Members of each cluster as lists of item indices."""
        return [np.flatnonzero(self.labels == p).tolist() for p in range(self.k)]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "labels": self.labels.tolist(),
            "medoids": list(self.medoids),
            "objective": float(self.objective),
            "costs": self.costs.tolist(),
            "counts": self.counts.tolist(),
            "state": self.state.value,
            "converged": self.converged,
            "n_iter": self.n_iter,
            "history": list(self.history),
            "n_reseeded": self.n_reseeded,
        }


@dataclass
class RunReport:
    """A k-medoid result together with its checks and run metadata."""
    result: KMedoidResult
    sanity_checks: Dict[str, bool] = field(default_factory=dict)
    clustering: Dict[str, float] = field(default_factory=dict)
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "result": self.result.to_dict(),
            "sanity_checks": {k: bool(v) for k, v in self.sanity_checks.items()},
            "clustering": self.clustering,
            "metadata": self.metadata,
        }
