"""Exception types raised by the k-medoid engine."""

from typing import Optional


class KMedoidError(Exception):
    """Base class for all k-medoid errors."""


class InvalidConfig(KMedoidError, ValueError):
    """
    Raised for bad inputs detected before any computation.

    Covers malformed cost matrices, K outside its valid range,
    explicit seed sets with duplicate or out-of-range indices, and
    unrecognized option names or values.
    """


class OutOfRange(KMedoidError, IndexError):
    """Raised when a cost matrix is indexed outside [0, n)."""

    def __init__(self, index, n: int):
        self.index = index
        self.n = n
        super().__init__(f"Index {index!r} is out of range for a {n} x {n} cost matrix")


class DegenerateCluster(KMedoidError, RuntimeError):
    """
    A cluster lost all of its members during an update step.

    The optimization loop normally recovers from this by re-seeding the
    medoid; it is only raised when the caller asks for it.
    """

    def __init__(self, position: int, medoid: int, iteration: Optional[int] = None):
        self.position = position
        self.medoid = medoid
        self.iteration = iteration
        where = f" at iteration {iteration}" if iteration is not None else ""
        super().__init__(
            f"Cluster {position} (medoid {medoid}) has no members{where}"
        )
