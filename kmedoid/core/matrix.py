"""Read-only access to a dense pre-computed cost matrix."""

from typing import Sequence, Tuple, Union
import numpy as np

from .errors import InvalidConfig, OutOfRange


class CostMatrixView:
    """
    Read-only view over an n x n cost matrix.

    ``C[i, j]`` is the cost of assigning item ``j`` to a cluster whose
    medoid is item ``i``. The matrix is not required to be symmetric.

    Usage:
        view = CostMatrixView(C)
        view[0, 3]            # scalar cost
        view.rows([2, 5])     # costs from medoids 2 and 5 to every item
    """

    def __init__(self, matrix):
        if isinstance(matrix, CostMatrixView):
            matrix = matrix._data
        data = np.asarray(matrix, dtype=float)

        if data.ndim != 2 or data.shape[0] != data.shape[1]:
            raise InvalidConfig(
                f"The cost matrix should be a real square matrix, got shape {data.shape}"
            )
        if data.shape[0] < 2:
            raise InvalidConfig("The cost matrix should cover at least 2 items")
        if not np.all(np.isfinite(data)):
            raise InvalidConfig("The cost matrix contains NaN or infinite entries")
        if np.any(data < 0):
            raise InvalidConfig("The cost matrix contains negative entries")

        data = data.view()
        data.flags.writeable = False
        self._data = data

    @property
    def n(self) -> int:
        """Number of items."""
        return self._data.shape[0]

    @property
    def shape(self) -> Tuple[int, int]:
        return self._data.shape

    def __len__(self) -> int:
        return self.n

    def __repr__(self) -> str:
        return f"CostMatrixView(n={self.n})"

    def _check(self, idx) -> np.ndarray:
        arr = np.asarray(idx)
        if arr.size and (
            not np.issubdtype(arr.dtype, np.integer)
            or arr.min() < 0
            or arr.max() >= self.n
        ):
            raise OutOfRange(idx, self.n)
        return arr.astype(int)

    def cost(self, i: int, j: int) -> float:
        """Cost of assigning item ``j`` to the cluster centered at ``i``."""
        self._check([i, j])
        return float(self._data[i, j])

    def __getitem__(self, key: Tuple[int, int]) -> float:
        i, j = key
        return self.cost(i, j)

    def rows(self, idx: Union[Sequence[int], np.ndarray]) -> np.ndarray:
        """Rows of the matrix for the given centers, shape (len(idx), n)."""
        return self._data[self._check(idx), :]

    def block(self, idx: Union[Sequence[int], np.ndarray]) -> np.ndarray:
        """Square sub-matrix ``C[idx][:, idx]`` among the given items."""
        idx = self._check(idx)
        return self._data[np.ix_(idx, idx)]

    def to_numpy(self) -> np.ndarray:
        """The underlying read-only array."""
        return self._data
