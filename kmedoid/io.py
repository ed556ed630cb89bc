"""Loading cost matrices and reference labels from disk."""

import os
import numpy as np
import pandas as pd

from .core.errors import InvalidConfig

_TEXT_SEPARATORS = {".csv": ",", ".tsv": "\t", ".txt": r"\s+"}


def load_cost_matrix(path: str) -> np.ndarray:
    """
    Load a dense cost matrix.

    ``.npy`` files are read with numpy; ``.csv``, ``.tsv`` and ``.txt``
    files are read as headerless delimited tables.
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Cost matrix not found: {path}")

    ext = os.path.splitext(path)[1].lower()
    if ext == ".npy":
        return np.load(path, allow_pickle=False)
    if ext in _TEXT_SEPARATORS:
        df = pd.read_csv(path, header=None, sep=_TEXT_SEPARATORS[ext], engine="python")
        return df.to_numpy(dtype=float)
    raise InvalidConfig(
        f"Unsupported cost matrix format '{ext}'. Use .npy, .csv, .tsv or .txt"
    )


def load_labels(path: str) -> np.ndarray:
    """Load one reference label per line (or per row of a one-column table)."""
    if not os.path.exists(path):
        raise FileNotFoundError(f"Labels file not found: {path}")
    if path.endswith(".npy"):
        return np.asarray(np.load(path, allow_pickle=False)).reshape(-1)
    df = pd.read_csv(path, header=None, sep=r"[,\s]+", engine="python")
    return df.iloc[:, 0].to_numpy()
