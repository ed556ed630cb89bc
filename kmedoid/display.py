"""Progress reporting for the optimization loop."""

import sys
from typing import TextIO

from .core.types import IterationRecord, KMedoidResult


class Reporter:
    """
    Prints progress according to the ``display`` option.

    - ``off``: nothing.
    - ``final``: one summary line when the loop terminates.
    - ``iter``: an iteration table plus the summary line.
    """

    def __init__(self, display: str = "off", stream: TextIO = None):
        self.display = display
        self.stream = stream

    @property
    def _out(self) -> TextIO:
        return self.stream if self.stream is not None else sys.stdout

    def _print(self, text: str):
        print(text, file=self._out)

    def start(self, n: int, k: int, medoids):
        if self.display != "iter":
            return
        self._print(f"K-medoids on {n} items, K = {k}, initial medoids {list(medoids)}")
        self._print(f" {'Iter':>5}  {'Objective':>14}  {'Change':>12}  {'#Changed':>8}")

    def iteration(self, record: IterationRecord):
        if self.display != "iter":
            return
        change = "" if record.iteration == 0 else f"{record.change:12.4g}"
        self._print(
            f" {record.iteration:5d}  {record.objective:14.6g}  {change:>12}  {record.n_changed:8d}"
        )

    def degenerate(self, position: int, old: int, new: int, iteration: int):
        if self.display == "off":
            return
        self._print(
            f"  WARNING: cluster {position} lost all members at iteration {iteration}; "
            f"re-seeded medoid {old} -> {new}"
        )

    def finish(self, result: KMedoidResult):
        if self.display == "off":
            return
        status = "converged" if result.converged else "did not converge"
        self._print(
            f"K-medoids {status} after {result.n_iter} iteration(s) "
            f"(objective = {result.objective:.6g})"
        )
