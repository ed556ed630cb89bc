"""Run k-medoid clustering once."""

import os
import time
import json
import math
import numbers
from datetime import datetime
from typing import Dict, Any, Optional, Sequence, Union
import numpy as np

from ..assignment import assign
from ..update import update_medoids
from ..display import Reporter
from ..config.schema import KMedoidOptions, parse_options, to_run_config, validate_config
from ..core.errors import InvalidConfig
from ..core.matrix import CostMatrixView
from ..core.random import RngLike, get_rng, resolve_rng
from ..core.registry import get_registry
from ..core.types import IterationRecord, KMedoidResult, LoopState, Medoids, RunReport
from ..seeding.base import check_num_clusters, check_seeds
from ..io import load_cost_matrix, load_labels
from ..metrics import compute_clustering_metrics, run_sanity_checks

MIN_CLUSTERS = 2


class OptimizationLoop:
    """
    Alternating assign / update loop of Partitioning Around Medoids.

    The loop moves through ``SEEDING -> ITERATING`` and stops in either
    ``CONVERGED`` or ``MAX_ITER_REACHED``. Each iteration assigns every
    item to its nearest medoid and stops if the objective changed by
    less than ``tolfun``; otherwise it re-selects the medoid of every
    cluster and stops if the medoid set did not change.
    """

    def __init__(
        self,
        view: CostMatrixView,
        options: KMedoidOptions,
        rng: np.random.Generator,
        reporter: Reporter = None,
    ):
        self.view = view
        self.options = options
        self.rng = rng
        self.reporter = reporter or Reporter(options.display)
        self.state = LoopState.SEEDING

    def seed(self, k: int) -> Medoids:
        seeder = get_registry("seeders").create(self.options.init)
        return seeder.seed(self.view, k, self.rng)

    def run(self, k: Optional[int] = None, seeds: Optional[Medoids] = None) -> KMedoidResult:
        """
        Optimize from explicit ``seeds`` or from ``k`` seeded medoids.

        Arguments are expected to be validated already.
        """
        self.state = LoopState.SEEDING
        medoids = tuple(seeds) if seeds is not None else self.seed(k)
        opts = self.options
        self.reporter.start(self.view.n, len(medoids), medoids)

        self.state = LoopState.ITERATING
        iteration = 0
        prev_objective = math.inf
        n_changed = 0
        n_reseeded = 0
        history = []
        trace = []

        while True:
            assignment = assign(self.view, medoids)
            objective = assignment.objective
            record = IterationRecord(iteration, objective, prev_objective - objective, n_changed)
            history.append(objective)
            trace.append(record)
            self.reporter.iteration(record)

            if iteration > 0 and abs(prev_objective - objective) < opts.tolfun:
                self.state = LoopState.CONVERGED
                break
            if iteration >= opts.maxiter:
                self.state = LoopState.MAX_ITER_REACHED
                break

            update = update_medoids(
                self.view,
                medoids,
                assignment.labels,
                rng=self.rng,
                on_degenerate=opts.on_degenerate,
                iteration=iteration,
            )
            for p in update.degenerate:
                n_reseeded += 1
                self.reporter.degenerate(p, medoids[p], update.medoids[p], iteration)

            if not update.degenerate and set(update.medoids) == set(medoids):
                self.state = LoopState.CONVERGED
                break

            n_changed = sum(a != b for a, b in zip(medoids, update.medoids))
            medoids = update.medoids
            prev_objective = objective
            iteration += 1

        result = KMedoidResult(
            labels=assignment.labels,
            medoids=medoids,
            objective=objective,
            costs=assignment.costs,
            counts=assignment.counts(len(medoids)),
            state=self.state,
            n_iter=iteration,
            history=tuple(history),
            n_reseeded=n_reseeded,
            trace=tuple(trace),
        )
        self.reporter.finish(result)
        return result


def _resolve_k_or_seeds(k_or_seeds, n: int):
    if isinstance(k_or_seeds, numbers.Integral) and not isinstance(k_or_seeds, bool):
        return check_num_clusters(k_or_seeds, n, min_k=MIN_CLUSTERS), None
    if isinstance(k_or_seeds, (str, bytes, bool, dict)) or not hasattr(k_or_seeds, "__len__"):
        raise InvalidConfig(
            f"The second argument should be K or a sequence of initial medoids, got {k_or_seeds!r}"
        )
    seeds = check_seeds(k_or_seeds, n, min_k=MIN_CLUSTERS)
    return len(seeds), seeds


def run_kmedoid(
    cost_matrix,
    k_or_seeds: Union[int, Sequence[int]],
    options: Union[None, KMedoidOptions, Dict[str, Any]] = None,
    rng: RngLike = None,
    **overrides
) -> KMedoidResult:
    """
    K-medoid clustering on a pre-computed cost matrix.

    Args:
        cost_matrix: n x n matrix (array-like or CostMatrixView) where
            ``C[i, j]`` is the cost of assigning item ``j`` to a cluster
            centered at item ``i``.
        k_or_seeds: Number of medoids K (2 <= K < n), or a sequence of
            K distinct initial medoid indices.
        options: KMedoidOptions or a mapping of option names to values.
        rng: Generator or integer seed used for seeding. Defaults to a
            generator seeded with ``options.seed`` if set, else the
            fallback generator.
        **overrides: Individual options, e.g. ``maxiter=50``.

    Returns:
        KMedoidResult with labels, medoids, objective, per-item costs
        and per-cluster counts.

    Raises:
        InvalidConfig: If the matrix, K, seeds or options are invalid.
    """
    view = cost_matrix if isinstance(cost_matrix, CostMatrixView) else CostMatrixView(cost_matrix)
    opts = parse_options(options, **overrides)
    k, seeds = _resolve_k_or_seeds(k_or_seeds, view.n)

    if rng is not None:
        gen = resolve_rng(rng)
    elif opts.seed is not None:
        gen = np.random.default_rng(opts.seed)
    else:
        gen = get_rng()

    loop = OptimizationLoop(view, opts, gen)
    return loop.run(k=k, seeds=seeds)


def run_from_config(
    config: Dict[str, Any],
    output_dir: str = None,
    verbose: bool = True
) -> RunReport:
    """
    Run k-medoid clustering from a configuration dict.

    Args:
        config: Run configuration (see ``config.schema.validate_config``).
        output_dir: Directory to save results.
        verbose: Print progress.

    Returns:
        RunReport with the result, sanity checks and metrics.
    """
    errors = validate_config(config)
    if errors:
        raise InvalidConfig("; ".join(errors))

    run = to_run_config(config)
    start_time = time.time()

    if verbose:
        print(f"Running k-medoids: {run.name}")

    C = load_cost_matrix(run.matrix)
    view = CostMatrixView(C)

    if verbose:
        print(f"  Loaded {view.n} x {view.n} cost matrix from {run.matrix}")

    options = dict(run.options)
    if not verbose:
        options["display"] = "off"
    opts = parse_options(options)

    result = run_kmedoid(view, run.seeds if run.seeds is not None else run.k, opts)

    sanity = run_sanity_checks(view, result)

    clustering = {}
    if run.labels:
        clustering = compute_clustering_metrics(load_labels(run.labels), result.labels)

    elapsed = time.time() - start_time

    report = RunReport(
        result=result,
        sanity_checks=sanity,
        clustering=clustering,
        metadata={
            "config": config,
            "options": opts.to_dict(),
            "n_items": view.n,
            "elapsed_seconds": elapsed,
            "timestamp": datetime.now().isoformat(),
        }
    )

    if verbose:
        print(f"\nResults:")
        print(f"  Medoids: {list(result.medoids)}")
        print(f"  Cluster sizes: {result.counts.tolist()}")
        print(f"  Objective: {result.objective:.6g}")
        print(f"  Converged: {result.converged} ({result.n_iter} iterations)")
        if 'ari' in clustering:
            print(f"  ARI vs reference labels: {clustering['ari']:.4f}")
        print(f"  Time: {elapsed:.2f}s")
        print(f"  Sanity checks passed: {sanity.get('all_passed', False)}")

    if output_dir:
        os.makedirs(output_dir, exist_ok=True)
        with open(os.path.join(output_dir, "results.json"), "w") as f:
            json.dump(report.to_dict(), f, indent=2, default=str)

    return report
