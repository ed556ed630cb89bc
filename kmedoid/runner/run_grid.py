"""Run a grid of k-medoid configurations."""

import os
import copy
import itertools
from typing import Dict, Any
import pandas as pd
from tqdm import tqdm

from .run_one import run_from_config
from ..core.errors import KMedoidError


def run_grid(
    grid_config: Dict[str, Any],
    output_dir: str = "results",
    verbose: bool = True
) -> pd.DataFrame:
    """
    Run k-medoids for every combination of grid parameters.

    Typical use is sweeping ``k`` to pick a cluster count, or sweeping
    ``options.init`` and ``options.seed`` to compare seeding strategies.

    Args:
        grid_config: Configuration with a ``base`` run config and a
            ``grid`` mapping of dotted keys to lists of values.
        output_dir: Base output directory.
        verbose: Print progress.

    Returns:
        DataFrame with one row per run.
    """
    base_config = grid_config.get("base", {})
    grid_params = grid_config.get("grid", {})

    param_names = list(grid_params.keys())
    param_values = [grid_params[k] if isinstance(grid_params[k], list) else [grid_params[k]]
                    for k in param_names]
    combos = list(itertools.product(*param_values))

    all_results = []

    for i, values in enumerate(tqdm(combos, desc="grid", disable=verbose)):
        config = copy.deepcopy(base_config)

        for name, value in zip(param_names, values):
            _set_nested(config, name, value)

        config["name"] = f"run_{i:04d}"

        if verbose:
            print(f"\n{'='*60}")
            print(f"Run {i+1}/{len(combos)}")
            params_str = ", ".join(f"{n}={v}" for n, v in zip(param_names, values))
            print(f"  {params_str}")

        run_output = os.path.join(output_dir, config["name"])

        try:
            report = run_from_config(config, run_output, verbose=verbose)
        except (KMedoidError, OSError) as e:
            if verbose:
                print(f"  ERROR: {e}")
            all_results.append({
                "name": config["name"],
                "error": str(e),
                **{f"param_{name}": value for name, value in zip(param_names, values)}
            })
            continue

        result = report.result
        row = {
            "name": config["name"],
            "k": result.k,
            "objective": result.objective,
            "converged": result.converged,
            "n_iter": result.n_iter,
            "n_reseeded": result.n_reseeded,
            "medoids": " ".join(str(m) for m in result.medoids),
            "sanity_passed": report.sanity_checks.get("all_passed", False),
            **report.clustering,
        }
        for name, value in zip(param_names, values):
            row[f"param_{name}"] = value
        all_results.append(row)

    results_df = pd.DataFrame(all_results)

    os.makedirs(output_dir, exist_ok=True)
    results_df.to_csv(os.path.join(output_dir, "grid_results.csv"), index=False)

    return results_df


def _set_nested(d: Dict, key: str, value: Any):
    """Set a nested key in a dict (e.g., 'options.init')."""
    keys = key.split(".")
    current = d
    for k in keys[:-1]:
        if k not in current:
            current[k] = {}
        current = current[k]
    current[keys[-1]] = value
