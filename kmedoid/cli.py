"""Command-line interface for kmedoid."""

import argparse
import sys

from .runner import run_from_config, run_grid
from .config.schema import load_config, validate_config
from .core.errors import KMedoidError


def _parse_seeds(text: str):
    try:
        return [int(s) for s in text.replace(" ", "").split(",") if s]
    except ValueError:
        raise argparse.ArgumentTypeError(f"Seeds should be comma-separated integers, got '{text}'") from None


def _build_run_config(args) -> dict:
    config = load_config(args.config) if args.config else {}
    config.setdefault("name", "cli")
    config["matrix"] = args.matrix
    options = dict(config.get("options") or {})

    if args.k is not None:
        config["k"] = args.k
        config.pop("seeds", None)
    if args.seeds is not None:
        config["seeds"] = args.seeds
        config.pop("k", None)
    if args.labels:
        config["labels"] = args.labels

    for name in ("maxiter", "tolfun", "init", "display", "seed"):
        value = getattr(args, name)
        if value is not None:
            options[name] = value
    options.setdefault("display", "final")
    config["options"] = options
    return config


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="K-medoid clustering on a pre-computed cost matrix"
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    run_parser = subparsers.add_parser("run", help="Cluster one cost matrix")
    run_parser.add_argument("matrix", help="Cost matrix file (.npy, .csv, .tsv or .txt)")
    group = run_parser.add_mutually_exclusive_group()
    group.add_argument("-k", type=int, help="Number of medoids")
    group.add_argument("--seeds", type=_parse_seeds, help="Initial medoids, e.g. 0,5,9")
    run_parser.add_argument("--config", help="YAML file with run settings")
    run_parser.add_argument("--init", choices=["kmpp", "rand"], help="Seeding strategy")
    run_parser.add_argument("--maxiter", type=int, help="Maximum number of iterations")
    run_parser.add_argument("--tolfun", type=float, help="Objective change tolerance")
    run_parser.add_argument("--display", choices=["off", "final", "iter"], help="Progress output")
    run_parser.add_argument("--seed", type=int, help="Random seed")
    run_parser.add_argument("--labels", help="Reference labels to compare against")
    run_parser.add_argument("-o", "--output", default=None, help="Output directory")

    grid_parser = subparsers.add_parser("grid", help="Run a grid of configurations")
    grid_parser.add_argument("config", help="Path to grid config YAML file")
    grid_parser.add_argument("-o", "--output", default="results", help="Output directory")
    grid_parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    list_parser = subparsers.add_parser("list", help="List available components")
    list_parser.add_argument("component", choices=["seeders"])

    args = parser.parse_args(argv)

    if args.command == "run":
        config = _build_run_config(args)
        errors = validate_config(config)
        if errors:
            print("Configuration errors:")
            for e in errors:
                print(f"  - {e}")
            sys.exit(1)

        try:
            run_from_config(config, args.output, verbose=True)
        except (KMedoidError, OSError, ValueError) as e:
            print(f"Error: {e}")
            sys.exit(1)
        if args.output:
            print(f"\nResults saved to: {args.output}")

    elif args.command == "grid":
        config = load_config(args.config)
        results = run_grid(config, args.output, verbose=args.verbose)
        print(f"\nGrid results saved to: {args.output}/grid_results.csv")
        print(results.to_string(index=False))

    elif args.command == "list":
        from .core.registry import get_registry
        registry = get_registry(args.component)
        print(f"Available {args.component}:")
        for name in registry.list():
            print(f"  - {name}")

    else:
        parser.print_help()


if __name__ == "__main__":
    main()
