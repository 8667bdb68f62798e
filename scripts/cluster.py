#!/usr/bin/env python3
"""
K-means CLI - cluster CSV columns and inspect inertia.

Usage:
    python scripts/cluster.py columns data.csv
    python scripts/cluster.py run data.csv --columns x y -k 3 --plot out.png
    python scripts/cluster.py demo -n 100 -k 4 --seed 1
    python scripts/cluster.py elbow data.csv --columns x y --k-max 8
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from clusterkit.analysis.elbow import elbow_curve, suggest_k
from clusterkit.clustering import InvalidInput
from clusterkit.config import KMeansConfig, load_config
from clusterkit.core.dataset import (
    DatasetError,
    generate_uniform_points,
    list_columns,
    load_csv,
    load_points,
)
from clusterkit.core.logger import Logger
from clusterkit.runner import ClusterRunner, format_inertia_table


def build_config(args) -> KMeansConfig:
    """Config file (if any) overridden by explicit CLI flags."""
    config = load_config(Path(args.config)) if getattr(args, "config", None) else KMeansConfig()

    overrides = {
        "n_clusters": args.k,
        "seed": args.seed,
        "max_iter": getattr(args, "max_iter", None),
        "tol": getattr(args, "tol", None),
        "columns": getattr(args, "columns", None),
    }
    data = config.to_dict()
    data.update({k: v for k, v in overrides.items() if v is not None})
    data["verbose"] = getattr(args, "verbose", True)
    return KMeansConfig.from_dict(data)


def _report(result, points, args, labels=None) -> None:

    print()
    print(format_inertia_table(list(result.inertia)))
    print()
    sizes = result.cluster_sizes()
    for i, centroid in enumerate(result.centroids):
        coords = ", ".join(f"{v:.4f}" for v in centroid)
        print(f"  cluster {i}: size={sizes[i]}, centroid=({coords})")

    if args.plot:
        if points.shape[1] < 2:
            print("Skipping plot: need at least two columns", file=sys.stderr)
        else:
            from clusterkit.plotting import save_report
            path = save_report(points, result, Path(args.plot), labels=labels)
            print(f"\nPlot written to {path}")


def cmd_columns(args):
    """List CSV columns."""
    frame = load_csv(Path(args.csv))
    for name in list_columns(frame):
        print(name)
    return 0


def cmd_run(args):
    """Cluster selected CSV columns."""
    config = build_config(args)

    logger = Logger(Path(args.log_dir)) if args.log_dir else None
    try:
        runner = ClusterRunner(config, logger)
        result = runner.run_csv(Path(args.csv))
        _report(result, runner.points, args, labels=config.columns[:2])
    finally:
        if logger:
            logger.close()
    return 0


def cmd_demo(args):
    """Cluster uniform random points."""
    config = build_config(args)
    points = generate_uniform_points(args.n, seed=args.seed)
    result = ClusterRunner(config).run(points)
    _report(result, points, args, labels=["x", "y"])
    return 0


def cmd_elbow(args):
    """Final inertia for k = 1..k_max."""
    points = load_points(Path(args.csv), args.columns)
    curve = elbow_curve(points, args.k_max, seed=args.seed)

    print(format_inertia_table([inertia for _, inertia in curve], header=("Number of Clusters", "Inertia")))
    best = suggest_k(curve)
    if best is not None:
        print(f"\nSuggested k (elbow): {best}")
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="K-means clustering with inertia tracking"
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # columns
    p_columns = subparsers.add_parser("columns", help="List CSV columns")
    p_columns.add_argument("csv", help="CSV file with header row")

    # run
    p_run = subparsers.add_parser("run", help="Cluster CSV columns")
    p_run.add_argument("csv", help="CSV file with header row")
    p_run.add_argument("--columns", nargs="+", help="Feature columns")
    p_run.add_argument("-k", type=int, help="Number of clusters")
    p_run.add_argument("--seed", type=int, help="Random seed for initial centroids")
    p_run.add_argument("--max-iter", type=int, help="Iteration cap")
    p_run.add_argument("--tol", type=float, help="Convergence tolerance (0 = exact)")
    p_run.add_argument("--config", help="YAML config file")
    p_run.add_argument("--log-dir", help="Write clustering.jsonl here")
    p_run.add_argument("--plot", help="Write scatter + inertia image here")
    p_run.add_argument("--verbose", action="store_true", default=True)
    p_run.add_argument("--quiet", dest="verbose", action="store_false")

    # demo
    p_demo = subparsers.add_parser("demo", help="Cluster uniform random points")
    p_demo.add_argument("-n", type=int, default=100, help="Number of points")
    p_demo.add_argument("-k", type=int, help="Number of clusters")
    p_demo.add_argument("--seed", type=int, help="Random seed")
    p_demo.add_argument("--plot", help="Write scatter + inertia image here")
    p_demo.add_argument("--quiet", dest="verbose", action="store_false")

    # elbow
    p_elbow = subparsers.add_parser("elbow", help="Inertia for k = 1..k_max")
    p_elbow.add_argument("csv", help="CSV file with header row")
    p_elbow.add_argument("--columns", nargs="+", required=True, help="Feature columns")
    p_elbow.add_argument("--k-max", type=int, default=10, help="Largest k")
    p_elbow.add_argument("--seed", type=int, help="Random seed")

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    # Dispatch
    commands = {
        "columns": cmd_columns,
        "run": cmd_run,
        "demo": cmd_demo,
        "elbow": cmd_elbow,
    }

    try:
        return commands[args.command](args)
    except (InvalidInput, DatasetError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
