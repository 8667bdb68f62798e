"""
Clustering runner.

Core loop: load → cluster → log → report.
Wires the dataset layer, the engine and the JSONL logger together.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import numpy as np

from .clustering import ClusteringResult, InvalidInput, IterationState, cluster
from .clustering.algorithm import validate_points
from .config import KMeansConfig
from .core.dataset import DatasetError, load_points
from .core.logger import Logger


def _to_native(obj):
    """Convert numpy types to native Python types for JSON serialization."""
    if isinstance(obj, dict):
        return {k: _to_native(v) for k, v in obj.items()}
    elif isinstance(obj, (list, tuple)):
        return [_to_native(v) for v in obj]
    elif isinstance(obj, np.floating):
        return float(obj)
    elif isinstance(obj, np.integer):
        return int(obj)
    elif isinstance(obj, np.ndarray):
        return obj.tolist()
    return obj


def format_inertia_table(inertia: list[float], header: tuple[str, str] = ("Iteration", "Inertia")) -> str:
    """
    Render inertia values as a two-column text table.

    Rows are numbered from 1.
    """
    rows = [(str(i), f"{value:.4f}") for i, value in enumerate(inertia, start=1)]
    left = max([len(header[0])] + [len(r[0]) for r in rows])
    right = max([len(header[1])] + [len(r[1]) for r in rows])

    lines = [
        f"{header[0]:<{left}} | {header[1]:>{right}}",
        f"{'-' * left}-+-{'-' * right}",
    ]
    for a, b in rows:
        lines.append(f"{a:<{left}} | {b:>{right}}")
    return "\n".join(lines)


class ClusterRunner:
    """Run K-means with logging and console progress."""

    def __init__(self, config: Optional[KMeansConfig] = None, logger: Optional[Logger] = None):
        """
        Initialize runner.

        Args:
            config: Run configuration (defaults if None)
            logger: Optional JSONL logger for run events
        """
        self.config = config or KMeansConfig()
        self.logger = logger

        # Validated points of the latest run (for plotting)
        self.points: Optional[np.ndarray] = None

    def run(self, points) -> ClusteringResult:
        """
        Cluster points using the configured parameters.

        Raises:
            InvalidInput: On malformed points or parameters (logged first)
        """
        try:
            data = validate_points(points)
        except InvalidInput as e:
            self._log_error(str(e), "invalid_input")
            raise

        self.points = data

        if self.logger:
            self.logger.log_run_start(_to_native(self.config.to_dict()), *data.shape)

        if self.config.verbose:
            print(f"Clustering {data.shape[0]} points ({data.shape[1]}D) into k={self.config.n_clusters}")

        try:
            result = cluster(
                data,
                self.config.n_clusters,
                max_iter=self.config.max_iter,
                tol=self.config.tol,
                seed=self.config.seed,
                callback=self._on_iteration,
            )
        except InvalidInput as e:
            self._log_error(str(e), "invalid_input")
            raise

        if self.logger:
            self.logger.log_run_end(
                n_iter=result.n_iter,
                converged=result.converged,
                final_inertia=result.final_inertia,
                cluster_sizes=result.cluster_sizes(),
            )

        if self.config.verbose:
            status = "converged" if result.converged else "hit iteration cap"
            print(f"Done: {status} after {result.n_iter} iterations, "
                  f"inertia={result.final_inertia:.4f}, sizes={result.cluster_sizes()}")

        return result

    def run_csv(self, csv_path: Path) -> ClusteringResult:
        """
        Load the configured columns from a CSV and cluster them.

        Raises:
            DatasetError: If the CSV or column selection is unusable (logged first)
            InvalidInput: On malformed parameters
        """
        try:
            points = load_points(csv_path, self.config.columns or [])
        except DatasetError as e:
            self._log_error(str(e), "dataset")
            raise
        return self.run(points)

    def _on_iteration(self, state: IterationState) -> None:
        if self.logger:
            self.logger.log_iteration(**state.to_dict())

        if self.config.verbose:
            line = f"  [iter {state.iteration}] inertia={state.inertia:.4f}"
            if state.empty_clusters:
                line += f" (empty clusters kept: {list(state.empty_clusters)})"
            print(line)

    def _log_error(self, message: str, error_type: str) -> None:
        if self.logger:
            self.logger.log_error(message, error_type=error_type)
