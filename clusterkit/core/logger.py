"""
Structured logging for clustering runs.

Single JSONL file with typed events for streaming and analysis.

Event types:
- run_start: Config, dataset shape
- iteration: Inertia and empty clusters per iteration
- run_end: Summary (iterations, convergence, cluster sizes)
- elbow: Final inertia for one k of an elbow sweep
- error: Rejected input or unreadable data
"""

import json
from pathlib import Path
from datetime import datetime
from typing import Any, Optional


class Logger:
    def __init__(self, output_dir: Path, filename: str = "clustering.jsonl"):
        """
        Initialize logger.

        Args:
            output_dir: Directory for log files (created if missing)
            filename: Log file name inside output_dir
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.log_file = self.output_dir / filename

        # Open file in append mode
        self.file_handle = open(self.log_file, 'a')

    def _write_event(self, event_type: str, data: dict[str, Any]) -> None:
        """Write typed event to JSONL log."""
        event = {
            "type": event_type,
            "timestamp": datetime.now().isoformat(),
            **data
        }
        self.file_handle.write(json.dumps(event) + '\n')
        self.file_handle.flush()  # Ensure streaming writes

    def log_run_start(self, config: dict[str, Any], n_points: int, dimensions: int) -> None:
        """
        Log start of a clustering run.

        Args:
            config: Run configuration parameters
            n_points: Number of points being clustered
            dimensions: Features per point
        """
        self._write_event("run_start", {
            "config": config,
            "n_points": n_points,
            "dimensions": dimensions,
        })

    def log_iteration(
        self,
        iteration: int,
        inertia: float,
        empty_clusters: list[int],
        converged: bool,
    ) -> None:
        """
        Log one completed iteration.

        Args:
            iteration: 1-based iteration number
            inertia: Inertia after the update step
            empty_clusters: Clusters that received no points
            converged: Whether centroids stopped moving
        """
        self._write_event("iteration", {
            "iteration": iteration,
            "inertia": inertia,
            "empty_clusters": list(empty_clusters),
            "converged": converged,
        })

    def log_run_end(
        self,
        n_iter: int,
        converged: bool,
        final_inertia: float,
        cluster_sizes: list[int],
    ) -> None:
        """
        Log run completion.

        Args:
            n_iter: Iterations completed
            converged: False if the iteration cap was reached
            final_inertia: Inertia of the last iteration
            cluster_sizes: Points per cluster
        """
        self._write_event("run_end", {
            "n_iter": n_iter,
            "converged": converged,
            "final_inertia": final_inertia,
            "cluster_sizes": cluster_sizes,
        })

    def log_elbow(self, k: int, inertia: float) -> None:
        """Log one point of an elbow sweep."""
        self._write_event("elbow", {
            "k": k,
            "inertia": inertia,
        })

    def log_error(
        self,
        message: str,
        error_type: str = "error",
        iteration: Optional[int] = None,
    ) -> None:
        """
        Log error event.

        Args:
            message: Error description
            error_type: Error category (e.g. invalid_input, dataset)
            iteration: Iteration where the error occurred (if applicable)
        """
        data = {
            "message": message,
            "error_type": error_type,
        }
        if iteration is not None:
            data["iteration"] = iteration

        self._write_event("error", data)

    def close(self) -> None:
        """Close log file."""
        if hasattr(self, 'file_handle') and self.file_handle:
            self.file_handle.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()


def read_events(log_file: Path) -> list[dict]:
    """Read all events from a JSONL log."""
    events = []
    with open(log_file) as f:
        for line in f:
            line = line.strip()
            if line:
                events.append(json.loads(line))
    return events
