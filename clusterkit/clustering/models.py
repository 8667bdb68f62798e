"""
Data models for K-means clustering.

Defines the result of a clustering run and the per-iteration snapshot
handed to progress callbacks.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


class InvalidInput(ValueError):
    """Raised when points, k or run options are malformed. Nothing is computed."""
    pass


def _frozen(array: np.ndarray) -> np.ndarray:
    """Return a read-only copy of an array."""
    array = np.array(array, copy=True)
    array.setflags(write=False)
    return array


@dataclass(frozen=True)
class IterationState:
    """Snapshot of one completed iteration."""

    iteration: int                  # 1-based
    inertia: float                  # Cost against the updated centroids
    centroids: np.ndarray           # k × d, after the update step
    empty_clusters: tuple[int, ...]  # Clusters that received no points (kept prior centroid)
    converged: bool

    def to_dict(self) -> dict:
        return {
            "iteration": self.iteration,
            "inertia": self.inertia,
            "empty_clusters": list(self.empty_clusters),
            "converged": self.converged,
        }


@dataclass(frozen=True)
class ClusteringResult:
    """
    Terminal output of a K-means run.

    Arrays are read-only copies; the result never aliases caller data.
    """

    assignments: np.ndarray      # n, cluster index per point
    centroids: np.ndarray        # k × d
    inertia: tuple[float, ...]   # One entry per completed iteration
    converged: bool              # False when the iteration cap was hit

    def __post_init__(self):
        object.__setattr__(self, "assignments", _frozen(self.assignments))
        object.__setattr__(self, "centroids", _frozen(self.centroids))
        object.__setattr__(self, "inertia", tuple(float(v) for v in self.inertia))

    @property
    def n_clusters(self) -> int:
        return len(self.centroids)

    @property
    def n_iter(self) -> int:
        return len(self.inertia)

    @property
    def final_inertia(self) -> float:
        """Inertia of the last iteration (0.0 if none ran)."""
        return self.inertia[-1] if self.inertia else 0.0

    def cluster_sizes(self) -> list[int]:
        """Number of points assigned to each cluster, in cluster order."""
        return np.bincount(self.assignments, minlength=self.n_clusters).tolist()

    def members(self, cluster: int) -> list[int]:
        """Indices of the points assigned to a cluster."""
        if not 0 <= cluster < self.n_clusters:
            raise IndexError(f"cluster {cluster} out of range [0, {self.n_clusters})")
        return np.flatnonzero(self.assignments == cluster).tolist()

    def to_dict(self) -> dict:
        """Convert to dict for JSON serialization."""
        return {
            "assignments": self.assignments.tolist(),
            "centroids": self.centroids.tolist(),
            "inertia": list(self.inertia),
            "n_iter": self.n_iter,
            "converged": self.converged,
            "cluster_sizes": self.cluster_sizes(),
        }
