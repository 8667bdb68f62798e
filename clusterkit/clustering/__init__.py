"""
K-means clustering engine.

Pure computation: (points, k) → assignments, centroids, inertia history.
"""

from .models import (
    ClusteringResult,
    IterationState,
    InvalidInput,
)
from .algorithm import (
    MAX_ITERATIONS,
    validate_points,
    squared_distances,
    initialize_centroids,
    assign_clusters,
    update_centroids,
    compute_inertia,
    has_converged,
    cluster,
)

__all__ = [
    # Models
    "ClusteringResult",
    "IterationState",
    "InvalidInput",
    # Algorithm
    "MAX_ITERATIONS",
    "validate_points",
    "squared_distances",
    "initialize_centroids",
    "assign_clusters",
    "update_centroids",
    "compute_inertia",
    "has_converged",
    "cluster",
]
