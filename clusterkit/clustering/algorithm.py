"""
K-means (Lloyd's algorithm) over arbitrary-dimensional numeric points.

Core loop: initialize → assign → update → inertia → convergence check.
Distances are squared Euclidean throughout.
"""

from __future__ import annotations

import numbers
from typing import Callable, Optional, Sequence

import numpy as np

from .models import ClusteringResult, InvalidInput, IterationState


# Iteration cap; reaching it ends the run without error
MAX_ITERATIONS = 100


def validate_points(points) -> np.ndarray:
    """
    Copy points into an n × d float64 matrix, rejecting malformed input.

    Raises:
        InvalidInput: If points are empty, ragged, non-numeric,
            zero-dimensional or contain NaN/inf
    """
    try:
        data = np.array(points, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise InvalidInput(f"points must be a sequence of numeric vectors: {e}") from e

    if data.ndim >= 1 and len(data) == 0:
        raise InvalidInput("points must not be empty")
    if data.ndim != 2:
        raise InvalidInput(f"points must be 2-dimensional (n × d), got shape {data.shape}")
    if data.shape[1] == 0:
        raise InvalidInput("points must have at least one feature")
    if not np.isfinite(data).all():
        raise InvalidInput("points must not contain NaN or infinite values")

    return data


def _validate_k(k, n_points: int) -> int:
    if isinstance(k, bool) or not isinstance(k, (int, np.integer)):
        raise InvalidInput(f"k must be an integer, got {k!r}")
    if k < 1:
        raise InvalidInput(f"k must be at least 1, got {k}")
    if k > n_points:
        raise InvalidInput(f"k ({k}) cannot exceed the number of points ({n_points})")
    return int(k)


def squared_distances(points: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    """Squared Euclidean distance from every point to every centroid (n × k)."""
    diff = points[:, np.newaxis, :] - centroids[np.newaxis, :, :]
    return np.sum(diff * diff, axis=2)


def initialize_centroids(points: np.ndarray, k: int, rng: np.random.Generator) -> np.ndarray:
    """Pick k points uniformly at random, with replacement, as starting centroids."""
    indices = rng.integers(0, len(points), size=k)
    return points[indices].copy()


def assign_clusters(points: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    """
    Assign each point to its nearest centroid.

    Ties go to the lowest centroid index (argmin returns the first minimum).
    """
    return np.argmin(squared_distances(points, centroids), axis=1)


def update_centroids(
    points: np.ndarray,
    assignments: np.ndarray,
    centroids: np.ndarray,
) -> tuple[np.ndarray, tuple[int, ...]]:
    """
    Recompute each centroid as the mean of its members.

    A cluster with no members keeps its previous centroid. Points are
    divided by their cluster size before summing so the sum stays within
    float range.

    Returns:
        (new_centroids, empty_clusters)
    """
    k = len(centroids)
    counts = np.bincount(assignments, minlength=k)

    means = np.zeros_like(centroids, dtype=np.float64)
    np.add.at(means, assignments, points / counts[assignments, np.newaxis])

    new_centroids = np.array(centroids, dtype=np.float64, copy=True)
    occupied = counts > 0
    new_centroids[occupied] = means[occupied]

    empty = tuple(int(i) for i in np.flatnonzero(~occupied))
    return new_centroids, empty


def compute_inertia(points: np.ndarray, assignments: np.ndarray, centroids: np.ndarray) -> float:
    """Sum of squared distances from each point to its assigned centroid."""
    diff = points - centroids[assignments]
    return float(np.sum(diff * diff))


def has_converged(old: np.ndarray, new: np.ndarray, tol: float = 0.0) -> bool:
    """
    True when no centroid coordinate moved by more than tol.

    tol=0.0 means exact equality.
    """
    return bool(np.all(np.abs(new - old) <= tol))


def cluster(
    points: Sequence[Sequence[float]],
    k: int,
    *,
    max_iter: int = MAX_ITERATIONS,
    tol: float = 0.0,
    seed: Optional[int] = None,
    rng: Optional[np.random.Generator] = None,
    initial_centroids: Optional[Sequence[Sequence[float]]] = None,
    callback: Optional[Callable[[IterationState], None]] = None,
) -> ClusteringResult:
    """
    Partition points into k clusters.

    Args:
        points: n points of equal dimensionality d
        k: Number of clusters, 1 <= k <= n
        max_iter: Iteration cap (the run stops silently when reached)
        tol: Max per-coordinate centroid movement still counted as converged
        seed: Seed for the initial centroid draw (ignored if rng is given)
        rng: Generator for the initial centroid draw
        initial_centroids: k × d starting centroids; skips the random draw
        callback: Called with an IterationState after every iteration

    Returns:
        ClusteringResult with k centroids, n assignments and the
        per-iteration inertia history

    Raises:
        InvalidInput: On malformed points or parameters
    """
    data = validate_points(points)
    n_points, n_features = data.shape
    k = _validate_k(k, n_points)

    if isinstance(max_iter, bool) or not isinstance(max_iter, (int, np.integer)) or max_iter < 1:
        raise InvalidInput(f"max_iter must be a positive integer, got {max_iter!r}")
    if isinstance(tol, bool) or not isinstance(tol, numbers.Real) or not tol >= 0:
        raise InvalidInput(f"tol must be non-negative, got {tol!r}")

    if initial_centroids is not None:
        centroids = validate_points(initial_centroids)
        if centroids.shape != (k, n_features):
            raise InvalidInput(
                f"initial_centroids must have shape ({k}, {n_features}), got {centroids.shape}"
            )
    else:
        if rng is None:
            rng = np.random.default_rng(seed)
        centroids = initialize_centroids(data, k, rng)

    inertia_history: list[float] = []
    assignments = np.zeros(n_points, dtype=np.intp)
    converged = False

    for iteration in range(1, max_iter + 1):
        assignments = assign_clusters(data, centroids)
        new_centroids, empty = update_centroids(data, assignments, centroids)

        inertia = compute_inertia(data, assignments, new_centroids)
        inertia_history.append(inertia)

        converged = has_converged(centroids, new_centroids, tol)
        centroids = new_centroids

        if callback is not None:
            callback(IterationState(
                iteration=iteration,
                inertia=inertia,
                centroids=centroids.copy(),
                empty_clusters=empty,
                converged=converged,
            ))

        if converged:
            break

    return ClusteringResult(
        assignments=assignments,
        centroids=centroids,
        inertia=tuple(inertia_history),
        converged=converged,
    )
