"""
Elbow analysis for choosing k.

Runs K-means for k = 1..k_max and records the final inertia of each run.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from ..clustering import InvalidInput, cluster, validate_points
from ..clustering.algorithm import MAX_ITERATIONS
from ..core.logger import Logger


def elbow_curve(
    points,
    k_max: int,
    *,
    seed: Optional[int] = None,
    max_iter: int = MAX_ITERATIONS,
    tol: float = 0.0,
    logger: Optional[Logger] = None,
) -> list[tuple[int, float]]:
    """
    Final inertia for each k in 1..min(k_max, n).

    A single generator drives every run, so one seed reproduces the
    whole curve.

    Args:
        points: n points of equal dimensionality
        k_max: Largest k to try
        seed: Seed for the shared generator
        max_iter: Iteration cap per run
        tol: Convergence tolerance per run
        logger: Optional JSONL logger (one elbow event per k)

    Returns:
        List of (k, final_inertia)

    Raises:
        InvalidInput: On malformed points or k_max < 1
    """
    data = validate_points(points)
    if isinstance(k_max, bool) or not isinstance(k_max, (int, np.integer)) or k_max < 1:
        raise InvalidInput(f"k_max must be a positive integer, got {k_max!r}")

    rng = np.random.default_rng(seed)
    curve = []
    for k in range(1, min(int(k_max), len(data)) + 1):
        result = cluster(data, k, max_iter=max_iter, tol=tol, rng=rng)
        curve.append((k, result.final_inertia))
        if logger:
            logger.log_elbow(k, result.final_inertia)

    return curve


def suggest_k(curve: list[tuple[int, float]]) -> Optional[int]:
    """
    Pick the elbow: the k with the largest second difference in inertia.

    Returns None when the curve has fewer than 3 points.
    """
    if len(curve) < 3:
        return None

    inertia = np.array([value for _, value in curve])
    second_diff = inertia[:-2] - 2 * inertia[1:-1] + inertia[2:]
    return curve[int(np.argmax(second_diff)) + 1][0]
