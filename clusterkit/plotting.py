"""
Rendering of clustering results.

Scatter of two selected dimensions coloured by cluster (centroids drawn
as squares) and the inertia-per-iteration curve.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import numpy as np

from .clustering import ClusteringResult


def plot_clusters(
    points,
    result: ClusteringResult,
    columns: tuple[int, int] = (0, 1),
    ax=None,
    labels: Optional[Sequence[str]] = None,
):
    """
    Scatter points coloured by cluster, centroids as squares.

    Args:
        points: The clustered points (n × d, d >= 2)
        result: ClusteringResult for those points
        columns: Indices of the two dimensions to draw
        ax: Axes to draw on (new figure if None)
        labels: Axis labels for the two dimensions

    Returns:
        The matplotlib Axes
    """
    data = np.asarray(points, dtype=np.float64)
    if data.ndim != 2 or data.shape[1] < 2:
        raise ValueError("Scatter plot needs at least two dimensions")
    if len(data) != len(result.assignments):
        raise ValueError(f"{len(data)} points but {len(result.assignments)} assignments")

    x, y = columns
    if ax is None:
        _, ax = plt.subplots(figsize=(8, 6))

    cmap = plt.get_cmap('tab10')
    colors = [cmap(c % 10) for c in result.assignments]
    ax.scatter(data[:, x], data[:, y], c=colors, s=25)

    centroid_colors = [cmap(i % 10) for i in range(result.n_clusters)]
    ax.scatter(
        result.centroids[:, x], result.centroids[:, y],
        c=centroid_colors, marker='s', s=100, edgecolors='black', linewidths=1,
    )

    if labels is not None:
        ax.set_xlabel(labels[0], fontsize=12)
        ax.set_ylabel(labels[1], fontsize=12)
    ax.set_title(f'K-means Clustering (k={result.n_clusters})', fontsize=14, fontweight='bold')
    ax.grid(True, alpha=0.3)
    return ax


def plot_inertia(inertia: Sequence[float], ax=None):
    """Line chart of inertia per iteration (x starts at 1)."""
    if ax is None:
        _, ax = plt.subplots(figsize=(6, 4))

    iterations = list(range(1, len(inertia) + 1))
    ax.plot(iterations, list(inertia), 'o-', linewidth=1.5, markersize=4, color='steelblue')
    ax.set_xlabel('Iteration', fontsize=12)
    ax.set_ylabel('Inertia', fontsize=12)
    ax.set_title('Inertia per Iteration', fontsize=14, fontweight='bold')
    if iterations:
        ax.set_xticks(iterations if len(iterations) <= 20 else iterations[::len(iterations) // 10])
        ax.set_ylim(bottom=0)
    ax.grid(True, alpha=0.3)
    return ax


def save_report(
    points,
    result: ClusteringResult,
    output_path: Path,
    columns: tuple[int, int] = (0, 1),
    labels: Optional[Sequence[str]] = None,
) -> Path:
    """Write scatter + inertia panels to one image file."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    fig, axes = plt.subplots(1, 2, figsize=(14, 6))
    plot_clusters(points, result, columns=columns, ax=axes[0], labels=labels)
    plot_inertia(result.inertia, ax=axes[1])

    plt.tight_layout()
    plt.savefig(output_path, dpi=150, bbox_inches='tight')
    plt.close(fig)
    return output_path
