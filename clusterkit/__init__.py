"""
clusterkit - K-means clustering with inertia tracking.

Dimension-agnostic engine plus CSV loading, logging, plotting and elbow analysis.
"""

from .clustering import ClusteringResult, InvalidInput, cluster
from .config import KMeansConfig, load_config
from .runner import ClusterRunner, format_inertia_table

__all__ = [
    "ClusteringResult",
    "InvalidInput",
    "cluster",
    "KMeansConfig",
    "load_config",
    "ClusterRunner",
    "format_inertia_table",
]
