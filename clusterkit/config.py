"""
Configuration for clustering runs.
"""

from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Optional

import yaml

from .clustering.algorithm import MAX_ITERATIONS

__all__ = [
    "KMeansConfig",
    "DEFAULT_KMEANS_CONFIG",
    "MAX_ITERATIONS",
    "load_config",
]


DEFAULT_KMEANS_CONFIG = {
    'n_clusters': 3,
    'max_iter': MAX_ITERATIONS,
    'tol': 0.0,  # 0.0 = exact centroid equality
    'seed': None,
    'columns': None,
    'verbose': True,
}


@dataclass
class KMeansConfig:
    """Configuration for a K-means run."""

    # Algorithm
    n_clusters: int = 3
    max_iter: int = MAX_ITERATIONS
    tol: float = 0.0
    seed: Optional[int] = None  # None = fresh random draw per run

    # Dataset
    columns: Optional[list[str]] = field(default=None)  # Feature columns to select from CSV

    # Output
    verbose: bool = True

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "KMeansConfig":
        """Create from dict, filtering out unknown keys."""
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        return cls(**filtered)


def load_config(config_path: Path) -> KMeansConfig:
    """
    Load run config from YAML, merging with defaults.

    The file holds a `kmeans:` section, e.g.

        kmeans:
          n_clusters: 4
          seed: 7
          columns: [sepal_length, sepal_width]

    Args:
        config_path: Path to YAML config file

    Returns:
        KMeansConfig with file values over defaults
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"No config file at {config_path}")

    with open(config_path) as f:
        data = yaml.safe_load(f) or {}

    merged = DEFAULT_KMEANS_CONFIG.copy()
    merged.update(data.get('kmeans') or {})

    return KMeansConfig.from_dict(merged)
