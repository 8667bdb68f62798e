"""
Dataset loading for clustering.

Reads CSV files with a header row, selects feature columns and coerces
them to floats. Also generates the uniform random demo dataset.
"""

from pathlib import Path
from typing import Optional, Sequence

import numpy as np
import pandas as pd


# Demo drawing area (800×600 canvas minus margins)
DEMO_WIDTH = 760
DEMO_HEIGHT = 560


class DatasetError(ValueError):
    """Raised when a CSV cannot be read or a column selection is unusable."""
    pass


def load_csv(path: Path) -> pd.DataFrame:
    """
    Load a CSV file with a header row.

    Raises:
        DatasetError: If the file is missing, empty or not parseable
    """
    path = Path(path)
    if not path.exists():
        raise DatasetError(f"CSV file not found: {path}")

    try:
        frame = pd.read_csv(path)
    except (pd.errors.EmptyDataError, pd.errors.ParserError, UnicodeDecodeError) as e:
        raise DatasetError(f"Could not parse {path}: {e}") from e

    if frame.columns.empty:
        raise DatasetError(f"No columns in {path}")
    return frame


def list_columns(frame: pd.DataFrame) -> list[str]:
    """Column names in file order."""
    return [str(c) for c in frame.columns]


def select_columns(frame: pd.DataFrame, columns: Sequence[str]) -> np.ndarray:
    """
    Extract the selected columns as an n × d float matrix.

    Rows with a missing value in any selected column are dropped.

    Raises:
        DatasetError: If no columns are given, a column is unknown,
            a value is not numeric, or no complete rows remain
    """
    columns = list(columns)
    if not columns:
        raise DatasetError("Select at least one column")

    missing = [c for c in columns if c not in frame.columns]
    if missing:
        raise DatasetError(f"Unknown columns: {', '.join(missing)}")

    selected = frame[columns].dropna()
    try:
        points = selected.astype(np.float64).to_numpy()
    except (TypeError, ValueError) as e:
        raise DatasetError(f"Non-numeric values in columns {columns}: {e}") from e

    if len(points) == 0:
        raise DatasetError(f"No complete rows for columns {columns}")
    return points


def load_points(path: Path, columns: Sequence[str]) -> np.ndarray:
    """Load a CSV and return the selected columns as points."""
    return select_columns(load_csv(path), columns)


def generate_uniform_points(
    n: int = 100,
    width: float = DEMO_WIDTH,
    height: float = DEMO_HEIGHT,
    seed: Optional[int] = None,
) -> np.ndarray:
    """Generate n points uniformly distributed over a width × height area."""
    if n < 1:
        raise DatasetError(f"n must be at least 1, got {n}")
    rng = np.random.default_rng(seed)
    return rng.uniform(low=(0.0, 0.0), high=(width, height), size=(n, 2))
