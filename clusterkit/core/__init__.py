"""Dataset loading and structured logging for clustering runs."""

from .dataset import (
    DatasetError,
    load_csv,
    list_columns,
    select_columns,
    load_points,
    generate_uniform_points,
)
from .logger import Logger, read_events

__all__ = [
    "DatasetError",
    "load_csv",
    "list_columns",
    "select_columns",
    "load_points",
    "generate_uniform_points",
    "Logger",
    "read_events",
]
