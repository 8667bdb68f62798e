"""
Test ClusterRunner orchestration

Note: runs the real engine; only stdout is captured.
"""

import tempfile
from pathlib import Path

import numpy as np
import pytest

from clusterkit.clustering import InvalidInput
from clusterkit.config import KMeansConfig
from clusterkit.core.dataset import DatasetError
from clusterkit.core.logger import Logger, read_events
from clusterkit.runner import ClusterRunner, format_inertia_table


POINTS = [[0, 0], [0, 1], [10, 0], [10, 1], [0, 0.5], [10, 0.5]]


def test_runner_logs_full_run():
    """Runner writes run_start, one event per iteration and run_end."""
    print("Testing ClusterRunner.run with logger...")

    with tempfile.TemporaryDirectory() as tmpdir:
        log_dir = Path(tmpdir) / "logs"
        config = KMeansConfig(n_clusters=2, seed=0, verbose=False)

        with Logger(log_dir) as logger:
            result = ClusterRunner(config, logger).run(POINTS)

        events = read_events(log_dir / "clustering.jsonl")

    types = [e["type"] for e in events]
    assert types[0] == "run_start"
    assert types[-1] == "run_end"
    assert types.count("iteration") == result.n_iter
    print(f"  ✓ {len(events)} events for {result.n_iter} iterations")

    start, end = events[0], events[-1]
    assert start["n_points"] == 6
    assert start["dimensions"] == 2
    assert start["config"]["n_clusters"] == 2
    assert end["converged"] == result.converged
    assert end["final_inertia"] == pytest.approx(result.final_inertia)
    assert sum(end["cluster_sizes"]) == 6


def test_runner_verbose_output(capsys):
    config = KMeansConfig(n_clusters=1, seed=0, verbose=True)

    result = ClusterRunner(config).run(POINTS)

    out = capsys.readouterr().out
    assert "Clustering 6 points (2D) into k=1" in out
    assert "[iter 1]" in out
    assert f"after {result.n_iter} iterations" in out


def test_runner_quiet(capsys):
    ClusterRunner(KMeansConfig(n_clusters=2, seed=1, verbose=False)).run(POINTS)

    assert capsys.readouterr().out == ""


def test_runner_reports_empty_clusters(capsys):
    """Duplicate points drawn as centroids leave one cluster empty on the first pass."""
    config = KMeansConfig(n_clusters=2, verbose=True)
    result = ClusterRunner(config).run([[1, 1], [1, 1], [1, 1]])

    out = capsys.readouterr().out
    assert "empty clusters kept: [1]" in out
    assert result.cluster_sizes() == [3, 0]


def test_runner_logs_invalid_input():
    with tempfile.TemporaryDirectory() as tmpdir:
        config = KMeansConfig(n_clusters=10, verbose=False)

        with Logger(Path(tmpdir)) as logger:
            with pytest.raises(InvalidInput):
                ClusterRunner(config, logger).run(POINTS)

        events = read_events(Path(tmpdir) / "clustering.jsonl")

    assert [e["type"] for e in events] == ["run_start", "error"]
    assert events[-1]["error_type"] == "invalid_input"
    assert "cannot exceed" in events[-1]["message"]


def test_runner_rejects_empty_points_before_start():
    with tempfile.TemporaryDirectory() as tmpdir:
        with Logger(Path(tmpdir)) as logger:
            with pytest.raises(InvalidInput):
                ClusterRunner(KMeansConfig(verbose=False), logger).run([])

        events = read_events(Path(tmpdir) / "clustering.jsonl")

    assert [e["type"] for e in events] == ["error"]


def test_run_csv():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "points.csv"
        path.write_text("x,y,label\n0,0,a\n0,1,a\n10,0,b\n10,1,b\n")
        config = KMeansConfig(n_clusters=2, seed=3, columns=["x", "y"], verbose=False)

        runner = ClusterRunner(config)
        result = runner.run_csv(path)

    assert result.centroids.shape == (2, 2)
    assert len(result.assignments) == 4
    assert runner.points.tolist() == [[0.0, 0.0], [0.0, 1.0], [10.0, 0.0], [10.0, 1.0]]


def test_run_csv_bad_columns_logged():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "points.csv"
        path.write_text("x,y\n0,0\n1,1\n")
        config = KMeansConfig(n_clusters=1, columns=["z"], verbose=False)

        with Logger(Path(tmpdir) / "logs") as logger:
            with pytest.raises(DatasetError):
                ClusterRunner(config, logger).run_csv(path)

        events = read_events(Path(tmpdir) / "logs" / "clustering.jsonl")

    assert events[0]["type"] == "error"
    assert events[0]["error_type"] == "dataset"
    assert "z" in events[0]["message"]
    assert len(events) == 1


def test_runner_accepts_numpy_input():
    data = np.random.default_rng(2).normal(size=(20, 4))

    result = ClusterRunner(KMeansConfig(n_clusters=3, seed=2, verbose=False)).run(data)

    assert result.centroids.shape == (3, 4)


def test_format_inertia_table():
    table = format_inertia_table([2.0, 1.0])
    lines = table.splitlines()

    assert lines[0] == "Iteration | Inertia"
    assert lines[1] == "----------+--------"
    assert lines[2] == "1         |  2.0000"
    assert lines[3] == "2         |  1.0000"


def test_format_inertia_table_custom_header():
    table = format_inertia_table([10.5], header=("Number of Clusters", "Inertia"))

    assert table.splitlines()[0] == "Number of Clusters | Inertia"
    assert table.splitlines()[2].endswith("10.5000")
