"""
Test logger.py functionality
"""

import tempfile
from pathlib import Path

from clusterkit.core.logger import Logger, read_events


def test_logger():
    """Test logger writes JSONL correctly."""
    print("Testing Logger class...")

    with tempfile.TemporaryDirectory() as tmpdir:
        log_dir = Path(tmpdir) / "logs"

        with Logger(log_dir) as logger:
            print(f"  ✓ Logger created in {log_dir}")

            logger.log_run_start(config={"n_clusters": 2}, n_points=4, dimensions=2)
            logger.log_iteration(iteration=1, inertia=1.0, empty_clusters=[], converged=False)
            logger.log_iteration(iteration=2, inertia=1.0, empty_clusters=[1], converged=True)
            logger.log_run_end(n_iter=2, converged=True, final_inertia=1.0, cluster_sizes=[2, 2])
            logger.log_elbow(k=3, inertia=0.5)
            logger.log_error("k must be at least 1, got 0", error_type="invalid_input")
            print("  ✓ Logged all event types")

        log_file = log_dir / "clustering.jsonl"
        assert log_file.exists(), "Log file should exist"

        events = read_events(log_file)
        assert len(events) == 6, f"Expected 6 events, got {len(events)}"
        print(f"  ✓ Read {len(events)} events from JSONL")

        types = [e["type"] for e in events]
        assert types == ["run_start", "iteration", "iteration", "run_end", "elbow", "error"]

        for event in events:
            assert "timestamp" in event, f"Event {event['type']} missing timestamp"

        assert events[0]["config"] == {"n_clusters": 2}
        assert events[0]["n_points"] == 4
        assert events[2]["empty_clusters"] == [1]
        assert events[3]["cluster_sizes"] == [2, 2]
        assert events[4]["k"] == 3
        assert events[5]["error_type"] == "invalid_input"
        assert "iteration" not in events[5]
        print("  ✓ Event payloads correct")


def test_logger_appends():
    """A second logger on the same directory appends rather than truncates."""
    with tempfile.TemporaryDirectory() as tmpdir:
        with Logger(Path(tmpdir)) as logger:
            logger.log_elbow(k=1, inertia=4.0)
        with Logger(Path(tmpdir)) as logger:
            logger.log_elbow(k=2, inertia=1.0)

        events = read_events(Path(tmpdir) / "clustering.jsonl")
        assert [e["k"] for e in events] == [1, 2]


def test_logger_streams_before_close():
    """Events are flushed as they are written."""
    with tempfile.TemporaryDirectory() as tmpdir:
        logger = Logger(Path(tmpdir), filename="run.jsonl")
        logger.log_error("boom", iteration=3)

        events = read_events(Path(tmpdir) / "run.jsonl")
        assert events[0]["iteration"] == 3

        logger.close()
