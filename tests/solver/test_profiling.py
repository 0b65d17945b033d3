"""Tests for memory profiling."""

import tempfile
import tracemalloc
from pathlib import Path

from count_queries.solver.profiling import SNAPSHOT_FILENAME, memory_profile


def test_memory_profile_disabled_without_directory() -> None:
    with memory_profile(None) as snapshot_path:
        assert snapshot_path is None
    assert not tracemalloc.is_tracing()


def test_memory_profile_writes_snapshot() -> None:
    with tempfile.TemporaryDirectory() as tmp_dir:
        profile_dir = Path(tmp_dir) / "profile"

        with memory_profile(str(profile_dir)) as snapshot_path:
            assert tracemalloc.is_tracing()
            _data = [str(i) for i in range(1000)]

        assert not tracemalloc.is_tracing()
        assert snapshot_path == profile_dir / SNAPSHOT_FILENAME
        snapshot = tracemalloc.Snapshot.load(str(snapshot_path))
        assert snapshot.traces is not None
