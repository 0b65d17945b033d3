"""Optional memory profiling of a whole run."""

import logging
import tracemalloc
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

logger = logging.getLogger(__name__)

SNAPSHOT_FILENAME = "mem.tracemalloc"

# Frames kept per allocation traceback.
TRACEBACK_DEPTH = 10


@contextmanager
def memory_profile(directory: str | None) -> Iterator[Path | None]:
    """
    Trace allocations for the duration of the block.

    When `directory` is set, a tracemalloc snapshot is dumped there on exit
    and its path is yielded. With no directory this is a no-op.
    """
    if not directory:
        yield None
        return

    out_dir = Path(directory)
    out_dir.mkdir(parents=True, exist_ok=True)
    snapshot_path = out_dir / SNAPSHOT_FILENAME

    tracemalloc.start(TRACEBACK_DEPTH)
    try:
        yield snapshot_path
    finally:
        snapshot = tracemalloc.take_snapshot()
        _, peak = tracemalloc.get_traced_memory()
        tracemalloc.stop()
        snapshot.dump(str(snapshot_path))
        logger.info("Memory profile written to %s (peak %.1f KiB)", snapshot_path, peak / 1024)
