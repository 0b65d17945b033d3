import logging
import shutil
import tempfile
import time
from dataclasses import dataclass
from pathlib import Path

from count_queries.partition.partition import partition
from count_queries.partition.reader import iter_records
from count_queries.partition.types import DEFAULT_MAX_LINE_LENGTH, PartitionStats
from count_queries.reduce.reduce import reduce_parts
from count_queries.storage.files import BUFFER_SIZE, FilePartStore

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 950


@dataclass(frozen=True, slots=True)
class CountOptions:
    """Tuning knobs threaded through one counting run."""

    limit: int = DEFAULT_LIMIT
    max_line_length: int = DEFAULT_MAX_LINE_LENGTH
    tmp_dir: str | None = None

    def __post_init__(self) -> None:
        if self.max_line_length <= 0:
            raise ValueError(f"max_line_length must be positive, got {self.max_line_length}")


def count_queries(
    input_path: str,
    output_path: str,
    options: CountOptions | None = None,
) -> int:
    """
    Count distinct lines of the input file into a tab-delimited report.

    Two-pass algorithm:
    1. Partition input lines into parts of at most `limit` distinct records,
       each saved to its own file in a scratch directory
    2. Reduce the parts into the output file, one `record\\tcount` line each

    The scratch directory is removed on every exit path. Returns the number
    of parts the input was split into.
    """
    options = options or CountOptions()
    total_start = time.perf_counter()
    input_file = Path(input_path)

    logger.info(
        "Starting: file=%s, limit=%d, max_line_length=%d",
        input_file.name,
        options.limit,
        options.max_line_length,
    )

    tmp_dir = tempfile.mkdtemp(prefix="count_queries_", dir=options.tmp_dir)

    try:
        store = FilePartStore(Path(tmp_dir))

        # Pass 1: partition to part files.
        t1_start = time.perf_counter()
        stats = PartitionStats()
        with open(input_file, "rb", buffering=BUFFER_SIZE) as handle:
            records = iter_records(handle, options.max_line_length)
            parts_count = partition(records, options.limit, store.save, stats)
        t1 = time.perf_counter() - t1_start

        logger.info(
            "Pass 1 done: %d records into %d parts in %.2fs",
            stats.records_read,
            parts_count,
            t1,
        )

        # Pass 2: reduce parts into the report.
        t2_start = time.perf_counter()
        with open(
            output_path,
            "w",
            encoding="utf-8",
            errors="surrogateescape",
            newline="",
        ) as output:
            reduce_parts(store.factories(parts_count), output)
        t2 = time.perf_counter() - t2_start

        logger.info("Pass 2 done: %d parts reduced in %.2fs", parts_count, t2)

        total_passes = t1 + t2
        if total_passes > 0:
            logger.debug(
                "Timing breakdown: Pass1=%.2fs (%.0f%%), Pass2=%.2fs (%.0f%%)",
                t1,
                100 * t1 / total_passes,
                t2,
                100 * t2 / total_passes,
            )

        total_time = time.perf_counter() - total_start
        logger.info("Result: report written to %s (total %.2fs)", output_path, total_time)
        return parts_count

    finally:
        shutil.rmtree(tmp_dir, ignore_errors=True)
