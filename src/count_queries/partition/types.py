"""Shared constants and metadata structures for partitioning."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeAlias

# 64KB, the same order as a stock line scanner buffer.
DEFAULT_MAX_LINE_LENGTH = 64 * 1024

Part: TypeAlias = dict[str, int]
SavePart: TypeAlias = Callable[[Part, int], None]


@dataclass
class PartitionStats:
    """Statistics from a partition run."""

    records_read: int = 0
    parts_saved: int = 0
