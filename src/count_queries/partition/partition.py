"""Split a record stream into size-capped frequency parts."""

from collections.abc import Iterable

from count_queries.partition.types import Part, PartitionStats, SavePart


def partition(
    records: Iterable[str],
    limit: int,
    save: SavePart,
    stats: PartitionStats | None = None,
) -> int:
    """
    Count records into parts of at most `limit` distinct keys and save each one.

    A part is handed to `save(part, part_num)` as soon as it holds `limit`
    distinct records. Part numbers start at 1. A non-empty trailing part is
    saved at the end of input; an empty one never is.

    With `limit <= 0` records are not counted at all and every record flushes
    an empty part, so the number of parts equals the number of records.

    Errors raised by `save` or by iterating `records` propagate unchanged.
    Parts saved before the failure are left as they are.

    Returns:
        Number of parts saved.
    """
    parts_count = 0
    part: Part = {}

    for record in records:
        if stats is not None:
            stats.records_read += 1
        if limit > 0:
            part[record] = part.get(record, 0) + 1

        if len(part) >= limit:
            parts_count += 1
            save(part, parts_count)
            if stats is not None:
                stats.parts_saved += 1
            part = {}

    if part:
        parts_count += 1
        save(part, parts_count)
        if stats is not None:
            stats.parts_saved += 1

    return parts_count
