"""Merge saved parts into one tab-delimited frequency report."""

from collections.abc import Sequence
from typing import TextIO

from count_queries.partition.types import Part
from count_queries.storage.serialize import deserialize_part, serialize_part
from count_queries.storage.types import PartHandleFactory


def write_report(part: Part, output: TextIO) -> None:
    """Write `record\\tcount` lines, in no particular order."""
    for record, count in part.items():
        output.write(f"{record}\t{count}\n")


def fold_part(accumulator: Part, other: Part) -> None:
    """
    Move the counts of every accumulator key from `other` into `accumulator`.

    Keys absent from `other` count as 0. Moved keys are deleted from `other`,
    leaving only the keys no earlier part has claimed.
    """
    for record in accumulator:
        accumulator[record] += other.pop(record, 0)


def reduce_parts(parts: Sequence[PartHandleFactory], output: TextIO) -> None:
    """
    Merge all parts into `output`, one line per distinct record.

    Part i is loaded as the accumulator and every later part is folded into
    it. A folded part is rewritten in place with only its unclaimed keys, so
    each record is reported exactly once, by the first part that holds it.

    Handles are opened through the factories only when needed. At most two are
    open at a time (the accumulator and the part being folded), and every
    handle is closed before returning, including on errors.

    Any storage or decoding error aborts the merge. Output written so far is
    left in place and should not be trusted.
    """
    for i, open_accumulator in enumerate(parts):
        with open_accumulator() as accumulator_handle:
            accumulator = deserialize_part(accumulator_handle)

            for o in range(i + 1, len(parts)):
                with parts[o]() as other_handle:
                    other = deserialize_part(other_handle)
                    fold_part(accumulator, other)
                    # Persist the shrunken part so later passes skip moved keys.
                    other_handle.clear()
                    serialize_part(other, other_handle)

            write_report(accumulator, output)
