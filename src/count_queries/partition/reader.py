"""Line reader feeding records to the partitioner."""

from collections.abc import Iterator
from typing import BinaryIO

from count_queries.partition.types import DEFAULT_MAX_LINE_LENGTH


def strip_terminator(raw_line: bytes) -> bytes:
    """Drop one trailing "\\n" and then one trailing "\\r"."""
    if raw_line.endswith(b"\n"):
        raw_line = raw_line[:-1]
    if raw_line.endswith(b"\r"):
        raw_line = raw_line[:-1]
    return raw_line


def iter_records(
    stream: BinaryIO,
    max_line_length: int = DEFAULT_MAX_LINE_LENGTH,
) -> Iterator[str]:
    """
    Yield one record per input line.

    Empty lines are records too. A final line without a trailing newline is
    still yielded. Bytes that are not valid UTF-8 are kept via surrogateescape,
    so records stay opaque and can be written back unchanged.

    Raises ValueError when a line is longer than max_line_length bytes,
    not counting its terminator.
    """
    if max_line_length <= 0:
        raise ValueError(f"max_line_length must be positive, got {max_line_length}")

    line_no = 0
    while True:
        # Room for the record plus a "\r\n" terminator.
        raw_line = stream.readline(max_line_length + 2)
        if not raw_line:
            return
        line_no += 1

        body = strip_terminator(raw_line)
        if len(body) > max_line_length:
            raise ValueError(f"line {line_no} exceeds max line length of {max_line_length} bytes")

        yield body.decode("utf-8", errors="surrogateescape")
