"""File-backed part storage opened one handle at a time."""

from pathlib import Path
from typing import Self

from count_queries.partition.types import Part
from count_queries.storage.serialize import serialize_part
from count_queries.storage.types import PartHandleFactory

# 1MB buffer for efficient I/O.
BUFFER_SIZE = 1024 * 1024


class FilePartHandle:
    """Read/write handle over one part file."""

    def __init__(self, path: Path):
        self._file = open(path, "r+b", buffering=BUFFER_SIZE)  # noqa: SIM115

    def read(self, size: int = -1, /) -> bytes:
        return self._file.read(size)

    def readline(self, size: int = -1, /) -> bytes:
        return self._file.readline(size)

    def write(self, data: bytes, /) -> int:
        return self._file.write(data)

    def clear(self) -> None:
        """Discard the file contents and rewind for writing."""
        self._file.seek(0)
        self._file.truncate(0)

    def close(self) -> None:
        self._file.close()

    @property
    def closed(self) -> bool:
        return self._file.closed

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class FilePartStore:
    """
    One file per part inside a directory.

    Nothing is kept open between calls: `save` opens and closes its file, and
    each handle factory opens the part file only when called. The number of
    open descriptors therefore does not grow with the number of parts.
    """

    def __init__(self, directory: Path):
        self._directory = directory

    @property
    def directory(self) -> Path:
        return self._directory

    def path(self, part_num: int) -> Path:
        return self._directory / f"part_{part_num:06d}.bin"

    def save(self, part: Part, part_num: int) -> None:
        """Write a new part file, replacing any previous one."""
        with open(self.path(part_num), "wb", buffering=BUFFER_SIZE) as handle:
            serialize_part(part, handle)

    def factory(self, part_num: int) -> PartHandleFactory:
        """Return a callable that opens a fresh handle on the part file."""
        path = self.path(part_num)

        def open_handle() -> FilePartHandle:
            return FilePartHandle(path)

        return open_handle

    def factories(self, parts_count: int) -> list[PartHandleFactory]:
        """Handle factories for parts 1..parts_count, in part order."""
        return [self.factory(part_num) for part_num in range(1, parts_count + 1)]
