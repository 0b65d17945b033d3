"""In-memory part storage for tests, with the same handle semantics as files."""

import io
from typing import Self

from count_queries.partition.types import Part
from count_queries.storage.serialize import serialize_part
from count_queries.storage.types import PartHandleFactory


class MemoryPartHandle:
    """
    Handle over a copy of a part's stored bytes.

    Reads start at offset 0. Writes become visible to later handles when the
    handle is closed.
    """

    def __init__(self, store: "MemoryPartStore", part_num: int):
        self._store = store
        self._part_num = part_num
        self._buffer = io.BytesIO(store.data[part_num])
        self.closed = False

    def read(self, size: int = -1, /) -> bytes:
        return self._buffer.read(size)

    def readline(self, size: int = -1, /) -> bytes:
        return self._buffer.readline(size)

    def write(self, data: bytes, /) -> int:
        return self._buffer.write(data)

    def clear(self) -> None:
        self._buffer.seek(0)
        self._buffer.truncate(0)

    def close(self) -> None:
        if self.closed:
            return
        self._store.data[self._part_num] = self._buffer.getvalue()
        self._store.release(self)
        self.closed = True

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class MemoryPartStore:
    """Part bytes keyed by part number, plus open-handle bookkeeping."""

    handle_class = MemoryPartHandle

    def __init__(self) -> None:
        self.data: dict[int, bytes] = {}
        self.open_count = 0
        self.peak_open = 0
        self.opened_total = 0

    def save(self, part: Part, part_num: int) -> None:
        buffer = io.BytesIO()
        serialize_part(part, buffer)
        self.data[part_num] = buffer.getvalue()

    def open(self, part_num: int) -> MemoryPartHandle:
        if part_num not in self.data:
            raise FileNotFoundError(f"part {part_num} has not been saved")
        handle = self.handle_class(self, part_num)
        self.open_count += 1
        self.opened_total += 1
        self.peak_open = max(self.peak_open, self.open_count)
        return handle

    def release(self, handle: MemoryPartHandle) -> None:
        self.open_count -= 1

    def factory(self, part_num: int) -> PartHandleFactory:
        return lambda: self.open(part_num)

    def factories(self, parts_count: int) -> list[PartHandleFactory]:
        return [self.factory(part_num) for part_num in range(1, parts_count + 1)]
