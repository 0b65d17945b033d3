"""Shared handle contract for part storage."""

from collections.abc import Callable
from typing import Protocol, Self, TypeAlias


class PartHandle(Protocol):
    """
    Read/write access to one part's stored bytes.

    `clear()` discards the stored bytes and moves the position back to the
    start. `close()` releases the underlying resource.
    """

    def read(self, size: int = -1, /) -> bytes: ...

    def readline(self, size: int = -1, /) -> bytes: ...

    def write(self, data: bytes, /) -> int: ...

    def clear(self) -> None: ...

    def close(self) -> None: ...

    def __enter__(self) -> Self: ...

    def __exit__(self, *exc_info: object) -> None: ...


# Opens a fresh handle on every call; may be called many times per part.
PartHandleFactory: TypeAlias = Callable[[], PartHandle]
