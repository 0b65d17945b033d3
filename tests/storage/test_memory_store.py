"""Tests for in-memory part storage."""

import pytest

from count_queries.storage.serialize import deserialize_part, serialize_part
from memory_store import MemoryPartStore


class TestMemoryPartStore:
    """Test cases for MemoryPartStore."""

    def test_each_handle_reads_from_start(self) -> None:
        store = MemoryPartStore()
        store.save({"qA": 1}, 1)

        for _ in range(2):
            with store.open(1) as handle:
                assert deserialize_part(handle) == {"qA": 1}

    def test_writes_visible_after_close(self) -> None:
        store = MemoryPartStore()
        store.save({"qA": 1, "qB": 2}, 1)

        with store.open(1) as handle:
            handle.clear()
            serialize_part({"qB": 2}, handle)

        with store.open(1) as handle:
            assert deserialize_part(handle) == {"qB": 2}

    def test_tracks_open_handles(self) -> None:
        store = MemoryPartStore()
        store.save({}, 1)
        store.save({}, 2)

        first = store.open(1)
        second = store.open(2)
        assert store.open_count == 2
        first.close()
        second.close()
        second.close()

        assert store.open_count == 0
        assert store.peak_open == 2
        assert store.opened_total == 2

    def test_unknown_part_raises(self) -> None:
        store = MemoryPartStore()
        with pytest.raises(FileNotFoundError):
            store.factory(1)()
