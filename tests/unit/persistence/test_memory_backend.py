"""Unit tests for the in-memory sequence and file stores."""

from __future__ import annotations

import threading

import pytest

from achforge.core.exceptions import FileStoreError, SequenceStoreError
from achforge.core.protocols import IFileStore, ISequenceStore
from achforge.persistence.memory_backend import MemoryFileStore, MemorySequenceStore, next_sequence


class TestMemorySequenceStore:
    def test_satisfies_protocol(self):
        assert isinstance(MemorySequenceStore(), ISequenceStore)

    def test_cycle_length_is_nine(self):
        store = MemorySequenceStore()
        values = [store.advance() for _ in range(9)]
        assert values[-1] == 1
        assert sorted(values) == list(range(1, 10))

    @pytest.mark.parametrize("initial", [0, 10, -1])
    def test_initial_out_of_range(self, initial):
        with pytest.raises(SequenceStoreError):
            MemorySequenceStore(initial=initial)

    def test_concurrent_advances_are_not_lost(self):
        store = MemorySequenceStore()

        def worker():
            for _ in range(45):
                store.advance()

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        # 180 advances is a whole number of 9-step cycles.
        assert store.current() == 1

    def test_next_sequence_wraps(self):
        assert next_sequence(8) == 9
        assert next_sequence(9) == 1


class TestMemoryFileStore:
    def test_satisfies_protocol(self):
        assert isinstance(MemoryFileStore(), IFileStore)

    def test_save_then_read(self, generated):
        store = MemoryFileStore()
        assert store.save("nacha/a.txt", generated) == "nacha/a.txt"
        assert store.read("nacha/a.txt") == generated.encode()
        assert store.metadata("nacha/a.txt")["sequence-number"] == "1"

    def test_read_missing_raises(self):
        with pytest.raises(FileStoreError):
            MemoryFileStore().read("missing.txt")
        with pytest.raises(FileStoreError):
            MemoryFileStore().metadata("missing.txt")

    def test_list_by_prefix(self, generated):
        store = MemoryFileStore()
        store.save("nacha/a.txt", generated)
        store.save("other/b.txt", generated)
        assert store.list_files("nacha/") == ["nacha/a.txt"]
