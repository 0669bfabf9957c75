"""Shared test doubles: re-exported memory backends and a failing file store."""

from __future__ import annotations

from achforge.core.exceptions import FileStoreError
from achforge.models.outputs import GeneratedFile
from achforge.nacha.trace import SequentialTraceSource
from achforge.persistence.memory_backend import MemoryFileStore, MemorySequenceStore


class FailingFileStore(MemoryFileStore):
    """IFileStore whose saves always fail, for retry-safety tests."""

    def save(self, path: str, generated: GeneratedFile) -> str:
        raise FileStoreError(f"save refused for {path!r}")


__all__ = ["FailingFileStore", "MemoryFileStore", "MemorySequenceStore", "SequentialTraceSource"]
