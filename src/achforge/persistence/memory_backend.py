"""In-memory backends for single-instance deployments and unit tests."""

from __future__ import annotations

import threading

from achforge.core.exceptions import FileStoreError, SequenceStoreError
from achforge.models.outputs import GeneratedFile

MIN_SEQUENCE = 1
MAX_SEQUENCE = 9


def next_sequence(current: int) -> int:
    """Successor of a file ID modifier value; 9 wraps to 1."""
    return MIN_SEQUENCE if current >= MAX_SEQUENCE else current + 1


def check_sequence(value: int) -> int:
    if not MIN_SEQUENCE <= value <= MAX_SEQUENCE:
        raise SequenceStoreError(
            f"sequence value {value} is outside {MIN_SEQUENCE}..{MAX_SEQUENCE}"
        )
    return value


class MemorySequenceStore:
    """Lock-guarded ISequenceStore; the counter lives only as long as the process."""

    def __init__(self, initial: int = MIN_SEQUENCE) -> None:
        self._value = check_sequence(initial)
        self._lock = threading.Lock()

    def current(self) -> int:
        with self._lock:
            return self._value

    def advance(self) -> int:
        with self._lock:
            self._value = next_sequence(self._value)
            return self._value


class MemoryFileStore:
    """Dict-backed IFileStore."""

    def __init__(self) -> None:
        self._files: dict[str, bytes] = {}
        self._metadata: dict[str, dict[str, str]] = {}

    def save(self, path: str, generated: GeneratedFile) -> str:
        self._files[path] = generated.encode()
        self._metadata[path] = generated.metadata
        return path

    def read(self, path: str) -> bytes:
        try:
            return self._files[path]
        except KeyError as exc:
            raise FileStoreError(f"No stored file at {path!r}") from exc

    def metadata(self, path: str) -> dict[str, str]:
        try:
            return dict(self._metadata[path])
        except KeyError as exc:
            raise FileStoreError(f"No stored file at {path!r}") from exc

    def list_files(self, prefix: str) -> list[str]:
        return [k for k in self._files if k.startswith(prefix)]
