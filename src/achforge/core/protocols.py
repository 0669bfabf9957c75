"""Protocol interfaces for achforge collaborators.

Encoder and services depend on these Protocols only. Backends satisfy them
structurally, so in-memory doubles need no inheritance.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from achforge.models.outputs import GeneratedFile


# ---------------------------------------------------------------------------
# File Sequence Counter
# ---------------------------------------------------------------------------

@runtime_checkable
class ISequenceStore(Protocol):
    """Holder of the file ID modifier counter (values 1..9, wrapping)."""

    def current(self) -> int: ...

    def advance(self) -> int: ...


# ---------------------------------------------------------------------------
# Trace Number Source
# ---------------------------------------------------------------------------

@runtime_checkable
class ITraceSource(Protocol):
    """Supplier of the low-order 7 digits of each entry's trace number."""

    def next_suffix(self) -> int: ...


# ---------------------------------------------------------------------------
# Generated File Storage
# ---------------------------------------------------------------------------

@runtime_checkable
class IFileStore(Protocol):
    """S3-compatible storage for generated NACHA files and their summaries."""

    def save(self, path: str, generated: GeneratedFile) -> str: ...

    def read(self, path: str) -> bytes: ...

    def metadata(self, path: str) -> dict[str, str]: ...

    def list_files(self, prefix: str) -> list[str]: ...
