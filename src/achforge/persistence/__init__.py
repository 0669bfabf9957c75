"""Pluggable persistence backends behind Protocol interfaces."""

from __future__ import annotations

from achforge.core.config import AppSettings
from achforge.core.protocols import IFileStore, ISequenceStore
from achforge.persistence.memory_backend import MemoryFileStore, MemorySequenceStore
from achforge.persistence.redis_backend import RedisSequenceStore
from achforge.persistence.s3_backend import S3FileStore


def create_persistence(settings: AppSettings | None = None) -> tuple[ISequenceStore, IFileStore]:
    """Create wired-up persistence backends from application settings.

    Returns:
        Tuple of (sequence_store, file_store).
    """
    if settings is None:
        settings = AppSettings()

    sequence_store: ISequenceStore
    if settings.sequence.backend == "redis":
        sequence_store = RedisSequenceStore(
            key=settings.sequence.key,
            host=settings.redis.host,
            port=settings.redis.port,
            db=settings.redis.db,
            initial=settings.sequence.initial,
        )
    else:
        sequence_store = MemorySequenceStore(initial=settings.sequence.initial)

    file_store: IFileStore
    if settings.s3.enabled:
        file_store = S3FileStore.from_config(settings.s3)
    else:
        file_store = MemoryFileStore()

    return sequence_store, file_store
