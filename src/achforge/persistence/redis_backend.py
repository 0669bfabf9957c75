"""Redis sequence backend implementing ISequenceStore."""

from __future__ import annotations

import redis

from achforge.core.exceptions import SequenceStoreError
from achforge.persistence.memory_backend import MIN_SEQUENCE, check_sequence, next_sequence


class RedisSequenceStore:
    """ISequenceStore shared by every process pointing at the same Redis key.

    ``advance`` runs as a WATCH/MULTI transaction, so concurrent advances are
    retried rather than lost.
    """

    def __init__(
        self,
        key: str = "achforge:file-sequence",
        host: str = "localhost",
        port: int = 6379,
        db: int = 0,
        initial: int = MIN_SEQUENCE,
    ) -> None:
        self._key = key
        self._initial = check_sequence(initial)
        self._client = redis.Redis(host=host, port=port, db=db, decode_responses=True)

    def _read(self, client) -> int:
        raw = client.get(self._key)
        return self._initial if raw is None else check_sequence(int(raw))

    def current(self) -> int:
        try:
            return self._read(self._client)
        except SequenceStoreError:
            raise
        except Exception as exc:
            raise SequenceStoreError(f"Redis GET failed for key={self._key!r}: {exc}") from exc

    def advance(self) -> int:
        def _advance(pipe) -> int:
            value = next_sequence(self._read(pipe))
            pipe.multi()
            pipe.set(self._key, value)
            return value

        try:
            return self._client.transaction(_advance, self._key, value_from_callable=True)
        except SequenceStoreError:
            raise
        except Exception as exc:
            raise SequenceStoreError(f"Redis advance failed for key={self._key!r}: {exc}") from exc
