"""Sources for the pseudo-random low-order digits of entry trace numbers."""

from __future__ import annotations

import itertools
import random

from achforge.nacha.records import TRACE_SUFFIX_MODULUS


class RandomTraceSource:
    """ITraceSource drawing 7-digit suffixes from ``random.Random``.

    Suffixes are not unique across files; seed it for reproducible output.
    """

    def __init__(self, seed: int | None = None) -> None:
        self._rng = random.Random(seed)

    def next_suffix(self) -> int:
        return self._rng.randrange(TRACE_SUFFIX_MODULUS)


class SequentialTraceSource:
    """ITraceSource counting up from ``start``; used for golden-file output."""

    def __init__(self, start: int = 1) -> None:
        self._counter = itertools.count(start)

    def next_suffix(self) -> int:
        return next(self._counter) % TRACE_SUFFIX_MODULUS
