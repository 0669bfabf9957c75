"""NACHA file encoder.

Serializes one batch of payment entries into NACHA's fixed-width format:
file header, batch header, one entry detail per payment (in the order
supplied), batch control, file control, then ``9``-filler lines up to a whole
number of 10-line blocks.

``generate`` only reads the file ID modifier; ``advance_sequence`` is the sole
mutation, so callers can advance once the file is safely persisted and retry
a failed persist with the same sequence number.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Sequence
from datetime import date, datetime

from achforge.core.exceptions import InvalidBatchError
from achforge.core.protocols import ISequenceStore, ITraceSource
from achforge.models.outputs import GeneratedFile, ValidationResult
from achforge.models.payment import Direction, FileBatch, OriginatorProfile, PaymentEntry
from achforge.nacha.records import (
    BATCH_CONTROL,
    BATCH_HEADER,
    BLOCKING_FACTOR,
    ENTRY_DETAIL,
    FILE_CONTROL,
    FILE_HEADER,
    FILLER_LINE,
    MAX_ENTRY_AMOUNT_CENTS,
    MAX_TOTAL_AMOUNT_CENTS,
    TRACE_SUFFIX_MODULUS,
    BatchControlContext,
    BatchHeaderContext,
    EntryDetailContext,
    FileControlContext,
    FileHeaderContext,
)
from achforge.nacha.trace import RandomTraceSource
from achforge.nacha.validation import validate_file

logger = logging.getLogger(__name__)

BATCH_COUNT = 1
# Block count is ceil((5 + entry count) / 10).
BLOCK_COUNT_OVERHEAD = 5
MAX_ENTRY_COUNT = 10**6 - 1


def build_filename(direction: Direction, effective_date: date, created_at: datetime) -> str:
    """``ACH_{DR|CR}_{YYYYMMDD}_{HHMMSS}.txt``."""
    return f"ACH_{direction.value}_{effective_date:%Y%m%d}_{created_at:%H%M%S}.txt"


def pad_to_block(lines: list[str]) -> list[str]:
    """Append filler records until the line count is a multiple of the blocking factor."""
    shortfall = -len(lines) % BLOCKING_FACTOR
    return lines + [FILLER_LINE] * shortfall


class NachaFileEncoder:
    """Renders payment batches for one originator into NACHA file content."""

    def __init__(
        self,
        profile: OriginatorProfile,
        sequence_store: ISequenceStore,
        trace_source: ITraceSource | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._profile = profile
        self._sequence = sequence_store
        self._trace = trace_source or RandomTraceSource()
        self._clock = clock

    @property
    def profile(self) -> OriginatorProfile:
        return self._profile

    # ---- public operations ----

    def generate(
        self,
        entries: Sequence[PaymentEntry],
        effective_date: date,
        direction: Direction | str,
    ) -> GeneratedFile:
        """Render ``entries`` as a single-batch NACHA file.

        Raises:
            InvalidBatchError: ``entries`` is empty or an amount does not fit
                its fixed-width field.
        """
        return self._generate(entries, effective_date, Direction(direction), self._profile)

    def generate_batch(self, batch: FileBatch) -> GeneratedFile:
        """Render a FileBatch using the batch's own originator profile."""
        return self._generate(batch.entries, batch.effective_date, batch.direction, batch.profile)

    def advance_sequence(self) -> int:
        """Move the file ID modifier to its next value (9 wraps to 1)."""
        sequence = self._sequence.advance()
        logger.info("File sequence advanced", extra={"sequence_number": sequence})
        return sequence

    @staticmethod
    def validate(content: str) -> ValidationResult:
        return validate_file(content)

    # ---- record pipeline ----

    def _generate(
        self,
        entries: Sequence[PaymentEntry],
        effective_date: date,
        direction: Direction,
        profile: OriginatorProfile,
    ) -> GeneratedFile:
        entries = list(entries)
        _check_entries(entries)
        if isinstance(effective_date, datetime):
            effective_date = effective_date.date()

        created_at = self._clock()
        sequence = self._sequence.current()
        total_cents = sum(entry.amount_cents for entry in entries)

        lines = [
            FILE_HEADER.render(
                FileHeaderContext(profile=profile, created_at=created_at, file_id_modifier=sequence)
            ),
            BATCH_HEADER.render(
                BatchHeaderContext(profile=profile, direction=direction, effective_date=effective_date)
            ),
        ]
        lines.extend(
            ENTRY_DETAIL.render(
                EntryDetailContext(
                    direction=direction,
                    receiver=entry.receiving_side(direction),
                    amount_cents=entry.amount_cents,
                    trace_number=self._trace_number(profile),
                )
            )
            for entry in entries
        )
        lines.append(
            BATCH_CONTROL.render(
                BatchControlContext(
                    profile=profile,
                    direction=direction,
                    entry_count=len(entries),
                    entry_hash=sum(e.receiving_side(direction).routing_prefix for e in entries),
                    total_amount_cents=total_cents,
                )
            )
        )
        # The file hash covers both sides of every entry, unlike the batch hash.
        lines.append(
            FILE_CONTROL.render(
                FileControlContext(
                    batch_count=BATCH_COUNT,
                    block_count=math.ceil((BLOCK_COUNT_OVERHEAD + len(entries)) / BLOCKING_FACTOR),
                    entry_count=len(entries),
                    entry_hash=sum(
                        e.debit_side.routing_prefix + e.credit_side.routing_prefix for e in entries
                    ),
                    total_debit_cents=total_cents,
                    total_credit_cents=total_cents,
                )
            )
        )

        filename = build_filename(direction, effective_date, created_at)
        generated = GeneratedFile(
            filename=filename,
            content="\n".join(pad_to_block(lines)),
            entry_count=len(entries),
            total_amount_cents=total_cents,
            effective_date=effective_date,
            direction=direction,
            sequence_number=sequence,
            created_at=created_at,
        )
        logger.info(
            "NACHA file generated",
            extra={
                "nacha_filename": filename,
                "direction": direction.value,
                "entry_count": len(entries),
                "total_amount_cents": total_cents,
                "sequence_number": sequence,
            },
        )
        return generated

    def _trace_number(self, profile: OriginatorProfile) -> int:
        suffix = self._trace.next_suffix() % TRACE_SUFFIX_MODULUS
        return int(profile.odfi_prefix) * TRACE_SUFFIX_MODULUS + suffix


def _check_entries(entries: list[PaymentEntry]) -> None:
    if not entries:
        raise InvalidBatchError("cannot generate a NACHA file with no entries")
    if len(entries) > MAX_ENTRY_COUNT:
        raise InvalidBatchError(f"{len(entries)} entries exceed the 6-digit batch entry count")
    for index, entry in enumerate(entries):
        if entry.amount_cents > MAX_ENTRY_AMOUNT_CENTS:
            raise InvalidBatchError(
                f"entry {index} amount {entry.amount_cents} cents exceeds the 10-digit amount field"
            )
    total = sum(entry.amount_cents for entry in entries)
    if total > MAX_TOTAL_AMOUNT_CENTS:
        raise InvalidBatchError(f"batch total {total} cents exceeds the 12-digit total field")
