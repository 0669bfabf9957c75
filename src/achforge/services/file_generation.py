"""File generation workflow around the NACHA encoder.

Resolves the legally postable effective date for the file direction,
generates the file, persists it, and only then advances the file sequence.
A failure anywhere before the advance leaves the counter where it was, so
the whole call can be retried.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import date

from achforge.core.config import AppSettings
from achforge.core.protocols import IFileStore, ITraceSource
from achforge.models.outputs import GeneratedFile, ValidationResult
from achforge.models.payment import Direction, PaymentEntry
from achforge.nacha.encoder import NachaFileEncoder
from achforge.persistence import create_persistence
from achforge.settlement.business_days import BusinessDayCalculator

logger = logging.getLogger(__name__)


class FileGenerationService:
    """Generate, store, and sequence NACHA files for one originator."""

    def __init__(
        self,
        *,
        encoder: NachaFileEncoder,
        calendar: BusinessDayCalculator,
        file_store: IFileStore,
        prefix: str = "",
    ) -> None:
        self._encoder = encoder
        self._calendar = calendar
        self._files = file_store
        self._prefix = prefix

    @classmethod
    def from_settings(
        cls,
        settings: AppSettings,
        trace_source: ITraceSource | None = None,
    ) -> FileGenerationService:
        """Wire a service from configuration.

        The calendar generates federal holidays for whatever year a request
        falls in, with the configured overrides applied.
        """
        sequence_store, file_store = create_persistence(settings)
        cal = settings.calendar
        calendar = BusinessDayCalculator.federal(
            extra=cal.extra_holidays,
            excluded=cal.excluded_holidays,
            weekend=cal.weekend_days,
        )
        encoder = NachaFileEncoder(
            settings.originator.to_profile(), sequence_store, trace_source=trace_source
        )
        return cls(encoder=encoder, calendar=calendar, file_store=file_store, prefix=settings.s3.prefix)

    def effective_date_for(self, requested: date, direction: Direction | str) -> date:
        """Settlement date for a file of ``direction`` requested for ``requested``.

        Debits post on the first business day on or after the request;
        credits settle two business days after that debit date.
        """
        debit_date = self._calendar.resolve_effective_date(requested)
        if Direction(direction) is Direction.CREDIT:
            return self._calendar.resolve_credit_effective_date(debit_date)
        return debit_date

    def generate(
        self, entries: Sequence[PaymentEntry], requested_date: date, direction: Direction | str
    ) -> GeneratedFile:
        """Generate and store a file, then advance the sequence.

        Raises:
            InvalidBatchError: ``entries`` violate the encoder's input contract.
            FileStoreError: the file could not be stored; the sequence is unchanged.
            SequenceStoreError: the file is stored but the counter did not advance.
        """
        direction = Direction(direction)
        effective_date = self.effective_date_for(requested_date, direction)
        generated = self._encoder.generate(entries, effective_date, direction)

        path = self._files.save(self.path_for(generated.filename), generated)
        logger.info(
            "NACHA file stored",
            extra={"path": path, "effective_date": effective_date.isoformat()},
        )

        self._encoder.advance_sequence()
        return generated

    def path_for(self, filename: str) -> str:
        return f"{self._prefix}{filename}"

    def list_files(self) -> list[str]:
        return sorted(self._files.list_files(self._prefix))

    def stored_metadata(self, filename: str) -> dict[str, str]:
        """Generation summary recorded with a stored file."""
        return self._files.metadata(self.path_for(filename))

    def validate_stored(self, filename: str) -> ValidationResult:
        """Run the structural check on a previously stored file."""
        content = self._files.read(self.path_for(filename)).decode("ascii")
        return self._encoder.validate(content)
