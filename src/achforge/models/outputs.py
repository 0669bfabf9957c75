"""Output models: generated NACHA files and structural validation results."""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, Field

from achforge.models.payment import Direction

NACHA_CONTENT_TYPE = "text/plain"


class GeneratedFile(BaseModel):
    """A rendered NACHA file, handed to the caller for persistence."""

    model_config = {"frozen": True}

    filename: str
    content: str
    entry_count: int
    total_amount_cents: int
    effective_date: date
    direction: Direction
    sequence_number: int
    created_at: datetime

    @property
    def line_count(self) -> int:
        return len(self.content.split("\n"))

    def encode(self) -> bytes:
        """File content as the ASCII bytes delivered to the bank."""
        return self.content.encode("ascii")

    @property
    def metadata(self) -> dict[str, str]:
        """Summary stored alongside the content (no account or name data)."""
        return {
            "direction": self.direction.value,
            "effective-date": self.effective_date.isoformat(),
            "sequence-number": str(self.sequence_number),
            "entry-count": str(self.entry_count),
            "total-amount-cents": str(self.total_amount_cents),
        }


class ValidationResult(BaseModel):
    """Outcome of the lightweight structural check on a NACHA file."""

    valid: bool
    errors: list[str] = Field(default_factory=list)
