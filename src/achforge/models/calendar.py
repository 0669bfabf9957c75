"""Holiday calendar models."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel


class FederalHoliday(BaseModel):
    """A holiday as the ACH network observes it (weekend shift already applied)."""

    model_config = {"frozen": True}

    id: str
    name: str
    observed_date: date
    year: int
    recurring: bool = True
