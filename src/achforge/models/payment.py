"""Payment instruction models consumed by the NACHA encoder.

Entries arrive already decrypted from the transaction store. Routing numbers
are validated here, at construction; free-text fields are accepted at any
length and truncated by the renderer to their fixed NACHA widths.
"""

from __future__ import annotations

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from enum import StrEnum
from typing import Optional

from pydantic import BaseModel, Field

ROUTING_PATTERN = r"^[0-9]{9}$"


def to_cents(amount: Decimal) -> int:
    """Convert a dollar amount to integer cents, rounding half up."""
    return int((Decimal(amount) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class Direction(StrEnum):
    """Which side of each entry the file originates against."""

    DEBIT = "DR"
    CREDIT = "CR"


class AccountSide(BaseModel):
    """One side (debit or credit) of a payment entry."""

    model_config = {"frozen": True}

    routing: str
    account: str
    identifier: str
    name: str

    @property
    def routing_prefix(self) -> int:
        """First 8 digits of the routing number, as summed into entry hashes."""
        return int(self.routing[:8])

    @property
    def check_digit(self) -> str:
        return self.routing[8]


class PaymentEntry(BaseModel):
    """One instruction to move money from a debit account to a credit account."""

    model_config = {"frozen": True}

    debit_routing: str = Field(pattern=ROUTING_PATTERN)
    debit_account: str
    debit_identifier: str = ""
    debit_name: str

    credit_routing: str = Field(pattern=ROUTING_PATTERN)
    credit_account: str
    credit_identifier: str = ""
    credit_name: str

    amount_cents: int = Field(ge=0, strict=True)

    @property
    def debit_side(self) -> AccountSide:
        return AccountSide(
            routing=self.debit_routing,
            account=self.debit_account,
            identifier=self.debit_identifier,
            name=self.debit_name,
        )

    @property
    def credit_side(self) -> AccountSide:
        return AccountSide(
            routing=self.credit_routing,
            account=self.credit_account,
            identifier=self.credit_identifier,
            name=self.credit_name,
        )

    def receiving_side(self, direction: Direction) -> AccountSide:
        """The side named in the entry detail record for a file of this direction."""
        return self.debit_side if direction is Direction.DEBIT else self.credit_side


class OriginatorProfile(BaseModel):
    """Company and bank identifiers stamped on every generated file."""

    model_config = {"frozen": True}

    immediate_destination: str = Field(pattern=r"^[0-9]{9,10}$")
    immediate_origin: str = Field(pattern=r"^[0-9]{9,10}$")
    company_name: str = Field(min_length=1, max_length=16)
    company_id: str = Field(pattern=r"^[0-9]{10}$")
    discretionary_data: str = Field(default="", max_length=20)
    originating_dfi: str = Field(pattern=r"^[0-9]{8,9}$")
    destination_name: Optional[str] = Field(default=None, max_length=23)
    origin_name: Optional[str] = Field(default=None, max_length=23)

    @property
    def odfi_prefix(self) -> str:
        """First 8 digits of the originating DFI routing number."""
        return self.originating_dfi[:8]

    @property
    def resolved_destination_name(self) -> str:
        # Falls back to the routing number when no bank name is configured.
        return self.destination_name or self.immediate_destination

    @property
    def resolved_origin_name(self) -> str:
        return self.origin_name or self.immediate_origin


class FileBatch(BaseModel):
    """One file generation request: ordered entries sharing a settlement date."""

    model_config = {"frozen": True}

    entries: tuple[PaymentEntry, ...] = Field(min_length=1)
    effective_date: date
    direction: Direction
    profile: OriginatorProfile

    @property
    def total_amount_cents(self) -> int:
        return sum(entry.amount_cents for entry in self.entries)
