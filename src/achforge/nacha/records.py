"""NACHA record layouts and the contexts they render from.

Field order and widths follow the NACHA file format: file header (1), batch
header (5), entry detail (6), batch control (8) and file control (9).
"""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel

from achforge.models.payment import AccountSide, Direction, OriginatorProfile
from achforge.nacha.fields import (
    RECORD_LENGTH,
    RecordLayout,
    alpha,
    blank,
    constant,
    numeric,
    right_aligned,
)

SERVICE_CLASS_CODES: dict[Direction, str] = {Direction.DEBIT: "225", Direction.CREDIT: "220"}
TRANSACTION_CODES: dict[Direction, str] = {Direction.DEBIT: "27", Direction.CREDIT: "22"}

STANDARD_ENTRY_CLASS = "CCD"
BATCH_NUMBER = "0000001"
BLOCKING_FACTOR = 10
FILLER_LINE = "9" * RECORD_LENGTH

HASH_MODULUS = 10**10
TRACE_SUFFIX_MODULUS = 10**7
MAX_ENTRY_AMOUNT_CENTS = 10**10 - 1
MAX_TOTAL_AMOUNT_CENTS = 10**12 - 1


# ---------------------------------------------------------------------------
# Render contexts
# ---------------------------------------------------------------------------

class FileHeaderContext(BaseModel):
    model_config = {"frozen": True}

    profile: OriginatorProfile
    created_at: datetime
    file_id_modifier: int


class BatchHeaderContext(BaseModel):
    model_config = {"frozen": True}

    profile: OriginatorProfile
    direction: Direction
    effective_date: date


class EntryDetailContext(BaseModel):
    """One entry as seen from the receiving side of the file's direction."""

    model_config = {"frozen": True}

    direction: Direction
    receiver: AccountSide
    amount_cents: int
    trace_number: int


class BatchControlContext(BaseModel):
    model_config = {"frozen": True}

    profile: OriginatorProfile
    direction: Direction
    entry_count: int
    entry_hash: int
    total_amount_cents: int

    @property
    def total_debit_cents(self) -> int:
        return self.total_amount_cents if self.direction is Direction.DEBIT else 0

    @property
    def total_credit_cents(self) -> int:
        return self.total_amount_cents if self.direction is Direction.CREDIT else 0


class FileControlContext(BaseModel):
    model_config = {"frozen": True}

    batch_count: int
    block_count: int
    entry_count: int
    entry_hash: int
    total_debit_cents: int
    total_credit_cents: int


# ---------------------------------------------------------------------------
# Layouts
# ---------------------------------------------------------------------------

FILE_HEADER = RecordLayout(
    name="file_header",
    specs=(
        constant("record_type", "1"),
        constant("priority_code", "01"),
        right_aligned("immediate_destination", 10, lambda c: c.profile.immediate_destination),
        right_aligned("immediate_origin", 10, lambda c: c.profile.immediate_origin),
        alpha("creation_date", 6, lambda c: c.created_at.strftime("%y%m%d")),
        alpha("creation_time", 4, lambda c: c.created_at.strftime("%H%M")),
        right_aligned("file_id_modifier", 1, lambda c: c.file_id_modifier, pad="A"),
        constant("record_size", "094"),
        constant("blocking_factor", str(BLOCKING_FACTOR)),
        constant("format_code", "1"),
        alpha("destination_name", 23, lambda c: c.profile.resolved_destination_name),
        alpha("origin_name", 23, lambda c: c.profile.resolved_origin_name),
        blank("reference_code", 8),
    ),
)

BATCH_HEADER = RecordLayout(
    name="batch_header",
    specs=(
        constant("record_type", "5"),
        alpha("service_class_code", 3, lambda c: SERVICE_CLASS_CODES[c.direction]),
        alpha("company_name", 16, lambda c: c.profile.company_name),
        alpha("discretionary_data", 20, lambda c: c.profile.discretionary_data),
        alpha("company_id", 10, lambda c: c.profile.company_id),
        constant("standard_entry_class", STANDARD_ENTRY_CLASS),
        alpha("entry_description", 10, lambda c: f"{c.direction.value} PAYMENT"),
        blank("descriptive_date", 6),
        alpha("effective_date", 6, lambda c: c.effective_date.strftime("%y%m%d")),
        blank("settlement_date", 3),
        constant("originator_status", "1"),
        alpha("originating_dfi", 8, lambda c: c.profile.odfi_prefix),
        constant("batch_number", BATCH_NUMBER),
    ),
)

ENTRY_DETAIL = RecordLayout(
    name="entry_detail",
    specs=(
        constant("record_type", "6"),
        alpha("transaction_code", 2, lambda c: TRANSACTION_CODES[c.direction]),
        alpha("receiving_dfi", 8, lambda c: c.receiver.routing[:8]),
        alpha("check_digit", 1, lambda c: c.receiver.check_digit),
        right_aligned("account_number", 17, lambda c: c.receiver.account),
        numeric("amount", 10, lambda c: c.amount_cents),
        right_aligned("identification", 15, lambda c: c.receiver.identifier),
        alpha("receiver_name", 22, lambda c: c.receiver.name),
        blank("discretionary_data", 2),
        constant("addenda_indicator", "0"),
        numeric("trace_number", 15, lambda c: c.trace_number),
    ),
)

BATCH_CONTROL = RecordLayout(
    name="batch_control",
    specs=(
        constant("record_type", "8"),
        alpha("service_class_code", 3, lambda c: SERVICE_CLASS_CODES[c.direction]),
        numeric("entry_count", 6, lambda c: c.entry_count),
        numeric("entry_hash", 10, lambda c: c.entry_hash % HASH_MODULUS),
        numeric("total_debit", 12, lambda c: c.total_debit_cents),
        numeric("total_credit", 12, lambda c: c.total_credit_cents),
        alpha("company_id", 10, lambda c: c.profile.company_id),
        blank("authentication_code", 19),
        blank("reserved", 6),
        alpha("originating_dfi", 8, lambda c: c.profile.odfi_prefix),
        constant("batch_number", BATCH_NUMBER),
    ),
)

FILE_CONTROL = RecordLayout(
    name="file_control",
    specs=(
        constant("record_type", "9"),
        numeric("batch_count", 6, lambda c: c.batch_count),
        numeric("block_count", 6, lambda c: c.block_count),
        numeric("entry_count", 8, lambda c: c.entry_count),
        numeric("entry_hash", 10, lambda c: c.entry_hash % HASH_MODULUS),
        numeric("total_debit", 12, lambda c: c.total_debit_cents),
        numeric("total_credit", 12, lambda c: c.total_credit_cents),
        blank("reserved", 39),
    ),
)

LAYOUTS: dict[str, RecordLayout] = {
    "1": FILE_HEADER,
    "5": BATCH_HEADER,
    "6": ENTRY_DETAIL,
    "8": BATCH_CONTROL,
    "9": FILE_CONTROL,
}
