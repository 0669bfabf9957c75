"""Shared fixtures: a fixed originator, two payment entries, a frozen clock, a rendered file."""

from __future__ import annotations

from datetime import date, datetime

import pytest

from achforge.models.outputs import GeneratedFile
from achforge.models.payment import Direction, OriginatorProfile, PaymentEntry
from achforge.nacha.encoder import NachaFileEncoder
from tests.fakes import MemorySequenceStore, SequentialTraceSource

GENERATED_AT = datetime(2026, 7, 2, 14, 30, 5)


@pytest.fixture
def profile() -> OriginatorProfile:
    return OriginatorProfile(
        immediate_destination="091000019",
        immediate_origin="1234567890",
        company_name="ACME PAYROLL",
        company_id="1234567890",
        originating_dfi="12345678",
    )


@pytest.fixture
def entries() -> list[PaymentEntry]:
    return [
        PaymentEntry(
            debit_routing="021000021",
            debit_account="123456789",
            debit_identifier="EMP001",
            debit_name="JOHN DOE",
            credit_routing="011000015",
            credit_account="987654321",
            credit_identifier="VEND001",
            credit_name="ACME SUPPLY",
            amount_cents=10000,
        ),
        PaymentEntry(
            debit_routing="026009593",
            debit_account="555000111",
            debit_identifier="EMP002",
            debit_name="JANE ROE",
            credit_routing="111000025",
            credit_account="444000222",
            credit_identifier="VEND002",
            credit_name="GLOBEX LLC",
            amount_cents=25050,
        ),
    ]


@pytest.fixture
def sequence_store() -> MemorySequenceStore:
    return MemorySequenceStore()


@pytest.fixture
def encoder(profile, sequence_store) -> NachaFileEncoder:
    return NachaFileEncoder(
        profile,
        sequence_store,
        trace_source=SequentialTraceSource(),
        clock=lambda: GENERATED_AT,
    )


@pytest.fixture
def generated(encoder, entries) -> GeneratedFile:
    return encoder.generate(entries, date(2026, 7, 6), Direction.DEBIT)
