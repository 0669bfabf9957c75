"""Tests for the sample file generation script."""

from __future__ import annotations

import sys
from datetime import date
from pathlib import Path

# Make scripts/ importable
sys.path.insert(0, str(Path(__file__).resolve().parent.parent.parent / "scripts"))

from generate_sample_file import build_sample, sample_entries  # noqa: E402

from achforge.models.payment import Direction  # noqa: E402
from achforge.nacha.encoder import NachaFileEncoder  # noqa: E402


def test_sample_entries_are_distinct():
    entries = sample_entries(3)
    assert [e.amount_cents for e in entries] == [12550, 15100, 17650]
    assert len({e.debit_account for e in entries}) == 3


def test_credit_sample_settles_two_business_days_after_debit():
    generated = build_sample(3, Direction.CREDIT, date(2026, 7, 4))
    assert generated.effective_date == date(2026, 7, 8)
    assert generated.entry_count == 3
    assert generated.total_amount_cents == 45300
    assert NachaFileEncoder.validate(generated.content).valid
