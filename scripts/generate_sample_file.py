"""Generate a sample NACHA file from demo entries.

Usage:
    python scripts/generate_sample_file.py --entries 3 --direction CR --output sample.txt
    python scripts/generate_sample_file.py --bucket achforge-nacha-files --endpoint-url http://localhost:4566
"""

from __future__ import annotations

import argparse
from datetime import date
from pathlib import Path

from achforge.core.logging import setup_logging
from achforge.models.outputs import GeneratedFile
from achforge.models.payment import Direction, OriginatorProfile, PaymentEntry
from achforge.nacha.encoder import NachaFileEncoder
from achforge.nacha.trace import SequentialTraceSource
from achforge.persistence.memory_backend import MemorySequenceStore
from achforge.persistence.s3_backend import S3FileStore
from achforge.settlement.business_days import BusinessDayCalculator

DEMO_PROFILE = OriginatorProfile(
    immediate_destination="091000019",
    immediate_origin="1234567890",
    company_name="ACHFORGE DEMO",
    company_id="1234567890",
    originating_dfi="12345678",
)


def sample_entries(count: int) -> list[PaymentEntry]:
    """``count`` demo entries with distinct accounts and amounts."""
    return [
        PaymentEntry(
            debit_routing="021000021",
            debit_account=f"1000{i:06d}",
            debit_identifier=f"DR{i:04d}",
            debit_name=f"DEMO PAYER {i}",
            credit_routing="011000015",
            credit_account=f"2000{i:06d}",
            credit_identifier=f"CR{i:04d}",
            credit_name=f"DEMO PAYEE {i}",
            amount_cents=10000 + i * 2550,
        )
        for i in range(1, count + 1)
    ]


def build_sample(count: int, direction: Direction, requested: date) -> GeneratedFile:
    """Render a deterministic sample file for ``requested`` (resolved to a business day)."""
    calendar = BusinessDayCalculator.federal()
    effective = calendar.resolve_effective_date(requested)
    if direction is Direction.CREDIT:
        effective = calendar.resolve_credit_effective_date(effective)
    encoder = NachaFileEncoder(DEMO_PROFILE, MemorySequenceStore(), trace_source=SequentialTraceSource())
    return encoder.generate(sample_entries(count), effective, direction)


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate a sample NACHA file")
    parser.add_argument("--entries", type=int, default=2, help="Number of demo entries")
    parser.add_argument("--direction", choices=["DR", "CR"], default="DR", help="File direction")
    parser.add_argument("--effective-date", type=date.fromisoformat, default=date.today(),
                        help="Requested settlement date (YYYY-MM-DD)")
    parser.add_argument("--output", type=Path, default=None, help="Write the file to this path")
    parser.add_argument("--bucket", default=None, help="Upload to this S3 bucket")
    parser.add_argument("--endpoint-url", default=None, help="S3 endpoint (e.g. http://localhost:4566)")
    parser.add_argument("--region", default="us-east-1", help="AWS region")
    args = parser.parse_args()

    setup_logging("INFO")
    generated = build_sample(args.entries, Direction(args.direction), args.effective_date)

    if args.output is not None:
        args.output.write_bytes(generated.encode())
        print(f"Wrote {generated.filename} to {args.output}")
    if args.bucket:
        store = S3FileStore(bucket=args.bucket, region=args.region, endpoint_url=args.endpoint_url)
        store.save(generated.filename, generated)
        print(f"Uploaded {generated.filename} to s3://{args.bucket}")
    if args.output is None and not args.bucket:
        print(generated.content)

    result = NachaFileEncoder.validate(generated.content)
    print(f"Structural check: {'valid' if result.valid else 'INVALID'}")
    for error in result.errors:
        print(f"  {error}")


if __name__ == "__main__":
    main()
