"""Structural smoke test for NACHA file content.

This is not full NACHA validation: a passing result says the file is shaped
like a NACHA file, not that a bank will accept it.
"""

from __future__ import annotations

from achforge.models.outputs import ValidationResult
from achforge.nacha.fields import RECORD_LENGTH

MIN_RECORDS = 4


def validate_file(content: str) -> ValidationResult:
    """Check record count, leading record types, and line widths.

    Defects are collected and returned; this never raises.
    """
    errors: list[str] = []
    lines = content.split("\n")

    if len(lines) < MIN_RECORDS:
        errors.append(
            "File must have at least 4 records (header, batch header, batch control, file control)"
        )
    if lines and not lines[0].startswith("1"):
        errors.append("First record must be File Header (type 1)")
    if len(lines) > 1 and not lines[1].startswith("5"):
        errors.append("Second record must be Batch Header (type 5)")

    # The final line is exempt so a trailing newline does not count as a defect.
    for index, line in enumerate(lines[:-1]):
        if len(line) != RECORD_LENGTH:
            errors.append(f"Line {index + 1} must be exactly {RECORD_LENGTH} characters")

    return ValidationResult(valid=not errors, errors=errors)
