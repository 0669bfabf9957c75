"""achforge exception hierarchy."""

from __future__ import annotations


class AchForgeError(Exception):
    """Base exception for all achforge errors."""


class InvalidBatchError(AchForgeError):
    """A file generation request violates the encoder's input contract."""


class CalendarError(AchForgeError):
    """Invalid input to a business-day or holiday computation."""


class RecordLayoutError(AchForgeError):
    """A fixed-width record layout or rendered line has the wrong width."""

    def __init__(self, record: str, expected: int, actual: int) -> None:
        self.record = record
        self.expected = expected
        self.actual = actual
        super().__init__(f"{record} record is {actual} characters wide, expected {expected}")


class SequenceStoreError(AchForgeError):
    """File sequence counter backend operation failed."""


class FileStoreError(AchForgeError):
    """Generated file storage operation failed."""
