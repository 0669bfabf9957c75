"""Declarative fixed-width field tables for NACHA records.

Every record type is a ``RecordLayout``: an ordered tuple of ``FieldSpec``
entries (name, width, justification, pad character, source accessor). One
routine, ``RecordLayout.render``, walks the table for every record type, and
each layout checks at definition time that its widths add up to 94.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, model_validator

from achforge.core.exceptions import RecordLayoutError

RECORD_LENGTH = 94

Source = Callable[[Any], object]


def printable_ascii(text: str) -> str:
    """Replace every character outside printable ASCII (0x20-0x7E) with a space."""
    return "".join(ch if " " <= ch <= "~" else " " for ch in text)


class Justify(StrEnum):
    LEFT = "left"
    RIGHT = "right"


class FieldSpec(BaseModel):
    """A single fixed-width field."""

    model_config = {"frozen": True}

    name: str
    width: int
    justify: Justify = Justify.LEFT
    pad: str = " "
    source: Source

    def format(self, value: object) -> str:
        """Pad ``value`` to the field width, then cut it to the width.

        Control and non-ASCII characters become spaces, so a value can never
        break the record onto a second line. Overlong values keep their
        leftmost characters regardless of justification.
        """
        text = printable_ascii(str(value))
        if self.justify is Justify.RIGHT:
            text = text.rjust(self.width, self.pad)
        else:
            text = text.ljust(self.width, self.pad)
        return text[: self.width]


def constant(name: str, value: str) -> FieldSpec:
    """Literal field whose width is the literal's length."""
    return FieldSpec(name=name, width=len(value), source=lambda _ctx: value)


def alpha(name: str, width: int, source: Source) -> FieldSpec:
    """Alphanumeric field: left-justified, space-padded."""
    return FieldSpec(name=name, width=width, source=source)


def numeric(name: str, width: int, source: Source) -> FieldSpec:
    """Numeric field: right-justified, zero-padded."""
    return FieldSpec(name=name, width=width, justify=Justify.RIGHT, pad="0", source=source)


def right_aligned(name: str, width: int, source: Source, pad: str = " ") -> FieldSpec:
    """Right-justified field with a non-zero pad (routing numbers, account numbers)."""
    return FieldSpec(name=name, width=width, justify=Justify.RIGHT, pad=pad, source=source)


def blank(name: str, width: int) -> FieldSpec:
    """Reserved field filled with spaces."""
    return FieldSpec(name=name, width=width, source=lambda _ctx: "")


class RecordLayout(BaseModel):
    """Ordered field table for one NACHA record type."""

    model_config = {"frozen": True}

    name: str
    specs: tuple[FieldSpec, ...]

    @model_validator(mode="after")
    def check_width(self) -> RecordLayout:
        if self.width != RECORD_LENGTH:
            raise RecordLayoutError(self.name, RECORD_LENGTH, self.width)
        names = [f.name for f in self.specs]
        if len(names) != len(set(names)):
            raise ValueError(f"{self.name} layout has duplicate field names")
        return self

    @property
    def width(self) -> int:
        return sum(f.width for f in self.specs)

    def render(self, ctx: Any) -> str:
        """Render one 94-character line from ``ctx`` via each field's accessor."""
        line = "".join(f.format(f.source(ctx)) for f in self.specs)
        if len(line) != RECORD_LENGTH:
            raise RecordLayoutError(self.name, RECORD_LENGTH, len(line))
        return line

    def offsets(self) -> dict[str, tuple[int, int]]:
        """Zero-based ``(start, end)`` slice bounds of every field."""
        bounds: dict[str, tuple[int, int]] = {}
        start = 0
        for f in self.specs:
            bounds[f.name] = (start, start + f.width)
            start += f.width
        return bounds

    def parse(self, line: str) -> dict[str, str]:
        """Slice a rendered line back into its raw named fields."""
        if len(line) != RECORD_LENGTH:
            raise RecordLayoutError(self.name, RECORD_LENGTH, len(line))
        return {name: line[start:end] for name, (start, end) in self.offsets().items()}
