"""Tests for the declarative fixed-width field tables."""

from __future__ import annotations

import pytest

from achforge.core.exceptions import RecordLayoutError
from achforge.nacha.fields import (
    RECORD_LENGTH,
    RecordLayout,
    alpha,
    blank,
    constant,
    numeric,
    right_aligned,
)
from achforge.nacha.records import LAYOUTS


class TestFieldFormat:
    def test_alpha_pads_right_with_spaces(self):
        assert alpha("name", 6, lambda c: c).format("AB") == "AB    "

    def test_numeric_pads_left_with_zeros(self):
        assert numeric("amount", 6, lambda c: c).format(42) == "000042"

    def test_right_aligned_pads_left_with_spaces(self):
        assert right_aligned("acct", 6, lambda c: c).format("123") == "   123"

    def test_overlong_value_keeps_leftmost_characters(self):
        assert alpha("name", 4, lambda c: c).format("ABCDEFG") == "ABCD"
        assert right_aligned("acct", 4, lambda c: c).format("1234567") == "1234"

    def test_control_characters_become_spaces(self):
        assert alpha("name", 10, lambda c: c).format("JOHN\nDOE") == "JOHN DOE  "
        assert right_aligned("acct", 6, lambda c: c).format("12\r\x003") == " 12  3"

    def test_custom_pad_character(self):
        assert right_aligned("modifier", 1, lambda c: c, pad="A").format("") == "A"

    def test_constant_width_is_literal_length(self):
        field = constant("record_size", "094")
        assert field.width == 3
        assert field.format(field.source(None)) == "094"


class TestRecordLayout:
    def test_rejects_layout_not_94_wide(self):
        with pytest.raises(RecordLayoutError) as exc_info:
            RecordLayout(name="short", specs=(constant("record_type", "1"), blank("rest", 10)))
        assert exc_info.value.actual == 11

    def test_every_nacha_layout_is_94_wide(self):
        for layout in LAYOUTS.values():
            assert layout.width == RECORD_LENGTH

    def test_render_and_parse(self):
        layout = RecordLayout(
            name="demo",
            specs=(
                constant("record_type", "7"),
                alpha("text", 20, lambda c: c["text"]),
                numeric("amount", 10, lambda c: c["amount"]),
                blank("reserved", 63),
            ),
        )
        line = layout.render({"text": "hello", "amount": 35050})
        assert len(line) == RECORD_LENGTH
        parsed = layout.parse(line)
        assert parsed["record_type"] == "7"
        assert parsed["text"].rstrip() == "hello"
        assert int(parsed["amount"]) == 35050

    def test_parse_rejects_wrong_width(self):
        with pytest.raises(RecordLayoutError):
            LAYOUTS["1"].parse("1" * 93)

    def test_offsets_are_contiguous(self):
        offsets = list(LAYOUTS["6"].offsets().values())
        assert offsets[0][0] == 0
        assert offsets[-1][1] == RECORD_LENGTH
        for (_, end), (start, _) in zip(offsets, offsets[1:]):
            assert end == start
