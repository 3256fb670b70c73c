"""Tests for positions, ranges and offset conversion."""

from __future__ import annotations

import pytest

from mythic_analyzer.document import MythicDoc
from mythic_analyzer.models.positions import Position, Range, pos_cmp, pos_is_in
from tests.conftest import TEST_URI


def _range(start_line: int, start_char: int, end_line: int, end_char: int) -> Range:
    return Range(
        start=Position(line=start_line, character=start_char),
        end=Position(line=end_line, character=end_char),
    )


class TestPosIsIn:
    @pytest.mark.parametrize(
        ("pos", "range_", "expected"),
        [
            (Position(line=0, character=0), _range(1, 0, 1, 0), False),
            (Position(line=1, character=0), _range(1, 1, 1, 1), False),
            (Position(line=1, character=1), _range(1, 1, 1, 1), True),
            (Position(line=1, character=2), _range(1, 1, 1, 3), True),
            (Position(line=1, character=4), _range(1, 1, 1, 3), False),
            (Position(line=2, character=0), _range(1, 0, 1, 0), False),
            (Position(line=1, character=0), _range(1, 0, 1, 0), True),
            (Position(line=1, character=0), _range(1, 0, 1, 1), True),
        ],
    )
    def test_single_line_ranges(self, pos: Position, range_: Range, expected: bool) -> None:
        assert pos_is_in(pos, range_) is expected

    def test_multi_line_range(self) -> None:
        range_ = _range(1, 5, 3, 2)
        assert pos_is_in(Position(line=2, character=100), range_)
        assert pos_is_in(Position(line=1, character=5), range_)
        assert not pos_is_in(Position(line=1, character=4), range_)
        assert pos_is_in(Position(line=3, character=2), range_)
        assert not pos_is_in(Position(line=3, character=3), range_)


class TestPosCmp:
    def test_ordering(self) -> None:
        assert pos_cmp(Position(line=0, character=5), Position(line=1, character=0)) < 0
        assert pos_cmp(Position(line=2, character=0), Position(line=1, character=9)) > 0
        assert pos_cmp(Position(line=1, character=3), Position(line=1, character=3)) == 0
        assert pos_cmp(Position(line=1, character=2), Position(line=1, character=3)) < 0


class TestOffsetConversion:
    SOURCE = "a: 1\n\nlonger_key: value\r\nlast"

    def test_round_trip_every_offset(self) -> None:
        doc = MythicDoc(self.SOURCE, TEST_URI)
        for offset in range(len(self.SOURCE) + 1):
            assert doc.position_to_offset(doc.offset_to_position(offset)) == offset

    def test_offset_to_position(self) -> None:
        doc = MythicDoc(self.SOURCE, TEST_URI)
        assert doc.offset_to_position(0) == Position(line=0, character=0)
        assert doc.offset_to_position(4) == Position(line=0, character=4)
        assert doc.offset_to_position(5) == Position(line=1, character=0)
        assert doc.offset_to_position(6) == Position(line=2, character=0)
        assert doc.offset_to_position(len(self.SOURCE)) == Position(line=3, character=4)

    def test_out_of_range_is_clamped(self) -> None:
        doc = MythicDoc(self.SOURCE, TEST_URI)
        assert doc.offset_to_position(-3) == Position(line=0, character=0)
        assert doc.position_to_offset(Position(line=0, character=99)) == 4
        assert doc.position_to_offset(Position(line=99, character=0)) == len(self.SOURCE)

    def test_empty_document(self) -> None:
        doc = MythicDoc("", TEST_URI)
        assert doc.line_count == 1
        assert doc.offset_to_position(0) == Position(line=0, character=0)
        assert doc.position_to_offset(Position(line=0, character=0)) == 0

    def test_line_text_and_whitespace_scan(self) -> None:
        doc = MythicDoc(self.SOURCE, TEST_URI)
        assert doc.line_text(0) == "a: 1"
        assert doc.line_text(1) == ""
        assert doc.line_text(2) == "longer_key: value\r"
        assert doc.line_text(7) == ""
        assert doc.next_non_whitespace(4) == 6
        assert doc.next_non_whitespace(len(self.SOURCE)) == len(self.SOURCE)
