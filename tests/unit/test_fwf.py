"""Tests for fixed-width column inference and parsing."""

from __future__ import annotations

import pytest

from tabscope.core.errors import ReaderError
from tabscope.domains.readers.app.fwf import (
    infer_widths,
    parse_fwf,
    parse_widths,
    shared_whitespace,
    split_line,
    widths_from_positions,
)


class TestInferWidths:
    def test_separates_padded_fields(self):
        lines = ["AAA  BBB CC", "A    B   CC"]
        assert shared_whitespace(lines) == [3, 4, 8, 11]
        assert infer_widths(lines) == [4, 3, 2]

    def test_inferred_widths_recover_fields(self):
        lines = ["AAA  BBB CC", "A    B   CC"]
        widths = infer_widths(lines)
        assert split_line(lines[0], widths) == ["AAA", "BBB", "CC"]
        assert split_line(lines[1], widths) == ["A", "B", "CC"]

    def test_single_space_gap_is_one_separator(self):
        lines = ["ab cd", "xy zw"]
        widths = infer_widths(lines)
        assert widths == [2, 2]
        assert split_line(lines[0], widths) == ["ab", "cd"]

    def test_no_shared_whitespace_is_one_column(self):
        assert infer_widths(["abc def", "abcdefgh"]) == [8]

    def test_blank_lines_are_ignored(self):
        assert infer_widths(["ab cd", "", "   ", "xy zw"]) == [2, 2]

    def test_empty_input(self):
        assert infer_widths([]) == []
        assert widths_from_positions([]) == []


class TestParseWidths:
    def test_parses_list(self):
        assert parse_widths("3,4, 5") == [3, 4, 5]

    @pytest.mark.parametrize("text", ["", "3,,4", "a", "3,-1"])
    def test_rejects_bad_lists(self, text):
        with pytest.raises(ReaderError):
            parse_widths(text)


class TestParseFwf:
    def test_header_and_rows(self):
        lines = [
            "name   age city",
            "alice  30  oslo",
            "bob    4   lima",
        ]
        df = parse_fwf(lines)
        assert df.columns == ["name", "age", "city"]
        assert df.rows() == [("alice", "30", "oslo"), ("bob", "4", "lima")]

    def test_without_header(self):
        df = parse_fwf(["ab cd", "xy zw"], has_header=False)
        assert df.columns == ["column_1", "column_2"]
        assert df.height == 2

    def test_explicit_widths_and_separator_length(self):
        df = parse_fwf(["aa||bbb", "cc||ddd"], [2, 3], has_header=False, separator_length=2)
        assert df.rows() == [("aa", "bbb"), ("cc", "ddd")]

    def test_flexible_last_field(self):
        lines = ["k v", "a long value"]
        assert parse_fwf(lines, [1, 1])["v"].to_list() == ["long value"]
        assert parse_fwf(lines, [1, 1], flexible_width=False)["v"].to_list() == ["l"]

    def test_duplicate_headers_never_collide(self):
        df = parse_fwf(["a a a_1", "1 2 3"], [1, 1, 3])
        assert df.columns == ["a", "a_1", "a_1_1"]
        assert df.row(0) == ("1", "2", "3")
