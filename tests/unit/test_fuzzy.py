"""Tests for subsequence fuzzy matching."""

from __future__ import annotations

import polars as pl
import pytest

from tabscope.domains.search.app.fuzzy import filter_suggestions, matches
from tabscope.domains.search.app.search import row_mask, search_rows


@pytest.mark.parametrize("candidate", ["", "abc", "anything at all", "ÄÖÜ"])
def test_empty_query_matches_everything(candidate):
    assert matches(candidate, "")


def test_subsequence_in_order():
    assert matches("abc", "ac")
    assert matches("abc", "abc")
    assert not matches("abc", "ba")
    assert not matches("abc", "abcd")


def test_case_insensitive():
    assert matches("Hello World", "hw")
    assert matches("straße", "STRASSE")
    assert matches("STRASSE", "strasse")


def test_null_never_matches_non_empty_query():
    assert not matches(None, "a")
    assert matches(None, "")


def test_long_candidate_is_scanned_fully():
    assert matches("x" * 10_000 + "yz", "yz")


def test_filter_suggestions_keeps_order_and_limit():
    history = ["select a", "filter b", "select c", "order d"]
    assert filter_suggestions("sl", history) == ["select a", "select c"]
    assert filter_suggestions("", history, limit=2) == ["select a", "filter b"]


class TestRowSearch:
    def test_row_matches_when_any_cell_matches(self):
        df = pl.DataFrame({"name": ["alice", "bob", None], "city": ["oslo", "lima", "bern"]})
        assert row_mask(df, "li") == [True, True, False]
        assert search_rows(df, "bn")["city"].to_list() == ["bern"]

    def test_empty_query_keeps_all_rows(self):
        df = pl.DataFrame({"a": [1, 2, 3]})
        assert search_rows(df, "").height == 3
