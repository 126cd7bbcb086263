"""Tests for the viewport selection and window model."""

from __future__ import annotations

import random

import pytest

from tabscope.domains.tabular.domain.viewport import Viewport


def _check(vp: Viewport) -> None:
    if vp.total_rows > 0:
        assert 0 <= vp.selected < vp.total_rows
    else:
        assert vp.selected == 0
    if vp.visible_rows > 0:
        assert vp.offset <= vp.selected <= vp.offset + vp.visible_rows - 1


class TestViewportSelection:
    def test_select_clamps_into_range(self):
        vp = Viewport()
        vp.reset(10)
        vp.set_page_size(4)
        vp.select(42)
        assert vp.selected == 9
        vp.select(-3)
        assert vp.selected == 0

    def test_relative_moves_saturate(self):
        vp = Viewport()
        vp.reset(10)
        vp.set_page_size(4)
        vp.select(0)
        vp.select_relative(-5)
        assert vp.selected == 0
        vp.select_relative(10**12)
        assert vp.selected == 9

    def test_empty_table_selects_nothing(self):
        vp = Viewport()
        vp.reset(0)
        vp.set_page_size(5)
        vp.select_last()
        vp.select_down(3)
        vp.select_random()
        assert (vp.selected, vp.offset) == (0, 0)
        assert vp.visible_window() == (0, 0)

    def test_offset_follows_selection(self):
        vp = Viewport()
        vp.reset(100)
        vp.set_page_size(10)
        vp.select(25)
        assert vp.offset == 16
        vp.select(20)
        assert vp.offset == 16
        vp.select(3)
        assert vp.offset == 3
        assert vp.visible_window() == (3, 10)

    def test_visible_window_is_cut_at_the_end(self):
        vp = Viewport()
        vp.reset(7)
        vp.set_page_size(5)
        vp.select_last()
        assert vp.visible_window() == (2, 5)

    def test_page_sizes(self):
        vp = Viewport()
        vp.reset(10)
        vp.set_page_size(5)
        assert vp.half_page == 2
        assert vp.full_page == 5
        vp.set_page_size(1)
        assert vp.half_page == 1
        vp.set_page_size(0)
        assert vp.full_page == 1

    def test_random_stays_in_range(self):
        vp = Viewport(rng=random.Random(7))
        vp.reset(3)
        vp.set_page_size(2)
        for _ in range(50):
            vp.select_random()
            _check(vp)

    def test_reset_returns_to_origin(self):
        vp = Viewport()
        vp.reset(50, 4)
        vp.set_page_size(5)
        vp.select(40)
        vp.scroll_end()
        vp.reset(20, 2)
        assert (vp.selected, vp.offset, vp.column_offset) == (0, 0, 0)
        assert vp.total_rows == 20


class TestViewportInvariants:
    @pytest.mark.parametrize("total", [0, 1, 2, 5, 13, 100])
    @pytest.mark.parametrize("page", [0, 1, 3, 10])
    def test_invariants_hold_for_random_walks(self, total, page):
        rng = random.Random(total * 31 + page)
        vp = Viewport(rng=rng)
        vp.reset(total)
        vp.set_page_size(page)
        ops = [
            lambda: vp.select(rng.randint(-5, total + 5)),
            lambda: vp.select_up(rng.randint(0, 20)),
            lambda: vp.select_down(rng.randint(0, 20)),
            lambda: vp.select_up(vp.half_page),
            lambda: vp.select_down(vp.full_page),
            vp.select_first,
            vp.select_last,
            vp.select_random,
            lambda: vp.set_page_size(rng.randint(0, 12)),
        ]
        for _ in range(200):
            rng.choice(ops)()
            _check(vp)


class TestColumnScroll:
    def test_column_offset_is_clamped(self):
        vp = Viewport()
        vp.reset(1, 3)
        vp.scroll_left()
        assert vp.column_offset == 0
        for _ in range(5):
            vp.scroll_right()
        assert vp.column_offset == 2
        vp.scroll_start()
        assert vp.column_offset == 0
        vp.scroll_end()
        assert vp.column_offset == 2
