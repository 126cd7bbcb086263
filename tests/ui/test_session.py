"""Session tests: key presses through resolution to state changes."""

from __future__ import annotations

import polars as pl
import pytest

from tabscope.core.actions import Action
from tabscope.core.binding_contexts import Context
from tabscope.core.keymap import DefaultKeymapProvider, KeyEvent
from tabscope.domains.shell.app.session import Session
from tabscope.shared.core.debug_events import get_debug_events


def press(session: Session, *keys: str) -> None:
    for name in keys:
        session.handle_key(KeyEvent.parse(name))


def type_text(session: Session, text: str) -> None:
    for char in text:
        session.handle_key(KeyEvent(code=char, character=char))


def selected(session: Session) -> int:
    return session.require_tab().viewport.selected


def test_every_bound_action_has_a_handler():
    for binding in DefaultKeymapProvider().get_bindings():
        assert callable(getattr(Session, f"action_{binding.action.name}", None)), binding.action.name


class TestNavigation:
    def test_last_then_full_page_up(self, session):
        press(session, "G")
        assert selected(session) == 9
        press(session, "pageup")
        assert selected(session) == 4

    def test_last_then_half_page_up(self, session):
        press(session, "G", "ctrl+u")
        assert selected(session) == 7

    def test_row_moves_saturate(self, session):
        press(session, "k", "k")
        assert selected(session) == 0
        press(session, *["j"] * 30)
        assert selected(session) == 9

    def test_offset_keeps_selection_visible(self, session):
        press(session, "ctrl+f", "ctrl+f")
        viewport = session.require_tab().viewport
        assert viewport.selected == 9
        assert viewport.offset == 5

    def test_first_and_random(self, session):
        press(session, "G", "g")
        assert selected(session) == 0
        press(session, "R")
        assert 0 <= selected(session) < 10

    def test_column_scroll(self, session):
        press(session, "l", "l", "l")
        assert session.require_tab().viewport.column_offset == 1
        press(session, "underscore")
        assert session.require_tab().viewport.column_offset == 0
        press(session, "dollar_sign")
        assert session.require_tab().viewport.column_offset == 1


class TestSheet:
    def test_enter_opens_sheet_and_escape_closes(self, session):
        press(session, "enter")
        assert session.context() is Context.SHEET
        press(session, "escape")
        assert session.context() is Context.TABLE

    def test_row_change_resets_sheet_scroll(self, session):
        press(session, "enter")
        tab = session.require_tab()
        tab.sheet_scroll.adjust(total_lines=20, viewport_height=3)
        press(session, "J", "J")
        assert tab.sheet_scroll.line_offset == 2
        press(session, "j")
        assert selected(session) == 1
        assert tab.sheet_scroll.line_offset == 0

    def test_sheet_scroll_outside_sheet_is_mode_error(self, session):
        session.invoke(Action("sheet_scroll_down"))
        assert session.error is not None
        assert session.context() is Context.ERROR


class TestPalette:
    def test_digit_opens_goto_prefilled(self, session):
        press(session, "4")
        assert session.context() is Context.COMMAND
        assert session.palette.text == "goto 4"
        press(session, "enter")
        assert session.palette is None
        assert selected(session) == 3
        assert session.history.recent() == ["goto 4"]

    def test_typing_and_editing(self, session):
        press(session, "colon")
        type_text(session, "godwn 22")
        press(session, "backspace", "left", "left", "left", "left", "o")
        assert session.palette.text == "godown 2"
        press(session, "enter")
        assert selected(session) == 2

    def test_escape_cancels_without_history(self, session):
        press(session, "colon")
        type_text(session, "goto 9")
        press(session, "escape")
        assert session.palette is None
        assert selected(session) == 0
        assert len(session.history) == 0

    def test_parse_failure_leaves_history_unchanged(self, session):
        press(session, "colon")
        type_text(session, "goto x")
        press(session, "enter")
        assert session.context() is Context.ERROR
        assert len(session.history) == 0

    def test_unknown_command_is_error(self, session):
        press(session, "colon")
        type_text(session, "nope")
        press(session, "enter")
        assert "nope" in session.error

    def test_empty_commit_is_ignored(self, session):
        press(session, "colon", "enter")
        assert session.palette is None
        assert session.error is None
        assert len(session.history) == 0

    def test_suggestion_selection(self, session):
        session.history.push("goto 7")
        session.history.push("goup 1")
        press(session, "colon")
        type_text(session, "gt")
        press(session, "down", "enter")
        assert session.palette.text == "goto 7"
        press(session, "enter")
        assert selected(session) == 6

    def test_escape_clears_selection_first(self, session):
        session.history.push("goto 2")
        press(session, "colon", "down", "escape")
        assert session.palette is not None
        assert session.palette.selected is None
        press(session, "escape")
        assert session.palette is None


class TestErrors:
    def test_any_key_dismisses(self, session):
        session.error = "boom"
        press(session, "j")
        assert session.error is None
        assert selected(session) == 0

    def test_colon_dismisses_and_opens_palette(self, session):
        session.error = "boom"
        press(session, "colon")
        assert session.error is None
        assert session.context() is Context.COMMAND

    def test_engine_error_surfaces(self, session):
        press(session, "colon")
        type_text(session, "Q SELECT * FROM nowhere")
        press(session, "enter")
        assert session.context() is Context.ERROR
        assert session.history.recent() == ["Q SELECT * FROM nowhere"]


class TestQueries:
    def _run(self, session: Session, line: str) -> None:
        press(session, "colon")
        type_text(session, line)
        press(session, "enter")
        assert session.error is None, session.error

    def test_filter_replaces_table_and_resets_viewport(self, session):
        press(session, "G")
        self._run(session, "F n >= 5")
        tab = session.require_tab()
        assert tab.frame["n"].to_list() == [5, 6, 7, 8, 9]
        assert (tab.viewport.selected, tab.viewport.offset) == (0, 0)

    def test_select_order_and_reset(self, session):
        self._run(session, "S n")
        assert session.require_tab().columns == ["n"]
        self._run(session, "O n DESC")
        assert session.require_tab().frame["n"].to_list()[0] == 9
        self._run(session, "reset")
        assert session.require_tab().columns == ["n", "label"]
        press(session, "ctrl+r")
        assert session.require_tab().frame.height == 10

    def test_query_uses_registered_file_tables(self, session):
        self._run(session, "Q SELECT count(*) AS c FROM numbers")
        assert session.require_tab().frame["c"].to_list() == [10]

    def test_new_tab_query(self, session):
        self._run(session, "tabn SELECT 1 AS one")
        assert len(session.tabs) == 2
        assert session.require_tab().frame["one"].to_list() == [1]
        press(session, "H")
        assert session.require_tab().name == "numbers"

    def test_goto_and_relative(self, session):
        self._run(session, "goto 10")
        assert selected(session) == 9
        self._run(session, "goup 4")
        assert selected(session) == 5


class TestSearch:
    def test_search_filters_and_commit_keeps_rows(self, session):
        press(session, "slash")
        assert session.context() is Context.SEARCH
        type_text(session, "w7")
        assert session.require_tab().frame["n"].to_list() == [7]
        press(session, "enter")
        assert session.context() is Context.TABLE
        assert session.require_tab().frame.height == 1

    def test_rollback_restores_rows(self, session):
        press(session, "slash")
        type_text(session, "row 3")
        assert session.require_tab().frame.height == 1
        press(session, "escape")
        assert session.require_tab().frame.height == 10


class TestTabs:
    def test_q_closes_tab_then_quits(self, session, numbers):
        session.add_table("more", numbers)
        press(session, "q")
        assert len(session.tabs) == 1
        assert not session.quit_requested
        press(session, "q")
        assert session.quit_requested

    def test_side_panel_selects_tab(self, session, numbers):
        session.add_table("second", numbers)
        press(session, "t")
        assert session.context() is Context.TAB_SIDE_PANEL
        press(session, "k", "enter")
        assert session.require_tab().name == "numbers"
        assert session.side_panel is None

    def test_switching_tabs_restarts_selection(self, session, numbers):
        session.add_table("second", numbers)
        press(session, "G", "H")
        assert session.require_tab().name == "numbers"
        press(session, "L")
        assert selected(session) == 0

    def test_add_table_records_event(self, session, numbers):
        session.add_table("orders", numbers)
        events = [event for event in get_debug_events() if event.name == "tab.add"]
        assert events[-1].data == {"tab": "orders", "rows": 10, "columns": 2}
        assert "orders" in session.engine.tables()

    def test_closing_file_tab_unregisters_table(self, session, numbers):
        session.add_table("orders", numbers)
        press(session, "q")
        assert "orders" not in session.engine.tables()
        assert "numbers" in session.engine.tables()

    def test_table_stays_registered_while_another_tab_shows_it(self, session):
        session.invoke(Action("schema_show"))
        press(session, "enter")
        assert session.tabs.names() == ["numbers", "numbers"]
        press(session, "q")
        assert "numbers" in session.engine.tables()


class TestPlotsAndExpansion:
    def _run(self, session: Session, line: str) -> None:
        press(session, "colon")
        type_text(session, line)
        press(session, "enter")

    def test_histogram_opens_and_q_closes_only_the_plot(self, session):
        self._run(session, "histogram n 5")
        tab = session.require_tab()
        assert session.context() is Context.HISTOGRAM_PLOT
        assert tab.plot.counts == (2, 2, 2, 2, 2)
        press(session, "q")
        assert session.context() is Context.TABLE
        assert tab.plot is None
        assert len(session.tabs) == 1

    def test_scatter_of_text_column_is_error(self, session):
        self._run(session, "scatter n label")
        assert session.context() is Context.ERROR
        assert "not numeric" in session.error
        assert session.require_tab().plot is None

    def test_e_toggles_expanded_cells(self, session):
        press(session, "e")
        assert session.require_tab().expanded
        press(session, "e")
        assert not session.require_tab().expanded

    def test_reset_without_original_is_mode_error(self, session):
        session.require_tab().original = None
        press(session, "ctrl+r")
        assert session.context() is Context.ERROR


class TestSchemaAndInfo:
    def test_schema_opens_registered_table(self, session):
        session.invoke(Action("schema_show"))
        assert session.context() is Context.SCHEMA
        press(session, "enter")
        assert session.schema is None
        assert len(session.tabs) == 2
        assert session.require_tab().name == "numbers"

    def test_info_modal_scrolls(self, session):
        press(session, "i")
        assert session.context() is Context.DATA_FRAME_INFO
        tab = session.require_tab()
        tab.info_scroll.adjust(total_lines=2, viewport_height=1)
        press(session, "j")
        assert tab.info_scroll.line_offset == 1
        press(session, "q")
        assert session.context() is Context.TABLE


class TestDebugCommand:
    def test_list_opens_event_tab(self, session):
        press(session, "colon")
        type_text(session, "debug list")
        press(session, "enter")
        tab = session.require_tab()
        assert tab.name == "debug events"
        assert tab.columns == ["Time", "Category", "Event", "Details"]
        assert tab.frame.height > 0

    def test_on_writes_log(self, session, runtime):
        session.invoke(Action.of("debug", "on"))
        session.invoke(Action("table_goto_last"))
        assert runtime.debug_log_path.exists()
        assert "enabled" in session.status


class TestEmptySession:
    def test_no_tab_context_and_errors(self, runtime):
        session = Session(runtime)
        assert session.context() is Context.EMPTY
        session.invoke(Action("table_reset"))
        assert session.error is not None

    def test_query_without_tab_opens_one(self, runtime):
        session = Session(runtime)
        session.invoke(Action.of("sql_query", "SELECT 42 AS answer"))
        assert session.require_tab().frame["answer"].to_list() == [42]


class TestHistoryPersistence:
    def test_history_saved_on_close(self, tmp_path):
        from dataclasses import replace

        from tabscope.shared.app.runtime import RuntimeConfig

        runtime = replace(RuntimeConfig.for_tests(tmp_path), persist_history=True)
        first = Session(runtime)
        first.add_table("t", pl.DataFrame({"a": [1, 2]}))
        first.invoke(Action.of("palette_show", "goto 2"))
        first.invoke(Action("palette_commit"))
        first.close()

        second = Session(runtime)
        assert second.history.recent() == ["goto 2"]
        second.close()


@pytest.mark.parametrize("key", ["z", "ctrl+z", "f9", "tab"])
def test_unbound_keys_change_nothing(session, key):
    press(session, key)
    assert session.error is None
    assert selected(session) == 0
