"""Row, column, sheet and info-modal actions on the active tab."""

from __future__ import annotations

from tabscope.shared.app.protocols import SessionProtocol


class TableNavigationMixin:
    """Actions that move the selection or scroll the active tab."""

    def action_table_goto(self: SessionProtocol, index: int) -> None:
        self.require_tab().move(lambda vp: vp.select(index))

    def action_table_go_up(self: SessionProtocol, n: int = 1) -> None:
        self.require_tab().move(lambda vp: vp.select_up(n))

    def action_table_go_down(self: SessionProtocol, n: int = 1) -> None:
        self.require_tab().move(lambda vp: vp.select_down(n))

    def action_table_go_up_half_page(self: SessionProtocol) -> None:
        self.require_tab().move(lambda vp: vp.select_up(vp.half_page))

    def action_table_go_down_half_page(self: SessionProtocol) -> None:
        self.require_tab().move(lambda vp: vp.select_down(vp.half_page))

    def action_table_go_up_full_page(self: SessionProtocol) -> None:
        self.require_tab().move(lambda vp: vp.select_up(vp.full_page))

    def action_table_go_down_full_page(self: SessionProtocol) -> None:
        self.require_tab().move(lambda vp: vp.select_down(vp.full_page))

    def action_table_goto_first(self: SessionProtocol) -> None:
        self.require_tab().move(lambda vp: vp.select_first())

    def action_table_goto_last(self: SessionProtocol) -> None:
        self.require_tab().move(lambda vp: vp.select_last())

    def action_table_goto_random(self: SessionProtocol) -> None:
        self.require_tab().move(lambda vp: vp.select_random())

    def action_table_scroll_left(self: SessionProtocol) -> None:
        self.require_tab().viewport.scroll_left()

    def action_table_scroll_right(self: SessionProtocol) -> None:
        self.require_tab().viewport.scroll_right()

    def action_table_scroll_start(self: SessionProtocol) -> None:
        self.require_tab().viewport.scroll_start()

    def action_table_scroll_end(self: SessionProtocol) -> None:
        self.require_tab().viewport.scroll_end()

    # Modals

    def action_sheet_show(self: SessionProtocol) -> None:
        self.require_tab().show_modal("sheet")

    def action_info_show(self: SessionProtocol) -> None:
        self.require_tab().show_modal("info")

    def action_table_dismiss_modal(self: SessionProtocol) -> None:
        self.require_tab().dismiss_modal()

    def action_table_toggle_expansion(self: SessionProtocol) -> None:
        self.require_tab().toggle_expansion()

    def action_sheet_scroll_up(self: SessionProtocol) -> None:
        tab = self.require_tab()
        tab.require_modal("sheet")
        tab.sheet_scroll.up()

    def action_sheet_scroll_down(self: SessionProtocol) -> None:
        tab = self.require_tab()
        tab.require_modal("sheet")
        tab.sheet_scroll.down()

    def action_info_scroll_up(self: SessionProtocol) -> None:
        tab = self.require_tab()
        tab.require_modal("info")
        tab.info_scroll.up()

    def action_info_scroll_down(self: SessionProtocol) -> None:
        tab = self.require_tab()
        tab.require_modal("info")
        tab.info_scroll.down()
