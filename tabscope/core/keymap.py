"""Core keymap definitions (UI-agnostic)."""

from __future__ import annotations

import unicodedata
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from tabscope.core.actions import Action
from tabscope.core.binding_contexts import Context
from tabscope.shared.core.debug_events import emit_debug_event

MODIFIERS = ("ctrl", "alt", "meta", "shift")

KEY_DISPLAY_OVERRIDES: dict[str, str] = {
    "colon": ":",
    "slash": "/",
    "underscore": "_",
    "dollar_sign": "$",
    "question_mark": "?",
    "space": "<space>",
    "escape": "<esc>",
    "enter": "<enter>",
    "delete": "<del>",
    "backspace": "<backspace>",
    "tab": "<tab>",
    "left": "<left>",
    "right": "<right>",
    "up": "<up>",
    "down": "<down>",
    "home": "<home>",
    "end": "<end>",
    "pageup": "<pgup>",
    "pagedown": "<pgdn>",
}


def format_key(key: str) -> str:
    """Format a key name for display in UI hints."""
    if key in KEY_DISPLAY_OVERRIDES:
        return KEY_DISPLAY_OVERRIDES[key]
    if key.startswith("ctrl+"):
        return f"^{key.split('+', 1)[1]}"
    if key.startswith("shift+"):
        return f"S-{format_key(key.split('+', 1)[1])}"
    return key


# Key names textual shortens from the unicode character name.
_KEY_CHARACTERS: dict[str, str] = {
    "space": " ",
    "slash": "/",
    "backslash": "\\",
    "at": "@",
    "minus": "-",
    "plus": "+",
    "underscore": "_",
}


def _character_for(code: str) -> str | None:
    """Printable character for a key name, using textual's naming scheme."""
    if len(code) == 1:
        return code
    if code in _KEY_CHARACTERS:
        return _KEY_CHARACTERS[code]
    try:
        char = unicodedata.lookup(code.replace("_", " ").upper())
    except KeyError:
        return None
    return char if char.isprintable() else None


@dataclass(frozen=True)
class KeyEvent:
    """A key press: key code, modifier set and the typed character if any."""

    code: str
    modifiers: frozenset[str] = frozenset()
    character: str | None = None

    @classmethod
    def parse(cls, key: str, character: str | None = None) -> KeyEvent:
        """Build an event from a textual key string such as ``ctrl+u``."""
        *prefix, code = key.split("+")
        modifiers = frozenset(part for part in prefix if part in MODIFIERS)
        if character is None and not (modifiers - {"shift"}):
            character = _character_for(code)
        return cls(code=code, modifiers=modifiers, character=character)

    @classmethod
    def from_textual(cls, key: str, character: str | None) -> KeyEvent:
        """Build an event from a textual ``Key`` message.

        Some terminals report ``shift+g`` for ``G``; letters are folded to
        their upper-case code without the shift modifier.
        """
        event = cls.parse(key, character)
        if "shift" in event.modifiers and len(event.code) == 1 and event.code.isalpha():
            upper = event.code.upper()
            return cls(code=upper, modifiers=event.modifiers - {"shift"}, character=upper)
        return event

    @property
    def key(self) -> str:
        ordered = [mod for mod in MODIFIERS if mod in self.modifiers]
        return "+".join([*ordered, self.code])

    @property
    def printable(self) -> str | None:
        """The typed character, unless a command modifier is held."""
        if self.modifiers & {"ctrl", "alt", "meta"}:
            return None
        if self.character and len(self.character) == 1 and self.character.isprintable():
            return self.character
        return None


class FallbackRule(str, Enum):
    """Catch-all rules consulted when no binding of a context matches."""

    GOTO_DIGIT = "goto_digit"
    PALETTE_INSERT = "palette_insert"
    SEARCH_INSERT = "search_insert"
    DISMISS_ERROR = "dismiss_error"

    def apply(self, event: KeyEvent) -> Action | None:
        char = event.printable
        if self is FallbackRule.GOTO_DIGIT:
            if char is not None and char in "123456789":
                return Action.of("palette_show", f"goto {char}")
            return None
        if self is FallbackRule.PALETTE_INSERT:
            return Action.of("palette_insert", char) if char is not None else None
        if self is FallbackRule.SEARCH_INSERT:
            return Action.of("search_insert", char) if char is not None else None
        return Action("dismiss_error")


@dataclass(frozen=True)
class KeyBindingDef:
    """Definition of a key binding within one context."""

    key: str  # textual key string, e.g. "ctrl+u", "G", "shift+left"
    action: Action
    context: Context
    primary: bool = True  # Primary key for display vs secondary aliases
    help: str = ""

    @property
    def event(self) -> KeyEvent:
        return KeyEvent.parse(self.key)


@dataclass(frozen=True)
class DisplayBinding:
    """A key hint as shown in the status line."""

    key: str
    label: str
    action: str


class KeymapProvider(ABC):
    """Abstract base class for keymap providers."""

    @abstractmethod
    def get_bindings(self) -> list[KeyBindingDef]:
        """Get all key binding definitions in registration order."""
        raise NotImplementedError

    @abstractmethod
    def get_fallbacks(self) -> dict[Context, FallbackRule]:
        """Get the fallback rule of every context that has one."""
        raise NotImplementedError

    def keys_for_action(self, action_name: str, *, include_secondary: bool = True) -> list[str]:
        """Get all keys for an action, primary first."""
        primary_keys: list[str] = []
        secondary_keys: list[str] = []
        seen: set[str] = set()
        for binding in self.get_bindings():
            if binding.action.name != action_name or binding.key in seen:
                continue
            seen.add(binding.key)
            if binding.primary:
                primary_keys.append(binding.key)
            elif include_secondary:
                secondary_keys.append(binding.key)
        return primary_keys + secondary_keys

    def action(self, action_name: str) -> str | None:
        """Get the primary key for an action."""
        keys = self.keys_for_action(action_name)
        return keys[0] if keys else None

    def bindings_for(self, context: Context) -> list[KeyBindingDef]:
        return [binding for binding in self.get_bindings() if binding.context == context]

    def display_bindings(self, context: Context) -> list[DisplayBinding]:
        """Key hints reachable in ``context``, nearest context first.

        A parent binding is hidden when a nearer context binds the same key or
        a nearer fallback rule consumes it.
        """
        fallbacks = self.get_fallbacks()
        hints: list[DisplayBinding] = []
        seen: set[str] = set()
        taken: set[str] = set()
        rules: list[FallbackRule] = []
        for ctx in context.chain():
            own = self.bindings_for(ctx)
            for binding in own:
                name = binding.action.name
                if not binding.primary or not binding.help or name in seen:
                    continue
                if binding.key in taken or any(rule.apply(binding.event) is not None for rule in rules):
                    continue
                seen.add(name)
                hints.append(DisplayBinding(key=format_key(binding.key), label=binding.help, action=name))
            taken.update(binding.key for binding in own)
            if ctx in fallbacks:
                rules.append(fallbacks[ctx])
        return hints


def _bind(context: Context, key: str, name: str, *args: object, primary: bool = True, help: str = "") -> KeyBindingDef:
    return KeyBindingDef(key, Action.of(name, *args), context, primary=primary, help=help)


class DefaultKeymapProvider(KeymapProvider):
    """Default vi-like keymap."""

    def __init__(self) -> None:
        self._bindings_cache: list[KeyBindingDef] | None = None
        self._emitted: bool = False

    def get_bindings(self) -> list[KeyBindingDef]:
        if self._bindings_cache is None:
            self._bindings_cache = self._build_bindings()
        if not self._emitted:
            for binding in self._bindings_cache:
                emit_debug_event(
                    "keybinding.register",
                    category="keybinding",
                    provider=self.__class__.__name__,
                    context=binding.context.value,
                    key=binding.key,
                    action=str(binding.action),
                )
            self._emitted = True
        return list(self._bindings_cache)

    def get_fallbacks(self) -> dict[Context, FallbackRule]:
        return {
            Context.ERROR: FallbackRule.DISMISS_ERROR,
            Context.TABLE: FallbackRule.GOTO_DIGIT,
            Context.COMMAND: FallbackRule.PALETTE_INSERT,
            Context.SEARCH: FallbackRule.SEARCH_INSERT,
        }

    def _build_bindings(self) -> list[KeyBindingDef]:
        E, T, S, C = Context.EMPTY, Context.TABLE, Context.SHEET, Context.COMMAND
        return [
            # Global
            _bind(E, "q", "tab_remove_or_quit", help="Close tab / quit"),
            _bind(E, "H", "tab_prev", help="Previous tab"),
            _bind(E, "L", "tab_next", help="Next tab"),
            _bind(E, "shift+left", "tab_prev", primary=False),
            _bind(E, "shift+right", "tab_next", primary=False),
            _bind(E, "colon", "palette_show", "", help="Command palette"),
            # Error popup
            _bind(Context.ERROR, "colon", "dismiss_error_and_show_palette", help="Command palette"),
            # Table
            _bind(T, "enter", "sheet_show", help="Show record"),
            _bind(T, "slash", "search_show", help="Fuzzy search"),
            _bind(T, "i", "info_show", help="Column info"),
            _bind(T, "t", "side_panel_show", help="Tab list"),
            _bind(T, "e", "table_toggle_expansion", help="Expand cells"),
            _bind(T, "k", "table_go_up", 1, help="Row up"),
            _bind(T, "up", "table_go_up", 1, primary=False),
            _bind(T, "j", "table_go_down", 1, help="Row down"),
            _bind(T, "down", "table_go_down", 1, primary=False),
            _bind(T, "h", "table_scroll_left", help="Column left"),
            _bind(T, "left", "table_scroll_left", primary=False),
            _bind(T, "l", "table_scroll_right", help="Column right"),
            _bind(T, "right", "table_scroll_right", primary=False),
            _bind(T, "ctrl+u", "table_go_up_half_page", help="Half page up"),
            _bind(T, "ctrl+d", "table_go_down_half_page", help="Half page down"),
            _bind(T, "ctrl+b", "table_go_up_full_page", help="Page up"),
            _bind(T, "ctrl+f", "table_go_down_full_page", help="Page down"),
            _bind(T, "pageup", "table_go_up_full_page", primary=False),
            _bind(T, "pagedown", "table_go_down_full_page", primary=False),
            _bind(T, "underscore", "table_scroll_start", help="First column"),
            _bind(T, "dollar_sign", "table_scroll_end", help="Last column"),
            _bind(T, "g", "table_goto_first", help="First row"),
            _bind(T, "home", "table_goto_first", primary=False),
            _bind(T, "G", "table_goto_last", help="Last row"),
            _bind(T, "end", "table_goto_last", primary=False),
            _bind(T, "R", "table_goto_random", help="Random row"),
            _bind(T, "ctrl+r", "table_reset", help="Reset table"),
            # Command palette
            _bind(C, "left", "palette_goto_prev"),
            _bind(C, "right", "palette_goto_next"),
            _bind(C, "home", "palette_goto_start"),
            _bind(C, "end", "palette_goto_end"),
            _bind(C, "backspace", "palette_delete_prev"),
            _bind(C, "delete", "palette_delete_next"),
            _bind(C, "up", "palette_select_previous", help="Previous"),
            _bind(C, "down", "palette_select_next", help="Next"),
            _bind(C, "ctrl+p", "palette_select_previous", primary=False),
            _bind(C, "ctrl+n", "palette_select_next", primary=False),
            _bind(C, "enter", "palette_insert_selected_or_commit", help="Run"),
            _bind(C, "escape", "palette_deselect_or_dismiss", help="Cancel"),
            # Sheet (record detail)
            _bind(S, "q", "table_dismiss_modal", help="Close record"),
            _bind(S, "escape", "table_dismiss_modal", primary=False),
            _bind(S, "K", "sheet_scroll_up", help="Scroll up"),
            _bind(S, "shift+up", "sheet_scroll_up", primary=False),
            _bind(S, "J", "sheet_scroll_down", help="Scroll down"),
            _bind(S, "shift+down", "sheet_scroll_down", primary=False),
            # Search bar
            _bind(Context.SEARCH, "left", "search_goto_prev"),
            _bind(Context.SEARCH, "right", "search_goto_next"),
            _bind(Context.SEARCH, "home", "search_goto_start"),
            _bind(Context.SEARCH, "end", "search_goto_end"),
            _bind(Context.SEARCH, "backspace", "search_delete_prev"),
            _bind(Context.SEARCH, "delete", "search_delete_next"),
            _bind(Context.SEARCH, "enter", "search_commit", help="Keep matches"),
            _bind(Context.SEARCH, "escape", "search_rollback", help="Cancel"),
            # Schema view
            _bind(Context.SCHEMA, "k", "schema_select_up", help="Up"),
            _bind(Context.SCHEMA, "up", "schema_select_up", primary=False),
            _bind(Context.SCHEMA, "j", "schema_select_down", help="Down"),
            _bind(Context.SCHEMA, "down", "schema_select_down", primary=False),
            _bind(Context.SCHEMA, "enter", "schema_open_table", help="Open table"),
            _bind(Context.SCHEMA, "q", "schema_dismiss", help="Close"),
            _bind(Context.SCHEMA, "escape", "schema_dismiss", primary=False),
            # Tab side panel
            _bind(Context.TAB_SIDE_PANEL, "k", "side_panel_up", help="Up"),
            _bind(Context.TAB_SIDE_PANEL, "up", "side_panel_up", primary=False),
            _bind(Context.TAB_SIDE_PANEL, "j", "side_panel_down", help="Down"),
            _bind(Context.TAB_SIDE_PANEL, "down", "side_panel_down", primary=False),
            _bind(Context.TAB_SIDE_PANEL, "enter", "side_panel_select", help="Select"),
            _bind(Context.TAB_SIDE_PANEL, "q", "side_panel_dismiss", help="Close"),
            _bind(Context.TAB_SIDE_PANEL, "escape", "side_panel_dismiss", primary=False),
            _bind(Context.TAB_SIDE_PANEL, "t", "side_panel_dismiss", primary=False),
            # Data frame info
            _bind(Context.DATA_FRAME_INFO, "q", "table_dismiss_modal", help="Close info"),
            _bind(Context.DATA_FRAME_INFO, "escape", "table_dismiss_modal", primary=False),
            _bind(Context.DATA_FRAME_INFO, "k", "info_scroll_up", help="Scroll up"),
            _bind(Context.DATA_FRAME_INFO, "up", "info_scroll_up", primary=False),
            _bind(Context.DATA_FRAME_INFO, "K", "info_scroll_up", primary=False),
            _bind(Context.DATA_FRAME_INFO, "shift+up", "info_scroll_up", primary=False),
            _bind(Context.DATA_FRAME_INFO, "j", "info_scroll_down", help="Scroll down"),
            _bind(Context.DATA_FRAME_INFO, "down", "info_scroll_down", primary=False),
            _bind(Context.DATA_FRAME_INFO, "J", "info_scroll_down", primary=False),
            _bind(Context.DATA_FRAME_INFO, "shift+down", "info_scroll_down", primary=False),
            # Plots
            _bind(Context.SCATTER_PLOT, "q", "table_dismiss_modal", help="Close plot"),
            _bind(Context.SCATTER_PLOT, "escape", "table_dismiss_modal", primary=False),
            _bind(Context.HISTOGRAM_PLOT, "q", "table_dismiss_modal", help="Close plot"),
            _bind(Context.HISTOGRAM_PLOT, "escape", "table_dismiss_modal", primary=False),
        ]
