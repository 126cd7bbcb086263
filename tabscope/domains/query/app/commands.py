"""Command palette language: keywords parsed into actions."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from types import MappingProxyType

from tabscope.core.actions import Action
from tabscope.core.errors import CommandNotFoundError, CommandParseError
from tabscope.domains.query.app.engine import CURRENT_TABLE
from tabscope.shared.core.debug_events import emit_debug_event

CommandParser = Callable[[str], Action]

_PARSERS: dict[str, CommandParser] = {}


def register_command(*keywords: str) -> Callable[[CommandParser], CommandParser]:
    """Register a parser under one or more keywords."""

    def decorator(func: CommandParser) -> CommandParser:
        for keyword in keywords:
            if keyword in _PARSERS:
                raise ValueError(f"Duplicate command keyword: {keyword}")
            _PARSERS[keyword] = func
        return func

    return decorator


def select_sql(columns: str) -> str:
    return f"SELECT {columns} FROM {CURRENT_TABLE}"


def filter_sql(predicate: str) -> str:
    return f"SELECT * FROM {CURRENT_TABLE} WHERE {predicate}"


def order_sql(expression: str) -> str:
    return f"SELECT * FROM {CURRENT_TABLE} ORDER BY {expression}"


def _require(args: str, usage: str) -> str:
    if not args:
        raise CommandParseError(f"Usage: {usage}")
    return args


def _positive_int(args: str, usage: str) -> int:
    try:
        value = int(_require(args, usage))
    except ValueError:
        raise CommandParseError(f"Not a number: {args!r} (usage: {usage})") from None
    if value < 1:
        raise CommandParseError(f"Expected a number of at least 1 (usage: {usage})")
    return value


def _no_args(args: str, keyword: str) -> None:
    if args:
        raise CommandParseError(f"{keyword} takes no arguments")


@register_command("Q", "query")
def _parse_query(args: str) -> Action:
    return Action.of("sql_query", _require(args, "Q <sql>"))


@register_command("tabn")
def _parse_new_tab(args: str) -> Action:
    return Action.of("tab_new_query", _require(args, "tabn <sql>"))


@register_command("S", "select")
def _parse_select(args: str) -> Action:
    return Action.of("table_select", _require(args, "S <columns>"))


@register_command("F", "filter", "where")
def _parse_filter(args: str) -> Action:
    return Action.of("table_filter", _require(args, "F <predicate>"))


@register_command("O", "order")
def _parse_order(args: str) -> Action:
    return Action.of("table_order", _require(args, "O <expression>"))


@register_command("reset")
def _parse_reset(args: str) -> Action:
    _no_args(args, "reset")
    return Action("table_reset")


@register_command("goto")
def _parse_goto(args: str) -> Action:
    # Row numbers are 1-based on the command line.
    return Action.of("table_goto", _positive_int(args, "goto <row>") - 1)


@register_command("goup")
def _parse_goup(args: str) -> Action:
    return Action.of("table_go_up", _positive_int(args, "goup <rows>"))


@register_command("godown")
def _parse_godown(args: str) -> Action:
    return Action.of("table_go_down", _positive_int(args, "godown <rows>"))


@register_command("schema")
def _parse_schema(args: str) -> Action:
    _no_args(args, "schema")
    return Action("schema_show")


@register_command("info")
def _parse_info(args: str) -> Action:
    _no_args(args, "info")
    return Action("info_show")


@register_command("tabs")
def _parse_tabs(args: str) -> Action:
    _no_args(args, "tabs")
    return Action("side_panel_show")


@register_command("scatter", "plot")
def _parse_scatter(args: str) -> Action:
    usage = "scatter <x> <y> [group]"
    parts = _require(args, usage).split()
    if len(parts) not in (2, 3):
        raise CommandParseError(f"Usage: {usage}")
    return Action.of("plot_scatter", *parts)


@register_command("histogram", "hist")
def _parse_histogram(args: str) -> Action:
    usage = "histogram <column> [buckets]"
    parts = _require(args, usage).split()
    if len(parts) == 1:
        return Action.of("plot_histogram", parts[0])
    if len(parts) == 2:
        return Action.of("plot_histogram", parts[0], _positive_int(parts[1], usage))
    raise CommandParseError(f"Usage: {usage}")


@register_command("q", "quit")
def _parse_quit(args: str) -> Action:
    _no_args(args, "quit")
    return Action("quit")


@register_command("debug", "dbg")
def _parse_debug(args: str) -> Action:
    value = args.lower()
    if value not in {"", "on", "off", "list", "clear"}:
        raise CommandParseError("Usage: debug on|off|list|clear")
    return Action.of("debug", value)


class CommandRegistry:
    """Read-only keyword table."""

    def __init__(self, parsers: Mapping[str, CommandParser] | None = None) -> None:
        self._parsers: Mapping[str, CommandParser] = MappingProxyType(dict(_PARSERS if parsers is None else parsers))

    def keywords(self) -> list[str]:
        return sorted(self._parsers)

    def __contains__(self, keyword: object) -> bool:
        return keyword in self._parsers

    def dispatch(self, line: str) -> Action:
        """Parse a command line into an action.

        Raises :class:`CommandNotFoundError` for an unknown keyword and
        :class:`CommandParseError` for bad arguments.
        """
        text = line.strip()
        if not text:
            raise CommandParseError("Empty command")
        keyword, *rest = text.split(maxsplit=1)
        parser = self._parsers.get(keyword)
        if parser is None:
            emit_debug_event("command.not_found", category="command", keyword=keyword)
            raise CommandNotFoundError(f"Unknown command: {keyword}")
        action = parser(rest[0].strip() if rest else "")
        emit_debug_event("command.dispatch", category="command", line=text, action=str(action))
        return action
