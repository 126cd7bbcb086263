"""Command line entry point for tabscope."""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path

from tabscope import __version__
from tabscope.core.errors import ReaderError
from tabscope.domains.query.app.engine import CURRENT_TABLE
from tabscope.domains.readers.app.readers import FORMATS, INFER_MODES, ReaderOptions, read_table, table_name
from tabscope.shared.app.runtime import RuntimeConfig
from tabscope.shared.core.debug_events import configure_debug_events, emit_debug_event

_ESCAPES = {"\\t": "\t", "tab": "\t", "\\s": " ", "space": " "}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tabscope",
        description="Keyboard-driven terminal viewer for tabular data files.",
    )
    parser.add_argument("files", nargs="*", type=Path, metavar="FILE", help="Files to open, one tab each")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-f", "--format", choices=FORMATS, help="File format (default: from extension)")
    parser.add_argument("--no-header", action="store_true", help="First line holds data, not column names")
    parser.add_argument("-s", "--separator", help="Field separator for csv/tsv")
    parser.add_argument("--quote-char", default='"', help="Quote character for csv/tsv")
    parser.add_argument("--widths", default="", help="Fixed-width column widths, e.g. 3,4,5")
    parser.add_argument("--separator-length", type=int, default=1, help="Characters between fixed-width fields")
    parser.add_argument(
        "--no-flexible-width",
        action="store_true",
        help="Cut the last fixed-width field at its width",
    )
    parser.add_argument("--infer-schema", choices=INFER_MODES, default="safe", help="Column type inference")
    parser.add_argument("--history-size", type=int, help="Number of commands kept in history")
    parser.add_argument("--debug", action="store_true", help="Write debug events to the log file")
    return parser


def reader_options(args: argparse.Namespace) -> ReaderOptions:
    separator = args.separator
    if separator is not None:
        separator = _ESCAPES.get(separator, separator)
    return ReaderOptions(
        format=args.format,
        has_header=not args.no_header,
        separator=separator,
        quote_char=args.quote_char or None,
        widths=args.widths,
        separator_length=args.separator_length,
        flexible_width=not args.no_flexible_width,
        infer_schema=args.infer_schema,
    )


def _named(paths: list[Path]) -> list[tuple[str, Path]]:
    """Pair each path with a table name, unique across the list."""
    used = {CURRENT_TABLE}
    named = []
    for path in paths:
        base = table_name(path)
        name, n = base, 1
        while name in used:
            n += 1
            name = f"{base}_{n}"
        used.add(name)
        named.append((name, path))
    return named


def runtime_from_args(args: argparse.Namespace) -> RuntimeConfig:
    runtime = RuntimeConfig.from_env()
    if args.history_size is not None and args.history_size > 0:
        runtime = replace(runtime, history_size=args.history_size)
    if args.debug:
        runtime = replace(runtime, debug_mode=True)
    return runtime


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    runtime = runtime_from_args(args)
    configure_debug_events(enabled=runtime.debug_mode, log_path=runtime.debug_log_path)
    emit_debug_event("startup", category="app", files=[str(f) for f in args.files])

    try:
        options = reader_options(args)
        tables = [(name, read_table(path, options)) for name, path in _named(args.files)]
    except ReaderError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    from tabscope.domains.shell.app.main import TabscopeApp
    from tabscope.domains.shell.app.session import Session

    session = Session(runtime)
    for name, frame in tables:
        session.add_table(name, frame)
    if tables:
        session.tabs.select(0)
    try:
        TabscopeApp(session).run()
    finally:
        session.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
