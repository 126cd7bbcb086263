"""Load files into polars tables."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

import polars as pl

from tabscope.core.errors import ReaderError
from tabscope.domains.readers.app.fwf import parse_fwf, parse_widths
from tabscope.domains.schema.app.inference import safe_infer_schema
from tabscope.shared.core.debug_events import emit_debug_event

FORMATS = ("csv", "tsv", "parquet", "json", "jsonl", "arrow", "fwf")
INFER_MODES = ("no", "fast", "full", "safe")

EXTENSION_FORMATS: dict[str, str] = {
    ".csv": "csv",
    ".tsv": "tsv",
    ".tab": "tsv",
    ".parquet": "parquet",
    ".pq": "parquet",
    ".json": "json",
    ".jsonl": "jsonl",
    ".ndjson": "jsonl",
    ".arrow": "arrow",
    ".feather": "arrow",
    ".ipc": "arrow",
    ".fwf": "fwf",
}


@dataclass(frozen=True)
class ReaderOptions:
    """How to turn a file into a table.

    ``format`` of None picks one from the file extension, falling back to
    csv. ``widths`` is an explicit fixed-width list like ``"3,4,5"``; empty
    means infer the boundaries.
    """

    format: str | None = None
    has_header: bool = True
    separator: str | None = None
    quote_char: str | None = '"'
    widths: str = ""
    separator_length: int = 1
    flexible_width: bool = True
    infer_schema: str = "safe"

    def __post_init__(self) -> None:
        if self.format is not None and self.format not in FORMATS:
            raise ReaderError(f"Unknown format: {self.format}")
        if self.infer_schema not in INFER_MODES:
            raise ReaderError(f"Unknown schema inference mode: {self.infer_schema}")
        if self.separator is not None and len(self.separator) != 1:
            raise ReaderError("Separator must be a single character")

    def format_for(self, path: Path) -> str:
        if self.format is not None:
            return self.format
        return EXTENSION_FORMATS.get(path.suffix.lower(), "csv")


def table_name(path: Path) -> str:
    """An SQL-friendly identifier derived from the file stem."""
    name = re.sub(r"\W+", "_", path.stem).strip("_") or "table"
    if name[0].isdigit():
        name = f"t_{name}"
    return name


def read_table(path: str | Path, options: ReaderOptions | None = None) -> pl.DataFrame:
    """Read ``path`` into a DataFrame, raising :class:`ReaderError` on failure."""
    path = Path(path)
    options = options or ReaderOptions()
    fmt = options.format_for(path)
    emit_debug_event("reader.read", category="reader", path=str(path), format=fmt, infer=options.infer_schema)
    try:
        df = _READERS[fmt](path, options)
    except ReaderError:
        raise
    except (OSError, UnicodeDecodeError, pl.exceptions.PolarsError) as exc:
        emit_debug_event("reader.error", category="reader", path=str(path), error=str(exc))
        raise ReaderError(f"{path}: {exc}") from exc
    if options.infer_schema == "safe" or (fmt == "fwf" and options.infer_schema != "no"):
        df = safe_infer_schema(df)
    return df


def _read_delimited(path: Path, options: ReaderOptions, default_separator: str) -> pl.DataFrame:
    mode = options.infer_schema
    return pl.read_csv(
        path,
        has_header=options.has_header,
        separator=options.separator or default_separator,
        quote_char=options.quote_char,
        infer_schema=mode in ("fast", "full"),
        infer_schema_length=None if mode == "full" else 100,
    )


def _read_csv(path: Path, options: ReaderOptions) -> pl.DataFrame:
    return _read_delimited(path, options, ",")


def _read_tsv(path: Path, options: ReaderOptions) -> pl.DataFrame:
    return _read_delimited(path, options, "\t")


def _read_parquet(path: Path, options: ReaderOptions) -> pl.DataFrame:
    return pl.read_parquet(path)


def _as_text(df: pl.DataFrame, options: ReaderOptions) -> pl.DataFrame:
    """Scalar columns as strings in ``no`` mode; nested values keep their shape."""
    if options.infer_schema != "no":
        return df
    scalars = [name for name, dtype in df.schema.items() if not dtype.is_nested()]
    return df.with_columns(pl.col(scalars).cast(pl.String)) if scalars else df


def _read_json(path: Path, options: ReaderOptions) -> pl.DataFrame:
    return _as_text(pl.read_json(path, infer_schema_length=None if options.infer_schema == "full" else 100), options)


def _read_jsonl(path: Path, options: ReaderOptions) -> pl.DataFrame:
    return _as_text(pl.read_ndjson(path, infer_schema_length=None if options.infer_schema == "full" else 100), options)


def _read_arrow(path: Path, options: ReaderOptions) -> pl.DataFrame:
    return pl.read_ipc(path)


def _read_fwf(path: Path, options: ReaderOptions) -> pl.DataFrame:
    widths = parse_widths(options.widths) if options.widths.strip() else None
    with path.open(encoding="utf-8") as f:
        lines = f.read().splitlines()
    return parse_fwf(
        lines,
        widths,
        has_header=options.has_header,
        separator_length=options.separator_length,
        flexible_width=options.flexible_width,
    )


_READERS = {
    "csv": _read_csv,
    "tsv": _read_tsv,
    "parquet": _read_parquet,
    "json": _read_json,
    "jsonl": _read_jsonl,
    "arrow": _read_arrow,
    "fwf": _read_fwf,
}
