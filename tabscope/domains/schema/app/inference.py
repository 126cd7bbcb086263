"""Lossless promotion of text columns to more specific types."""

from __future__ import annotations

from collections.abc import Callable

import polars as pl

_Cast = Callable[[pl.Series], pl.Series]

_BOOLEANS = {"true": True, "false": False}


def _to_int(s: pl.Series) -> pl.Series:
    return s.cast(pl.Int64, strict=False)


def _to_float(s: pl.Series) -> pl.Series:
    return s.cast(pl.Float64, strict=False)


def _to_bool(s: pl.Series) -> pl.Series:
    return s.str.to_lowercase().replace_strict(_BOOLEANS, default=None, return_dtype=pl.Boolean)


def _to_date(s: pl.Series) -> pl.Series:
    return s.str.to_date(strict=False)


def _to_time(s: pl.Series) -> pl.Series:
    return s.str.to_time(strict=False)


def _to_datetime(s: pl.Series) -> pl.Series:
    return s.str.to_datetime(time_unit="ms", strict=False)


# Preference order; the first lossless candidate wins.
CANDIDATES: tuple[tuple[str, _Cast], ...] = (
    ("Int64", _to_int),
    ("Float64", _to_float),
    ("Boolean", _to_bool),
    ("Date", _to_date),
    ("Time", _to_time),
    ("Datetime(ms)", _to_datetime),
)


def infer_series(series: pl.Series) -> pl.Series | None:
    """The first candidate cast that keeps the null mask, or None."""
    if series.dtype != pl.String:
        return None
    nulls = series.is_null()
    for _name, cast in CANDIDATES:
        try:
            casted = cast(series)
        except (pl.exceptions.PolarsError, ValueError, TypeError):
            continue
        if casted.is_null().equals(nulls):
            return casted.alias(series.name)
    return None


def safe_infer_schema(df: pl.DataFrame) -> pl.DataFrame:
    """Promote every text column whose values all survive a typed cast.

    Values that were null stay null and no other value may become null, so
    nothing is lost. Already typed columns are left alone, which makes the
    function idempotent.
    """
    replaced = [s for s in (infer_series(df.get_column(name)) for name in df.columns) if s is not None]
    if not replaced:
        return df
    return df.with_columns(replaced)
