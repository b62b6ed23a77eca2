"""Apply level operations to a column of a pandas or polars DataFrame.

Each helper returns a new frame of the same kind as its input; the
input frame is never modified.

Usage::

    df2 = mutate_factor(df, "relig", reorder_by_statistic, by="tvhours", aggregate="mean")
    df3 = mutate_factor(df, "partyid", collapse, {"other": ["No answer", "Don't know"], ...})
"""
from __future__ import annotations

from typing import Callable, Iterable, Optional, Union

import pandas as pd

from .config import DEFAULT_CONFIG, FactorConfig
from .counting import count_frame
from .factor import CategoricalSequence, from_series


def _is_polars_frame(df) -> bool:
    try:
        import polars as pl
        return isinstance(df, pl.DataFrame)
    except ImportError:
        return False


def _check_frame(df, column: str):
    if _is_polars_frame(df):
        columns = df.columns
    elif isinstance(df, pd.DataFrame):
        columns = list(df.columns)
    else:
        raise TypeError("unexpected type for dataframe, got %r" % (type(df),))
    if column not in columns:
        raise KeyError(f"Column {column!r} not found; available columns: {list(columns)!r}")


def _with_column(df, column: str, seq: CategoricalSequence):
    if _is_polars_frame(df):
        return df.with_columns(seq.to_polars(column))
    out = df.copy()
    out[column] = seq.to_series(name=column, index=df.index)
    return out


def factor_column(
    df,
    column: str,
    levels: Optional[Iterable[str]] = None,
    config: FactorConfig = DEFAULT_CONFIG,
):
    """Convert ``column`` to a categorical column (pandas category / polars Enum)."""
    _check_frame(df, column)
    return _with_column(df, column, from_series(df[column], levels, config))


def mutate_factor(
    df,
    column: str,
    operation: Callable[..., CategoricalSequence],
    *args,
    by: Union[str, Iterable[str], None] = None,
    config: FactorConfig = DEFAULT_CONFIG,
    **kwargs,
):
    """Replace ``column`` with ``operation(sequence, *by_columns, *args, **kwargs)``.

    ``by`` names columns passed positionally right after the sequence,
    e.g. the values to reorder by.
    """
    _check_frame(df, column)
    if isinstance(by, str):
        by = [by]
    by_columns = []
    for name in by or ():
        _check_frame(df, name)
        by_columns.append(df[name])

    seq = from_series(df[column], config=config)
    result = operation(seq, *by_columns, *args, **kwargs)
    if not isinstance(result, CategoricalSequence):
        raise TypeError(
            f"{getattr(operation, '__name__', operation)!r} returned "
            f"{type(result).__name__}, expected CategoricalSequence")
    return _with_column(df, column, result)


def count_column(
    df,
    column: str,
    sort: bool = False,
    name: str = "n",
    config: FactorConfig = DEFAULT_CONFIG,
):
    """Frequency table of ``column`` as a frame of the same kind as ``df``."""
    _check_frame(df, column)
    table = count_frame(from_series(df[column], config=config), sort=sort, name=name)
    if _is_polars_frame(df):
        import polars as pl
        return pl.DataFrame({
            'level': [None if pd.isna(v) else v for v in table['level'].astype(object)],
            name: table[name].tolist(),
            'prop': table['prop'].tolist(),
        })
    return table
