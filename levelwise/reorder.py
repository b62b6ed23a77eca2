"""Level reordering operations.

Each operation returns a new sequence whose catalog is a permutation of
the input catalog; the values themselves are unchanged.

Levels whose statistic is undefined (no observations) are placed
according to the empty-group policy:

  - "last": after every level that has a statistic, in prior relative order
  - "keep": at their prior catalog positions
  - "error": raise EmptyGroup
"""
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Union

import numpy as np
import pandas as pd

from .aggregates import resolve_aggregate
from .config import DEFAULT_CONFIG, EMPTY_GROUP_POLICIES, FactorConfig
from .counting import level_counts
from .errors import EmptyGroup
from .factor import CategoricalSequence

log = logging.getLogger("levelwise.reorder")


def _permute(seq: CategoricalSequence, order: List[int]) -> CategoricalSequence:
    """Rebind ``seq`` to the catalog ``[catalog[i] for i in order]``."""
    new_catalog = seq.catalog.take(order)
    old_to_new = np.empty(len(order), dtype=np.int64)
    old_to_new[np.asarray(order, dtype=np.int64)] = np.arange(len(order))
    return seq.remap(old_to_new, new_catalog)


def _as_numeric(values, name: str) -> pd.Series:
    ser = pd.Series(list(values), dtype=object)
    return pd.to_numeric(ser).astype(float).rename(name)


def _check_length(seq: CategoricalSequence, values, what: str):
    if len(values) != len(seq):
        raise ValueError(
            f"{what} has length {len(values)}, expected {len(seq)} to match the sequence")


def _order_by_stats(
    seq: CategoricalSequence,
    stats: Dict[int, float],
    descending: bool,
    empty: str,
) -> CategoricalSequence:
    """Sort levels by ``stats`` (code -> value), stable on catalog position."""
    if empty not in EMPTY_GROUP_POLICIES:
        raise ValueError(f"empty must be one of {EMPTY_GROUP_POLICIES}, got {empty!r}")

    n = len(seq.catalog)
    defined = [i for i in range(n) if not np.isnan(stats.get(i, np.nan))]
    empties = [i for i in range(n) if np.isnan(stats.get(i, np.nan))]

    sign = -1.0 if descending else 1.0
    ranked = sorted(defined, key=lambda i: (sign * stats[i], i))

    if empties:
        empty_labels = [seq.catalog[i] for i in empties]
        if empty == "error":
            raise EmptyGroup(empty_labels)
        log.debug("levels without observations %r placed by policy %r", empty_labels, empty)

    if empty == "keep":
        empty_set = set(empties)
        filler = iter(ranked)
        order = [i if i in empty_set else next(filler) for i in range(n)]
    else:
        order = ranked + empties
    return _permute(seq, order)


def reorder_by_statistic(
    seq: CategoricalSequence,
    values,
    aggregate="median",
    descending: bool = False,
    empty: Optional[str] = None,
    config: FactorConfig = DEFAULT_CONFIG,
) -> CategoricalSequence:
    """Order levels by a statistic of ``values`` computed per level.

    Parameters
    ----------
    seq : CategoricalSequence
    values : array-like
        Numbers aligned with ``seq``; NaN values are skipped.
    aggregate : str or callable
        A registered aggregate name ("mean", "median", "sum", "count",
        "min", "max", "last") or a callable reducing a Series.
    descending : bool
        Largest statistic first.
    empty : str, optional
        Empty-group policy, defaults to ``config.empty_groups``.
    """
    _check_length(seq, values, "values")
    agg = resolve_aggregate(aggregate)
    frame = pd.DataFrame({'code': seq.codes, 'value': _as_numeric(values, 'value').to_numpy()})
    frame = frame[frame['code'] >= 0].dropna(subset=['value'])

    stats = {int(code): agg(group) for code, group in frame.groupby('code')['value']}
    return _order_by_stats(seq, stats, descending, empty or config.empty_groups)


def reorder_by_statistic_pair(
    seq: CategoricalSequence,
    x,
    y,
    aggregate="mean",
    descending: bool = True,
    empty: Optional[str] = None,
    config: FactorConfig = DEFAULT_CONFIG,
) -> CategoricalSequence:
    """Order levels by the statistic of ``y`` at each level's largest ``x``.

    ``y`` is aggregated per (level, x) pair; each level is then ranked by
    the value at the last ``x`` it was observed at, e.g. the latest year
    of a time series, so a line chart's legend lists the lines in the
    order they end. Descending by default.
    """
    _check_length(seq, x, "x")
    _check_length(seq, y, "y")
    agg = resolve_aggregate(aggregate)
    frame = pd.DataFrame({
        'code': seq.codes,
        'x': pd.Series(list(x), dtype=object).to_numpy(),
        'y': _as_numeric(y, 'y').to_numpy(),
    })
    frame = frame[frame['code'] >= 0].dropna(subset=['x', 'y'])

    stats: Dict[int, float] = {}
    for (code, _), group in frame.groupby(['code', 'x'], sort=True)['y']:
        # groups arrive sorted by x within a level, so the last write wins
        stats[int(code)] = agg(group)
    return _order_by_stats(seq, stats, descending, empty or config.empty_groups)


def manual_relevel(
    seq: CategoricalSequence,
    front: Union[str, Iterable[str]],
    after: int = 0,
) -> CategoricalSequence:
    """Move ``front`` levels to the start of the catalog (or after ``after`` levels).

    The rest keep their relative order. Raises UnknownLevel for names not
    in the catalog.
    """
    if isinstance(front, str):
        front = [front]
    return seq.with_catalog_order(seq.catalog.moved_to_front(front, after=after))


def reverse(seq: CategoricalSequence) -> CategoricalSequence:
    return seq.with_catalog_order(seq.catalog.reversed())


def reorder_by_frequency(seq: CategoricalSequence) -> CategoricalSequence:
    """Most frequent level first; ties keep catalog order."""
    counts = level_counts(seq)
    order = sorted(range(len(seq.catalog)), key=lambda i: (-counts[i], i))
    return _permute(seq, order)


def reorder_by_appearance(seq: CategoricalSequence) -> CategoricalSequence:
    """Levels in order of first appearance; unobserved levels follow in prior order."""
    codes = seq.codes
    seen = pd.unique(codes[codes >= 0]).tolist()
    seen_set = set(seen)
    order = seen + [i for i in range(len(seq.catalog)) if i not in seen_set]
    return _permute(seq, order)
