"""Per-level frequency tables, always in catalog order."""
from __future__ import annotations

from typing import List, Optional, Tuple

import numpy as np
import pandas as pd

from .factor import CategoricalSequence


def level_counts(seq: CategoricalSequence) -> np.ndarray:
    """Observed count of every level, in catalog order (missing excluded)."""
    codes = seq.codes
    return np.bincount(codes[codes >= 0], minlength=len(seq.catalog))


def count(seq: CategoricalSequence) -> List[Tuple[Optional[str], int]]:
    """Frequency of each level in catalog order, zero-count levels included.

    A final ``(None, n)`` entry reports missing values when there are any.
    """
    counts = level_counts(seq)
    table = [(label, int(n)) for label, n in zip(seq.catalog, counts)]
    n_missing = seq.n_missing
    if n_missing:
        table.append((None, n_missing))
    return table


def count_frame(seq: CategoricalSequence, sort: bool = False, name: str = "n") -> pd.DataFrame:
    """``count`` as a DataFrame with ``level``, ``name`` and ``prop`` columns.

    ``prop`` is the share of all values, missing included. The ``level``
    column is categorical with the sequence's catalog as its categories,
    so a plotting library that honours category order keeps it.
    With ``sort=True`` rows are ordered by descending count (stable).
    """
    table = count(seq)
    total = len(seq)
    levels = pd.Categorical([label for label, _ in table], categories=list(seq.catalog))
    frame = pd.DataFrame({
        'level': levels,
        name: np.array([n for _, n in table], dtype=np.int64),
    })
    frame['prop'] = frame[name] / total if total else 0.0
    if sort:
        frame = frame.sort_values(name, ascending=False, kind='stable').reset_index(drop=True)
    return frame
