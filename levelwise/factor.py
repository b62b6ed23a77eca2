"""CategoricalValue, CategoricalSequence and the factory functions.

A sequence is a read-only integer code array paired with the catalog the
codes point into. ``-1`` is the missing code. Every transform returns a
new sequence built from a fresh catalog and a fresh code array, so a
code can never refer to a catalog other than the one it was built with.

Usage::

    seq = from_labels(["a", "b", "a", "c"])
    seq.catalog            # LevelCatalog(['a', 'b', 'c'])
    seq.to_series()        # pandas Series with category dtype
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, List, Optional, Sequence

import numpy as np
import pandas as pd

from .catalog import LevelCatalog
from .column_filters import _is_polars_dtype, is_categorical, is_labelable, is_ordered_enum
from .config import DEFAULT_CONFIG, FactorConfig
from .errors import DuplicateLevel, UnknownLevel

log = logging.getLogger("levelwise.factor")

MISSING_CODE = -1


@dataclass(frozen=True)
class CategoricalValue:
    """One categorical datum: a code into ``catalog``, or None when missing."""
    code: Optional[int]
    catalog: LevelCatalog

    @property
    def is_missing(self) -> bool:
        return self.code is None

    @property
    def label(self) -> Optional[str]:
        if self.code is None:
            return None
        return self.catalog[self.code]

    def __str__(self):
        return "<NA>" if self.code is None else self.catalog[self.code]


def _as_code_array(codes) -> np.ndarray:
    """Copy ``codes`` into a flat int64 array, rejecting non-integral values."""
    arr = np.asarray(codes).reshape(-1)
    if arr.size == 0:
        return np.empty(0, dtype=np.int64)
    if arr.dtype.kind == 'f':
        if not np.all(np.isfinite(arr) & (arr == np.floor(arr))):
            raise ValueError("Codes must be integers, got non-integral float values")
    elif arr.dtype.kind not in 'iu':
        raise ValueError(f"Codes must be integers, got dtype {arr.dtype}")
    return arr.astype(np.int64)


class CategoricalSequence:
    """An ordered sequence of categorical values sharing one catalog."""

    __slots__ = ('_codes', '_catalog')

    def __init__(self, codes, catalog: LevelCatalog):
        if not isinstance(catalog, LevelCatalog):
            catalog = LevelCatalog(catalog)
        codes = _as_code_array(codes)
        if codes.size and (codes.min() < MISSING_CODE or codes.max() >= len(catalog)):
            raise ValueError(
                f"Codes must lie in [-1, {len(catalog)}), got range "
                f"[{codes.min()}, {codes.max()}]"
            )
        codes.setflags(write=False)
        self._codes = codes
        self._catalog = catalog

    @property
    def catalog(self) -> LevelCatalog:
        return self._catalog

    @property
    def codes(self) -> np.ndarray:
        return self._codes

    @property
    def labels(self) -> List[Optional[str]]:
        cat = self._catalog.labels
        return [cat[c] if c >= 0 else None for c in self._codes.tolist()]

    @property
    def missing_mask(self) -> np.ndarray:
        return self._codes == MISSING_CODE

    @property
    def n_missing(self) -> int:
        return int(self.missing_mask.sum())

    def __len__(self) -> int:
        return len(self._codes)

    def __iter__(self) -> Iterator[CategoricalValue]:
        for c in self._codes.tolist():
            yield CategoricalValue(c if c >= 0 else None, self._catalog)

    def __getitem__(self, key):
        if isinstance(key, (int, np.integer)):
            c = int(self._codes[key])
            return CategoricalValue(c if c >= 0 else None, self._catalog)
        return CategoricalSequence(self._codes[key], self._catalog)

    def __eq__(self, other) -> bool:
        if not isinstance(other, CategoricalSequence):
            return NotImplemented
        return self._catalog == other._catalog and np.array_equal(self._codes, other._codes)

    __hash__ = None

    def __repr__(self) -> str:
        shown = self.labels[:8]
        more = ", ..." if len(self) > 8 else ""
        body = ", ".join("<NA>" if lbl is None else repr(lbl) for lbl in shown)
        return f"CategoricalSequence([{body}{more}], levels={list(self._catalog)!r})"

    def remap(self, old_to_new: Sequence[int], catalog: LevelCatalog) -> "CategoricalSequence":
        """Rebind to ``catalog`` translating each old code through ``old_to_new``.

        ``old_to_new[i]`` is the new code of old level ``i`` (``-1`` makes
        its values missing). Missing values stay missing.
        """
        old_to_new = np.asarray(old_to_new, dtype=np.int64)
        if len(old_to_new) != len(self._catalog):
            raise ValueError("old_to_new must have one entry per current level")
        if len(old_to_new) == 0:
            return CategoricalSequence(self._codes.copy(), catalog)
        new_codes = np.where(self._codes >= 0, old_to_new[self._codes], MISSING_CODE)
        return CategoricalSequence(new_codes, catalog)

    def with_catalog_order(self, catalog: LevelCatalog) -> "CategoricalSequence":
        """Rebind to a permutation of the current catalog."""
        if sorted(catalog.labels) != sorted(self._catalog.labels):
            raise ValueError("New catalog must be a permutation of the current one")
        return self.remap([catalog.index(lbl) for lbl in self._catalog], catalog)

    def to_pandas(self) -> pd.Categorical:
        return pd.Categorical.from_codes(
            self._codes, categories=pd.Index(list(self._catalog), dtype=object))

    def to_series(self, name=None, index=None) -> pd.Series:
        return pd.Series(self.to_pandas(), name=name, index=index)

    def to_polars(self, name: str = ""):
        import polars as pl
        return pl.Series(name, self.labels, dtype=pl.Enum(list(self._catalog)))


def _is_missing(value) -> bool:
    if value is None:
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def _normalize_labels(values: Iterable[Any], config: FactorConfig) -> np.ndarray:
    """Object array of str labels with None for every missing marker."""
    raw = list(values)
    arr = np.empty(len(raw), dtype=object)
    coerced = 0
    for i, v in enumerate(raw):
        if _is_missing(v):
            arr[i] = None
        elif isinstance(v, str):
            arr[i] = v
        elif config.coerce_to_str:
            arr[i] = str(v)
            coerced += 1
        else:
            raise TypeError(
                f"Labels must be strings or missing, got {v!r}; "
                "use FactorConfig(coerce_to_str=True) to convert values")
    if coerced:
        log.warning("coerced %d non-string value(s) to str", coerced)
    return arr


def from_labels(
    labels: Iterable[Any],
    levels: Optional[Iterable[str]] = None,
    config: FactorConfig = DEFAULT_CONFIG,
) -> CategoricalSequence:
    """Build a sequence from raw labels.

    Parameters
    ----------
    labels : iterable of str or missing markers
        ``None``, ``NaN`` and ``pd.NA`` become missing values.
    levels : iterable of str, optional
        Explicit catalog, used verbatim. Labels not in it raise
        ``UnknownLevel`` unless ``config.unmatched == "missing"``.
        When omitted the catalog is inferred by ``config.level_order``.
    config : FactorConfig
    """
    arr = _normalize_labels(labels, config)
    missing = np.fromiter((v is None for v in arr), dtype=bool, count=len(arr))
    present = arr[~missing]

    if levels is None:
        uniques = list(dict.fromkeys(present.tolist()))
        if config.level_order == "sorted":
            uniques.sort()
        catalog = LevelCatalog(uniques)
    else:
        catalog = levels if isinstance(levels, LevelCatalog) else LevelCatalog(levels)

    codes = pd.Index(list(catalog), dtype=object).get_indexer(arr)
    codes[missing] = MISSING_CODE
    unmatched = (codes == MISSING_CODE) & ~missing
    if unmatched.any():
        unknown = list(dict.fromkeys(arr[unmatched].tolist()))
        if config.unmatched == "error":
            raise UnknownLevel(unknown, context="not in explicit levels")
        log.debug("coding %d value(s) with unmatched labels %r as missing",
                  int(unmatched.sum()), unknown)
    return CategoricalSequence(codes, catalog)


def from_codes(codes: Iterable[int], levels: Iterable[str]) -> CategoricalSequence:
    """Build a sequence straight from integer codes (``-1`` is missing)."""
    return CategoricalSequence(list(codes), LevelCatalog(levels))


def _check_coerced_categories(original: List[Any], converted: List[str]) -> None:
    """Raise DuplicateLevel when distinct categories convert to one label."""
    sources: dict = {}
    for orig, label in zip(original, converted):
        sources.setdefault(label, []).append(orig)
    clashes = {label: origs for label, origs in sources.items() if len(origs) > 1}
    if clashes:
        detail = "; ".join(f"{origs!r} -> {label!r}" for label, origs in clashes.items())
        raise DuplicateLevel(list(clashes), context=f"categories collide after str conversion: {detail}")


def from_series(
    series,
    levels: Optional[Iterable[str]] = None,
    config: FactorConfig = DEFAULT_CONFIG,
) -> CategoricalSequence:
    """Build a sequence from a pandas or polars column.

    Columns that already carry levels (pandas ``category``, polars ``Enum``)
    keep their category order when ``levels`` is omitted. Polars
    ``Categorical`` columns have no meaningful order, so their levels are
    inferred like plain strings.
    """
    if isinstance(series, CategoricalSequence):
        return series

    dtype = getattr(series, 'dtype', None)
    if dtype is None:
        return from_labels(series, levels, config)

    if not is_labelable(dtype) and not config.coerce_to_str:
        raise TypeError(
            f"Column dtype {dtype} holds no labels; "
            "use FactorConfig(coerce_to_str=True) to convert values")

    if _is_polars_dtype(dtype):
        values = series.to_list()
        if levels is None and is_ordered_enum(dtype):
            levels = dtype.categories.to_list()
        return from_labels(values, levels, config)

    if is_categorical(dtype):
        categories = [c if isinstance(c, str) else str(c) for c in dtype.categories]
        if levels is None:
            if not config.coerce_to_str and any(not isinstance(c, str) for c in dtype.categories):
                raise TypeError("Categorical column has non-string categories; "
                                "use FactorConfig(coerce_to_str=True) to convert them")
            _check_coerced_categories(list(dtype.categories), categories)
            return CategoricalSequence(np.asarray(series.cat.codes, dtype=np.int64),
                                       LevelCatalog(categories))
        values = series.astype(object).tolist()
        return from_labels(values, levels, config)

    return from_labels(series.tolist(), levels, config)
