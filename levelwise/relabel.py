"""Level relabeling operations: rename, merge, lump, drop.

All of them come down to choosing a new label for every old level
(``None`` removes the level and turns its values missing) and building
the new catalog from those labels in old-catalog order.
"""
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Mapping, Optional, Set, Union

import numpy as np

from .catalog import LevelCatalog
from .config import DEFAULT_CONFIG, FactorConfig
from .counting import level_counts
from .errors import AmbiguousOrMissingLevel, UnknownLevel
from .factor import MISSING_CODE, CategoricalSequence

log = logging.getLogger("levelwise.relabel")

# In "auto" mode a level is kept when its share of the observed values is
# at least AUTO_LUMP_SHARE / (number of observed levels).
AUTO_LUMP_SHARE = 1.0


def _is_count(n) -> bool:
    return isinstance(n, (int, np.integer)) and not isinstance(n, bool) and n >= 0


def _relabel(seq: CategoricalSequence, new_labels: List[Optional[str]],
             catalog: Optional[LevelCatalog] = None) -> CategoricalSequence:
    """Rebind ``seq`` so old level ``i`` becomes ``new_labels[i]``.

    Without an explicit ``catalog`` the distinct new labels are kept in
    order of first occurrence.
    """
    for label in new_labels:
        if label is not None and not isinstance(label, str):
            raise TypeError(f"New level labels must be strings or None, got {label!r}")
    if catalog is None:
        catalog = LevelCatalog.from_unique(lbl for lbl in new_labels if lbl is not None)
    old_to_new = [MISSING_CODE if lbl is None else catalog.index(lbl) for lbl in new_labels]
    return seq.remap(old_to_new, catalog)


def recode(
    seq: CategoricalSequence,
    mapping: Mapping[str, Optional[str]],
    strict: Optional[bool] = None,
    config: FactorConfig = DEFAULT_CONFIG,
) -> CategoricalSequence:
    """Rename levels through ``mapping`` (old label -> new label).

    Levels renamed to the same label are merged. Unmapped levels pass
    through. Mapping to ``None`` drops the level and makes its values
    missing. Keys that are not levels raise UnknownLevel when ``strict``
    (default ``config.strict_recode``), otherwise they are ignored.
    """
    if strict is None:
        strict = config.strict_recode
    unknown = [key for key in mapping if key not in seq.catalog]
    if unknown:
        if strict:
            raise UnknownLevel(unknown, context="recode")
        log.warning("ignoring recode keys that are not levels: %r", unknown)
    return _relabel(seq, [mapping.get(lbl, lbl) for lbl in seq.catalog])


def collapse(
    seq: CategoricalSequence,
    groups: Mapping[str, Iterable[str]],
    other_label: Optional[str] = None,
) -> CategoricalSequence:
    """Merge levels into named groups (new label -> old labels).

    Every level must belong to exactly one group. With ``other_label``
    the levels no group names are merged into that label instead of
    raising AmbiguousOrMissingLevel.
    """
    assignment: Dict[str, str] = {}
    ambiguous: List[str] = []
    unknown: List[str] = []
    for new_label, members in groups.items():
        if isinstance(members, str):
            members = [members]
        for old in members:
            if old not in seq.catalog:
                unknown.append(old)
            elif old in assignment and assignment[old] != new_label:
                ambiguous.append(old)
            else:
                assignment[old] = new_label
    if unknown:
        raise UnknownLevel(list(dict.fromkeys(unknown)), context="collapse")

    missing = [lbl for lbl in seq.catalog if lbl not in assignment]
    if ambiguous or (missing and other_label is None):
        raise AmbiguousOrMissingLevel(
            missing=missing if other_label is None else (),
            ambiguous=list(dict.fromkeys(ambiguous)),
        )
    return _relabel(seq, [assignment.get(lbl, other_label) for lbl in seq.catalog])


def _lump_to_other(seq: CategoricalSequence, kept: Set[int], other_label: str) -> CategoricalSequence:
    """Recode every level outside ``kept`` to ``other_label``, appended last."""
    catalog = seq.catalog
    lumped = [catalog[i] for i in range(len(catalog)) if i not in kept]
    if not lumped:
        return seq
    log.debug("lumping %d level(s) into %r: %r", len(lumped), other_label, lumped)
    kept_labels = [catalog[i] for i in range(len(catalog)) if i in kept]
    if other_label not in kept_labels:
        kept_labels.append(other_label)
    new_labels = [catalog[i] if i in kept else other_label for i in range(len(catalog))]
    return _relabel(seq, new_labels, LevelCatalog(kept_labels))


def _any_observed(counts, kept: Set[int]) -> bool:
    return any(counts[i] > 0 for i in range(len(counts)) if i not in kept)


def lump(
    seq: CategoricalSequence,
    keep: Union[int, str] = "auto",
    other_label: Optional[str] = None,
    config: FactorConfig = DEFAULT_CONFIG,
) -> CategoricalSequence:
    """Merge the least frequent levels into ``other_label``.

    ``keep`` is the number of most frequent levels to keep (ties broken by
    catalog order), or ``"auto"`` to keep every level whose observed share
    is at least ``AUTO_LUMP_SHARE`` over the number of observed levels.
    Kept levels stay in catalog order; the catch-all level comes last, or
    absorbs the lumped values if it is itself a kept level.
    """
    other_label = config.other_label if other_label is None else other_label
    counts = level_counts(seq)
    n = len(counts)

    if keep == "auto":
        observed = [i for i in range(n) if counts[i] > 0]
        if not observed:
            return seq
        threshold = AUTO_LUMP_SHARE * counts.sum() / len(observed)
        kept = {i for i in observed if counts[i] >= threshold}
    elif _is_count(keep):
        ranked = sorted(range(n), key=lambda i: (-counts[i], i))
        kept = set(ranked[:int(keep)])
    else:
        raise ValueError(f"keep must be a non-negative int or 'auto', got {keep!r}")

    if not _any_observed(counts, kept):
        return seq
    return _lump_to_other(seq, kept, other_label)


def lump_min(
    seq: CategoricalSequence,
    min_count: int,
    other_label: Optional[str] = None,
    config: FactorConfig = DEFAULT_CONFIG,
) -> CategoricalSequence:
    """Merge levels observed fewer than ``min_count`` times into ``other_label``."""
    if not _is_count(min_count):
        raise ValueError(f"min_count must be a non-negative int, got {min_count!r}")
    other_label = config.other_label if other_label is None else other_label
    counts = level_counts(seq)
    kept = {i for i in range(len(counts)) if counts[i] >= min_count}
    if not _any_observed(counts, kept):
        return seq
    return _lump_to_other(seq, kept, other_label)


def replace_with_other(
    seq: CategoricalSequence,
    keep: Optional[Iterable[str]] = None,
    drop: Optional[Iterable[str]] = None,
    other_label: Optional[str] = None,
    config: FactorConfig = DEFAULT_CONFIG,
) -> CategoricalSequence:
    """Replace every level not in ``keep`` (or every level in ``drop``) with ``other_label``."""
    if (keep is None) == (drop is None):
        raise ValueError("Pass exactly one of keep or drop")
    other_label = config.other_label if other_label is None else other_label
    n = len(seq.catalog)
    if keep is not None:
        kept = set(seq.catalog.positions(keep, context="keep"))
    else:
        kept = set(range(n)) - set(seq.catalog.positions(drop, context="drop"))
    return _lump_to_other(seq, kept, other_label)


def drop_unused(seq: CategoricalSequence, only: Optional[Iterable[str]] = None) -> CategoricalSequence:
    """Remove levels without observations (restricted to ``only`` when given)."""
    counts = level_counts(seq)
    candidates = range(len(counts)) if only is None else seq.catalog.positions(only, context="drop_unused")
    dropped = {i for i in candidates if counts[i] == 0}
    if not dropped:
        return seq
    return _relabel(seq, [None if i in dropped else lbl for i, lbl in enumerate(seq.catalog)])


def explicit_missing(seq: CategoricalSequence, label: str = "(Missing)") -> CategoricalSequence:
    """Turn missing values into a real level, appended to the catalog."""
    if not seq.n_missing:
        return seq
    catalog = seq.catalog
    if label not in catalog:
        catalog = LevelCatalog(list(catalog) + [label])
    codes = seq.codes.copy()
    codes[codes == MISSING_CODE] = catalog.index(label)
    return CategoricalSequence(codes, catalog)
