"""Ordered level catalogs for categorical columns."""
from .catalog import LevelCatalog
from .config import DEFAULT_CONFIG, FactorConfig
from .counting import count, count_frame, level_counts
from .errors import (
    AmbiguousOrMissingLevel, DuplicateLevel, EmptyGroup, LevelError, UnknownLevel,
)
from .factor import (
    CategoricalSequence, CategoricalValue, from_codes, from_labels, from_series,
)
from .relabel import (
    collapse, drop_unused, explicit_missing, lump, lump_min, recode, replace_with_other,
)
from .reorder import (
    manual_relevel, reorder_by_appearance, reorder_by_frequency, reorder_by_statistic,
    reorder_by_statistic_pair, reverse,
)
from .result import Err, Ok, attempt

__version__ = "0.3.0"

__all__ = [
    "LevelCatalog", "FactorConfig", "DEFAULT_CONFIG",
    "CategoricalSequence", "CategoricalValue", "from_codes", "from_labels", "from_series",
    "count", "count_frame", "level_counts",
    "manual_relevel", "reorder_by_appearance", "reorder_by_frequency",
    "reorder_by_statistic", "reorder_by_statistic_pair", "reverse",
    "collapse", "drop_unused", "explicit_missing", "lump", "lump_min", "recode",
    "replace_with_other",
    "LevelError", "UnknownLevel", "AmbiguousOrMissingLevel", "EmptyGroup", "DuplicateLevel",
    "Ok", "Err", "attempt",
]
