"""Policy configuration passed explicitly to level operations."""
from __future__ import annotations

from dataclasses import dataclass, replace

LEVEL_ORDERS = ("appearance", "sorted")
UNMATCHED_POLICIES = ("error", "missing")
EMPTY_GROUP_POLICIES = ("last", "keep", "error")


@dataclass(frozen=True)
class FactorConfig:
    """Ordering and strictness policies.

    Attributes:
        level_order: catalog order when levels are inferred from the data,
            "appearance" (first seen first) or "sorted" (lexicographic)
        unmatched: what happens to labels missing from an explicit level
            list, "error" raises UnknownLevel, "missing" codes them as missing
        strict_recode: recode keys that are not levels raise UnknownLevel
        empty_groups: how statistic reordering ranks levels without
            observations, "last", "keep" (prior position) or "error"
        other_label: default catch-all label for lumping
        coerce_to_str: accept non-string columns by converting with str()
    """
    level_order: str = "appearance"
    unmatched: str = "error"
    strict_recode: bool = False
    empty_groups: str = "last"
    other_label: str = "Other"
    coerce_to_str: bool = False

    def __post_init__(self):
        _check_choice("level_order", self.level_order, LEVEL_ORDERS)
        _check_choice("unmatched", self.unmatched, UNMATCHED_POLICIES)
        _check_choice("empty_groups", self.empty_groups, EMPTY_GROUP_POLICIES)
        if not isinstance(self.other_label, str):
            raise ValueError(f"other_label must be a string, got {self.other_label!r}")

    def with_options(self, **kwargs) -> "FactorConfig":
        return replace(self, **kwargs)


def _check_choice(name, value, choices):
    if value not in choices:
        raise ValueError(f"{name} must be one of {choices}, got {value!r}")


DEFAULT_CONFIG = FactorConfig()
