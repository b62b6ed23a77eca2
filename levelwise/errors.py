"""Exception taxonomy for level operations.

Every failure an operation can signal is a ``LevelError``, so callers
can catch the whole family at once or single out one kind:

  - UnknownLevel: a label was referenced that is not in the catalog
  - AmbiguousOrMissingLevel: a collapse grouping does not partition the catalog
  - EmptyGroup: a reordering statistic is undefined for a level
  - DuplicateLevel: an explicit level list repeats a label
"""
from __future__ import annotations

from typing import Iterable, Tuple


class LevelError(ValueError):
    """Base class for all level errors."""

    def __init__(self, message: str, labels: Iterable = ()):
        self.labels: Tuple = tuple(labels)
        super().__init__(message)


class UnknownLevel(LevelError):
    """A label was referenced that is not a level of the catalog."""

    def __init__(self, labels: Iterable, context: str = ""):
        labels = tuple(labels)
        where = f" ({context})" if context else ""
        super().__init__(f"Unknown level(s){where}: {list(labels)!r}", labels)


class AmbiguousOrMissingLevel(LevelError):
    """A collapse grouping does not assign every level to exactly one group."""

    def __init__(self, missing: Iterable = (), ambiguous: Iterable = ()):
        self.missing = tuple(missing)
        self.ambiguous = tuple(ambiguous)
        parts = []
        if self.missing:
            parts.append(f"not assigned to any group: {list(self.missing)!r}")
        if self.ambiguous:
            parts.append(f"assigned to more than one group: {list(self.ambiguous)!r}")
        super().__init__(
            "Grouping does not partition the levels; " + "; ".join(parts),
            self.missing + self.ambiguous,
        )


class EmptyGroup(LevelError):
    """A level has no observations, so its statistic is undefined."""

    def __init__(self, labels: Iterable):
        labels = tuple(labels)
        super().__init__(
            f"No observations to compute a statistic for level(s): {list(labels)!r}",
            labels,
        )


class DuplicateLevel(LevelError):
    """An explicit list of levels contains the same label more than once."""

    def __init__(self, labels: Iterable, context: str = ""):
        labels = tuple(labels)
        where = f" ({context})" if context else ""
        super().__init__(f"Duplicate level(s){where}: {list(labels)!r}", labels)
