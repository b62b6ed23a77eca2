"""LevelCatalog: the ordered set of levels of a categorical variable."""
from __future__ import annotations

from collections import Counter
from typing import Dict, Iterable, Iterator, List, Sequence, Tuple

from .errors import DuplicateLevel, UnknownLevel


class LevelCatalog:
    """Ordered, deduplicated, immutable sequence of level labels.

    Order is meaningful: it is the comparison and display order of the
    variable. Reordering never mutates a catalog, it builds a new one.
    """

    __slots__ = ('_labels', '_positions')

    def __init__(self, labels: Iterable[str] = ()):
        labels = tuple(labels)
        for label in labels:
            if not isinstance(label, str):
                raise TypeError(f"Level labels must be strings, got {label!r}")
        if len(set(labels)) != len(labels):
            dupes = [lbl for lbl, n in Counter(labels).items() if n > 1]
            raise DuplicateLevel(dupes)
        self._labels: Tuple[str, ...] = labels
        self._positions: Dict[str, int] = {lbl: i for i, lbl in enumerate(labels)}

    @classmethod
    def from_unique(cls, labels: Iterable[str]) -> "LevelCatalog":
        """Build a catalog keeping the first occurrence of each label."""
        return cls(dict.fromkeys(labels))

    @property
    def labels(self) -> Tuple[str, ...]:
        return self._labels

    def __len__(self) -> int:
        return len(self._labels)

    def __iter__(self) -> Iterator[str]:
        return iter(self._labels)

    def __getitem__(self, pos):
        if isinstance(pos, slice):
            return LevelCatalog(self._labels[pos])
        return self._labels[pos]

    def __contains__(self, label) -> bool:
        return label in self._positions

    def __eq__(self, other) -> bool:
        if isinstance(other, LevelCatalog):
            return self._labels == other._labels
        if isinstance(other, (list, tuple)):
            return self._labels == tuple(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._labels)

    def __repr__(self) -> str:
        return f"LevelCatalog({list(self._labels)!r})"

    def index(self, label: str) -> int:
        try:
            return self._positions[label]
        except KeyError:
            raise UnknownLevel([label]) from None

    def positions(self, labels: Iterable[str], context: str = "") -> List[int]:
        """Positions of ``labels``; raises UnknownLevel naming every absent one."""
        labels = list(labels)
        unknown = [lbl for lbl in labels if lbl not in self._positions]
        if unknown:
            raise UnknownLevel(unknown, context)
        return [self._positions[lbl] for lbl in labels]

    def take(self, order: Sequence[int]) -> "LevelCatalog":
        """New catalog holding the levels at ``order`` (a permutation or subset)."""
        return LevelCatalog(self._labels[i] for i in order)

    def reversed(self) -> "LevelCatalog":
        return LevelCatalog(reversed(self._labels))

    def moved_to_front(self, front: Iterable[str], after: int = 0) -> "LevelCatalog":
        """Move ``front`` levels so they start at position ``after``."""
        front = list(dict.fromkeys(front))
        self.positions(front, context="relevel")
        moving = set(front)
        rest = [lbl for lbl in self._labels if lbl not in moving]
        after = max(0, min(after, len(rest)))
        return LevelCatalog(rest[:after] + front + rest[after:])
