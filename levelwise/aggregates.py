"""Named aggregate statistics used to reorder levels.

An aggregate reduces the values of one group (a pandas Series with NaN
already dropped) to a single number. A group without observations has
no statistic (NaN). Built-ins are registered with the
``@aggregate`` decorator; callers may also pass any callable.

Usage::

    @aggregate("p90")
    def p90(values: pd.Series) -> float:
        return values.quantile(0.9)

    reorder_by_statistic(seq, hours, aggregate="p90")
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Union

import numpy as np
import pandas as pd


@dataclass(frozen=True)
class Aggregate:
    """A registered group statistic.

    Attributes:
        name: registry key
        func: callable taking a non-empty Series, returning a number
    """
    name: str
    func: Callable[[pd.Series], float]

    def __call__(self, values: pd.Series) -> float:
        values = values.dropna()
        if len(values) == 0:
            return np.nan
        return float(self.func(values))


AGGREGATES: Dict[str, Aggregate] = {}


def aggregate(name=None):
    """Decorator registering a function as a named aggregate."""
    def decorator(func):
        key = name or func.__name__
        agg = Aggregate(name=key, func=func)
        AGGREGATES[key] = agg
        func._aggregate = agg
        return func
    return decorator


def resolve_aggregate(agg: Union[str, Callable, Aggregate]) -> Aggregate:
    """Turn a name, a decorated function, or a plain callable into an Aggregate."""
    if isinstance(agg, Aggregate):
        return agg
    if isinstance(agg, str):
        try:
            return AGGREGATES[agg]
        except KeyError:
            raise ValueError(
                f"Unknown aggregate {agg!r}; expected one of {sorted(AGGREGATES)}"
            ) from None
    if callable(agg):
        if hasattr(agg, '_aggregate'):
            return agg._aggregate
        return Aggregate(name=getattr(agg, '__name__', repr(agg)), func=agg)
    raise TypeError(f"Cannot use {agg!r} as an aggregate")


@aggregate()
def mean(values: pd.Series) -> float:
    return values.mean()


@aggregate()
def median(values: pd.Series) -> float:
    return values.median()


@aggregate("sum")
def sum_(values: pd.Series) -> float:
    return values.sum()


@aggregate()
def count(values: pd.Series) -> float:
    return len(values)


@aggregate("min")
def min_(values: pd.Series) -> float:
    return values.min()


@aggregate("max")
def max_(values: pd.Series) -> float:
    return values.max()


@aggregate()
def last(values: pd.Series) -> float:
    return values.iloc[-1]
