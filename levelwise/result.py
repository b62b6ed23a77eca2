"""Ok/Err result values for callers that prefer typed results to exceptions.

Level operations raise a ``LevelError`` subclass on failure.
``attempt`` runs an operation and turns that failure into an ``Err``
so the caller decides whether to abort, skip, or substitute a default.
Anything that is not a ``LevelError`` is a bug and still propagates.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar, Union

from .errors import LevelError

T = TypeVar('T')


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful operation result."""
    value: T

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: Any) -> T:
        return self.value


@dataclass(frozen=True)
class Err:
    """Failed operation result."""
    error: LevelError
    operation: str

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self):
        raise self.error

    def unwrap_or(self, default: Any) -> Any:
        return default

    def raise_error(self):
        raise self.error


OpResult = Union[Ok, Err]


def attempt(operation: Callable, *args, **kwargs) -> OpResult:
    """Run ``operation(*args, **kwargs)`` and wrap the outcome.

    Usage::

        res = attempt(manual_relevel, seq, front=["z"])
        if res.ok:
            seq = res.value
    """
    name = getattr(operation, '__name__', repr(operation))
    try:
        return Ok(operation(*args, **kwargs))
    except LevelError as e:
        return Err(error=e, operation=name)
