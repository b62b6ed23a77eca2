"""Column dtype predicates used when turning a column into a sequence.

Each predicate works for both pandas and polars dtypes.

Note: polars dtype equality (==) has surprising behavior with non-polars
types (e.g., `np.dtype('O') == pl.Int8` returns True). We guard against
this by checking isinstance(dtype, pl.DataType) before polars comparisons.
"""
from typing import Callable


def _is_polars_dtype(dtype) -> bool:
    """Check if dtype is a polars DataType instance or subclass."""
    try:
        import polars as pl
        return isinstance(dtype, pl.DataType) or (
            isinstance(dtype, type) and issubclass(dtype, pl.DataType)
        )
    except (ImportError, TypeError):
        return False


def is_string(dtype) -> bool:
    """Check if dtype is string/object (pandas or polars)."""
    if _is_polars_dtype(dtype):
        try:
            import polars as pl
            return dtype in (pl.Utf8, pl.String)
        except (ImportError, AttributeError):
            return False

    try:
        import pandas as pd
        return bool(pd.api.types.is_string_dtype(dtype))
    except (ImportError, TypeError):
        pass

    return False


def is_categorical(dtype) -> bool:
    """Check if dtype already carries levels (pandas category, polars Categorical/Enum)."""
    if _is_polars_dtype(dtype):
        try:
            import polars as pl
            return isinstance(dtype, (pl.Categorical, pl.Enum)) or dtype in (pl.Categorical, pl.Enum)
        except (ImportError, AttributeError):
            return False

    try:
        import pandas as pd
        return isinstance(dtype, pd.CategoricalDtype)
    except (ImportError, TypeError):
        pass

    return False


def is_ordered_enum(dtype) -> bool:
    """True when the dtype fixes its category order (pandas category, polars Enum)."""
    if _is_polars_dtype(dtype):
        try:
            import polars as pl
            return isinstance(dtype, pl.Enum)
        except (ImportError, AttributeError):
            return False
    try:
        import pandas as pd
        return isinstance(dtype, pd.CategoricalDtype)
    except (ImportError, TypeError):
        return False


def any_of(*predicates: Callable) -> Callable:
    """Combinator: returns True if any predicate matches."""
    def combined(dtype) -> bool:
        return any(p(dtype) for p in predicates)
    combined.__name__ = f"any_of({', '.join(p.__name__ for p in predicates)})"
    return combined


is_labelable = any_of(is_string, is_categorical)
