"""This module describes the tabular capability contract consumed by
``scitypes``, along with adapters that implement it for common containers.

A value is tabular if and only if one of the registered adapters accepts it.
Adapters expose an ordered list of column names, column lookup by name, and a
way to materialize a new table of the same flavor from a name → column
mapping.  Adapters for mutable containers also support replacing a column in
place.

Adapters
--------
DataFrameAdapter
    ``pandas.DataFrame`` objects.  Supports in-place replacement.

ColumnTableAdapter
    Mappings from column names to array-like columns, e.g.
    ``{"x": [1, 2, 3], "y": [1.0, 2.0, 3.0]}``.  Supports in-place
    replacement if the mapping is mutable.

ArrowTableAdapter
    ``pyarrow.Table`` objects.  Only registered if ``pyarrow`` is installed.
    These are immutable.
"""
from __future__ import annotations
from collections.abc import Mapping, MutableMapping
from typing import Any, Hashable

import numpy as np
import pandas as pd

from scitypes.util.error import (
    NotTabularError, UnsupportedOperationError, shorten_list
)


######################
####    PUBLIC    ####
######################


adapters: list[type[TableAdapter]] = []


def register_adapter(cls: type[TableAdapter]) -> type[TableAdapter]:
    """A class decorator that adds a :class:`TableAdapter` to the registry.

    Adapters are consulted in registration order, and are expected to accept
    mutually exclusive sets of containers.
    """
    if not (isinstance(cls, type) and issubclass(cls, TableAdapter)):
        raise TypeError(f"adapter must be a TableAdapter subclass, not {repr(cls)}")
    if cls in adapters:
        raise KeyError(f"adapter {cls.__name__} is already registered")
    adapters.append(cls)
    return cls


def find_adapter(value: Any) -> type[TableAdapter] | None:
    """Get the adapter class that accepts ``value``, if any."""
    for cls in adapters:
        if cls.accepts(value):
            return cls
    return None


def is_table(value: Any) -> bool:
    """Check whether ``value`` satisfies the tabular capability contract."""
    return find_adapter(value) is not None


def adapt(value: Any) -> TableAdapter:
    """Wrap a table in its adapter.

    Raises
    ------
    NotTabularError
        If no adapter accepts ``value``.
    """
    cls = find_adapter(value)
    if cls is None:
        raise NotTabularError(
            f"cannot inspect the columns of a non-tabular object of type "
            f"{type(value).__qualname__}"
        )
    return cls(value)


class TableAdapter:
    """Base class for table adapters.

    Parameters
    ----------
    table : Any
        The wrapped container.  Adapters never copy it.
    """

    def __init__(self, table: Any):
        self.table = table

    @classmethod
    def accepts(cls, value: Any) -> bool:
        """Check whether this adapter can wrap ``value``."""
        raise NotImplementedError(f"{cls.__qualname__} does not implement accepts()")

    @property
    def supports_inplace(self) -> bool:
        """Indicates whether :meth:`set_column` is available."""
        return False

    def column_names(self) -> list[Hashable]:
        """Get the (unique) names of the table's columns, in order."""
        raise NotImplementedError

    def get_column(self, name: Hashable) -> Any:
        """Get a column by name."""
        raise NotImplementedError

    def nrows(self) -> int:
        """Get the number of rows, taken from the first column.  Adapters for
        containers that record their own length override this.
        """
        names = self.column_names()
        if not names:
            return 0
        return len(self.get_column(names[0]))

    def materialize(self, columns: dict[Hashable, Any]) -> Any:
        """Build a new table of the same flavor from a name → column mapping.
        """
        raise NotImplementedError

    def set_column(self, name: Hashable, column: Any) -> None:
        """Replace a column in place, without rebuilding the table.

        Raises
        ------
        UnsupportedOperationError
            If the wrapped container cannot be modified in place.
        """
        raise UnsupportedOperationError(
            f"in-place coercion is not supported for "
            f"{type(self.table).__qualname__}; use coerce() instead"
        )

    def check_unique(self, names: list[Hashable]) -> list[Hashable]:
        """Raise a ``ValueError`` if ``names`` contains duplicates."""
        seen = set()
        duplicated = [n for n in names if n in seen or seen.add(n)]
        if duplicated:
            raise ValueError(f"duplicate column names: {shorten_list(duplicated)}")
        return names


########################
####    ADAPTERS    ####
########################


@register_adapter
class DataFrameAdapter(TableAdapter):
    """Adapter for ``pandas.DataFrame`` objects."""

    @classmethod
    def accepts(cls, value: Any) -> bool:
        return isinstance(value, pd.DataFrame)

    @property
    def supports_inplace(self) -> bool:
        return True

    def column_names(self) -> list[Hashable]:
        return self.check_unique(list(self.table.columns))

    def get_column(self, name: Hashable) -> pd.Series:
        return self.table[name]

    def nrows(self) -> int:
        return len(self.table.index)

    def materialize(self, columns: dict[Hashable, Any]) -> pd.DataFrame:
        result = self.table.copy()
        for name, col in columns.items():
            result[name] = col
        return result

    def set_column(self, name: Hashable, column: Any) -> None:
        self.table[name] = column


@register_adapter
class ColumnTableAdapter(TableAdapter):
    """Adapter for mappings from column names to array-like columns."""

    @classmethod
    def accepts(cls, value: Any) -> bool:
        if not isinstance(value, Mapping) or isinstance(value, pd.DataFrame):
            return False
        return all(is_column(col) for col in value.values())

    @property
    def supports_inplace(self) -> bool:
        return isinstance(self.table, MutableMapping)

    def column_names(self) -> list[Hashable]:
        return list(self.table.keys())

    def get_column(self, name: Hashable) -> Any:
        return self.table[name]

    def materialize(self, columns: dict[Hashable, Any]) -> Mapping:
        copy = getattr(self.table, "copy", None)
        if copy is None:
            return dict(columns)

        result = copy()
        if not isinstance(result, MutableMapping):
            return dict(columns)
        result.update(columns)
        return result

    def set_column(self, name: Hashable, column: Any) -> None:
        if not self.supports_inplace:
            super().set_column(name, column)
        self.table[name] = column


#######################
####    PRIVATE    ####
#######################


def is_column(value: Any) -> bool:
    """Check whether ``value`` can serve as the column of a column table."""
    if isinstance(value, np.ndarray):
        return value.ndim == 1
    return isinstance(
        value,
        (list, range, pd.Series, pd.Index, pd.api.extensions.ExtensionArray)
    )


# conditional adapters
try:
    import pyarrow as pa
except ImportError:
    pa = None


if pa is not None:

    ARROW_INTEGERS = {
        pa.int8(): pd.Int8Dtype(),
        pa.int16(): pd.Int16Dtype(),
        pa.int32(): pd.Int32Dtype(),
        pa.int64(): pd.Int64Dtype(),
        pa.uint8(): pd.UInt8Dtype(),
        pa.uint16(): pd.UInt16Dtype(),
        pa.uint32(): pd.UInt32Dtype(),
        pa.uint64(): pd.UInt64Dtype(),
    }

    @register_adapter
    class ArrowTableAdapter(TableAdapter):
        """Adapter for ``pyarrow.Table`` objects."""

        @classmethod
        def accepts(cls, value: Any) -> bool:
            return isinstance(value, pa.Table)

        def column_names(self) -> list[Hashable]:
            return self.check_unique(list(self.table.column_names))

        def get_column(self, name: Hashable) -> pd.Series:
            column = self.table.column(name)
            if column.null_count:
                # keep integers with nulls out of float64
                return column.to_pandas(types_mapper=ARROW_INTEGERS.get)
            return column.to_pandas()

        def nrows(self) -> int:
            return self.table.num_rows

        def materialize(self, columns: dict[Hashable, Any]) -> pa.Table:
            frame = pd.DataFrame({k: pd.Series(v) for k, v in columns.items()})
            return pa.Table.from_pandas(frame, preserve_index=False)
