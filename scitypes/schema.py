"""This module describes the ``schema()`` function, which summarizes the columns
of a table by name, stored type and element scientific type.
"""
from __future__ import annotations
from typing import Any, Hashable, NamedTuple

import numpy as np
import pandas as pd

from scitypes import conventions
from scitypes import tables
from scitypes.detect import elscitype
from scitypes.util.error import InconsistentLengthError, shorten_list
from scitypes.util.type_hints import scitype_like


class Schema(NamedTuple):
    """An immutable summary of a table's columns.

    Attributes
    ----------
    names : tuple[Hashable, ...]
        The (unique) column names, in order.
    types : tuple[Any, ...]
        The stored representation of each column.  This is the ``dtype`` of
        numpy/pandas columns, or the common Python type of the elements of a
        plain sequence (``object`` if they are mixed).
    scitypes : tuple[scitype, ...]
        The element scientific type of each column.
    nrows : int
        The number of rows in the table.
    """

    names: tuple[Hashable, ...]
    types: tuple[Any, ...]
    scitypes: tuple[scitype_like, ...]
    nrows: int

    def to_frame(self) -> pd.DataFrame:
        """Render the schema as a ``pandas.DataFrame`` indexed by column name.

        Examples
        --------
        .. doctest::

            >>> df = pd.DataFrame({"x": [1, 2, None], "y": ["a", "b", "c"]})
            >>> schema(df).to_frame()  # doctest: +NORMALIZE_WHITESPACE
                 type                     scitype
            name
            x  float64  Union(Continuous, Missing)
            y   object                  Unknown
        """
        return pd.DataFrame(
            {"type": object_array(self.types), "scitype": object_array(self.scitypes)},
            index=pd.Index(list(self.names), dtype=object, name="name"),
        )

    def __str__(self) -> str:
        return str(self.to_frame())


def schema(
    table: Any,
    convention: str | conventions.Convention | None = None
) -> Schema:
    """Extract the schema of a table.

    Parameters
    ----------
    table : Any
        A value satisfying the tabular capability contract.  See
        :mod:`scitypes.tables`.
    convention : str | Convention | None, default None
        The convention to classify columns with.  If ``None``, the active
        convention is used.

    Returns
    -------
    Schema
        A fresh, immutable summary of the table's columns.  It holds no
        reference to the table itself.

    Raises
    ------
    NotTabularError
        If ``table`` is not tabular.
    InconsistentLengthError
        If the columns of ``table`` have different lengths.
    ValueError
        If ``table`` has duplicate column names.
    """
    conv = conventions.resolve(convention)
    adapter = tables.adapt(table)

    names = tuple(adapter.column_names())
    columns = [adapter.get_column(name) for name in names]

    lengths = {len(col) for col in columns}
    if len(lengths) > 1:
        raise InconsistentLengthError(
            f"columns must have the same length, not {shorten_list(sorted(lengths))}"
        )

    return Schema(
        names=names,
        types=tuple(stored_type(col) for col in columns),
        scitypes=tuple(elscitype(col, conv) for col in columns),
        nrows=lengths.pop() if lengths else adapter.nrows(),
    )


#######################
####    PRIVATE    ####
#######################


def stored_type(column: Any) -> Any:
    """Get the stored representation of a column."""
    dtype = getattr(column, "dtype", None)
    if dtype is not None:
        return dtype

    observed = {type(el) for el in column}
    if len(observed) == 1:
        return observed.pop()
    return object


def object_array(values: tuple) -> np.ndarray:
    """Pack values into a 1D object array without letting numpy unpack
    sequence-like elements (e.g. ``TupleOf``).
    """
    result = np.empty(len(values), dtype=object)
    for index, value in enumerate(values):
        result[index] = value
    return result
