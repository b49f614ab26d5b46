"""This module describes the ``scitype()`` function and its relatives, which
infer the scientific type of arbitrary values.

Classification first resolves the structural *kind* of a value using the
trait registry.  Structural kinds (missing values, tables, arrays and tuples)
are handled here, while convention-specific kinds (numbers, categorical
values, images) are delegated to the active convention.
"""
from __future__ import annotations
from functools import reduce
from typing import Any, Iterable, Iterator

import numpy as np
import pandas as pd

from scitypes import conventions
from scitypes import tables
from scitypes import traits
from scitypes.types import (
    ArrayOf, Missing, Table, TupleOf, Union, Unknown, union
)
from scitypes.util.categorical import CategoricalValue
from scitypes.util.error import EmptySequenceError
from scitypes.util.type_hints import scitype_like


######################
####    PUBLIC    ####
######################


def scitype(
    value: Any,
    convention: str | conventions.Convention | None = None
) -> scitype_like:
    """Infer the scientific type of a value.

    Parameters
    ----------
    value : Any
        The value to classify.
    convention : str | Convention | None, default None
        The convention to classify with.  If ``None``, the active convention
        is used.

    Returns
    -------
    scitype
        The most specific scientific type of ``value``, or ``Unknown`` if no
        rule matches.

    Examples
    --------
    .. doctest::

        >>> scitype(3.14)
        Continuous
        >>> scitype(None)
        Missing
        >>> scitype([1, 2, None])
        ArrayOf(Union(Count, Missing), 1)
        >>> scitype((1, "a"))
        TupleOf(Count, Unknown)
        >>> scitype(pd.DataFrame({"x": [1.5, 2.5], "y": [1, 2]}))
        Table[Union(ArrayOf(Continuous, 1), ArrayOf(Count, 1))]
    """
    conv = conventions.resolve(convention)
    kind = traits.resolve(value)

    if kind == "missing":
        return Missing

    if kind == "tuple":
        return TupleOf(*(scitype(el, conv) for el in value))

    if kind == "array":
        ndim = getattr(value, "ndim", 1)
        if not size(value):
            return ArrayOf(Unknown, ndim)
        return ArrayOf(scitype_union(value, conv), ndim)

    if kind == "table":
        adapter = tables.adapt(value)
        columns = (adapter.get_column(name) for name in adapter.column_names())
        return Table[Union(*(scitype(col, conv) for col in columns))]

    return conv.classify(kind, value)


def scitype_union(
    values: Iterable,
    convention: str | conventions.Convention | None = None
) -> scitype_like:
    """Get the union of the scientific types of a sequence of values.

    Parameters
    ----------
    values : Iterable
        The values to classify.
    convention : str | Convention | None, default None
        The convention to classify with.  If ``None``, the active convention
        is used.

    Returns
    -------
    scitype
        ``union(scitype(v1), scitype(v2), ...)``, computed as a left fold over
        the elements.  Typed numpy/pandas arrays may be classified directly
        from their dtype if the convention supplies a vectorized rule, which
        always gives the same result as the fold.

    Raises
    ------
    EmptySequenceError
        If ``values`` is empty.

    Examples
    --------
    .. doctest::

        >>> scitype_union([1, 2.5, None])
        Union(Continuous, Count, Missing)
        >>> scitype_union(pd.Series([1, 2, 3]))
        Count
    """
    conv = conventions.resolve(convention)
    if not isinstance(values, (list, np.ndarray, pd.Series, pd.Index)) and (
        not isinstance(values, pd.api.extensions.ExtensionArray)
    ):
        values = list(values)

    if not size(values):
        raise EmptySequenceError("cannot take the scitype union of zero elements")

    result = conv.classify_vector(values)
    if result is not None:
        return result

    elements = iter_elements(values)
    return reduce(union, dict.fromkeys(scitype(el, conv) for el in elements))


def elscitype(
    values: Iterable,
    convention: str | conventions.Convention | None = None
) -> scitype_like:
    """Get the element scientific type of an array.

    This is equivalent to :func:`scitype_union`, except that empty arrays
    return ``Unknown`` rather than raising an error.
    """
    try:
        return scitype_union(values, convention)
    except EmptySequenceError:
        return Unknown


#######################
####    PRIVATE    ####
#######################


def size(values: Any) -> int:
    """Get the total number of elements in an array."""
    if isinstance(values, np.ndarray):
        return values.size
    return len(values)


def iter_elements(values: Any) -> Iterator:
    """Iterate over the elements of an array.

    Multidimensional numpy arrays are flattened.  Elements of pandas
    categoricals are wrapped in :class:`CategoricalValue` objects that share
    the pool of their parent array.
    """
    if isinstance(values, np.ndarray):
        return iter(values.flat)

    dtype = getattr(values, "dtype", None)
    if isinstance(dtype, pd.CategoricalDtype):
        levels = tuple(dtype.categories)
        ordered = bool(dtype.ordered)
        return (
            el if traits.is_missing(el) else CategoricalValue(el, levels, ordered)
            for el in values
        )

    return iter(values)
