"""This module defines the ``coerce()`` function and its in-place equivalent,
which rewrite the stored representation of arrays and table columns to realize
a target scientific type.
"""
from __future__ import annotations
from collections.abc import Iterable, Mapping
from typing import Any, Callable, Hashable
import warnings

import pandas as pd

from scitypes import conventions
from scitypes import tables
from scitypes import traits
from scitypes.decorators.base import FunctionDecorator
from scitypes.decorators.extension import extension_func
from scitypes.detect import elscitype
from scitypes.types import (
    Missing, allows_missing, check_scitype, is_scitype, nonmissing, union
)
from scitypes.types.base import _issubtype
from scitypes.util.error import (
    InvalidScitypeError, MissingLiftWarning, NotTabularError,
    UnsupportedOperationError, external_stacklevel, shorten_list
)
from scitypes.util.type_hints import coercion_spec, scitype_like, vector_like


class columnwise(FunctionDecorator):
    """A basic decorator that breaks up tabular inputs into individual columns
    before continuing with a coercion.

    Placing this above ``@extension_func`` allows the coercion itself to
    always work in one dimension.  Every column is coerced before the result
    is assembled, so a failure in any column leaves the input untouched.
    """
    # pylint: disable=invalid-name

    def __call__(
        self,
        data: Any,
        target: coercion_spec | scitype_like,
        **kwargs
    ):
        """Apply the wrapped function for each targeted column independently.
        """
        if tables.is_table(data):
            adapter = tables.adapt(data)
            staged = stage(adapter, target, self.__wrapped__, kwargs)
            if not staged:
                return data

            columns = {
                name: staged.get(name, adapter.get_column(name))
                for name in adapter.column_names()
            }
            return adapter.materialize(columns)

        if not is_scitype(target) and isinstance(target, Mapping):
            raise NotTabularError(
                f"column specifications can only be applied to tables, not "
                f"{type(data).__qualname__}"
            )

        # base case
        return self.__wrapped__(data, target, **kwargs)


######################
####    PUBLIC    ####
######################


@columnwise
@extension_func
def coerce(
    data: Any,
    target: scitype_like,
    *,
    verbosity: int = 1,
    tight: bool = False,
    convention: conventions.Convention | None = None
) -> pd.Series | Any:
    """Coerce an array or table to realize a scientific type.

    Parameters
    ----------
    data : Any
        A 1-dimensional array, or a table satisfying the tabular capability
        contract.
    target : scitype | Mapping | Iterable[tuple]
        The scientific type to realize.  For tables, this can be a mapping
        (or iterable of pairs) whose keys are either column names or
        scientific types.  Column names map a single column to its target,
        while scientific types act as rules that rewrite every column whose
        element scitype is a subtype of ``key | Missing``.  Rules are tried in
        order, and explicit column names always take precedence.  Names that
        are not columns of the table are ignored.  A bare scientific type is
        applied to every column.
    verbosity : int, default 1
        Set to ``0`` to suppress :class:`MissingLiftWarning` advisories.
    tight : bool, default False
        Request the narrow (non-missing-aware) representation.  This asserts
        that ``data`` has no missing values.
    convention : str | Convention | None, default None
        The convention that realizes ``target``.  If ``None``, the active
        convention is used.

    Returns
    -------
    pandas.Series | table
        A new ``pandas.Series`` (preserving the index and name of ``data`` if
        it is a series), or a new table of the same flavor as ``data``.  The
        input is never modified.

    Raises
    ------
    InvalidScitypeError
        If ``target`` is not a scientific type, or the convention cannot
        realize it.
    ValueError
        If ``tight=True`` and missing values are present, or if the values
        of ``data`` cannot represent ``target``.
    NotTabularError
        If a column specification is given for a value that is not a table.

    Notes
    -----
    If ``data`` contains missing values (or has a missing-aware dtype, like
    ``Int64``), and ``target`` does not include ``Missing``, then the target
    is widened to ``target | Missing``.  A :class:`MissingLiftWarning` is
    emitted whenever this happens, unless ``verbosity=0``.

    Examples
    --------
    .. doctest::

        >>> coerce([1, 2, 3], Continuous)
        0    1.0
        1    2.0
        2    3.0
        dtype: float64
        >>> coerce(["a", "b", "a"], Multiclass).cat.categories.tolist()
        ['a', 'b']
    """
    conv = conventions.resolve(convention)
    target = check_scitype(target)
    routine = conv.find_coercion(nonmissing(target))
    allowed = allows_missing(target)

    series = as_series(data)
    mask = series.isna()
    has_missing = bool(mask.any())

    if tight and has_missing:
        raise ValueError(
            f"tight=True, but missing values were found at index "
            f"{shorten_list(series.index[mask.to_numpy()])}"
        )

    missing_aware = not tight and (allowed or has_missing or is_masked(series))
    if missing_aware and not allowed and verbosity >= 1:
        label = "" if series.name is None else f"column {repr(series.name)} "
        warnings.warn(
            f"missing values encountered coercing {label}to {repr(target)}; "
            f"coerced to {repr(target | Missing)} instead",
            MissingLiftWarning,
            stacklevel=external_stacklevel()
        )

    return routine(series, nonmissing(target), missing_aware)


def coerce_inplace(data: Any, spec: coercion_spec | scitype_like, **kwargs) -> None:
    """Coerce the columns of a table in place.

    This accepts the same arguments as :func:`coerce`.

    Raises
    ------
    NotTabularError
        If ``data`` is not a table.
    UnsupportedOperationError
        If ``data`` cannot be modified in place.  No work is done, and the
        table is left unchanged.

    Notes
    -----
    Every targeted column is coerced before any of them are replaced, so
    errors in the coercion itself leave the table unchanged.  The
    replacements are then applied one column at a time, each one swapping the
    full column.  This is not atomic across columns: if a replacement fails
    partway through, the columns before it have already been changed.
    """
    adapter = tables.adapt(data)
    if not adapter.supports_inplace:
        raise UnsupportedOperationError(
            f"in-place coercion is not supported for {type(data).__qualname__}"
        )

    staged = stage(adapter, spec, coerce.__wrapped__, kwargs)
    for name, column in staged.items():
        adapter.set_column(name, column)


#######################
####    PRIVATE    ####
#######################


def stage(
    adapter: tables.TableAdapter,
    spec: coercion_spec | scitype_like,
    func: Callable,
    kwargs: dict
) -> dict[Hashable, pd.Series]:
    """Coerce every column that is targeted by ``spec``, without modifying
    the table.
    """
    conv = conventions.resolve(kwargs.get("convention", func.convention))
    targets = resolve_targets(adapter, spec, conv)

    staged = {}
    for name, target in targets.items():
        column = adapter.get_column(name)
        if getattr(column, "name", None) != name:
            column = pd.Series(column, name=name)
        staged[name] = func(column, target, **kwargs)
    return staged


def resolve_targets(
    adapter: tables.TableAdapter,
    spec: coercion_spec | scitype_like,
    conv: conventions.Convention
) -> dict[Hashable, scitype_like]:
    """Map each targeted column of a table to its target scitype.

    Names in ``spec`` that are not columns of the table are ignored.
    """
    names = adapter.column_names()

    # broadcast a bare scitype across every column
    if is_scitype(spec):
        return dict.fromkeys(names, spec)

    if isinstance(spec, Mapping):
        items = spec.items()
    elif isinstance(spec, Iterable) and not isinstance(spec, (str, bytes)):
        items = spec
    else:
        raise InvalidScitypeError(
            f"not a scientific type or column specification: {repr(spec)}"
        )
    by_name = {}
    rules = []
    for key, target in items:
        check_scitype(target)
        if is_scitype(key):
            rules.append((union(Missing, key), target))
        else:
            by_name[key] = target

    result = {}
    for name in names:
        if name in by_name:
            result[name] = by_name[name]
        elif rules:
            current = elscitype(adapter.get_column(name), conv)
            for source, target in rules:
                if _issubtype(current, source):
                    result[name] = target
                    break

    return result


def as_series(data: vector_like) -> pd.Series:
    """Convert a 1-dimensional array into a ``pandas.Series``."""
    if isinstance(data, pd.Series):
        return data
    if not traits.is_array(data):
        raise TypeError(
            f"coerce() expects a table or a 1-dimensional array, not "
            f"{type(data).__qualname__}"
        )
    if isinstance(data, pd.Index):
        return pd.Series(data.to_numpy(), name=data.name)
    return pd.Series(data)


def is_masked(series: pd.Series) -> bool:
    """Check whether a series has a structurally missing-aware dtype, e.g.
    ``Int64``, ``Float64``, ``boolean`` or ``string``.
    """
    return getattr(series.dtype, "na_value", None) is pd.NA
