"""This module describes the ``autotype()`` function, which suggests a
scientific type for each column of a table using a chain of heuristic rules.

The result is a plain dictionary that can be passed directly to
:func:`coerce() <scitypes.coerce>`.
"""
from __future__ import annotations
from typing import Any, Callable, Hashable, Iterable

import pandas as pd

from scitypes import conventions
from scitypes import tables
from scitypes.detect import elscitype
from scitypes.types import (
    Continuous, Count, Missing, Multiclass, OrderedFactor, Unknown,
    allows_missing, nonmissing
)
from scitypes.util.error import shorten_list
from scitypes.util.type_hints import scitype_like


# rule(current, column, nrows) -> suggested scitype
registered_rules: dict[str, Callable[[Any, pd.Series, int], scitype_like]] = {}


######################
####    PUBLIC    ####
######################


def autotype(
    table: Any,
    only_changes: bool = True,
    rules: str | Iterable[str] = ("few_to_finite",),
    convention: str | conventions.Convention | None = None
) -> dict[Hashable, scitype_like]:
    """Suggest a scientific type for each column of a table.

    Parameters
    ----------
    table : Any
        A value satisfying the tabular capability contract.
    only_changes : bool, default True
        If ``True``, only include columns whose suggested scitype differs from
        their current one.
    rules : str | Iterable[str], default ("few_to_finite",)
        The names of the rules to apply, in order.  Each rule sees the
        suggestion made by the previous one.  The available rules are:

            *   ``"few_to_finite"``: ``Count``, ``Continuous`` and ``Unknown``
                columns with few distinct values become ``OrderedFactor``
                (numeric) or ``Multiclass`` (otherwise).
            *   ``"discrete_to_continuous"``: ``Count`` columns become
                ``Continuous``.
            *   ``"string_to_multiclass"``: ``Unknown`` columns that consist
                entirely of strings become ``Multiclass``.

        ``Missing`` is preserved in every case.
    convention : str | Convention | None, default None
        The convention used to classify columns.

    Returns
    -------
    dict[Hashable, scitype]
        A mapping from column names to their suggested scientific types.

    Raises
    ------
    ValueError
        If any of ``rules`` is not recognized.
    NotTabularError
        If ``table`` is not tabular.

    Examples
    --------
    .. doctest::

        >>> df = pd.DataFrame({"x": [1, 2, 1, 2] * 10, "y": range(40)})
        >>> autotype(df)
        {'x': OrderedFactor}
        >>> autotype(df, rules=["discrete_to_continuous"])
        {'x': Continuous, 'y': Continuous}
    """
    conv = conventions.resolve(convention)
    chain = get_rules(rules)
    adapter = tables.adapt(table)

    result = {}
    columns = {name: adapter.get_column(name) for name in adapter.column_names()}
    nrows = max((len(col) for col in columns.values()), default=0)
    for name, column in columns.items():
        current = elscitype(column, conv)
        column = pd.Series(column)
        suggestion = current
        for func in chain:
            suggestion = func(suggestion, column, nrows)

        if not only_changes or suggestion != current:
            result[name] = suggestion

    return result


#######################
####    PRIVATE    ####
#######################


def rule(name: str) -> Callable:
    """A decorator that registers an ``autotype()`` rule under the given
    name.
    """
    def decorator(func: Callable) -> Callable:
        registered_rules[name] = func
        return func

    return decorator


def get_rules(names: str | Iterable[str]) -> list[Callable]:
    """Look up the named rules, raising a ``ValueError`` if any are missing."""
    if isinstance(names, str):
        names = [names]
    names = list(names)

    bad = [name for name in names if name not in registered_rules]
    if bad:
        raise ValueError(
            f"unknown autotype rule(s): {shorten_list(bad)}; must be one of "
            f"{list(registered_rules)}"
        )
    return [registered_rules[name] for name in names]


def keep_missing(current: Any, suggestion: Any) -> Any:
    """Add ``Missing`` to a suggestion if the current type allows it."""
    return suggestion | Missing if allows_missing(current) else suggestion


@rule("few_to_finite")
def few_to_finite(current: Any, column: pd.Series, nrows: int) -> Any:
    """Numeric or unknown columns with only a few distinct values are likely
    categorical.
    """
    base = nonmissing(current)
    if base not in (Count, Continuous, Unknown):
        return current

    try:
        nunique = column.nunique(dropna=True)
    except TypeError:  # unhashable elements
        return current

    if nunique >= max(3, min(0.1 * nrows, 100)):
        return current
    if base is Unknown:
        return keep_missing(current, Multiclass)
    return keep_missing(current, OrderedFactor)


@rule("discrete_to_continuous")
def discrete_to_continuous(current: Any, column: pd.Series, nrows: int) -> Any:
    """Treat counts as continuous."""
    if nonmissing(current) is Count:
        return keep_missing(current, Continuous)
    return current


@rule("string_to_multiclass")
def string_to_multiclass(current: Any, column: pd.Series, nrows: int) -> Any:
    """Unknown columns made up of strings are likely categorical."""
    if nonmissing(current) is not Unknown:
        return current
    values = column.dropna()
    if len(values) and all(isinstance(v, str) for v in values):
        return keep_missing(current, Multiclass)
    return current
