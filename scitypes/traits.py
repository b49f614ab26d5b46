"""This module describes the trait registry, which resolves arbitrary values to
a symbolic *kind* using structural predicates.

Kinds are never detected by name.  Each one is backed by a predicate that
inspects the shape of a value (does it expose named columns?  is it a missing
sentinel?), and the classifier dispatches on the kind that matches.

Kinds
-----
missing
    ``None``, ``pandas.NA``, ``pandas.NaT`` and floating point ``NaN``.
table
    Any value accepted by a registered table adapter.  See
    :mod:`scitypes.tables`.
array
    Lists, numpy arrays of rank >= 1, pandas ``Series``, ``Index`` and
    extension arrays.
tuple
    Python tuples.
number
    Real (non-missing) numbers, including booleans and numpy scalars.
categorical
    :class:`CategoricalValue <scitypes.util.categorical.CategoricalValue>`
    scalars.
image
    Objects exposing a string ``mode`` and a 2-tuple ``size``, as Pillow
    images do.
other
    Everything else.
"""
from __future__ import annotations
import numbers
from types import MappingProxyType
from typing import Any, Iterator, Mapping

import numpy as np
import pandas as pd

from scitypes import tables
from scitypes.util.categorical import CategoricalValue
from scitypes.util.type_hints import predicate


OTHER = "other"


class TraitRegistry:
    """An ordered, append-only mapping from kind names to structural
    predicates.

    Notes
    -----
    Resolution applies the predicates in registration order and returns the
    first match.  Registrants are responsible for making their predicates
    mutually exclusive: no value should satisfy more than one of them.  This
    is a caller contract, which is not verified during resolution.  Use
    :meth:`matches` to audit it.

    Registration is not thread-safe, and is expected to happen while modules
    are being imported.
    """

    def __init__(self):
        self._traits: dict[str, predicate] = {}

    @property
    def traits(self) -> Mapping[str, predicate]:
        """A read-only view of the registered kinds and their predicates."""
        return MappingProxyType(self._traits)

    def register(self, kind: str, func: predicate) -> None:
        """Add a new kind to the registry.

        Parameters
        ----------
        kind : str
            The symbolic name of the kind.
        func : Callable[[Any], bool]
            A structural predicate that returns ``True`` for values of this
            kind.

        Raises
        ------
        TypeError
            If ``kind`` is not a string or ``func`` is not callable.
        KeyError
            If ``kind`` is already registered (or is the reserved ``"other"``
            kind).  Kinds are never overwritten.
        """
        if not isinstance(kind, str):
            raise TypeError(f"kind must be a string, not {repr(kind)}")
        if not callable(func):
            raise TypeError(f"predicate must be callable, not {repr(func)}")
        if kind == OTHER or kind in self._traits:
            raise KeyError(f"kind {repr(kind)} is already registered")

        self._traits[kind] = func

    def resolve(self, value: Any) -> str:
        """Get the kind of a value, or ``"other"`` if no predicate matches."""
        for kind, func in self._traits.items():
            if func(value):
                return kind
        return OTHER

    def matches(self, value: Any) -> list[str]:
        """Get every kind whose predicate accepts ``value``.

        A well-formed registry returns at most one kind for any value.
        """
        return [kind for kind, func in self._traits.items() if func(value)]

    def __contains__(self, kind: str) -> bool:
        return kind in self._traits

    def __iter__(self) -> Iterator[str]:
        return iter(self._traits)

    def __len__(self) -> int:
        return len(self._traits)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self._traits)})"


#######################
####    DEFAULT    ####
#######################


registry = TraitRegistry()


def register(kind: str, func: predicate) -> None:
    """Add a kind to the process-wide trait registry."""
    registry.register(kind, func)


def resolve(value: Any) -> str:
    """Resolve a value's kind using the process-wide trait registry."""
    return registry.resolve(value)


def is_missing(value: Any) -> bool:
    """Check whether ``value`` is a missing-value sentinel."""
    if value is None or value is pd.NA or value is pd.NaT:
        return True
    if isinstance(value, (float, np.floating, np.datetime64, np.timedelta64)):
        return bool(pd.isna(value))
    return False


def is_array(value: Any) -> bool:
    """Check whether ``value`` is a homogeneous, array-like container."""
    if isinstance(value, np.ndarray):
        return value.ndim >= 1
    return isinstance(
        value,
        (list, range, pd.Series, pd.Index, pd.api.extensions.ExtensionArray)
    )


def is_number(value: Any) -> bool:
    """Check whether ``value`` is a real, non-missing number."""
    if isinstance(value, np.bool_):
        return True
    return isinstance(value, numbers.Real) and not is_missing(value)


def is_image(value: Any) -> bool:
    """Check whether ``value`` exposes the ``mode``/``size`` image protocol."""
    mode = getattr(value, "mode", None)
    size = getattr(value, "size", None)
    return (
        isinstance(mode, str) and
        isinstance(size, tuple) and
        len(size) == 2
    )


register("missing", is_missing)
register("table", tables.is_table)
register("array", is_array)
register("tuple", lambda value: isinstance(value, tuple))
register("number", is_number)
register("categorical", lambda value: isinstance(value, CategoricalValue))
register("image", is_image)
