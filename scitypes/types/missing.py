"""This module describes the ``Missing`` scientific type, which represents
absent values, along with helpers for missing-aware unions.
"""
from __future__ import annotations
from typing import Any

from .base import ScitypeMeta, Found, Union, check_scitype, iter_members


class Missing(metaclass=ScitypeMeta):
    """The scientific type of an absent value.

    ``Missing`` is not a :class:`Found` type.  A nullable ``T`` is expressed
    as ``T | Missing``, which is distinct from ``T`` itself.
    """

    params: tuple[str, ...] = ()
    args: tuple[Any, ...] = ()

    def __new__(cls, *args, **kwargs):
        raise TypeError(f"scientific types cannot be instantiated: {repr(cls)}")


Scientific = Union(Missing, Found)


def allows_missing(typ: Any) -> bool:
    """Check whether ``typ`` includes ``Missing`` as one of its members."""
    return any(member is Missing for member in iter_members(check_scitype(typ)))


def nonmissing(typ: Any) -> Any:
    """Strip ``Missing`` from a scientific type.

    Examples
    --------
    .. doctest::

        >>> nonmissing(Continuous | Missing)
        Continuous
        >>> nonmissing(Count)
        Count
    """
    return Union(*(m for m in iter_members(check_scitype(typ)) if m is not Missing))
