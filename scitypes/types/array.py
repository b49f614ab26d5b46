"""This module contains composite scientific types for containers of values:
``ArrayOf`` for homogeneous arrays and ``TupleOf`` for fixed-length tuples.
"""
from __future__ import annotations
from typing import Any, Iterator

import numpy as np

from .base import CompositeType, _issubtype, check_scitype


class ArrayOf(CompositeType):
    """The scientific type of an ``ndim``-dimensional array whose elements
    have scientific type ``element``.

    Parameters
    ----------
    element : scitype
        The union of the scientific types of every element.
    ndim : int, default 1
        The rank of the array.

    Notes
    -----
    ``ArrayOf`` is covariant in its element type:
    ``ArrayOf(Count, 1) <= ArrayOf(Count | Missing, 1)``.  Arrays of different
    rank are unrelated.
    """

    __slots__ = ("element", "ndim")

    def __init__(self, element: Any, ndim: int = 1):
        if isinstance(ndim, bool) or not isinstance(ndim, (int, np.integer)) or ndim < 1:
            raise ValueError(f"ndim must be a positive integer, not {repr(ndim)}")
        object.__setattr__(self, "element", check_scitype(element))
        object.__setattr__(self, "ndim", int(ndim))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} objects are immutable")

    def includes(self, other: Any) -> bool:
        return (
            isinstance(other, ArrayOf) and
            other.ndim == self.ndim and
            _issubtype(other.element, self.element)
        )

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, ArrayOf):
            return self.element == other.element and self.ndim == other.ndim
        return NotImplemented

    def __hash__(self) -> int:
        return hash((ArrayOf, self.element, self.ndim))

    def __repr__(self) -> str:
        return f"ArrayOf({repr(self.element)}, {self.ndim})"


class TupleOf(CompositeType):
    """The positional product of the scientific types of a tuple's elements.

    .. doctest::

        >>> scitype((1, 2.5, None))
        TupleOf(Count, Continuous, Missing)
    """

    __slots__ = ("elements",)

    def __init__(self, *elements: Any):
        object.__setattr__(
            self,
            "elements",
            tuple(check_scitype(el) for el in elements)
        )

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} objects are immutable")

    def includes(self, other: Any) -> bool:
        return (
            isinstance(other, TupleOf) and
            len(other) == len(self) and
            all(_issubtype(a, b) for a, b in zip(other, self))
        )

    def __iter__(self) -> Iterator[Any]:
        return iter(self.elements)

    def __len__(self) -> int:
        return len(self.elements)

    def __getitem__(self, index: int) -> Any:
        return self.elements[index]

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, TupleOf):
            return self.elements == other.elements
        return NotImplemented

    def __hash__(self) -> int:
        return hash((TupleOf, self.elements))

    def __repr__(self) -> str:
        return f"TupleOf({', '.join(repr(el) for el in self.elements)})"
