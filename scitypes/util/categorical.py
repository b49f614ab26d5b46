"""This module describes a ``CategoricalValue`` object, which represents a
single element drawn from a categorical pool.

Iterating over a ``pandas.Categorical`` yields bare values, which forget the
levels they were drawn from.  The classifier wraps them in this object so that
their scientific type can account for the size and ordering of the pool.
"""
from __future__ import annotations
from typing import Any, Iterable


class CategoricalValue:
    """A scalar categorical element.

    Parameters
    ----------
    value : Any
        The underlying (non-missing) value.
    levels : Iterable[Any]
        The levels of the pool this value belongs to.  Passing the same tuple
        to many values shares it between them.
    ordered : bool, default False
        Indicates whether the pool defines an ordering over its levels.

    Raises
    ------
    ValueError
        If ``value`` is not one of ``levels``.
    """

    __slots__ = ("value", "levels", "ordered")

    def __init__(self, value: Any, levels: Iterable[Any], ordered: bool = False):
        if not isinstance(levels, tuple):
            levels = tuple(levels)
        if value not in levels:
            raise ValueError(f"{repr(value)} is not a level of {list(levels)}")

        self.value = value
        self.levels = levels
        self.ordered = bool(ordered)

    @property
    def level(self) -> int:
        """The 1-based position of this value within its pool."""
        return self.levels.index(self.value) + 1

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, CategoricalValue):
            return (
                self.value == other.value and
                self.levels == other.levels and
                self.ordered == other.ordered
            )
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self.value, self.levels, self.ordered))

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({repr(self.value)}, "
            f"levels={list(self.levels)}, ordered={self.ordered})"
        )
