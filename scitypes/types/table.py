"""This module describes the ``Table`` scientific type and the ``TableType``
type former, which expresses "every column of this table has one of these
scientific types".
"""
from __future__ import annotations
from typing import Any

from .array import ArrayOf
from .base import (
    CompositeType, Known, ScitypeMeta, Union, _issubtype, check_scitype,
    iter_members
)
from .missing import Scientific
from scitypes.util.error import InvalidScitypeError


class Table(Known):
    """The scientific type of tabular data.

    If a table has columns ``c1, c2, ..., cn``, then by definition:

    .. code:: python

        scitype(X) == Table[scitype(c1) | scitype(c2) | ... | scitype(cn)]

    Parametrized ``Table[K]`` tags are only ever produced by
    :func:`scitype() <scitypes.scitype>` and compared against
    :class:`TableType` objects.
    """

    params = ("K",)

    @classmethod
    def validate(cls, columns: Any) -> tuple[Any]:
        return (check_scitype(columns),)


class TableType(CompositeType):
    """A type former for tables whose columns draw their scientific types
    from a fixed set.

    Parameters
    ----------
    *types : scitype
        The allowed element scitypes.  Each must be a subtype of
        ``Scientific`` (i.e. a :class:`Found` type, ``Missing``, or a union of
        these).

    Raises
    ------
    InvalidScitypeError
        If any of ``types`` is not a scientific element type.

    Notes
    -----
    ``scitype(X) <= TableType(T1, ..., Tn)`` holds if and only if ``X`` is a
    table and, for every column ``col`` of ``X``, the element scitype of
    ``col`` is a subtype of ``T1 | ... | Tn``.  This is checked column by
    column: neither the order nor the number of columns relative to ``n`` is
    relevant.

    Examples
    --------
    .. doctest::

        >>> X = {"x1": [10.0, 20.0, None], "x2": [1.0, 2.0, 3.0], "x3": [4, 5, 6]}
        >>> scitype(X) <= TableType(Continuous, Count)
        False
        >>> scitype(X) <= TableType(Continuous | Missing, Count)
        True
    """

    __slots__ = ("types", "union")

    def __init__(self, *types: Any):
        for typ in types:
            if not _issubtype(check_scitype(typ), Scientific):
                raise InvalidScitypeError(
                    f"arguments of TableType must be scientific element types, "
                    f"not {repr(typ)}"
                )
        object.__setattr__(self, "types", types)
        object.__setattr__(self, "union", Union(*types))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} objects are immutable")

    def includes(self, other: Any) -> bool:
        if isinstance(other, TableType):
            return _issubtype(other.union, self.union)
        if not (isinstance(other, ScitypeMeta) and issubclass(other, Table)):
            return False
        if not other.is_parametrized:
            return False

        for column in iter_members(other.args[0]):
            element = column.element if isinstance(column, ArrayOf) else column
            if not _issubtype(element, self.union):
                return False
        return True

    def within(self, other: ScitypeMeta) -> bool:
        return issubclass(Table, other)

    def matches(self, table: Any) -> bool:
        """Check whether a table satisfies this type.

        Parameters
        ----------
        table : Any
            A ``Table[K]`` scitype, a :class:`Schema <scitypes.Schema>`, or
            a live table.

        Returns
        -------
        bool
            ``True`` if every column of ``table`` has an element scitype that
            is a subtype of the union of this type's members.
        """
        from scitypes.schema import Schema

        if isinstance(table, Schema):
            return all(_issubtype(s, self.union) for s in table.scitypes)
        if isinstance(table, (ScitypeMeta, CompositeType)):
            return _issubtype(table, self)

        from scitypes.detect import scitype
        return _issubtype(scitype(table), self)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, TableType):
            return self.union == other.union
        return NotImplemented

    def __hash__(self) -> int:
        return hash((TableType, self.union))

    def __repr__(self) -> str:
        return f"TableType({', '.join(repr(t) for t in self.types)})"
