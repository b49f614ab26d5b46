"""This package defines the structure and contents of the ``scitypes`` type
system: a closed hierarchy of scientific type tags, the composite types built
from them, and the subtype relation between them.

Hierarchy
---------
.. code:: text

    Found
    ├── Unknown
    └── Known
        ├── Infinite
        │   ├── Continuous
        │   └── Count
        ├── Finite[N]
        │   ├── Multiclass[N]
        │   └── OrderedFactor[N]
        ├── Image[W, H]
        │   ├── GrayImage[W, H]
        │   └── ColorImage[W, H]
        └── Table[K]
    Missing

Composites
----------
Union
    A set of scientific types.  Also spelled ``A | B``.

ArrayOf
    The scientific type of an array, given the union of its element types.

TupleOf
    The positional product of the scientific types of a tuple's elements.

TableType
    A type former for tables whose columns draw their types from a fixed set.

Functions
---------
issubtype
    The subtype relation.  Also spelled ``A <= B``.

union
    Combine scientific types into their simplified union.
"""
from .base import (
    CompositeType, Found, Known, ScitypeMeta, Union, Unknown, check_scitype,
    is_scitype, issubtype, iter_members, union
)
from .missing import Missing, Scientific, allows_missing, nonmissing
from .infinite import Continuous, Count, Infinite
from .finite import Binary, Finite, Multiclass, OrderedFactor
from .image import ColorImage, GrayImage, Image
from .array import ArrayOf, TupleOf
from .table import Table, TableType
