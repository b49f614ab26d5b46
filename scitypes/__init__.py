"""Scientific types for tabular data.

``scitypes`` classifies values and table columns into a closed hierarchy of
scientific types (``Continuous``, ``Count``, ``Multiclass``, ...) that
describe how data should be interpreted, independent of how it is stored.  It
also coerces columns between representations to realize a requested
scientific type.

Subpackages
-----------
conventions
    Named bundles of classification and coercion rules.  ``mlj`` is active by
    default.

convert
    The ``coerce()`` function and its in-place equivalent.

decorators
    Cooperative decorators and managed arguments for ``coerce()``.

types
    Defines the structure and contents of the ``scitypes`` type system.

util
    Utilities for ``scitypes``-related functionality.

Modules
-------
attach
    Direct ``scitypes`` integration for ``pandas.Series`` and
    ``pandas.DataFrame`` objects.

autotype
    Heuristic scitype suggestions for the columns of a table.

detect
    Scientific type inference for arbitrary values.

schema
    Column summaries for tables.

tables
    The tabular capability contract and its adapters.

traits
    Structural classification of values into kinds.

tree
    Text rendering of the type hierarchy.
"""
from .types import (
    ArrayOf, Binary, ColorImage, Continuous, Count, Finite, Found, GrayImage,
    Image, Infinite, Known, Missing, Multiclass, OrderedFactor, Scientific,
    Table, TableType, TupleOf, Union, Unknown, allows_missing, is_scitype,
    issubtype, nonmissing, union
)
from .util.categorical import CategoricalValue
from .util.error import (
    EmptySequenceError, InconsistentLengthError, InvalidScitypeError,
    MissingLiftWarning, NotTabularError, UnsupportedOperationError
)
from .conventions import Convention, activate, convention, mlj
from .detect import elscitype, scitype, scitype_union
from .schema import Schema, schema
from .convert import coerce, coerce_inplace
from .autotype import autotype
from .tree import tree
from .attach import attach, detach
