"""This package implements the ``coerce()`` function and its in-place
equivalent, which convert the stored representation of arrays and tables to
realize a scientific type.

Functions
---------
coerce()
    Coerce an array, or the columns of a table, to a target scientific type.

coerce_inplace()
    Coerce the columns of a mutable table in place.
"""
from .base import coerce, coerce_inplace
from . import arguments  # managed arguments
