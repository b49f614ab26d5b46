"""This package contains various utilities related to ``scitypes``
functionality, including error types, categorical scalars, and type hints.

Modules
-------
categorical
    Scalar values drawn from a categorical pool, which remember their levels
    after being extracted from a ``pandas.Categorical``.

error
    Exception and warning types raised by ``scitypes`` functions, and
    utilities for formatting their messages.

type_hints
    type hints for mypy and other static type checkers.
"""
