"""This module defines the default ``mlj`` convention, including its scalar
classification rules, its vectorized fast path for typed arrays, and the
routines that coerce columns to realize a scientific type.

Representations
---------------
.. code:: text

    +---------------+------------------------+------------------------+
    | target        | no missing values      | missing-aware          |
    +===============+========================+========================+
    | Continuous    | float64                | Float64                |
    +---------------+------------------------+------------------------+
    | Count         | int64                  | Int64                  |
    +---------------+------------------------+------------------------+
    | Multiclass    | category (unordered)   | category (unordered)   |
    +---------------+------------------------+------------------------+
    | OrderedFactor | category (ordered)     | category (ordered)     |
    +---------------+------------------------+------------------------+
"""
from __future__ import annotations
import numbers
from typing import Any

import numpy as np
import pandas as pd

from scitypes.conventions import Convention
from scitypes.types import (
    ColorImage, Continuous, Count, GrayImage, Missing, Multiclass,
    OrderedFactor, ScitypeMeta, Union
)
from scitypes.util.categorical import CategoricalValue
from scitypes.util.error import shorten_list


MLJ = Convention("mlj")


# Pillow modes with a single intensity channel (plus optional alpha)
GRAY_MODES = {"1", "L", "LA", "I", "I;16", "F"}


#######################
####    SCALARS    ####
#######################


@MLJ.rule("number")
def classify_number(value: Any) -> ScitypeMeta:
    """Integers and booleans are counts.  Every other real is continuous."""
    if isinstance(value, (numbers.Integral, np.bool_)):
        return Count
    return Continuous


@MLJ.rule("categorical")
def classify_categorical(value: CategoricalValue) -> ScitypeMeta:
    """Categorical values are finite, with one class per level of their pool.
    """
    if value.ordered:
        return OrderedFactor[len(value.levels)]
    return Multiclass[len(value.levels)]


@MLJ.rule("image")
def classify_image(value: Any) -> ScitypeMeta:
    """Images are gray or color depending on their mode."""
    width, height = value.size
    if value.mode in GRAY_MODES:
        return GrayImage[width, height]
    return ColorImage[width, height]


#######################
####    VECTORS    ####
#######################


@MLJ.vector_rule
def classify_typed_vector(values: Any) -> Any:
    """Classify a typed numpy/pandas array from its dtype and missing mask,
    without visiting its elements.
    """
    dtype = getattr(values, "dtype", None)
    if dtype is None or isinstance(values, list):
        return None

    if isinstance(dtype, pd.CategoricalDtype):
        n = len(dtype.categories)
        if n:
            base = OrderedFactor[n] if dtype.ordered else Multiclass[n]
        else:
            base = Union()  # every element is missing
    elif pd.api.types.is_bool_dtype(dtype) or pd.api.types.is_integer_dtype(dtype):
        base = Count
    elif pd.api.types.is_float_dtype(dtype):
        base = Continuous
    else:
        return None

    mask = np.asarray(pd.isna(values))
    if not mask.any():
        return base
    if mask.all():
        return Missing
    return Union(base, Missing)


#########################
####    COERCIONS    ####
#########################


@MLJ.coercion(Continuous)
def to_continuous(series: pd.Series, target: ScitypeMeta, missing: bool) -> pd.Series:
    """Convert to ``float64``, or ``Float64`` if missing values are allowed.
    """
    return as_numeric(series).astype("Float64" if missing else "float64")


@MLJ.coercion(Count)
def to_count(series: pd.Series, target: ScitypeMeta, missing: bool) -> pd.Series:
    """Convert to ``int64``, or ``Int64`` if missing values are allowed.

    Raises
    ------
    ValueError
        If any value is non-integral or infinite.
    """
    numeric = as_numeric(series)
    if not pd.api.types.is_integer_dtype(numeric.dtype):
        values = numeric.dropna()
        floats = values.to_numpy(dtype="float64")
        with np.errstate(invalid="ignore"):
            bad = ~np.isfinite(floats) | (floats != np.round(floats))
        if bad.any():
            raise ValueError(
                f"cannot coerce non-integer values to Count at index "
                f"{shorten_list(values.index[bad])}"
            )

    return numeric.astype("Int64" if missing else "int64")


@MLJ.coercion(Multiclass)
@MLJ.coercion(OrderedFactor)
def to_finite(series: pd.Series, target: ScitypeMeta, missing: bool) -> pd.Series:
    """Convert to a ``category`` dtype, ordered for ``OrderedFactor`` targets.

    Raises
    ------
    ValueError
        If ``target`` is parametrized and the number of realized levels does
        not match.
    """
    ordered = issubclass(target, OrderedFactor)

    # existing categoricals keep their declared levels if N is explicit
    if isinstance(series.dtype, pd.CategoricalDtype):
        result = series.cat.as_ordered() if ordered else series.cat.as_unordered()
        if not target.args:
            result = result.cat.remove_unused_categories()
    else:
        result = series.astype(pd.CategoricalDtype(ordered=ordered))

    n = len(result.cat.categories)
    if target.args and target.args[0] != n:
        raise ValueError(
            f"cannot coerce to {repr(target)}: found {n} distinct level(s) "
            f"{shorten_list(result.cat.categories)}"
        )
    return result


#######################
####    PRIVATE    ####
#######################


def as_numeric(series: pd.Series) -> pd.Series:
    """Get a numeric view of a series.

    Categorical series are replaced by their 1-based level codes, booleans
    by ``Float64`` 0/1 and everything else is parsed by ``pd.to_numeric()``.
    Missing values are preserved.
    """
    if isinstance(series.dtype, pd.CategoricalDtype):
        codes = series.cat.codes
        return (codes + 1).astype("float64").where(codes >= 0)

    if pd.api.types.is_bool_dtype(series.dtype):
        return series.astype("Float64")

    if pd.api.types.is_numeric_dtype(series.dtype):
        return series

    # object, string, etc.
    values = series.astype(object)
    values = values.where(values.notna(), np.nan)
    return pd.to_numeric(values)
