"""This module contains the categorical scientific types, which are
parametrized by their number of classes.
"""
from __future__ import annotations
from typing import Any

import numpy as np

from .base import Known


def check_positive_int(name: str, val: Any) -> int:
    """Validate a positive integer parameter for a scientific type tag."""
    if isinstance(val, (bool, np.bool_)) or not isinstance(val, (int, np.integer)):
        raise TypeError(f"{name} must be a positive integer, not {repr(val)}")
    if val < 1:
        raise ValueError(f"{name} must be a positive integer, not {val}")
    return int(val)


class Finite(Known):
    """Abstract parent of categorical roles with ``N`` classes.

    .. doctest::

        >>> Finite[3]
        Finite[3]
        >>> Multiclass[3] <= Finite[3]
        True
        >>> Multiclass[3] <= Finite[2]
        False
    """

    params = ("N",)

    @classmethod
    def validate(cls, n: Any) -> tuple[int]:
        return (check_positive_int("N", n),)


class Multiclass(Finite):
    """Unordered categorical data, e.g. names or colors."""


class OrderedFactor(Finite):
    """Categorical data whose classes have a natural order, e.g. ratings."""


Binary = Finite[2]
