"""This module holds argument validators for the ``coerce()`` extension_func.
See the API docs for ``@extension_func`` for more details.
"""
from __future__ import annotations

import numpy as np

from scitypes import conventions

from .base import coerce


#########################
####    ARGUMENTS    ####
#########################


@coerce.argument
def verbosity(val: int, context: dict) -> int:
    """The level of advisories to emit during coercion.  ``0`` suppresses
    :class:`MissingLiftWarning` notices, while ``1`` or higher emits them.
    """
    if isinstance(val, (bool, np.bool_)) or not isinstance(val, (int, np.integer)):
        raise TypeError(f"`verbosity` must be an integer, not {repr(val)}")
    if val < 0:
        raise ValueError(f"`verbosity` must be non-negative, not {val}")
    return int(val)


@coerce.argument
def tight(val: bool, context: dict) -> bool:
    """Request the narrow representation of the target scitype, asserting
    that no missing values are present.
    """
    if not isinstance(val, (bool, np.bool_)):
        raise TypeError(f"`tight` must be a boolean, not {repr(val)}")
    return bool(val)


@coerce.argument
def convention(
    val: str | conventions.Convention | None,
    context: dict
) -> conventions.Convention | None:
    """The convention used to realize the target scitype.  If this is
    ``None``, the active convention is looked up at call time.
    """
    if val is None:
        return None
    return conventions.resolve(val)
