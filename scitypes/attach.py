"""This module describes the ``attach()`` and ``detach()`` functions, which
integrate ``scitypes`` directly into ``pandas.Series`` and
``pandas.DataFrame`` objects.

Once attached, the following attributes are available:

.. code:: text

    +-------------------+----------------+--------------------+
    | attribute         | pandas.Series  | pandas.DataFrame   |
    +===================+================+====================+
    | .scitype          | x              | x                  |
    +-------------------+----------------+--------------------+
    | .elscitype        | x              |                    |
    +-------------------+----------------+--------------------+
    | .schema           |                | x                  |
    +-------------------+----------------+--------------------+
    | .coerce()         | x              | x                  |
    +-------------------+----------------+--------------------+

Any attributes that these mask are restored by ``detach()``.
"""
from __future__ import annotations
from typing import Any, Callable

import pandas as pd

from scitypes.convert import coerce
from scitypes.detect import elscitype, scitype
from scitypes.schema import schema


# (class, name) -> original descriptor, or NOT_FOUND
attached: dict[tuple[type, str], Any] = {}


NOT_FOUND = object()


def attach() -> None:
    """Attach ``scitypes`` attributes to ``pandas.Series`` and
    ``pandas.DataFrame``.

    Examples
    --------
    .. doctest::

        >>> attach()
        >>> pd.Series([1, 2, 3]).scitype
        ArrayOf(Count, 1)
        >>> pd.Series([1, 2, 3]).coerce(Continuous).dtype
        dtype('float64')
        >>> detach()
    """
    # Series
    attach_to(pd.Series, "scitype", property(scitype))
    attach_to(pd.Series, "elscitype", property(elscitype))
    attach_to(pd.Series, "coerce", method(coerce))

    # DataFrame
    attach_to(pd.DataFrame, "scitype", property(scitype))
    attach_to(pd.DataFrame, "schema", property(schema))
    attach_to(pd.DataFrame, "coerce", method(coerce))


def detach() -> None:
    """Remove every attribute added by :func:`attach`, restoring any that
    they masked.
    """
    for (class_, name), original in reversed(list(attached.items())):
        if original is NOT_FOUND:
            delattr(class_, name)
        else:
            setattr(class_, name, original)
    attached.clear()


#######################
####    PRIVATE    ####
#######################


def attach_to(class_: type, name: str, descriptor: Any) -> None:
    """Set an attribute on a class, remembering the one it masks."""
    key = (class_, name)
    if key not in attached:
        attached[key] = class_.__dict__.get(name, NOT_FOUND)
    setattr(class_, name, descriptor)


def method(func: Callable) -> Callable:
    """Wrap a function so that it can be used as an instance method."""

    def bound(self, *args, **kwargs):
        return func(self, *args, **kwargs)

    bound.__name__ = func.__name__
    bound.__doc__ = func.__doc__
    return bound
