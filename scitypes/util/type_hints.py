"""This module provides PEP 484-style type hints for ``scitypes`` constructs.
"""
from typing import (
    Any, Callable, Hashable, Iterable, List, Mapping, Tuple, Union
)

import numpy as np
import numpy.typing
import pandas as pd


#########################
####    ITERABLES    ####
#########################


array_like = numpy.typing.ArrayLike


list_like = Union[
    List,
    Tuple,
    array_like
]


vector_like = Union[
    List,
    np.ndarray,
    pd.Series,
    pd.Index,
    pd.api.extensions.ExtensionArray
]


#######################
####    SCITYPE    ####
#######################


# a scitype class, a Union/ArrayOf/TupleOf/TableType object
scitype_like = Any


coercion_spec = Union[
    Mapping[Union[Hashable, scitype_like], scitype_like],
    Iterable[Tuple[Union[Hashable, scitype_like], scitype_like]]
]


predicate = Callable[[Any], bool]
