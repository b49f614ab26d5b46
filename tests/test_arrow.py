from __future__ import annotations

import pytest

pa = pytest.importorskip("pyarrow")

from scitypes import coerce, coerce_inplace, schema, tables  # noqa: E402
from scitypes.types import Continuous, Count, Missing, Multiclass  # noqa: E402
from scitypes.util.error import UnsupportedOperationError  # noqa: E402


####################
####    DATA    ####
####################


def table():
    return pa.table({"a": [1, 2, None], "b": ["x", "y", "x"]})


#####################
####    TESTS    ####
#####################


def test_arrow_tables_are_adapted():
    adapter = tables.adapt(table())
    assert isinstance(adapter, tables.ArrowTableAdapter)
    assert adapter.column_names() == ["a", "b"]
    assert not adapter.supports_inplace
    assert adapter.nrows() == 3


def test_schema_of_arrow_table():
    result = schema(table())
    assert result.names == ("a", "b")
    assert result.scitypes[0] == Count | Missing
    assert result.nrows == 3


def test_coerce_arrow_table_returns_arrow_table():
    result = coerce(table(), {"a": Count, "b": Multiclass}, verbosity=0)
    assert isinstance(result, pa.Table)
    assert schema(result).scitypes == (Count | Missing, Multiclass[2])


def test_coerce_inplace_on_arrow_table_raises():
    with pytest.raises(UnsupportedOperationError):
        coerce_inplace(table(), {"a": Continuous})
