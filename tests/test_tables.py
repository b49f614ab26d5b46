from __future__ import annotations
from types import MappingProxyType

import numpy as np
import pandas as pd
import pytest

from scitypes import tables
from scitypes.util.error import NotTabularError, UnsupportedOperationError


#####################
####    TESTS    ####
#####################


@pytest.mark.parametrize("value", [[1, 2], "abc", 3, {"a": 1}, pd.Series([1])])
def test_adapt_rejects_non_tabular_values(value):
    assert not tables.is_table(value)
    with pytest.raises(NotTabularError):
        tables.adapt(value)


def test_dataframe_adapter_exposes_columns_in_order():
    df = pd.DataFrame({"b": [1, 2], "a": [3.0, 4.0]})
    adapter = tables.adapt(df)
    assert isinstance(adapter, tables.DataFrameAdapter)
    assert adapter.column_names() == ["b", "a"]
    assert adapter.get_column("a").equals(df["a"])
    assert adapter.supports_inplace


def test_dataframe_adapter_rejects_duplicate_column_names():
    df = pd.DataFrame([[1, 2]], columns=["a", "a"])
    with pytest.raises(ValueError):
        tables.adapt(df).column_names()


def test_dataframe_adapter_materializes_a_new_frame():
    df = pd.DataFrame({"a": [1, 2], "b": [3, 4]}, index=[10, 20])
    adapter = tables.adapt(df)
    result = adapter.materialize({
        "a": pd.Series([1.0, 2.0], index=[10, 20]),
        "b": df["b"],
    })
    assert result is not df
    assert list(result.columns) == ["a", "b"]
    assert list(result.index) == [10, 20]
    assert result["a"].dtype == np.float64
    assert df["a"].dtype == np.int64


def test_column_table_adapter_accepts_mappings_of_arrays():
    table = {"x": [1, 2], "y": np.array([1.0, 2.0]), "z": pd.Series([1, 2])}
    adapter = tables.adapt(table)
    assert isinstance(adapter, tables.ColumnTableAdapter)
    assert adapter.column_names() == ["x", "y", "z"]
    assert adapter.get_column("x") == [1, 2]


def test_adapters_count_rows():
    assert tables.adapt({"x": range(4), "y": [1, 2, 3, 4]}).nrows() == 4
    assert tables.adapt({}).nrows() == 0
    assert tables.adapt(pd.DataFrame(index=range(3))).nrows() == 3
    assert tables.adapt(pd.DataFrame({"a": [1, 2]})).nrows() == 2


def test_column_table_adapter_supports_inplace_only_for_mutable_mappings():
    assert tables.adapt({"x": [1, 2]}).supports_inplace

    frozen = tables.adapt(MappingProxyType({"x": [1, 2]}))
    assert not frozen.supports_inplace
    with pytest.raises(UnsupportedOperationError):
        frozen.set_column("x", [3, 4])


def test_column_table_adapter_materializes_a_copy():
    table = {"x": [1, 2], "y": [3, 4]}
    result = tables.adapt(table).materialize({"x": [5, 6], "y": [3, 4]})
    assert result == {"x": [5, 6], "y": [3, 4]}
    assert table == {"x": [1, 2], "y": [3, 4]}


def test_register_adapter_rejects_duplicates_and_non_adapters():
    with pytest.raises(KeyError):
        tables.register_adapter(tables.DataFrameAdapter)
    with pytest.raises(TypeError):
        tables.register_adapter(dict)
