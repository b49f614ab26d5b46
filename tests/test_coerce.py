from __future__ import annotations
from types import MappingProxyType
import warnings

import numpy as np
import pandas as pd
import pytest

from scitypes import coerce, coerce_inplace, elscitype, schema
from scitypes.types import (
    Binary, Continuous, Count, Finite, Image, Missing, Multiclass,
    OrderedFactor, Unknown
)
from scitypes.util.error import (
    InvalidScitypeError, MissingLiftWarning, NotTabularError,
    UnsupportedOperationError
)

from tests import assert_series_equal


####################
####    DATA    ####
####################


@pytest.fixture(autouse=True)
def reset_settings():
    yield
    coerce.reset_defaults()


def people() -> dict:
    return {
        "name": ["Siri", "Robo", "Alexa", "Cortana"],
        "height": [152, None, 148, 163],
        "rating": [1, 5, 2, 1],
    }


def numbers() -> pd.DataFrame:
    return pd.DataFrame({
        "x": [1, 2, 3],
        "y": [1.0, 2.0, 3.0],
        "z": [10, 20, 30],
    })


#######################
####    SCALARS    ####
#######################


def test_coerce_list_to_continuous():
    result = coerce([1, 2, 3], Continuous)
    expected = pd.Series([1.0, 2.0, 3.0], dtype="float64")
    assert_series_equal("coerce()", [1, 2, 3], expected, result)


def test_coerce_preserves_series_index_and_name():
    values = pd.Series([3, 4], index=["a", "b"], name="foo")
    result = coerce(values, Continuous)
    expected = pd.Series([3.0, 4.0], index=["a", "b"], name="foo")
    assert_series_equal("coerce()", values, expected, result)
    assert values.dtype == np.int64  # input is untouched


def test_coerce_float_to_count():
    result = coerce(pd.Series([1.0, 2.0, 3.0]), Count)
    expected = pd.Series([1, 2, 3], dtype="int64")
    assert_series_equal("coerce()", [1.0, 2.0, 3.0], expected, result)


@pytest.mark.parametrize("values", [[1.5, 2.0], [1.0, np.inf], ["1.5"]])
def test_coerce_non_integer_values_to_count_raises(values):
    with pytest.raises(ValueError):
        coerce(values, Count)


def test_coerce_strings_to_numbers():
    result = coerce(pd.Series(["1", "2"]), Count)
    assert_series_equal(
        "coerce()", ["1", "2"], pd.Series([1, 2], dtype="int64"), result
    )


def test_coerce_booleans_to_count():
    result = coerce(pd.Series([True, False]), Count)
    assert_series_equal(
        "coerce()", [True, False], pd.Series([1, 0], dtype="int64"), result
    )


def test_coerce_categorical_to_number_uses_one_based_levels():
    values = pd.Series(
        pd.Categorical(["hi", "lo", "hi"], categories=["lo", "hi"], ordered=True)
    )
    result = coerce(values, Count)
    assert_series_equal(
        "coerce()", values, pd.Series([2, 1, 2], dtype="int64"), result
    )


#######################
####    MISSING    ####
#######################


def test_missing_values_lift_the_target_with_a_warning():
    with pytest.warns(MissingLiftWarning, match="Union\\(Count, Missing\\)"):
        result = coerce([1, None, 3], Count)

    expected = pd.Series([1, pd.NA, 3], dtype="Int64")
    assert_series_equal("coerce()", [1, None, 3], expected, result)
    assert elscitype(result) == Count | Missing


def test_missing_lift_warning_points_at_the_caller():
    with pytest.warns(MissingLiftWarning) as record:
        coerce([1, None], Count)
    assert record[0].filename == __file__

    with pytest.warns(MissingLiftWarning) as record:
        coerce(people(), {"height": Continuous})
    assert record[0].filename == __file__

    with pytest.warns(MissingLiftWarning) as record:
        coerce_inplace(people(), {"height": Continuous})
    assert record[0].filename == __file__


def test_missing_lift_warning_is_suppressed_at_verbosity_zero():
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        result = coerce([1.5, None], Continuous, verbosity=0)
    assert result.dtype == pd.Float64Dtype()


def test_missing_lift_warning_can_be_silenced_globally():
    coerce.verbosity = 0
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        coerce([1.5, None], Continuous)


def test_target_including_missing_does_not_warn():
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        result = coerce([1, 2], Count | Missing)
    assert result.dtype == pd.Int64Dtype()
    assert elscitype(result) is Count


def test_masked_dtype_is_treated_as_missing_aware():
    values = pd.Series([1, 2], dtype="Int64")
    with pytest.warns(MissingLiftWarning):
        result = coerce(values, Continuous)
    assert result.dtype == pd.Float64Dtype()


def test_tight_coercion_requests_narrow_representation():
    result = coerce([1, 2], Count | Missing, tight=True)
    assert result.dtype == np.int64

    values = pd.Series([1, 2], dtype="Int64")
    assert coerce(values, Count, tight=True).dtype == np.int64


def test_tight_coercion_with_missing_values_raises():
    with pytest.raises(ValueError, match="tight=True"):
        coerce([1.0, None], Continuous, tight=True)


@pytest.mark.parametrize(
    "values, target",
    [
        ([1, 2, 3], Continuous),
        ([1.0, 2.0], Count),
        (["a", "b", "b"], Multiclass[2]),
        ([3, 1, 2], OrderedFactor[3]),
    ]
)
def test_tight_coercion_realizes_target_exactly(values, target):
    assert elscitype(coerce(values, target, tight=True)) is target


######################
####    FINITE    ####
######################


def test_coerce_to_multiclass_infers_cardinality():
    result = coerce(["a", "b", "c", "a"], Multiclass)
    assert result.cat.categories.tolist() == ["a", "b", "c"]
    assert not result.cat.ordered
    assert elscitype(result) is Multiclass[3]


def test_coerce_to_ordered_factor():
    result = coerce([3, 1, 2, 1], OrderedFactor)
    assert result.cat.ordered
    assert result.cat.categories.tolist() == [1, 2, 3]
    assert elscitype(result) is OrderedFactor[3]


def test_coerce_to_finite_with_wrong_cardinality_raises():
    with pytest.raises(ValueError):
        coerce(["a", "b", "c"], Multiclass[4])


def test_explicit_cardinality_keeps_declared_levels():
    values = pd.Series(pd.Categorical(["a", "b"], categories=["a", "b", "c"]))
    result = coerce(values, Multiclass[3])
    assert result.cat.categories.tolist() == ["a", "b", "c"]

    result = coerce(values, Multiclass)
    assert result.cat.categories.tolist() == ["a", "b"]


def test_coerce_multiclass_to_ordered_factor():
    values = pd.Series(["lo", "hi"], dtype="category")
    result = coerce(values, OrderedFactor)
    assert result.cat.ordered
    assert elscitype(result) is OrderedFactor[2]


def test_finite_with_missing_values():
    with pytest.warns(MissingLiftWarning):
        result = coerce(["a", None, "b"], Multiclass)
    assert elscitype(result) == Multiclass[2] | Missing


######################
####    ERRORS    ####
######################


@pytest.mark.parametrize("target", [Finite, Binary, Image, Unknown, "Continuous", float])
def test_coerce_to_unrealizable_target_raises(target):
    with pytest.raises(InvalidScitypeError):
        coerce([1, 2], target)


def test_coerce_non_array_raises_type_error():
    with pytest.raises(TypeError):
        coerce(3, Continuous)


def test_column_specification_on_non_table_raises():
    with pytest.raises(NotTabularError):
        coerce([1, 2, 3], {"x": Continuous})


#####################
####    TABLE    ####
#####################


def test_coerce_table_by_column_name():
    X = people()
    with pytest.warns(MissingLiftWarning, match="column 'height'"):
        result = coerce(
            X,
            {"name": Multiclass, "height": Continuous, "rating": OrderedFactor}
        )

    assert schema(result).scitypes == (
        Multiclass[4], Continuous | Missing, OrderedFactor[3]
    )
    assert X == people()  # input is untouched


def test_coerce_table_by_rule():
    result = coerce(numbers(), {Count: Continuous})
    assert isinstance(result, pd.DataFrame)
    assert schema(result).scitypes == (Continuous, Continuous, Continuous)
    assert numbers()["x"].dtype == np.int64


def test_column_names_take_precedence_over_rules():
    result = coerce(numbers(), [(Count, Continuous), ("x", OrderedFactor)])
    assert schema(result).scitypes == (
        OrderedFactor[3], Continuous, Continuous
    )


def test_rules_apply_in_order_and_first_match_wins():
    result = coerce(numbers(), [(Count, OrderedFactor), (Count, Continuous)])
    assert schema(result).scitypes[0] is OrderedFactor[3]


def test_rules_match_columns_with_missing_values():
    table = {"a": [1, None], "b": [0.5, 1.5]}
    result = coerce(table, {Count: Continuous}, verbosity=0)
    assert schema(result).scitypes == (Continuous | Missing, Continuous)


def test_bare_scitype_applies_to_every_column():
    result = coerce(numbers(), Continuous)
    assert (result.dtypes == np.float64).all()


def test_unmatched_specification_returns_input():
    df = numbers()
    assert coerce(df, {}) is df
    assert coerce(df, {Multiclass: Continuous}) is df


def test_names_missing_from_the_table_are_ignored():
    df = pd.DataFrame({"x": [1, 2]})
    result = coerce(df, {"x": Continuous, "nope": Count})
    assert list(result.columns) == ["x"]
    assert result["x"].dtype == np.float64
    assert coerce(df, {"nope": Count}) is df

    table = {"x": [1, 2]}
    coerce_inplace(table, {"nope": Continuous})
    assert table == {"x": [1, 2]}


def test_failed_column_leaves_table_untouched():
    df = pd.DataFrame({"a": [1, 2], "b": [0.5, 1.5]})
    with pytest.raises(ValueError):
        coerce(df, {"a": Continuous, "b": Count})
    assert df["a"].dtype == np.int64


#######################
####    INPLACE    ####
#######################


def test_coerce_inplace_modifies_dataframe():
    df = numbers()
    assert coerce_inplace(df, {"x": Continuous}) is None
    assert df["x"].dtype == np.float64
    assert df["z"].dtype == np.int64


def test_coerce_inplace_modifies_column_mapping():
    table = people()
    coerce_inplace(table, {"rating": OrderedFactor})
    assert elscitype(table["rating"]) is OrderedFactor[3]
    assert table["name"] == people()["name"]


def test_coerce_inplace_on_immutable_table_raises():
    table = MappingProxyType({"x": [1, 2]})
    with pytest.raises(UnsupportedOperationError):
        coerce_inplace(table, {"x": Continuous})
    assert table["x"] == [1, 2]


def test_coerce_inplace_on_non_table_raises():
    with pytest.raises(NotTabularError):
        coerce_inplace([1, 2], Continuous)


def test_coerce_inplace_stages_every_column_before_writing():
    df = pd.DataFrame({"a": [1, 2], "b": [0.5, 1.5]})
    with pytest.raises(ValueError):
        coerce_inplace(df, {"a": Continuous, "b": Count})
    assert df["a"].dtype == np.int64


def test_invalid_table_specification_raises():
    with pytest.raises(InvalidScitypeError):
        coerce(numbers(), "Continuous")
    with pytest.raises(InvalidScitypeError):
        coerce(numbers(), {"x": "Continuous"})
