from __future__ import annotations

import pandas as pd
import pytest

from scitypes import coerce, conventions, scitype
from scitypes.conventions import Convention
from scitypes.types import (
    ArrayOf, Continuous, Count, Finite, Multiclass, OrderedFactor, Unknown
)
from scitypes.util.error import InvalidScitypeError


####################
####    DATA    ####
####################


@pytest.fixture(autouse=True)
def restore_convention():
    yield
    conventions.mlj()


#####################
####    TESTS    ####
#####################


def test_mlj_is_active_by_default():
    assert conventions.convention().name == "mlj"
    assert list(conventions.available()) == ["unspecified", "mlj"]


def test_unspecified_convention_classifies_everything_as_unknown():
    conv = conventions.activate("unspecified")
    assert conventions.convention() is conv
    assert scitype(3) is Unknown
    assert scitype([1, 2.5]) == ArrayOf(Unknown, 1)

    conventions.mlj()
    assert scitype(3) is Count


def test_explicit_convention_overrides_active_one():
    conventions.activate("unspecified")
    assert scitype(3, convention="mlj") is Count
    assert scitype(3, convention=conventions.registry["mlj"]) is Count


def test_unspecified_convention_cannot_coerce():
    with pytest.raises(InvalidScitypeError):
        coerce([1, 2], Continuous, convention="unspecified")


def test_activating_unknown_convention_raises():
    with pytest.raises(ValueError):
        conventions.activate("scikit")
    assert conventions.convention().name == "mlj"


def test_resolve_rejects_non_conventions():
    with pytest.raises(TypeError):
        conventions.resolve(3)


def test_registering_a_duplicate_convention_raises():
    with pytest.raises(KeyError):
        conventions.register_convention(Convention("mlj"))


def test_custom_convention_rules_and_coercions():
    conv = Convention("custom")

    @conv.rule("number")
    def classify(value):
        return OrderedFactor[10] if 0 <= value < 10 else Unknown

    @conv.coercion(Finite)
    def to_finite(series, target, missing):
        return series.astype("category")

    with pytest.raises(KeyError):
        conv.rule("number")(classify)

    assert scitype(3, convention=conv) is OrderedFactor[10]
    assert scitype(30, convention=conv) is Unknown
    assert scitype("a", convention=conv) is Unknown

    # coercions are inherited by subtypes of their target
    assert conv.find_coercion(Multiclass[3]) is to_finite
    with pytest.raises(InvalidScitypeError):
        conv.find_coercion(Continuous)

    result = coerce(pd.Series([1, 2]), Multiclass, convention=conv)
    assert isinstance(result.dtype, pd.CategoricalDtype)
