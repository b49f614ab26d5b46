from __future__ import annotations
import datetime
from types import SimpleNamespace

import numpy as np
import pandas as pd
import pytest

from scitypes import traits
from scitypes.traits import TraitRegistry
from scitypes.util.categorical import CategoricalValue


####################
####    DATA    ####
####################


def image(mode: str, width: int, height: int):
    """Mimic the ``mode``/``size`` protocol of a Pillow image."""
    return SimpleNamespace(mode=mode, size=(width, height))


SAMPLES = {
    "missing": [None, pd.NA, pd.NaT, np.nan, float("nan"), np.float32("nan")],
    "table": [
        pd.DataFrame({"a": [1, 2]}),
        {"a": [1, 2], "b": np.array([1.0, 2.0])},
        {"a": pd.Series([1, 2])},
    ],
    "array": [
        [1, 2, 3],
        [],
        range(3),
        np.array([1.0, 2.0]),
        np.zeros((2, 3)),
        pd.Series([1, 2]),
        pd.Index(["a", "b"]),
        pd.array([1, None], dtype="Int64"),
        pd.Categorical(["a", "b"]),
    ],
    "tuple": [(), (1, 2), ("a", None)],
    "number": [
        1, 2.5, True, np.int8(3), np.float64(1.5), np.bool_(False),
        float("inf"),
    ],
    "categorical": [CategoricalValue("a", ("a", "b"))],
    "image": [image("L", 4, 4), image("RGB", 8, 2)],
    "other": [
        "text", b"bytes", object(), datetime.datetime(2020, 1, 1),
        np.datetime64("2020-01-01"), complex(1, 2), np.array(3.0),
        {"a": 1}, {1, 2},
    ],
}


def samples(*kinds):
    return [
        pytest.param(value, kind, id=f"{kind}-{i}")
        for kind in kinds or SAMPLES
        for i, value in enumerate(SAMPLES[kind])
    ]


#####################
####    TESTS    ####
#####################


@pytest.mark.parametrize("value, kind", samples())
def test_trait_registry_resolves_structural_kinds(value, kind):
    assert traits.resolve(value) == kind


@pytest.mark.parametrize("value, kind", samples())
def test_builtin_kinds_are_mutually_exclusive(value, kind):
    matches = traits.registry.matches(value)
    assert len(matches) <= 1, (
        f"{repr(value)} satisfies more than one kind: {matches}"
    )


def test_builtin_kinds_are_registered_in_order():
    assert list(traits.registry) == [
        "missing", "table", "array", "tuple", "number", "categorical", "image"
    ]


def test_registering_a_duplicate_kind_raises_key_error():
    registry = TraitRegistry()
    registry.register("number", lambda value: isinstance(value, int))
    with pytest.raises(KeyError):
        registry.register("number", lambda value: True)
    with pytest.raises(KeyError):
        registry.register("other", lambda value: True)


def test_registering_a_non_callable_predicate_raises_type_error():
    registry = TraitRegistry()
    with pytest.raises(TypeError):
        registry.register("number", 3)
    with pytest.raises(TypeError):
        registry.register(3, lambda value: True)


def test_resolution_returns_first_match_in_registration_order():
    registry = TraitRegistry()
    registry.register("first", lambda value: value > 0)
    registry.register("second", lambda value: value > 1)
    assert registry.resolve(5) == "first"
    assert registry.resolve(-1) == "other"
    assert registry.matches(5) == ["first", "second"]


def test_registry_exposes_read_only_view():
    registry = TraitRegistry()
    registry.register("number", lambda value: True)
    assert "number" in registry
    assert len(registry) == 1
    with pytest.raises(TypeError):
        registry.traits["other"] = lambda value: True
