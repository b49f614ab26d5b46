from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from scitypes import attach, detach, Schema
from scitypes.types import ArrayOf, Continuous, Count, Missing, Table


####################
####    DATA    ####
####################


@pytest.fixture
def attached():
    attach()
    yield
    detach()


#####################
####    TESTS    ####
#####################


def test_attach_adds_series_attributes(attached):
    series = pd.Series([1, 2, None])
    assert series.scitype == ArrayOf(Continuous | Missing, 1)
    assert series.elscitype == Continuous | Missing
    assert series.coerce(Count, verbosity=0).dtype == pd.Int64Dtype()


def test_attach_adds_dataframe_attributes(attached):
    df = pd.DataFrame({"x": [1, 2], "y": [0.5, 1.5]})
    assert df.scitype is Table[ArrayOf(Count, 1) | ArrayOf(Continuous, 1)]
    assert isinstance(df.schema, Schema)
    assert df.schema.scitypes == (Count, Continuous)

    result = df.coerce({"x": Continuous})
    assert result["x"].dtype == np.float64
    assert df["x"].dtype == np.int64


def test_detach_removes_attributes():
    attach()
    detach()
    assert not hasattr(pd.Series([1]), "elscitype")
    assert not hasattr(pd.DataFrame({"x": [1]}), "schema")


def test_detach_restores_masked_attributes():
    original = pd.DataFrame.__dict__.get("coerce")
    attach()
    attach()  # attaching twice remembers the original
    detach()
    assert pd.DataFrame.__dict__.get("coerce") is original
