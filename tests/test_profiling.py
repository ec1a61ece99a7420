# tests/test_profiling.py
from __future__ import annotations

import math

import numpy as np
import pandas as pd
import pytest

from app.application.profiling import (
    detect_value_type,
    column_type,
    profile_dataframe,
    records_from_dataframe,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("42", "number"),
        ("-3.5", "number"),
        ("2024-01-15", "date"),
        ("2024-01-15T10:30:00", "date"),
        ("15/01/2024", "date"),
        ("sim", "boolean"),
        ("FALSE", "boolean"),
        ("ana@email.com", "email"),
        ("(11) 98765-4321", "phone"),
        ("https://exemplo.com", "url"),
        ("R$ 1500", "currency"),
        ("15%", "percentage"),
        ("São Paulo", "text"),
        ("", "text"),
        (7, "number"),
        (True, "boolean"),
    ],
)
def test_detect_value_type(value, expected):
    assert detect_value_type(value) == expected


def test_column_type_uses_majority():
    s = pd.Series(["a@x.com", "b@y.com", "nao-email", None])
    assert column_type(s) == "email"


def test_profile_counts_duplicates_and_nulls():
    df = pd.DataFrame({"a": [1, 1, 2, None], "b": ["x", "x", "y", "z"]})
    prof = profile_dataframe(df)
    assert prof["totalRows"] == 4
    assert prof["totalColumns"] == 2
    assert prof["dataQuality"]["duplicates"] == 1
    assert prof["dataQuality"]["consistency"] == 0.75
    assert prof["dataQuality"]["completeness"] == round(7 / 8, 2)
    assert prof["recommendations"][0] == "Remover 1 registros duplicados"


def test_profile_clean_frame():
    df = pd.DataFrame({"a": [1, 2], "b": ["x", "y"]})
    prof = profile_dataframe(df)
    assert prof["dataQuality"] == {"completeness": 1.0, "accuracy": 1.0, "consistency": 1.0, "duplicates": 0}
    assert prof["recommendations"] == ["Nenhum problema de qualidade encontrado"]


def test_profile_empty_frame():
    prof = profile_dataframe(pd.DataFrame())
    assert prof["totalRows"] == 0
    assert prof["dataQuality"]["completeness"] == 1.0


def test_records_are_json_native():
    df = pd.DataFrame({
        "n": np.array([1, 2], dtype="int64"),
        "f": [1.5, math.nan],
        "d": pd.to_datetime(["2024-01-01", "2024-01-02"]),
    })
    rows = records_from_dataframe(df)
    assert rows[0] == {"n": 1, "f": 1.5, "d": "2024-01-01T00:00:00"}
    assert rows[1]["f"] is None
    assert type(rows[0]["n"]) is int


def test_records_convert_time_and_timedelta():
    from datetime import time

    df = pd.DataFrame({"t": [time(10, 30)], "d": [pd.Timedelta(minutes=90)]})
    row = records_from_dataframe(df)[0]
    assert row == {"t": "10:30:00", "d": "0 days 01:30:00"}
