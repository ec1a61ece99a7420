# tests/test_export.py
from __future__ import annotations

from app.application.export import to_csv


def test_empty():
    assert to_csv([]) == ""


def test_header_comes_from_first_record():
    rows = [{"a": 1, "b": 2}, {"b": 3, "c": 4}]
    assert to_csv(rows) == "a,b\n1,2\n,3"


def test_quoting():
    rows = [{"nome": 'Ana "Aninha"', "obs": "a,b", "linha": "x\ny", "ok": True, "vazio": None}]
    out = to_csv(rows)
    header, body = out.split("\n", 1)
    assert header == "nome,obs,linha,ok,vazio"
    assert body == '"Ana ""Aninha""","a,b","x\ny",true,'


def test_numbers_are_not_quoted():
    assert to_csv([{"v": 1.5, "n": 10}]) == "v,n\n1.5,10"


def test_integral_floats_drop_decimal_part():
    assert to_csv([{"v": 3500.0, "w": -2.0, "x": 0.25}]) == "v,w,x\n3500,-2,0.25"
