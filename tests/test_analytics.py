# tests/test_analytics.py
from __future__ import annotations

API = "/api/analytics"

CSV = (
    "produto,valor,cidade\n"
    "Notebook,3500,São Paulo\n"
    "Mouse,150,Rio de Janeiro\n"
    "Teclado,,São Paulo\n"
    "Monitor,1200,São Paulo\n"
).encode("utf-8")


def _upload(client):
    r = client.post("/api/sheets/upload", files={"file": ("vendas.csv", CSV, "text/csv")})
    assert r.status_code == 201
    return r.json()["sheet"]["id"]


def test_seeded_analytics(client):
    r = client.get(f"{API}/1")
    assert r.status_code == 200
    analytics = r.json()["analytics"]
    assert analytics["sheetId"] == "1"
    assert analytics["totalRows"] == 150
    assert analytics["dataQuality"]["completeness"] == 0.95


def test_missing_analytics(client):
    r = client.get(f"{API}/999")
    assert r.status_code == 404
    assert r.json()["message"] == "Análise não encontrada"


def test_seeded_insights_and_charts(client):
    insights = client.post(f"{API}/1/insights").json()["insights"]
    assert insights[0]["id"] == "insight-1"
    charts = client.post(f"{API}/1/charts").json()["charts"]
    assert charts[0]["id"] == "chart-1"
    assert {"labels", "datasets"} <= set(charts[0]["data"])


def test_unknown_sheet_gives_empty_lists(client):
    assert client.post(f"{API}/999/insights").json() == {"insights": []}
    assert client.post(f"{API}/999/charts").json() == {"charts": []}


def test_analytics_of_upload(client):
    sid = _upload(client)
    analytics = client.get(f"{API}/{sid}").json()["analytics"]
    assert analytics["totalRows"] == 4
    assert analytics["totalColumns"] == 3
    quality = analytics["dataQuality"]
    assert quality["completeness"] == 0.92
    assert quality["accuracy"] == 1.0
    assert quality["duplicates"] == 0
    by_name = {c["name"]: c for c in analytics["columnAnalysis"]}
    assert by_name["valor"]["type"] == "number"
    assert by_name["valor"]["nullCount"] == 1
    assert by_name["cidade"]["uniqueCount"] == 2
    assert analytics["recommendations"] == ['Preencher 1 valores ausentes na coluna "valor"']


def test_insights_of_upload(client):
    sid = _upload(client)
    insights = client.post(f"{API}/{sid}/insights").json()["insights"]
    assert [i["type"] for i in insights] == ["quality", "pattern", "statistic"]
    assert insights[0]["id"] == f"insight-{sid}-1"
    assert insights[0]["severity"] == "warning"
    assert "São Paulo" in insights[1]["description"]
    assert all(0 <= i["confidence"] <= 1 for i in insights)


def test_charts_of_upload(client):
    sid = _upload(client)
    charts = client.post(f"{API}/{sid}/charts").json()["charts"]
    assert [c["type"] for c in charts] == ["bar", "line", "pie"]
    bar = charts[0]["data"]
    assert bar["labels"][0] == "São Paulo"
    assert bar["datasets"][0]["data"] == [3, 1]
    line = charts[1]["data"]["datasets"][0]["data"]
    assert line == [3500.0, 150.0, None, 1200.0]


def test_analytics_after_delete(client):
    sid = _upload(client)
    assert client.get(f"{API}/{sid}").status_code == 200
    client.delete(f"/api/sheets/{sid}")
    assert client.get(f"{API}/{sid}").status_code == 404
    assert client.post(f"{API}/{sid}/insights").json() == {"insights": []}
