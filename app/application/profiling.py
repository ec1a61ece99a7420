# app/application/profiling.py
"""
Perfilamento de planilhas enviadas.

Deriva a partir do DataFrame real o que as planilhas de demonstração trazem
como fixture: qualidade dos dados, análise por coluna, recomendações,
insights e sugestões de gráficos (formato Chart.js).
"""
from __future__ import annotations

import math
import re
from collections import Counter
from datetime import date, datetime, time as dtime, timedelta
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
import pandas as pd

PALETTE = ["#3B82F6", "#10B981", "#F59E0B", "#EF4444", "#8B5CF6"]

# ------------------------
# Detecção de tipo por valor
# ------------------------
_RE_NUMBER = re.compile(r"^-?\d+\.?\d*$")
_RE_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}([T ]\d{2}:\d{2}(:\d{2}(\.\d+)?)?)?$|^\d{2}/\d{2}/\d{4}$")
_RE_BOOL = re.compile(r"^(true|false|sim|não|nao|yes|no)$", re.IGNORECASE)
_RE_EMAIL = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_RE_PHONE = re.compile(r"^\+?\d{10,15}$")
_RE_URL = re.compile(r"^https?://.+")
_RE_CURRENCY = re.compile(r"^(R\$|\$|€|£)\s?\d+")
_RE_PERCENT = re.compile(r"\d+%$")


def detect_value_type(value: Any) -> str:
    """
    Tipo de um valor isolado. A ordem dos testes importa:
    number, date, boolean, email, phone, url, currency, percentage, text.
    """
    if isinstance(value, (bool, np.bool_)):
        return "boolean"
    if isinstance(value, (int, float, np.integer, np.floating)):
        return "number"
    if isinstance(value, (datetime, date, pd.Timestamp)):
        return "date"

    s = str(value if value is not None else "").strip()
    if not s:
        return "text"
    if _RE_NUMBER.match(s):
        return "number"
    if _RE_DATE.match(s):
        return "date"
    if _RE_BOOL.match(s):
        return "boolean"
    if _RE_EMAIL.match(s):
        return "email"
    if _RE_PHONE.match(re.sub(r"[\s\-\(\)]", "", s)):
        return "phone"
    if _RE_URL.match(s):
        return "url"
    if _RE_CURRENCY.match(s):
        return "currency"
    if _RE_PERCENT.search(s):
        return "percentage"
    return "text"


def _column_profile(series: pd.Series) -> Tuple[str, int]:
    """(tipo dominante, quantos valores não nulos batem com ele)."""
    values = series.dropna()
    if values.empty:
        return "text", 0
    if pd.api.types.is_bool_dtype(series):
        return "boolean", int(values.size)
    if pd.api.types.is_numeric_dtype(series):
        return "number", int(values.size)
    if pd.api.types.is_datetime64_any_dtype(series):
        return "date", int(values.size)

    counts = Counter(detect_value_type(v) for v in values)
    col_type, hits = counts.most_common(1)[0]
    return col_type, int(hits)


def column_type(series: pd.Series) -> str:
    return _column_profile(series)[0]


def _ratio(num: float, den: float) -> float:
    if den <= 0:
        return 1.0
    return round(float(num) / float(den), 2)


# ------------------------
# Perfil / analytics
# ------------------------
def profile_dataframe(df: pd.DataFrame) -> Dict[str, Any]:
    rows, cols = int(df.shape[0]), int(df.shape[1])
    cells = rows * cols
    non_null = int(df.notna().sum().sum()) if cells else 0

    duplicates = int(df.duplicated().sum()) if rows else 0

    column_analysis: List[Dict[str, Any]] = []
    recommendations: List[str] = []
    matching = 0

    if duplicates:
        recommendations.append(f"Remover {duplicates} registros duplicados")

    for col in df.columns:
        s = df[col]
        col_type, hits = _column_profile(s)
        null_count = int(s.isna().sum())
        filled = int(s.notna().sum())
        matching += hits
        column_analysis.append({
            "name": str(col),
            "type": col_type,
            "nullCount": null_count,
            "uniqueCount": int(s.nunique(dropna=True)),
        })
        if null_count:
            recommendations.append(f'Preencher {null_count} valores ausentes na coluna "{col}"')
        off = filled - hits
        if off > 0:
            recommendations.append(f'Validar {off} valores fora do padrão "{col_type}" na coluna "{col}"')

    if not recommendations:
        recommendations.append("Nenhum problema de qualidade encontrado")

    return {
        "totalRows": rows,
        "totalColumns": cols,
        "dataQuality": {
            "completeness": _ratio(non_null, cells),
            "accuracy": _ratio(matching, non_null),
            "consistency": round(1.0 - duplicates / rows, 2) if rows else 1.0,
            "duplicates": duplicates,
        },
        "columnAnalysis": column_analysis,
        "recommendations": recommendations,
    }


# ------------------------
# Conversão para JSON
# ------------------------
def _to_native(v: Any) -> Any:
    if v is None:
        return None
    if not isinstance(v, (list, tuple, dict, set)):
        try:
            if pd.isna(v):
                return None
        except (TypeError, ValueError):
            pass
    if isinstance(v, (bool, np.bool_)):
        return bool(v)
    if isinstance(v, np.integer):
        return int(v)
    if isinstance(v, (float, np.floating)):
        f = float(v)
        return None if math.isnan(f) or math.isinf(f) else f
    if isinstance(v, (pd.Timestamp, datetime, date, dtime)):
        return v.isoformat()
    if isinstance(v, (pd.Timedelta, timedelta)):
        return str(v)
    return v


def records_from_dataframe(df: pd.DataFrame) -> List[Dict[str, Any]]:
    """Linhas como dicts com tipos nativos (NaN -> None)."""
    return [
        {str(k): _to_native(v) for k, v in row.items()}
        for row in df.to_dict(orient="records")
    ]


# ------------------------
# Insights
# ------------------------
def _numeric_columns(df: pd.DataFrame) -> List[str]:
    return [
        c for c in df.columns
        if pd.api.types.is_numeric_dtype(df[c]) and not pd.api.types.is_bool_dtype(df[c])
        and df[c].notna().any()
    ]


def _categorical_column(df: pd.DataFrame) -> Optional[str]:
    """Primeira coluna de texto com valores repetidos."""
    rows = len(df)
    for c in df.columns:
        s = df[c]
        if pd.api.types.is_numeric_dtype(s) or pd.api.types.is_bool_dtype(s):
            continue
        n = int(s.nunique(dropna=True))
        if 1 <= n < rows and column_type(s) == "text":
            return str(c)
    return None


def _fmt(x: float) -> str:
    return f"{x:g}"


def build_insights(df: pd.DataFrame, sheet_id: str, created_at: str) -> List[Dict[str, Any]]:
    prof = profile_dataframe(df)
    quality = prof["dataQuality"]
    rows = prof["totalRows"]
    out: List[Dict[str, Any]] = []

    def add(kind: str, title: str, description: str, confidence: float, severity: str) -> None:
        out.append({
            "id": f"insight-{sheet_id}-{len(out) + 1}",
            "type": kind,
            "title": title,
            "description": description,
            "confidence": round(float(confidence), 2),
            "severity": severity,
            "createdAt": created_at,
        })

    completeness = quality["completeness"]
    add(
        "quality",
        "Completude dos dados",
        f"{completeness * 100:.0f}% das células estão preenchidas",
        1.0,
        "positive" if completeness >= 0.95 else "warning",
    )

    if quality["duplicates"]:
        pct = quality["duplicates"] / rows * 100
        add(
            "anomaly",
            "Registros duplicados",
            f"Encontrados {quality['duplicates']} registros duplicados ({pct:.1f}% das linhas)",
            0.99,
            "warning",
        )

    cat = _categorical_column(df)
    if cat:
        vc = df[cat].value_counts(dropna=True)
        top_val, top_n = vc.index[0], int(vc.iloc[0])
        share = top_n / int(vc.sum())
        add(
            "pattern",
            f'Valor predominante em "{cat}"',
            f'"{top_val}" aparece em {share * 100:.0f}% dos registros preenchidos',
            share,
            "info",
        )

    for col in _numeric_columns(df)[:3]:
        s = df[col].dropna().astype(float)
        add(
            "statistic",
            f'Faixa de "{col}"',
            f"Valores entre {_fmt(s.min())} e {_fmt(s.max())} (média {_fmt(round(s.mean(), 2))})",
            1.0,
            "info",
        )
        if len(s) >= 4:
            half = len(s) // 2
            first, second = s.iloc[:half].mean(), s.iloc[half:].mean()
            if first != 0:
                change = (second - first) / abs(first) * 100
                if abs(change) >= 10:
                    add(
                        "trend",
                        f'Tendência de {"alta" if change > 0 else "queda"} em "{col}"',
                        f'A média de "{col}" variou {change:+.1f}% entre a primeira '
                        f"e a segunda metade dos registros",
                        0.7,
                        "positive" if change > 0 else "warning",
                    )
    return out


# ------------------------
# Gráficos recomendados
# ------------------------
def build_charts(df: pd.DataFrame, sheet_id: str) -> List[Dict[str, Any]]:
    charts: List[Dict[str, Any]] = []

    cat = _categorical_column(df)
    if cat:
        vc = df[cat].value_counts(dropna=True).head(5)
        charts.append({
            "id": f"chart-{sheet_id}-bar",
            "type": "bar",
            "title": f"Distribuição por {cat}",
            "description": f"Gráfico de barras mostrando os valores mais frequentes de {cat}",
            "data": {
                "labels": [str(v) for v in vc.index],
                "datasets": [{
                    "label": "Registros",
                    "data": [int(n) for n in vc.values],
                    "backgroundColor": PALETTE[: len(vc)],
                }],
            },
        })

    nums = _numeric_columns(df)
    if nums:
        col = nums[0]
        head = df[col].head(20)
        charts.append({
            "id": f"chart-{sheet_id}-line",
            "type": "line",
            "title": f"Evolução de {col}",
            "description": f"Gráfico de linha mostrando {col} ao longo das primeiras linhas",
            "data": {
                "labels": [str(i + 1) for i in range(len(head))],
                "datasets": [{
                    "label": str(col),
                    "data": [_to_native(v) for v in head.tolist()],
                    "borderColor": PALETTE[0],
                    "backgroundColor": "rgba(59, 130, 246, 0.1)",
                }],
            },
        })

    if df.shape[1]:
        types = Counter(column_type(df[c]) for c in df.columns)
        labels = sorted(types)
        charts.append({
            "id": f"chart-{sheet_id}-pie",
            "type": "pie",
            "title": "Tipos de dados das colunas",
            "description": "Gráfico de pizza mostrando quantas colunas há de cada tipo",
            "data": {
                "labels": labels,
                "datasets": [{
                    "data": [types[t] for t in labels],
                    "backgroundColor": [PALETTE[i % len(PALETTE)] for i in range(len(labels))],
                }],
            },
        })
    return charts
