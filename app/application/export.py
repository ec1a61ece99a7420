# app/application/export.py
from __future__ import annotations

import time
from typing import Any, Dict, List

from fastapi import HTTPException
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, Response

from app.infrastructure import sheets_repo_mem as repo


def _csv_cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        # 3500.0 -> 3500
        return str(int(value))
    s = str(value)
    if isinstance(value, str) and any(ch in s for ch in (",", '"', "\n", "\r")):
        return '"' + s.replace('"', '""') + '"'
    return s


def to_csv(records: List[Dict[str, Any]]) -> str:
    """
    Cabeçalho = chaves do primeiro registro; cada linha usa as mesmas chaves
    (chave ausente -> vazio). Linhas separadas por '\\n'.
    """
    if not records:
        return ""
    headers = list(records[0].keys())
    lines = [",".join(_csv_cell(h) for h in headers)]
    for row in records:
        lines.append(",".join(_csv_cell(row.get(h)) for h in headers))
    return "\n".join(lines)


def _attachment(filename: str) -> Dict[str, str]:
    return {"Content-Disposition": f'attachment; filename="{filename}"'}


def export_processed(sheet_id: str, fmt: str = "json") -> Response:
    """
    Exporta os dados processados de uma planilha.
    A existência é verificada antes do formato (404 vence 400).
    """
    processed = repo.get_processed(sheet_id)
    if not processed:
        raise HTTPException(status_code=404, detail="Dados processados não encontrados")

    fmt = (fmt or "json").strip().lower()
    filename = f"dados_processados_{sheet_id}_{int(time.time() * 1000)}"

    if fmt == "csv":
        return Response(
            content=to_csv(processed.get("data") or []),
            media_type="text/csv; charset=utf-8",
            headers=_attachment(f"{filename}.csv"),
        )

    if fmt == "json":
        return JSONResponse(jsonable_encoder(processed), headers=_attachment(f"{filename}.json"))

    if fmt == "pdf":
        # geração de PDF ainda não existe; devolve o JSON e o link alternativo
        return JSONResponse({
            "message": "Exportação PDF em desenvolvimento",
            "data": jsonable_encoder(processed),
            "downloadUrl": f"/api/processed-data/{sheet_id}/export?format=json",
        })

    raise HTTPException(status_code=400, detail="Formato de exportação não suportado")
