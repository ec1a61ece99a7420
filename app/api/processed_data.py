# app/api/processed_data.py
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from app.core.config import PREVIEW_LIMIT
from app.api.deps import sheets_user, owner_filter
from app.application import sheets_service
from app.application.export import export_processed
from app.infrastructure import sheets_repo_mem as sheets_repo

router = APIRouter(prefix="/api/processed-data", tags=["processed-data"])

NOT_FOUND = "Dados processados não encontrados"


def _check_owner(sheet_id: str, user_id: Optional[str]) -> None:
    owner = owner_filter(user_id)
    if owner is None:
        return
    sheet = sheets_repo.get_sheet(sheet_id)
    if not sheet or sheet.get("userId") != owner:
        raise HTTPException(status_code=404, detail=NOT_FOUND)


@router.get("/{sheet_id}")
def get_processed_data(
    sheet_id: str,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    user_id: Optional[str] = Depends(sheets_user),
):
    """Registro processado com 'data' fatiado pela página pedida."""
    _check_owner(sheet_id, user_id)
    processed = sheets_repo.get_processed(sheet_id)
    if not processed:
        raise HTTPException(status_code=404, detail=NOT_FOUND)

    out = sheets_service.paginate(
        processed.get("data") or [], page, limit,
        max_limit=max(PREVIEW_LIMIT, 1000), default_limit=PREVIEW_LIMIT,
    )
    processed["data"] = out["items"]
    return {"processedData": processed, "pagination": out["pagination"]}


@router.get("/{sheet_id}/export")
def export(sheet_id: str, format: str = "json", user_id: Optional[str] = Depends(sheets_user)):
    """GET /api/processed-data/{id}/export?format=csv|json|pdf"""
    _check_owner(sheet_id, user_id)
    return export_processed(sheet_id, format)
