# app/api/analytics.py
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from app.api.deps import sheets_user, owner_filter
from app.application import analytics_service
from app.infrastructure import sheets_repo_mem as sheets_repo

router = APIRouter(prefix="/api/analytics", tags=["analytics"])


def _visible(sheet_id: str, user_id: Optional[str]) -> bool:
    owner = owner_filter(user_id)
    if owner is None:
        return True
    sheet = sheets_repo.get_sheet(sheet_id)
    return bool(sheet) and sheet.get("userId") == owner


@router.get("/{sheet_id}")
def get_analytics(sheet_id: str, user_id: Optional[str] = Depends(sheets_user)):
    analytics = analytics_service.get_analytics(sheet_id) if _visible(sheet_id, user_id) else None
    if not analytics:
        raise HTTPException(status_code=404, detail="Análise não encontrada")
    return {"analytics": analytics}


@router.post("/{sheet_id}/insights")
def generate_insights(sheet_id: str, user_id: Optional[str] = Depends(sheets_user)):
    """Planilha desconhecida (ou ainda não processada) -> lista vazia."""
    if not _visible(sheet_id, user_id):
        return {"insights": []}
    return {"insights": analytics_service.generate_insights(sheet_id)}


@router.post("/{sheet_id}/charts")
def chart_recommendations(sheet_id: str, user_id: Optional[str] = Depends(sheets_user)):
    if not _visible(sheet_id, user_id):
        return {"charts": []}
    return {"charts": analytics_service.chart_recommendations(sheet_id)}
