# app/api/sheets.py
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, File, UploadFile, status

from app.core.config import DEMO_USER_ID
from app.api.deps import sheets_user, owner_filter
from app.application import sheets_service

router = APIRouter(prefix="/api/sheets", tags=["sheets"])


@router.get("")
def list_sheets(
    page: Optional[str] = None,
    limit: Optional[str] = None,
    user_id: Optional[str] = Depends(sheets_user),
):
    """GET /api/sheets?page=1&limit=10 (valores inválidos caem no padrão)."""
    return sheets_service.list_sheets(page, limit, user_id=owner_filter(user_id))


@router.post("/upload", status_code=status.HTTP_201_CREATED)
def upload_sheet(
    background: BackgroundTasks,
    file: Optional[UploadFile] = File(None),
    user_id: Optional[str] = Depends(sheets_user),
):
    """
    Recebe a planilha e devolve 201 na hora com processed=false.
    A leitura (linhas/colunas/dados) roda em background.
    """
    sheet = sheets_service.register_upload(file, user_id or DEMO_USER_ID)
    background.add_task(sheets_service.process_sheet, sheet["id"])
    return {"sheet": sheet, "message": "Planilha enviada com sucesso! Processando..."}


@router.get("/{sheet_id}")
def get_sheet(sheet_id: str, user_id: Optional[str] = Depends(sheets_user)):
    return {"sheet": sheets_service.get_sheet(sheet_id, owner_filter(user_id))}


@router.delete("/{sheet_id}")
def delete_sheet(sheet_id: str, user_id: Optional[str] = Depends(sheets_user)):
    sheets_service.delete_sheet(sheet_id, owner_filter(user_id))
    return {"message": "Planilha excluída com sucesso"}


@router.get("/{sheet_id}/history")
def get_history(
    sheet_id: str,
    limit: Optional[str] = None,
    user_id: Optional[str] = Depends(sheets_user),
):
    """Eventos da planilha; ?limit=N devolve só os últimos N."""
    return {"items": sheets_service.sheet_history(sheet_id, owner_filter(user_id), limit)}
