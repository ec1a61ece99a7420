# app/application/sheets_service.py
from __future__ import annotations

import logging
import math
import time
from datetime import datetime
from typing import Any, Dict, List, Optional

from fastapi import HTTPException, UploadFile

from app.core.config import PROCESSING_DELAY_SEC
from app.domain.models import Sheet, ProcessedData, ProcessedSummary
from app.infrastructure import sheets_repo_mem as repo
from app.infrastructure.datasources import read_dataframe
from app.infrastructure.files import validate_upload, save_upload, stored_file, remove_sheet_dir
from app.infrastructure.history_repo_fs import append_history, read_history
from app.application.profiling import profile_dataframe, records_from_dataframe
from app.application import analytics_service

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100


def now_iso() -> str:
    return datetime.utcnow().isoformat() + "Z"


def _positive_int(value: Any, default: int) -> int:
    try:
        n = int(value)
    except (TypeError, ValueError):
        return default
    return n if n > 0 else default


def paginate(items: List[Any], page: Any, limit: Any, max_limit: int = MAX_LIMIT,
             default_limit: int = DEFAULT_LIMIT) -> Dict[str, Any]:
    """Fatia 'items' e devolve {items, pagination}. page/limit inválidos -> padrão."""
    page_n = _positive_int(page, DEFAULT_PAGE)
    limit_n = min(_positive_int(limit, default_limit), max_limit)
    start = (page_n - 1) * limit_n
    total = len(items)
    return {
        "items": items[start:start + limit_n],
        "pagination": {
            "page": page_n,
            "limit": limit_n,
            "total": total,
            "pages": math.ceil(total / limit_n),
        },
    }


# -----------------------
# Consulta
# -----------------------
def list_sheets(page: Any = None, limit: Any = None, user_id: Optional[str] = None) -> Dict[str, Any]:
    out = paginate(repo.list_sheets(user_id=user_id), page, limit)
    return {"sheets": out["items"], "pagination": out["pagination"]}


def get_sheet(sheet_id: str, user_id: Optional[str] = None) -> Dict[str, Any]:
    """404 se não existe ou, com user_id, se pertence a outro usuário."""
    sheet = repo.get_sheet(sheet_id)
    if not sheet or (user_id and sheet.get("userId") != user_id):
        raise HTTPException(status_code=404, detail="Planilha não encontrada")
    return sheet


def sheet_history(sheet_id: str, user_id: Optional[str] = None, limit: Any = None) -> List[Dict[str, Any]]:
    get_sheet(sheet_id, user_id)
    return read_history(sheet_id, _positive_int(limit, 0) or None)


# -----------------------
# Upload + processamento
# -----------------------
def register_upload(file: Optional[UploadFile], user_id: str) -> Dict[str, Any]:
    size = validate_upload(file)

    sheet_id = repo.next_id()
    path = save_upload(file, sheet_id)

    sheet = Sheet(
        id=sheet_id,
        filename=f"{int(time.time() * 1000)}-{file.filename}",
        originalName=file.filename,
        fileSize=size,
        mimeType=file.content_type or "application/octet-stream",
        uploadDate=now_iso(),
        userId=user_id,
    ).model_dump()
    repo.insert_sheet(sheet)

    append_history(sheet_id, {"type": "sheet_uploaded", "file": path.name, "size": size, "userId": user_id})
    logger.info("Planilha %s recebida: %s (%d bytes)", sheet_id, file.filename, size)
    return sheet


def process_sheet(sheet_id: str) -> None:
    """
    Tarefa em background: lê o arquivo com pandas e preenche contagens e
    dados processados. Se a planilha foi apagada no meio do caminho, não faz nada.
    """
    if PROCESSING_DELAY_SEC > 0:
        time.sleep(PROCESSING_DELAY_SEC)

    sheet = repo.get_sheet(sheet_id)
    if not sheet:
        logger.info("Planilha %s removida antes do processamento", sheet_id)
        return

    append_history(sheet_id, {"type": "processing_started"})
    t0 = time.time()
    try:
        df = read_dataframe(stored_file(sheet_id, sheet["originalName"]))
        prof = profile_dataframe(df)

        rows, cols = int(df.shape[0]), int(df.shape[1])
        complete_rows = int(df.notna().all(axis=1).sum()) if cols else 0
        elapsed = round(time.time() - t0, 3)

        processed = ProcessedData(
            id=sheet_id,
            sheetId=sheet_id,
            data=records_from_dataframe(df),
            summary=ProcessedSummary(
                totalRows=rows,
                processedRows=complete_rows,
                errorRows=rows - complete_rows,
                processingTime=elapsed,
                qualityScore=prof["dataQuality"]["completeness"],
            ),
            createdAt=now_iso(),
        ).model_dump()
    except Exception as e:
        # qualquer falha de leitura/perfil encerra em status "error"
        logger.exception("Falha ao processar planilha %s", sheet_id)
        if repo.update_sheet(sheet_id, processed=False, status="error", errorMessage=str(e)):
            append_history(sheet_id, {"type": "processing_failed", "error": str(e)})
        return

    if not repo.save_processed_if_exists(sheet_id, processed):
        return
    repo.update_sheet(
        sheet_id,
        processed=True,
        status="completed",
        rowCount=rows,
        columnCount=cols,
        errorMessage=None,
        processedAt=now_iso(),
    )
    analytics_service.invalidate(sheet_id)
    append_history(sheet_id, {
        "type": "processing_completed",
        "rows": rows,
        "cols": cols,
        "duration_ms": int(elapsed * 1000),
    })
    logger.info("Planilha %s processada: %dx%d", sheet_id, rows, cols)


# -----------------------
# Remoção
# -----------------------
def delete_sheet(sheet_id: str, user_id: Optional[str] = None) -> None:
    get_sheet(sheet_id, user_id)
    repo.delete_sheet(sheet_id)
    analytics_service.invalidate(sheet_id)
    remove_sheet_dir(sheet_id)
    logger.info("Planilha %s removida", sheet_id)
