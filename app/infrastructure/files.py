# app/infrastructure/files.py
from __future__ import annotations

import os
import shutil
import logging
from pathlib import Path

from fastapi import UploadFile, HTTPException

from app.core.config import UPLOADS_DIR, ALLOWED_EXTENSIONS, ALLOWED_MIME_TYPES, MAX_FILE_SIZE_MB

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024  # 1 MB
FORMAT_ERROR = "Formato de arquivo não permitido. Use Excel (.xlsx, .xls) ou CSV (.csv)"


def _sanitize_filename(name: str) -> str:
    return Path(name or "planilha.bin").name


def _max_bytes() -> int:
    return int(float(MAX_FILE_SIZE_MB) * 1024 * 1024)


def _too_large() -> HTTPException:
    return HTTPException(
        status_code=413,
        detail=f"Arquivo muito grande. Limite permitido: {int(MAX_FILE_SIZE_MB)} MB.",
    )


def get_size_bytes(file: UploadFile) -> int:
    # SpooledTemporaryFile: mede e rebobina
    f = file.file
    cur = f.tell()
    f.seek(0, os.SEEK_END)
    size = f.tell()
    f.seek(cur, os.SEEK_SET)
    return size


def is_allowed(filename: str, content_type: str | None) -> bool:
    """Aceita se o MIME OU a extensão estiverem na allow-list."""
    ext = Path(filename or "").suffix.lower()
    mime = (content_type or "").split(";")[0].strip().lower()
    return mime in ALLOWED_MIME_TYPES or ext in ALLOWED_EXTENSIONS


def validate_upload(file: UploadFile | None) -> int:
    """Valida nome, formato e tamanho. Devolve o tamanho em bytes."""
    name = ((file.filename if file else "") or "").strip()
    if not file or not name:
        raise HTTPException(status_code=400, detail="Nenhum arquivo enviado")

    if not is_allowed(name, file.content_type):
        logger.info("Arquivo rejeitado: %s (MIME: %s)", name, file.content_type)
        raise HTTPException(status_code=400, detail=FORMAT_ERROR)

    size = get_size_bytes(file)
    if size > _max_bytes():
        raise _too_large()
    return size


def sheet_dir(sheet_id: str) -> Path:
    return UPLOADS_DIR / str(sheet_id)


def save_upload(file: UploadFile, sheet_id: str) -> Path:
    """Grava o upload em UPLOADS_DIR/<id>/ de forma atômica (.tmp + replace)."""
    safe_name = _sanitize_filename(file.filename)
    target = sheet_dir(sheet_id) / safe_name
    tmp = target.with_suffix(target.suffix + ".tmp")
    target.parent.mkdir(parents=True, exist_ok=True)

    max_bytes = _max_bytes()
    written = 0
    file.file.seek(0)

    try:
        with tmp.open("wb") as out:
            while True:
                chunk = file.file.read(CHUNK_SIZE)
                if not chunk:
                    break
                written += len(chunk)
                if written > max_bytes:
                    raise _too_large()
                out.write(chunk)
        tmp.replace(target)
    except HTTPException:
        tmp.unlink(missing_ok=True)
        raise
    except OSError as e:
        tmp.unlink(missing_ok=True)
        raise HTTPException(status_code=500, detail=f"Erro ao salvar o arquivo: {e!s}")

    return target


def stored_file(sheet_id: str, original_name: str) -> Path:
    return sheet_dir(sheet_id) / _sanitize_filename(original_name)


def remove_sheet_dir(sheet_id: str) -> None:
    d = sheet_dir(sheet_id)
    if d.exists():
        shutil.rmtree(d, ignore_errors=True)
