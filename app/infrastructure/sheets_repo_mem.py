# app/infrastructure/sheets_repo_mem.py
from __future__ import annotations

import copy
import threading
from typing import Any, Dict, List, Optional

from app.infrastructure.fixtures import seed_sheets, seed_processed_data

_sheets: List[Dict[str, Any]] = []
_processed: Dict[str, Dict[str, Any]] = {}
_lock = threading.RLock()
_last_id = 0


def reset() -> None:
    global _last_id
    with _lock:
        _sheets[:] = seed_sheets()
        _processed.clear()
        _processed.update(seed_processed_data())
        _last_id = max((int(s["id"]) for s in _sheets), default=0)


# ---------- planilhas ----------
def list_sheets(user_id: Optional[str] = None) -> List[Dict[str, Any]]:
    """Em ordem de upload. Com user_id, só as planilhas desse usuário."""
    with _lock:
        rows = [s for s in _sheets if user_id is None or s.get("userId") == user_id]
        return copy.deepcopy(rows)


def get_sheet(sheet_id: str) -> Optional[Dict[str, Any]]:
    with _lock:
        for s in _sheets:
            if s.get("id") == sheet_id:
                return copy.deepcopy(s)
    return None


def next_id() -> str:
    """Reserva o próximo id; ids de planilhas apagadas não voltam a ser usados."""
    global _last_id
    with _lock:
        _last_id += 1
        return str(_last_id)


def insert_sheet(sheet: Dict[str, Any]) -> Dict[str, Any]:
    with _lock:
        _sheets.append(copy.deepcopy(sheet))
    return sheet


def update_sheet(sheet_id: str, **fields) -> Optional[Dict[str, Any]]:
    with _lock:
        for s in _sheets:
            if s.get("id") == sheet_id:
                s.update(fields)
                return copy.deepcopy(s)
    return None


def delete_sheet(sheet_id: str) -> bool:
    with _lock:
        idx = next((i for i, s in enumerate(_sheets) if s.get("id") == sheet_id), -1)
        if idx < 0:
            return False
        _sheets.pop(idx)
        _processed.pop(sheet_id, None)
        return True


# ---------- dados processados ----------
def get_processed(sheet_id: str) -> Optional[Dict[str, Any]]:
    with _lock:
        rec = _processed.get(sheet_id)
        return copy.deepcopy(rec) if rec else None


def save_processed_if_exists(sheet_id: str, record: Dict[str, Any]) -> bool:
    """Grava os dados processados só se a planilha ainda existe (atômico com delete_sheet)."""
    with _lock:
        if not any(s.get("id") == sheet_id for s in _sheets):
            return False
        _processed[sheet_id] = copy.deepcopy(record)
        return True


reset()
