# app/infrastructure/history_repo_fs.py
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, List, Any, Optional
from datetime import datetime

from app.infrastructure.files import sheet_dir

HISTORY_FILENAME = "history.jsonl"

logger = logging.getLogger(__name__)


def _now_iso() -> str:
    return datetime.utcnow().isoformat() + "Z"


def history_path(sheet_id: str) -> Path:
    """Log de eventos da planilha: uploads/{id}/history.jsonl"""
    return sheet_dir(sheet_id) / HISTORY_FILENAME


def append_history(sheet_id: str, event: Dict[str, Any]) -> None:
    """Acrescenta um evento como uma linha JSON."""
    p = history_path(sheet_id)
    p.parent.mkdir(parents=True, exist_ok=True)

    payload = dict(event)
    payload.setdefault("ts", _now_iso())

    line = json.dumps(payload, ensure_ascii=False, default=str)
    with p.open("a", encoding="utf-8") as f:
        f.write(line + "\n")


def read_history(sheet_id: str, limit: Optional[int] = None) -> List[Dict[str, Any]]:
    """Lê o history.jsonl. Com limit>0 devolve os últimos N eventos."""
    p = history_path(sheet_id)
    if not p.exists():
        return []

    items: List[Dict[str, Any]] = []
    with p.open("r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            try:
                items.append(json.loads(line))
            except json.JSONDecodeError:
                logger.warning("Linha corrompida em %s", p)
                continue

    if limit and limit > 0:
        return items[-limit:]
    return items
