# app/application/analytics_service.py
from __future__ import annotations

import logging
import time
from datetime import datetime
from typing import Any, Dict, List, Optional

import pandas as pd

from app.core.config import ANALYTICS_CACHE_TTL_SECONDS, ANALYTICS_DELAY_SEC
from app.infrastructure import sheets_repo_mem as repo
from app.infrastructure import fixtures
from app.infrastructure.cache import TTLCache
from app.application.profiling import profile_dataframe, build_insights, build_charts

logger = logging.getLogger(__name__)

_cache = TTLCache(default_ttl=ANALYTICS_CACHE_TTL_SECONDS)


def _now() -> str:
    return datetime.utcnow().isoformat() + "Z"


def invalidate(sheet_id: str) -> None:
    for kind in ("analytics", "insights", "charts"):
        _cache.delete(f"{kind}:{sheet_id}")


def clear_cache() -> None:
    _cache.clear()


def _simulate_work() -> None:
    if ANALYTICS_DELAY_SEC > 0:
        time.sleep(ANALYTICS_DELAY_SEC)


def _frame_for(sheet_id: str) -> Optional[pd.DataFrame]:
    """DataFrame de uma planilha enviada e já processada; None caso contrário."""
    processed = repo.get_processed(sheet_id)
    if not processed:
        return None
    data = processed.get("data") or []
    columns = list(data[0].keys()) if data else []
    return pd.DataFrame(data, columns=columns)


def _cached(kind: str, sheet_id: str, build) -> Any:
    key = f"{kind}:{sheet_id}"
    hit = _cache.get(key)
    if hit is not None:
        return hit
    value = build()
    if value is not None:
        _cache.set(key, value)
    return value


def get_analytics(sheet_id: str) -> Optional[Dict[str, Any]]:
    """Fixture para planilhas de demonstração, calculado para uploads processados."""
    if not repo.get_sheet(sheet_id):
        return None

    seeded = fixtures.seed_analytics().get(sheet_id)
    if seeded:
        return seeded

    def build() -> Optional[Dict[str, Any]]:
        df = _frame_for(sheet_id)
        if df is None:
            return None
        logger.info("Calculando analytics da planilha %s", sheet_id)
        return {"id": sheet_id, "sheetId": sheet_id, **profile_dataframe(df), "createdAt": _now()}

    return _cached("analytics", sheet_id, build)


def generate_insights(sheet_id: str) -> List[Dict[str, Any]]:
    _simulate_work()
    if not repo.get_sheet(sheet_id):
        return []

    seeded = fixtures.seed_insights().get(sheet_id)
    if seeded is not None:
        return seeded

    def build() -> Optional[List[Dict[str, Any]]]:
        df = _frame_for(sheet_id)
        return None if df is None else build_insights(df, sheet_id, _now())

    return _cached("insights", sheet_id, build) or []


def chart_recommendations(sheet_id: str) -> List[Dict[str, Any]]:
    _simulate_work()
    if not repo.get_sheet(sheet_id):
        return []

    seeded = fixtures.seed_charts().get(sheet_id)
    if seeded is not None:
        return seeded

    def build() -> Optional[List[Dict[str, Any]]]:
        df = _frame_for(sheet_id)
        return None if df is None else build_charts(df, sheet_id)

    return _cached("charts", sheet_id, build) or []
