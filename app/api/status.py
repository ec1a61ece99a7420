# app/api/status.py
from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter

from app.core.config import APP_NAME

router = APIRouter(tags=["meta"])


def _now_iso() -> str:
    return datetime.utcnow().isoformat() + "Z"


def _healthy() -> dict:
    return {"success": True, "data": {"status": "healthy", "timestamp": _now_iso()}}


@router.get("/")
def root():
    return {"success": True, "data": {"name": APP_NAME, "status": "ok", "timestamp": _now_iso()}}


@router.get("/health")
def health():
    return _healthy()


@router.get("/api/health")
def api_health():
    return _healthy()
