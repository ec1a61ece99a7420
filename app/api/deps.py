# app/api/deps.py
from __future__ import annotations

from typing import Optional

from fastapi import Request

from app.core.config import SHEETS_PUBLIC
from app.core.security import optional_bearer_user, require_bearer_user


def sheets_user(request: Request) -> Optional[str]:
    """
    SHEETS_PUBLIC=1: não exige auth (devolve o usuário do token, se houver).
    SHEETS_PUBLIC=0: exige Authorization: Bearer válido.
    """
    if SHEETS_PUBLIC:
        return optional_bearer_user(request)
    return require_bearer_user(request)


def owner_filter(user_id: Optional[str]) -> Optional[str]:
    """Rotas públicas listam tudo; rotas privadas só o que é do usuário."""
    return None if SHEETS_PUBLIC else user_id
