# app/infrastructure/users_repo_mem.py
from __future__ import annotations

import copy
import threading
from datetime import datetime
from typing import Dict, List, Optional

from app.core.security import hash_password
from app.domain.models import User
from app.infrastructure.fixtures import SEED_USERS

# Lista de usuários do processo: some ao reiniciar
_rows: List[Dict] = []
_lock = threading.RLock()


def _now() -> str:
    return datetime.utcnow().isoformat() + "Z"


def reset() -> None:
    """(Re)semeia os usuários de demonstração."""
    seeded: List[Dict] = []
    for seed in SEED_USERS:
        u = User(
            id=seed["id"],
            name=seed["name"],
            email=seed["email"],
            plan=seed["plan"],
            createdAt=seed["createdAt"],
        ).model_dump()
        u["passwordHash"] = hash_password(seed["password"])
        seeded.append(u)
    with _lock:
        _rows[:] = seeded


def _find(pred) -> Optional[Dict]:
    with _lock:
        for u in _rows:
            if pred(u):
                return copy.deepcopy(u)
    return None


def get_by_email(email: str) -> Optional[Dict]:
    email_low = (email or "").strip().lower()
    return _find(lambda u: str(u.get("email", "")).lower() == email_low)


def get_by_id(uid: str) -> Optional[Dict]:
    return _find(lambda u: u.get("id") == uid)


def email_taken_by_other(email: str, uid: str) -> bool:
    other = get_by_email(email)
    return bool(other) and other["id"] != uid


def next_id() -> str:
    with _lock:
        ids = [int(u["id"]) for u in _rows if str(u.get("id", "")).isdigit()]
    return str(max(ids, default=0) + 1)


def insert_user(name: str, email: str, password_hash: str, plan: str = "free") -> Dict:
    with _lock:
        obj = User(
            id=next_id(),
            name=name,
            email=(email or "").strip().lower(),
            plan=plan,
            createdAt=_now(),
        ).model_dump()
        obj["passwordHash"] = password_hash
        _rows.append(obj)
        return copy.deepcopy(obj)


def update_user(uid: str, **fields) -> Optional[Dict]:
    """Atualiza campos de um usuário existente; None se não existe."""
    with _lock:
        for u in _rows:
            if u.get("id") == uid:
                u.update(fields)
                return copy.deepcopy(u)
    return None


reset()
