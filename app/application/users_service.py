# app/application/users_service.py
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, Optional

from app.core.config import PLAN_LIMITS
from app.core.security import (
    hash_password,
    verify_password,
    issue_tokens,
    verify_refresh_token,
    revoke_refresh_token,
)
from app.infrastructure import users_repo_mem as repo
from app.infrastructure import sheets_repo_mem as sheets_repo

logger = logging.getLogger(__name__)

MIN_PASSWORD_LEN = 6


class EmailAlreadyRegistered(ValueError):
    pass


class InvalidCredentials(ValueError):
    pass


def _now() -> str:
    return datetime.utcnow().isoformat() + "Z"


def public_user(u: Dict) -> Dict:
    """Usuário sem o hash de senha."""
    return {k: v for k, v in u.items() if k != "passwordHash"}


def _usage(u: Dict) -> Dict[str, int]:
    sheets = sheets_repo.list_sheets(user_id=u["id"])
    limits = PLAN_LIMITS.get(u.get("plan", "free"), PLAN_LIMITS["free"])
    return {
        "totalSheets": len(sheets),
        "totalStorage": sum(int(s.get("fileSize", 0)) for s in sheets),
        "maxStorage": limits["maxStorage"],
        "planLimit": limits["planLimit"],
    }


# -----------------------
# Auth
# -----------------------
def register(name: str, email: str, password: str) -> Dict[str, Any]:
    if repo.get_by_email(email):
        raise EmailAlreadyRegistered("Email já cadastrado")

    u = repo.insert_user(name.strip(), email, hash_password(password))
    logger.info("Usuário registrado: %s", u["email"])
    return {"user": public_user(u), "tokens": issue_tokens(u["id"])}


def authenticate(email: str, password: str) -> Dict[str, Any]:
    u = repo.get_by_email(email)
    if not u or not verify_password(password, u.get("passwordHash", "")):
        raise InvalidCredentials("Credenciais inválidas")

    u = repo.update_user(u["id"], lastLogin=_now()) or u
    return {"user": public_user(u), "tokens": issue_tokens(u["id"])}


def refresh(refresh_token: str) -> Dict[str, Any]:
    """Troca um refresh token válido por um novo par (o antigo é revogado)."""
    uid = verify_refresh_token(refresh_token)
    u = repo.get_by_id(uid) if uid else None
    if not u:
        raise InvalidCredentials("Refresh token inválido")

    revoke_refresh_token(refresh_token)
    tokens = issue_tokens(u["id"])
    return {"user": public_user(u), **tokens}


def logout(refresh_token: Optional[str] = None) -> None:
    if refresh_token:
        revoke_refresh_token(refresh_token)


# -----------------------
# Perfil
# -----------------------
def get_user(uid: str) -> Optional[Dict]:
    u = repo.get_by_id(uid)
    return public_user(u) if u else None


def get_profile(uid: str) -> Optional[Dict]:
    u = repo.get_by_id(uid)
    if not u:
        return None
    return {**public_user(u), "usage": _usage(u)}


def create_profile(uid: str, data: Dict[str, Any]) -> Optional[Dict]:
    """
    Completa o perfil após o cadastro. Aceita 'name' ou 'nome' e mescla
    'preferences' com as preferências atuais.
    """
    u = repo.get_by_id(uid)
    if not u:
        return None

    fields: Dict[str, Any] = {}
    name = data.get("name") or data.get("nome")
    if name:
        fields["name"] = str(name).strip()

    prefs = data.get("preferences")
    if isinstance(prefs, dict):
        merged = dict(u.get("preferences") or {})
        for k, v in prefs.items():
            if isinstance(v, dict) and isinstance(merged.get(k), dict):
                merged[k] = {**merged[k], **v}
            else:
                merged[k] = v
        fields["preferences"] = merged

    if fields:
        repo.update_user(uid, **fields)
    return get_profile(uid)


def update_profile(uid: str, name: Optional[str], email: Optional[str]) -> Optional[Dict]:
    if not name and not email:
        raise ValueError("Nome ou email devem ser fornecidos")
    if not repo.get_by_id(uid):
        return None
    if email and repo.email_taken_by_other(email, uid):
        raise EmailAlreadyRegistered("Email já cadastrado")

    fields: Dict[str, Any] = {}
    if name:
        fields["name"] = name.strip()
    if email:
        fields["email"] = email.strip().lower()
    repo.update_user(uid, **fields)
    return get_profile(uid)


def change_password(uid: str, current: Optional[str], new: Optional[str]) -> None:
    if not current or not new:
        raise ValueError("Senha atual e nova senha são obrigatórias")
    if len(new) < MIN_PASSWORD_LEN:
        raise ValueError(f"Nova senha deve ter pelo menos {MIN_PASSWORD_LEN} caracteres")

    u = repo.get_by_id(uid)
    if not u or not verify_password(current, u.get("passwordHash", "")):
        raise InvalidCredentials("Senha atual incorreta")

    repo.update_user(uid, passwordHash=hash_password(new))
