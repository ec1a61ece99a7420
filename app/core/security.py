# app/core/security.py
from __future__ import annotations

import threading
import time
from typing import Dict, Optional
from uuid import uuid4

import bcrypt
from fastapi import HTTPException, Request, status
from itsdangerous import (
    URLSafeTimedSerializer,
    BadSignature,
    BadTimeSignature,
    SignatureExpired,
)

from app.core.config import (
    SECRET_KEY,
    ACCESS_TTL_MIN,
    REFRESH_TTL_DAYS,
    BCRYPT_ROUNDS,
)

# Sal para distinguir o propósito (rotacionar se a semântica mudar)
_TOKEN_SALT = "leitorplanilhas.token.v1"

_ACCESS_MAX_AGE = ACCESS_TTL_MIN * 60
_REFRESH_MAX_AGE = REFRESH_TTL_DAYS * 24 * 60 * 60

# jti de refresh tokens revogados (logout / rotação)
_revoked: set[str] = set()
_revoked_lock = threading.Lock()


def _ser() -> URLSafeTimedSerializer:
    return URLSafeTimedSerializer(secret_key=SECRET_KEY, salt=_TOKEN_SALT)


# -----------------------------
# Senhas
# -----------------------------
def hash_password(plain: str) -> str:
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(plain.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    if not plain or not hashed:
        return False
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # hash malformado
        return False


# -----------------------------
# Criação e verificação de tokens
# -----------------------------
def _create_token(sub: str, purpose: str) -> str:
    return _ser().dumps({"sub": str(sub), "purpose": purpose, "jti": uuid4().hex})


def _load_token(token: str, purpose: str, max_age: int) -> Optional[Dict]:
    try:
        data = _ser().loads(token, max_age=max_age)
    except (BadSignature, BadTimeSignature, SignatureExpired):
        return None
    if not isinstance(data, dict) or data.get("purpose") != purpose:
        return None
    if data.get("sub") is None:
        return None
    return data


def create_access_token(sub: str) -> str:
    """A expiração é validada no loads() com max_age."""
    return _create_token(sub, "access")


def create_refresh_token(sub: str) -> str:
    return _create_token(sub, "refresh")


def verify_access_token(token: str) -> Optional[str]:
    """Devolve o user_id (sub) se o token for válido e não expirou; senão None."""
    data = _load_token(token, "access", _ACCESS_MAX_AGE)
    return str(data["sub"]) if data else None


def verify_refresh_token(token: str) -> Optional[str]:
    data = _load_token(token, "refresh", _REFRESH_MAX_AGE)
    if not data:
        return None
    with _revoked_lock:
        if data.get("jti") in _revoked:
            return None
    return str(data["sub"])


def revoke_refresh_token(token: str) -> bool:
    """Revoga um refresh token válido. Devolve False se o token já não servia."""
    data = _load_token(token, "refresh", _REFRESH_MAX_AGE)
    if not data:
        return False
    with _revoked_lock:
        _revoked.add(str(data.get("jti")))
    return True


def issue_tokens(sub: str) -> Dict:
    """Par de tokens no formato esperado pelo front (expiresIn em epoch ms)."""
    return {
        "accessToken": create_access_token(sub),
        "refreshToken": create_refresh_token(sub),
        "expiresIn": int((time.time() + _ACCESS_MAX_AGE) * 1000),
    }


def clear_revocations() -> None:
    with _revoked_lock:
        _revoked.clear()


# -----------------------------
# Authorization: Bearer
# -----------------------------
def _get_bearer_token(request: Request) -> Optional[str]:
    """
    Extrai o token Bearer do header Authorization.
    Formato esperado: 'Authorization: Bearer <token>'.
    """
    auth = request.headers.get("Authorization", "").strip()
    if not auth:
        return None
    parts = auth.split()
    if len(parts) == 2 and parts[0].lower() == "bearer":
        return parts[1]
    return None


def get_user_id_from_auth_header(request: Request) -> Optional[str]:
    token = _get_bearer_token(request)
    if not token:
        return None
    return verify_access_token(token)


def require_bearer_user(request: Request) -> str:
    """
    Dependência: exige Authorization: Bearer <token>.
    Devolve o user_id ou lança 401.
    """
    token = _get_bearer_token(request)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token não fornecido",
            headers={"WWW-Authenticate": "Bearer"},
        )
    uid = verify_access_token(token)
    if not uid:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token inválido ou expirado",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return uid


def optional_bearer_user(request: Request) -> Optional[str]:
    """Dependência: user_id do Bearer válido, ou None (sem 401)."""
    return get_user_id_from_auth_header(request)
