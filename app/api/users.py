# app/api/users.py
from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, HTTPException
from pydantic import BaseModel, EmailStr

from app.core.security import require_bearer_user
from app.application import users_service
from app.application.users_service import EmailAlreadyRegistered, InvalidCredentials

router = APIRouter(prefix="/api/users", tags=["users"])


class UpdateProfileBody(BaseModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None


class ChangePasswordBody(BaseModel):
    currentPassword: Optional[str] = None
    newPassword: Optional[str] = None


def _not_found() -> HTTPException:
    return HTTPException(status_code=404, detail="Usuário não encontrado")


@router.get("/profile")
def get_profile(user_id: str = Depends(require_bearer_user)):
    profile = users_service.get_profile(user_id)
    if not profile:
        raise _not_found()
    return {"user": profile}


@router.post("/profile")
def create_profile(
    user_id: str = Depends(require_bearer_user),
    data: Optional[Dict[str, Any]] = Body(None),
):
    """Completa o perfil logo após o cadastro."""
    profile = users_service.create_profile(user_id, data or {})
    if not profile:
        raise _not_found()
    return {"success": True, "message": "Perfil criado com sucesso", "user": profile}


@router.put("/profile")
def update_profile(body: UpdateProfileBody, user_id: str = Depends(require_bearer_user)):
    try:
        profile = users_service.update_profile(user_id, body.name, str(body.email) if body.email else None)
    except EmailAlreadyRegistered as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if not profile:
        raise _not_found()
    return {"message": "Perfil atualizado com sucesso", "user": profile}


@router.put("/change-password")
def change_password(body: ChangePasswordBody, user_id: str = Depends(require_bearer_user)):
    try:
        users_service.change_password(user_id, body.currentPassword, body.newPassword)
    except InvalidCredentials as e:
        raise HTTPException(status_code=401, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"message": "Senha alterada com sucesso"}
