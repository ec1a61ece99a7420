# app/api/auth.py
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, EmailStr

from app.core.security import optional_bearer_user
from app.application import users_service
from app.application.users_service import EmailAlreadyRegistered, InvalidCredentials

router = APIRouter(prefix="/api/auth", tags=["auth"])


# -----------------------
# Schemas
# -----------------------
# Campos opcionais: a ausência vira 400 com mensagem própria, não erro de schema
class RegisterBody(BaseModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    password: Optional[str] = None


class LoginBody(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class RefreshBody(BaseModel):
    refreshToken: Optional[str] = None


# -----------------------
# Endpoints
# -----------------------
@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(body: RegisterBody):
    if not (body.name or "").strip() or not body.email or not body.password:
        raise HTTPException(status_code=400, detail="Nome, email e senha são obrigatórios")

    try:
        data = users_service.register(body.name, str(body.email), body.password)
    except EmailAlreadyRegistered as e:
        raise HTTPException(status_code=409, detail=str(e))

    return {"success": True, "data": data}


@router.post("/login")
def login(body: LoginBody):
    if not body.email or not body.password:
        raise HTTPException(status_code=400, detail="Email e senha são obrigatórios")

    try:
        data = users_service.authenticate(body.email, body.password)
    except InvalidCredentials as e:
        raise HTTPException(status_code=401, detail=str(e))

    return {"success": True, "data": data}


@router.post("/logout")
def logout(body: Optional[RefreshBody] = None):
    users_service.logout(body.refreshToken if body else None)
    return {"success": True, "message": "Logout realizado com sucesso"}


@router.post("/refresh")
def refresh(body: RefreshBody):
    if not body.refreshToken:
        raise HTTPException(status_code=400, detail="Refresh token é obrigatório")

    try:
        data = users_service.refresh(body.refreshToken)
    except InvalidCredentials as e:
        raise HTTPException(status_code=401, detail=str(e))

    return {"success": True, "data": data}


@router.get("/me")
def me(uid: Optional[str] = Depends(optional_bearer_user)):
    if not uid:
        return {"user": None}
    return {"user": users_service.get_user(uid)}
