# app/main.py
from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import APP_NAME, FRONTEND_ORIGIN, EXTRA_ORIGINS
from app.core.errors import install_error_handlers
from app.core.logging_setup import configure_logging

from app.api.status import router as status_router                   # /, /health, /api/health
from app.api.auth import router as auth_router                       # /api/auth/*
from app.api.users import router as users_router                     # /api/users/*
from app.api.sheets import router as sheets_router                   # /api/sheets/*
from app.api.analytics import router as analytics_router             # /api/analytics/*
from app.api.processed_data import router as processed_data_router   # /api/processed-data/*

configure_logging()
logger = logging.getLogger("app.http")

app = FastAPI(title=APP_NAME)


# ---------- CORS ----------
def _norm_origin(o: str) -> str:
    return (o or "").strip().rstrip("/")


allowed_origins = {_norm_origin(FRONTEND_ORIGIN), *(_norm_origin(o) for o in EXTRA_ORIGINS)}
allowed_origins = {o for o in allowed_origins if o}

app.add_middleware(
    CORSMiddleware,
    allow_origins=sorted(allowed_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------- Log de requisições ----------
@app.middleware("http")
async def log_requests(request: Request, call_next):
    t0 = time.perf_counter()
    response = await call_next(request)
    ms = (time.perf_counter() - t0) * 1000
    logger.info("%s %s -> %d (%.1f ms)", request.method, request.url.path, response.status_code, ms)
    return response


# ---------- Erros ----------
install_error_handlers(app)


# ---------- Routers (cada um já traz seu prefix) ----------
app.include_router(status_router)
app.include_router(auth_router)
app.include_router(users_router)
app.include_router(sheets_router)
app.include_router(analytics_router)
app.include_router(processed_data_router)
