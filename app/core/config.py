# app/core/config.py
from __future__ import annotations

from pathlib import Path
import os
import secrets
from dotenv import load_dotenv

# ------------------------------
# Helpers
# ------------------------------
def _as_bool(val: str | int | None, default: bool = False) -> bool:
    """Converte valores de env em bool."""
    if val is None:
        return default
    s = str(val).strip().lower()
    return s in {"1", "true", "t", "yes", "y", "on", "sim"}


# ------------------------------
# Caminhos base e carga do .env
# ------------------------------
# Raiz do repo (contém /app, /data, /tests)
BASE_DIR: Path = Path(__file__).resolve().parents[2]

load_dotenv(BASE_DIR / ".env")

APP_NAME = os.getenv("APP_NAME", "Leitor de Planilhas")

# ------------------------------
# Dados locais (overridable por ENV)
# ------------------------------
DATA_DIR: Path = Path(os.getenv("DATA_DIR", str(BASE_DIR / "data")))
DATA_DIR.mkdir(parents=True, exist_ok=True)

UPLOADS_DIR: Path = Path(os.getenv("UPLOADS_DIR", str(DATA_DIR / "uploads")))
UPLOADS_DIR.mkdir(parents=True, exist_ok=True)

# ------------------------------
# CORS / Frontend
# ------------------------------
# Vite em dev: 5173; preview: 4173
FRONTEND_ORIGIN: str = os.getenv("FRONTEND_ORIGIN", "http://localhost:5173").rstrip("/")
EXTRA_ORIGINS = (
    "http://localhost:5173",
    "http://localhost:5174",
    "http://localhost:4173",
    "http://127.0.0.1:5173",
)

# ------------------------------
# Arquivos / uploads
# ------------------------------
ALLOWED_EXTENSIONS = frozenset({".xlsx", ".xls", ".csv"})
ALLOWED_MIME_TYPES = frozenset({
    "application/vnd.ms-excel",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "text/csv",
    "application/csv",
})
MAX_FILE_SIZE_MB: float = float(os.getenv("MAX_FILE_SIZE_MB", "50"))

# Atraso simulado do processamento em background (o front faz polling)
PROCESSING_DELAY_SEC: float = float(os.getenv("PROCESSING_DELAY_SEC", "0"))

# Linhas por página em /api/processed-data/{id}
PREVIEW_LIMIT: int = int(os.getenv("PREVIEW_LIMIT", "100"))

# ------------------------------
# Auth / tokens
# ------------------------------
# Troque em produção!
SECRET_KEY: str = os.getenv("SECRET_KEY", secrets.token_urlsafe(32))

ACCESS_TTL_MIN: int = int(os.getenv("ACCESS_TTL_MIN", "15"))
REFRESH_TTL_DAYS: int = int(os.getenv("REFRESH_TTL_DAYS", "7"))
BCRYPT_ROUNDS: int = int(os.getenv("BCRYPT_ROUNDS", "12"))

# Em dev as rotas de planilhas ficam públicas (uploads vão para o usuário demo).
# Em produção use 0 para exigir Authorization: Bearer.
SHEETS_PUBLIC: bool = _as_bool(os.getenv("SHEETS_PUBLIC", "1"), default=True)
DEMO_USER_ID = "1"

# Limites por plano
PLAN_LIMITS = {
    "free": {"maxStorage": 100 * 1024 * 1024, "planLimit": 10},
    "premium": {"maxStorage": 1024 * 1024 * 1024, "planLimit": 100},
}

# ------------------------------
# Analytics
# ------------------------------
ANALYTICS_DELAY_SEC: float = float(os.getenv("ANALYTICS_DELAY_SEC", "0"))
ANALYTICS_CACHE_TTL_SECONDS: int = int(os.getenv("ANALYTICS_CACHE_TTL_SECONDS", "1800"))

# ------------------------------
# Logging
# ------------------------------
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").strip().upper()
