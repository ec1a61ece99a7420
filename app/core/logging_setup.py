# app/core/logging_setup.py
from __future__ import annotations

import logging

from app.core.config import LOG_LEVEL

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging() -> None:
    """Handler único no logger do pacote 'app' (idempotente)."""
    root = logging.getLogger("app")
    if not any(getattr(h, "_leitor", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._leitor = True  # type: ignore[attr-defined]
        root.addHandler(handler)
    root.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))
