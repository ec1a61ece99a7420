from __future__ import annotations
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Literal, Optional


class Preferences(BaseModel):
    language: str = "pt-BR"
    timezone: str = "America/Sao_Paulo"
    notifications: Dict[str, bool] = Field(default_factory=lambda: {"email": True, "push": False})


class User(BaseModel):
    id: str
    name: str
    email: str
    plan: Literal["free", "premium"] = "free"
    createdAt: str
    lastLogin: Optional[str] = None
    preferences: Preferences = Field(default_factory=Preferences)


class Sheet(BaseModel):
    id: str
    filename: str
    originalName: str
    fileSize: int
    mimeType: str = "application/octet-stream"
    uploadDate: str
    processed: bool = False
    status: Literal["processing", "completed", "error"] = "processing"
    rowCount: int = 0
    columnCount: int = 0
    userId: str
    errorMessage: Optional[str] = None
    processedAt: Optional[str] = None


class ProcessedSummary(BaseModel):
    totalRows: int
    processedRows: int
    errorRows: int
    processingTime: float       # segundos
    qualityScore: float         # 0..1


class ProcessedData(BaseModel):
    id: str
    sheetId: str
    data: List[Dict[str, Any]]
    summary: ProcessedSummary
    createdAt: str
