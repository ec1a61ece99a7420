# app/infrastructure/fixtures.py
"""
Dados de demonstração (planilhas 1 e 2 do usuário demo).

As funções devolvem cópias novas a cada chamada; os repositórios em memória
as usam para (re)semear o estado do processo.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List


def _now() -> str:
    return datetime.utcnow().isoformat() + "Z"


# ---------------- Usuários ----------------
# Senhas em texto só aqui; o repositório guarda o hash bcrypt.
SEED_USERS: List[Dict[str, Any]] = [
    {
        "id": "1",
        "name": "Demo User",
        "email": "demo@example.com",
        "password": "demo123",
        "plan": "free",
        "createdAt": "2024-01-01T00:00:00Z",
    },
    {
        "id": "2",
        "name": "Admin User",
        "email": "admin@example.com",
        "password": "admin123",
        "plan": "premium",
        "createdAt": "2024-01-01T00:00:00Z",
    },
]


# ---------------- Planilhas ----------------
def seed_sheets() -> List[Dict[str, Any]]:
    return [
        {
            "id": "1",
            "filename": "exemplo_planilha.xlsx",
            "originalName": "Planilha de Exemplo.xlsx",
            "fileSize": 1024000,
            "mimeType": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            "uploadDate": "2024-01-15T10:30:00Z",
            "processed": True,
            "status": "completed",
            "rowCount": 150,
            "columnCount": 12,
            "userId": "1",
            "errorMessage": None,
            "processedAt": "2024-01-15T10:30:03Z",
        },
        {
            "id": "2",
            "filename": "vendas_2024.xlsx",
            "originalName": "Relatório de Vendas 2024.xlsx",
            "fileSize": 2048000,
            "mimeType": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            "uploadDate": "2024-01-20T14:45:00Z",
            "processed": True,
            "status": "completed",
            "rowCount": 320,
            "columnCount": 8,
            "userId": "1",
            "errorMessage": None,
            "processedAt": "2024-01-20T14:45:03Z",
        },
    ]


def seed_processed_data() -> Dict[str, Dict[str, Any]]:
    created = _now()
    return {
        "1": {
            "id": "1",
            "sheetId": "1",
            "data": [
                {"Nome": "João Silva", "Email": "joao@email.com", "Idade": 28, "Cidade": "São Paulo"},
                {"Nome": "Maria Santos", "Email": "maria@email.com", "Idade": 32, "Cidade": "Rio de Janeiro"},
                {"Nome": "Pedro Oliveira", "Email": "pedro@email.com", "Idade": 25, "Cidade": "Brasília"},
                {"Nome": "Ana Costa", "Email": "ana@email.com", "Idade": 29, "Cidade": "Salvador"},
                {"Nome": "Carlos Mendes", "Email": "carlos@email.com", "Idade": 35, "Cidade": "Fortaleza"},
            ],
            "summary": {
                "totalRows": 150,
                "processedRows": 145,
                "errorRows": 5,
                "processingTime": 2.3,
                "qualityScore": 0.92,
            },
            "createdAt": created,
        },
        "2": {
            "id": "2",
            "sheetId": "2",
            "data": [
                {"Produto": "Notebook Dell", "Valor": 3500, "Data": "2024-01-15", "Cliente": "Empresa ABC"},
                {"Produto": "Mouse Logitech", "Valor": 150, "Data": "2024-01-16", "Cliente": "João Silva"},
                {"Produto": "Teclado Mecânico", "Valor": 450, "Data": "2024-01-17", "Cliente": "Maria Santos"},
                {"Produto": "Monitor LG", "Valor": 1200, "Data": "2024-01-18", "Cliente": "Pedro Oliveira"},
                {"Produto": "Webcam HD", "Valor": 280, "Data": "2024-01-19", "Cliente": "Ana Costa"},
            ],
            "summary": {
                "totalRows": 320,
                "processedRows": 308,
                "errorRows": 12,
                "processingTime": 3.1,
                "qualityScore": 0.89,
            },
            "createdAt": created,
        },
    }


# ---------------- Analytics ----------------
def seed_analytics() -> Dict[str, Dict[str, Any]]:
    created = _now()
    return {
        "1": {
            "id": "1",
            "sheetId": "1",
            "totalRows": 150,
            "totalColumns": 12,
            "dataQuality": {
                "completeness": 0.95,
                "accuracy": 0.88,
                "consistency": 0.92,
                "duplicates": 5,
            },
            "columnAnalysis": [
                {"name": "Nome", "type": "text", "nullCount": 0, "uniqueCount": 150},
                {"name": "Email", "type": "email", "nullCount": 2, "uniqueCount": 148},
                {"name": "Idade", "type": "number", "nullCount": 5, "uniqueCount": 45},
                {"name": "Cidade", "type": "text", "nullCount": 8, "uniqueCount": 25},
            ],
            "recommendations": [
                "Remover 5 registros duplicados",
                'Preencher 15 valores ausentes na coluna "Telefone"',
                "Validar formato de 2 emails inválidos",
                "Padronizar nomes de cidades (encontradas 25 variações)",
            ],
            "createdAt": created,
        },
        "2": {
            "id": "2",
            "sheetId": "2",
            "totalRows": 320,
            "totalColumns": 8,
            "dataQuality": {
                "completeness": 0.89,
                "accuracy": 0.91,
                "consistency": 0.87,
                "duplicates": 12,
            },
            "columnAnalysis": [
                {"name": "Produto", "type": "text", "nullCount": 0, "uniqueCount": 45},
                {"name": "Valor", "type": "currency", "nullCount": 8, "uniqueCount": 120},
                {"name": "Data", "type": "date", "nullCount": 3, "uniqueCount": 180},
                {"name": "Cliente", "type": "text", "nullCount": 15, "uniqueCount": 95},
            ],
            "recommendations": [
                "Remover 12 registros duplicados",
                "Preencher 26 valores ausentes",
                "Validar 3 datas inconsistentes",
                "Padronizar 45 nomes de produtos",
            ],
            "createdAt": created,
        },
    }


def seed_insights() -> Dict[str, List[Dict[str, Any]]]:
    created = _now()
    return {
        "1": [
            {
                "id": "insight-1",
                "type": "trend",
                "title": "Crescimento de usuários",
                "description": "Detectado crescimento de 23% no número de usuários novos nos últimos 3 meses",
                "confidence": 0.92,
                "severity": "positive",
                "createdAt": created,
            },
            {
                "id": "insight-2",
                "type": "anomaly",
                "title": "Anomalia detectada",
                "description": "Identificado pico incomum de registros no dia 15/01/2024",
                "confidence": 0.85,
                "severity": "warning",
                "createdAt": created,
            },
            {
                "id": "insight-3",
                "type": "correlation",
                "title": "Correlação forte",
                "description": "Forte correlação (0.87) entre idade e preferência de produto",
                "confidence": 0.87,
                "severity": "info",
                "createdAt": created,
            },
        ],
        "2": [
            {
                "id": "insight-4",
                "type": "trend",
                "title": "Aumento nas vendas",
                "description": "Vendas aumentaram 15% em comparação com o mês anterior",
                "confidence": 0.94,
                "severity": "positive",
                "createdAt": created,
            },
            {
                "id": "insight-5",
                "type": "pattern",
                "title": "Padrão sazonal",
                "description": "Detectado padrão de vendas mais altas nas sextas-feiras",
                "confidence": 0.89,
                "severity": "info",
                "createdAt": created,
            },
        ],
    }


def seed_charts() -> Dict[str, List[Dict[str, Any]]]:
    return {
        "1": [
            {
                "id": "chart-1",
                "type": "bar",
                "title": "Distribuição por Cidade",
                "description": "Gráfico de barras mostrando a distribuição de usuários por cidade",
                "data": {
                    "labels": ["São Paulo", "Rio de Janeiro", "Brasília", "Salvador", "Fortaleza"],
                    "datasets": [{
                        "label": "Número de Usuários",
                        "data": [45, 32, 28, 25, 20],
                        "backgroundColor": ["#3B82F6", "#10B981", "#F59E0B", "#EF4444", "#8B5CF6"],
                    }],
                },
            },
            {
                "id": "chart-2",
                "type": "line",
                "title": "Crescimento ao Longo do Tempo",
                "description": "Gráfico de linha mostrando o crescimento de usuários ao longo do tempo",
                "data": {
                    "labels": ["Jan", "Fev", "Mar", "Abr", "Mai", "Jun"],
                    "datasets": [{
                        "label": "Novos Usuários",
                        "data": [120, 135, 150, 165, 180, 195],
                        "borderColor": "#3B82F6",
                        "backgroundColor": "rgba(59, 130, 246, 0.1)",
                    }],
                },
            },
            {
                "id": "chart-3",
                "type": "pie",
                "title": "Distribuição por Idade",
                "description": "Gráfico de pizza mostrando a distribuição de usuários por faixa etária",
                "data": {
                    "labels": ["18-25", "26-35", "36-45", "46-55", "55+"],
                    "datasets": [{
                        "data": [25, 35, 20, 15, 5],
                        "backgroundColor": ["#10B981", "#3B82F6", "#F59E0B", "#EF4444", "#8B5CF6"],
                    }],
                },
            },
        ],
        "2": [
            {
                "id": "chart-4",
                "type": "bar",
                "title": "Vendas por Produto",
                "description": "Gráfico de barras mostrando vendas por produto",
                "data": {
                    "labels": ["Produto A", "Produto B", "Produto C", "Produto D", "Produto E"],
                    "datasets": [{
                        "label": "Total de Vendas",
                        "data": [12500, 9800, 8700, 7600, 6500],
                        "backgroundColor": "#10B981",
                    }],
                },
            },
            {
                "id": "chart-5",
                "type": "line",
                "title": "Tendência de Vendas Diárias",
                "description": "Gráfico de linha mostrando a tendência de vendas diárias",
                "data": {
                    "labels": ["Seg", "Ter", "Qua", "Qui", "Sex", "Sáb", "Dom"],
                    "datasets": [{
                        "label": "Vendas Diárias",
                        "data": [1200, 1350, 1100, 1400, 1800, 1600, 900],
                        "borderColor": "#F59E0B",
                        "backgroundColor": "rgba(245, 158, 11, 0.1)",
                    }],
                },
            },
        ],
    }
