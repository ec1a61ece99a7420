# tests/conftest.py
import os, sys, shutil, tempfile

import pytest

# raiz do repo (pai de /tests) no PYTHONPATH
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

# antes de importar app.*: dados em diretório temporário e bcrypt barato
os.environ.setdefault("DATA_DIR", tempfile.mkdtemp(prefix="leitor-tests-"))
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("SHEETS_PUBLIC", "1")
os.environ.setdefault("PROCESSING_DELAY_SEC", "0")
os.environ.setdefault("ANALYTICS_DELAY_SEC", "0")

from fastapi.testclient import TestClient  # noqa: E402

from app.main import app  # noqa: E402
from app.core import security  # noqa: E402
from app.core.config import UPLOADS_DIR  # noqa: E402
from app.application import analytics_service  # noqa: E402
from app.infrastructure import users_repo_mem, sheets_repo_mem  # noqa: E402


@pytest.fixture(autouse=True)
def _fresh_state():
    users_repo_mem.reset()
    sheets_repo_mem.reset()
    analytics_service.clear_cache()
    security.clear_revocations()
    # ids de planilha recomeçam em 3 a cada teste
    for child in UPLOADS_DIR.iterdir():
        shutil.rmtree(child, ignore_errors=True)
    yield


@pytest.fixture
def client():
    return TestClient(app)


def login(client, email="demo@example.com", password="demo123"):
    r = client.post("/api/auth/login", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    return r.json()["data"]


@pytest.fixture
def auth_headers(client):
    tokens = login(client)["tokens"]
    return {"Authorization": f"Bearer {tokens['accessToken']}"}
