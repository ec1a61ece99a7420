# tests/test_auth.py
"""
Fluxo de autenticação: cadastro, login com bcrypt, refresh com rotação,
logout revogando o refresh token e /me.
"""
from __future__ import annotations


def _login(client, email="demo@example.com", password="demo123"):
    return client.post("/api/auth/login", json={"email": email, "password": password})


def test_health_envelope(client):
    for path in ("/health", "/api/health"):
        r = client.get(path)
        assert r.status_code == 200
        body = r.json()
        assert body["success"] is True
        assert body["data"]["status"] == "healthy"
        assert body["data"]["timestamp"].endswith("Z")


def test_unknown_route_returns_404_envelope(client):
    r = client.get("/api/nao-existe")
    assert r.status_code == 404
    assert r.json() == {"success": False, "message": "Rota não encontrada"}


def test_login_demo_user(client):
    r = _login(client)
    assert r.status_code == 200
    data = r.json()["data"]
    assert data["user"]["email"] == "demo@example.com"
    assert "passwordHash" not in data["user"]
    assert data["user"]["lastLogin"]
    tokens = data["tokens"]
    assert tokens["accessToken"] and tokens["refreshToken"]
    assert isinstance(tokens["expiresIn"], int)


def test_login_email_is_case_insensitive(client):
    assert _login(client, email="DEMO@Example.com").status_code == 200


def test_login_wrong_password(client):
    r = _login(client, password="errada")
    assert r.status_code == 401
    assert r.json()["message"] == "Credenciais inválidas"


def test_login_missing_fields(client):
    r = client.post("/api/auth/login", json={"email": "demo@example.com"})
    assert r.status_code == 400
    assert r.json()["message"] == "Email e senha são obrigatórios"


def test_register_then_login(client):
    r = client.post(
        "/api/auth/register",
        json={"name": "Nova Pessoa", "email": "nova@example.com", "password": "segredo1"},
    )
    assert r.status_code == 201
    body = r.json()
    assert body["success"] is True
    user = body["data"]["user"]
    assert user["id"] == "3"
    assert user["plan"] == "free"
    assert body["data"]["tokens"]["accessToken"]

    assert _login(client, "nova@example.com", "segredo1").status_code == 200


def test_register_duplicate_email(client):
    r = client.post(
        "/api/auth/register",
        json={"name": "Outro", "email": "demo@example.com", "password": "segredo1"},
    )
    assert r.status_code == 409
    assert r.json()["message"] == "Email já cadastrado"


def test_register_missing_fields(client):
    r = client.post("/api/auth/register", json={"email": "x@example.com", "password": "segredo1"})
    assert r.status_code == 400
    assert r.json()["message"] == "Nome, email e senha são obrigatórios"


def test_register_invalid_email_is_validation_error(client):
    r = client.post("/api/auth/register", json={"name": "X", "email": "nao-e-email", "password": "abc123"})
    assert r.status_code == 400
    body = r.json()
    assert body["message"] == "Dados inválidos"
    assert body["details"][0]["field"] == "email"


def test_refresh_rotates_tokens(client):
    old = _login(client).json()["data"]["tokens"]["refreshToken"]

    r = client.post("/api/auth/refresh", json={"refreshToken": old})
    assert r.status_code == 200
    data = r.json()["data"]
    assert data["user"]["id"] == "1"
    assert data["refreshToken"] != old

    # o token antigo foi revogado
    again = client.post("/api/auth/refresh", json={"refreshToken": old})
    assert again.status_code == 401


def test_refresh_requires_token(client):
    r = client.post("/api/auth/refresh", json={})
    assert r.status_code == 400
    assert r.json()["message"] == "Refresh token é obrigatório"


def test_refresh_rejects_access_token(client):
    access = _login(client).json()["data"]["tokens"]["accessToken"]
    r = client.post("/api/auth/refresh", json={"refreshToken": access})
    assert r.status_code == 401


def test_logout_revokes_refresh_token(client):
    refresh = _login(client).json()["data"]["tokens"]["refreshToken"]
    r = client.post("/api/auth/logout", json={"refreshToken": refresh})
    assert r.status_code == 200
    assert r.json() == {"success": True, "message": "Logout realizado com sucesso"}

    assert client.post("/api/auth/refresh", json={"refreshToken": refresh}).status_code == 401


def test_logout_without_body(client):
    r = client.post("/api/auth/logout")
    assert r.status_code == 200


def test_me(client, auth_headers):
    assert client.get("/api/auth/me").json() == {"user": None}
    r = client.get("/api/auth/me", headers=auth_headers)
    assert r.json()["user"]["email"] == "demo@example.com"
