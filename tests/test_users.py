# tests/test_users.py
from __future__ import annotations


def test_profile_requires_token(client):
    r = client.get("/api/users/profile")
    assert r.status_code == 401
    assert r.json()["message"] == "Token não fornecido"
    assert r.headers["WWW-Authenticate"] == "Bearer"


def test_profile_invalid_token(client):
    r = client.get("/api/users/profile", headers={"Authorization": "Bearer lixo"})
    assert r.status_code == 401
    assert r.json()["message"] == "Token inválido ou expirado"


def test_profile_includes_usage(client, auth_headers):
    r = client.get("/api/users/profile", headers=auth_headers)
    assert r.status_code == 200
    user = r.json()["user"]
    assert user["id"] == "1"
    assert "passwordHash" not in user
    usage = user["usage"]
    assert usage["totalSheets"] == 2
    assert usage["totalStorage"] > 0
    assert usage["planLimit"] == 10
    assert usage["maxStorage"] == 100 * 1024 * 1024


def test_create_profile_merges_preferences(client, auth_headers):
    r = client.post(
        "/api/users/profile",
        headers=auth_headers,
        json={"nome": "Demo Renomeado", "preferences": {"theme": "dark", "notifications": {"email": False}}},
    )
    assert r.status_code == 200
    user = r.json()["user"]
    assert user["name"] == "Demo Renomeado"
    assert user["preferences"]["theme"] == "dark"
    assert user["preferences"]["notifications"]["email"] is False
    # chaves não enviadas continuam lá
    assert "push" in user["preferences"]["notifications"]


def test_update_profile(client, auth_headers):
    r = client.put("/api/users/profile", headers=auth_headers, json={"name": "Novo Nome"})
    assert r.status_code == 200
    assert r.json()["user"]["name"] == "Novo Nome"


def test_update_profile_requires_a_field(client, auth_headers):
    r = client.put("/api/users/profile", headers=auth_headers, json={})
    assert r.status_code == 400
    assert r.json()["message"] == "Nome ou email devem ser fornecidos"


def test_update_profile_email_conflict(client, auth_headers):
    r = client.put("/api/users/profile", headers=auth_headers, json={"email": "admin@example.com"})
    assert r.status_code == 409


def test_change_password(client, auth_headers):
    r = client.put(
        "/api/users/change-password",
        headers=auth_headers,
        json={"currentPassword": "demo123", "newPassword": "novasenha"},
    )
    assert r.status_code == 200

    old = client.post("/api/auth/login", json={"email": "demo@example.com", "password": "demo123"})
    assert old.status_code == 401
    new = client.post("/api/auth/login", json={"email": "demo@example.com", "password": "novasenha"})
    assert new.status_code == 200


def test_change_password_wrong_current(client, auth_headers):
    r = client.put(
        "/api/users/change-password",
        headers=auth_headers,
        json={"currentPassword": "errada", "newPassword": "novasenha"},
    )
    assert r.status_code == 401
    assert r.json()["message"] == "Senha atual incorreta"


def test_change_password_too_short(client, auth_headers):
    r = client.put(
        "/api/users/change-password",
        headers=auth_headers,
        json={"currentPassword": "demo123", "newPassword": "123"},
    )
    assert r.status_code == 400


def test_update_profile_rejects_invalid_email(client, auth_headers):
    r = client.put("/api/users/profile", headers=auth_headers, json={"email": "x"})
    assert r.status_code == 400
    body = r.json()
    assert body["message"] == "Dados inválidos"
    assert body["details"][0]["field"] == "email"
    # e-mail continua o mesmo
    assert client.get("/api/users/profile", headers=auth_headers).json()["user"]["email"] == "demo@example.com"


def test_update_profile_email(client, auth_headers):
    r = client.put("/api/users/profile", headers=auth_headers, json={"email": "Novo@Example.com"})
    assert r.status_code == 200
    assert r.json()["user"]["email"] == "novo@example.com"
