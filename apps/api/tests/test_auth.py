"""Tests for Authentication."""
import pytest
from httpx import AsyncClient

from admissions.core.deps import COOKIE_NAME


def _register_payload(**overrides):
    payload = {
        "username": "ana.ruiz",
        "password": "secret123",
        "display_name": "Ana Ruiz",
        "email": "ana@example.com",
        "role": "advisor",
    }
    payload.update(overrides)
    return payload


@pytest.mark.asyncio
async def test_register_creates_user_and_sets_cookie(client: AsyncClient):
    response = await client.post("/api/register", json=_register_payload())
    assert response.status_code == 201
    data = response.json()
    assert data["username"] == "ana.ruiz"
    assert data["role"] == "advisor"
    assert "password_hash" not in data
    assert COOKIE_NAME in response.cookies


@pytest.mark.asyncio
async def test_register_duplicate_username_rejected(client: AsyncClient, make_user):
    make_user(username="ana.ruiz")
    response = await client.post("/api/register", json=_register_payload())
    assert response.status_code == 400
    assert response.json()["error"] == "Username is already in use"


@pytest.mark.asyncio
async def test_register_validation_errors_list_fields(client: AsyncClient):
    response = await client.post(
        "/api/register", json=_register_payload(password="123", email="not-an-email")
    )
    assert response.status_code == 400
    body = response.json()
    fields = {d["field"] for d in body["details"]}
    assert {"password", "email"} <= fields


@pytest.mark.asyncio
async def test_login_then_current_user(client: AsyncClient, make_user):
    make_user(username="director1", password="topsecret")

    response = await client.post(
        "/api/login", json={"username": "director1", "password": "topsecret"}
    )
    assert response.status_code == 200

    # Cookie from the login response is reused by the client
    me = await client.get("/api/user")
    assert me.status_code == 200
    assert me.json()["username"] == "director1"


@pytest.mark.asyncio
async def test_login_wrong_password(client: AsyncClient, make_user):
    make_user(username="director1", password="topsecret")
    response = await client.post(
        "/api/login", json={"username": "director1", "password": "wrongpass"}
    )
    assert response.status_code == 401
    assert response.json() == {"error": "Invalid credentials"}


@pytest.mark.asyncio
async def test_login_requires_csrf_header(client: AsyncClient, make_user):
    make_user(username="director1", password="topsecret")
    response = await client.post(
        "/api/login",
        json={"username": "director1", "password": "topsecret"},
        headers={"X-Requested-With": ""},
    )
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_protected_endpoint_requires_session(client: AsyncClient):
    response = await client.get("/api/prospectos")
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_garbage_cookie_rejected(client: AsyncClient):
    client.cookies.set(COOKIE_NAME, "not-a-jwt")
    response = await client.get("/api/user")
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_logout_revokes_existing_tokens(client: AsyncClient, advisor, make_auth):
    auth = make_auth(advisor)
    client.cookies.set(COOKIE_NAME, auth.token)

    response = await client.post("/api/logout")
    assert response.status_code == 200
    assert response.json() == {"status": "logged_out"}

    # The old token carries a stale token_version
    client.cookies.set(COOKIE_NAME, auth.token)
    response = await client.get("/api/user")
    assert response.status_code == 401
    assert response.json()["error"] == "Session revoked"


@pytest.mark.asyncio
async def test_disabled_user_rejected(client: AsyncClient, db, advisor, make_auth):
    auth = make_auth(advisor)
    advisor.is_active = False
    db.commit()

    client.cookies.set(COOKIE_NAME, auth.token)
    response = await client.get("/api/user")
    assert response.status_code == 401
