"""Integration tests for registration, login and principal resolution."""

from datetime import timedelta

import pytest
from httpx import AsyncClient

from studysync.infrastructure.auth import jwt_service


@pytest.mark.asyncio
async def test_register_returns_user_and_token(client: AsyncClient):
    res = await client.post(
        "/api/auth/register",
        json={
            "username": "alice",
            "email": "Alice@Example.com",
            "password": "secret123",
            "full_name": "Alice Liddell",
        },
    )

    assert res.status_code == 201
    data = res.json()
    assert data["token"]
    assert data["expires_in"] == 3600
    assert data["user"]["username"] == "alice"
    assert data["user"]["email"] == "alice@example.com"
    assert data["user"]["full_name"] == "Alice Liddell"
    assert "password" not in data["user"]
    assert "password_hash" not in data["user"]


@pytest.mark.asyncio
async def test_register_duplicate_email_conflicts(client: AsyncClient, register):
    await register("alice")

    res = await client.post(
        "/api/auth/register",
        json={"username": "alice2", "email": "ALICE@example.com", "password": "secret123"},
    )

    assert res.status_code == 409
    assert res.json()["error"] == "Conflict"
    assert res.json()["field"] == "email"


@pytest.mark.asyncio
async def test_register_validation_errors(client: AsyncClient):
    res = await client.post(
        "/api/auth/register",
        json={"username": "al", "email": "not-an-email", "password": "123"},
    )

    assert res.status_code == 400
    body = res.json()
    assert body["error"] == "Validation error"
    fields = {detail["field"] for detail in body["details"]}
    assert fields == {"username", "email", "password"}


@pytest.mark.asyncio
async def test_login_success(client: AsyncClient, register):
    alice = await register("alice")

    res = await client.post(
        "/api/auth/login", json={"email": "alice@example.com", "password": "secret123"}
    )

    assert res.status_code == 200
    assert res.json()["user"]["id"] == alice["id"]
    assert jwt_service.verify_access_token(res.json()["token"]) == alice["id"]


@pytest.mark.asyncio
async def test_login_failures_are_indistinguishable(client: AsyncClient, register):
    await register("alice")

    wrong_password = await client.post(
        "/api/auth/login", json={"email": "alice@example.com", "password": "nope-nope"}
    )
    unknown_email = await client.post(
        "/api/auth/login", json={"email": "bob@example.com", "password": "secret123"}
    )

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json()
    assert wrong_password.json()["message"] == "Invalid email or password."


@pytest.mark.asyncio
async def test_login_with_malformed_email_is_unauthorized(client: AsyncClient, register):
    await register("alice")

    res = await client.post(
        "/api/auth/login", json={"email": "not-an-email", "password": "secret123"}
    )

    assert res.status_code == 401
    assert res.json()["message"] == "Invalid email or password."


@pytest.mark.asyncio
async def test_login_with_blank_email_is_rejected(client: AsyncClient):
    res = await client.post("/api/auth/login", json={"email": "", "password": "secret123"})

    assert res.status_code == 400
    assert res.json()["details"][0]["field"] == "email"


@pytest.mark.asyncio
async def test_me_requires_token(client: AsyncClient):
    res = await client.get("/api/users/me")

    assert res.status_code == 401
    assert res.json()["message"] == "Not authorized, no token."
    assert res.headers["WWW-Authenticate"] == "Bearer"


@pytest.mark.asyncio
async def test_me_returns_profile(client: AsyncClient, register):
    alice = await register("alice")

    res = await client.get("/api/users/me", headers=alice["headers"])

    assert res.status_code == 200
    assert res.json()["id"] == alice["id"]
    assert res.json()["username"] == "alice"


@pytest.mark.asyncio
async def test_invalid_and_expired_tokens_fail(client: AsyncClient, register):
    alice = await register("alice")
    expired = jwt_service.create_access_token(alice["id"], expires_delta=timedelta(seconds=-1))

    for token in ["garbage", expired]:
        res = await client.get("/api/users/me", headers={"Authorization": f"Bearer {token}"})
        assert res.status_code == 401
        assert res.json()["message"] == "Not authorized, token failed."


@pytest.mark.asyncio
async def test_token_for_unknown_user_fails(client: AsyncClient):
    token = jwt_service.create_access_token("00000000-0000-0000-0000-000000000000")

    res = await client.get("/api/users/me", headers={"Authorization": f"Bearer {token}"})

    assert res.status_code == 401
    assert res.json()["message"] == "Not authorized, user not found."


@pytest.mark.asyncio
async def test_health_and_unknown_route(client: AsyncClient):
    health = await client.get("/health")
    assert health.status_code == 200
    assert health.json()["status"] == "healthy"

    missing = await client.get("/api/nowhere")
    assert missing.status_code == 404
    assert missing.json()["message"] == "Not Found - /api/nowhere"
    assert "X-Correlation-ID" in missing.headers
