"""
Tests for login and session restore.

Covers the seeded accounts, credential checks, lastLogin stamping and the
bearer session token.
"""

import pytest
from jose import jwt

from dailyops.app.core.exceptions import PersistenceError


@pytest.mark.asyncio
async def test_seeded_collections(client):
    """A fresh data directory starts with one account per role and two checks."""
    users = (await client.get("/api/users")).json()
    tasks = (await client.get("/api/tasks")).json()

    assert {user["role"] for user in users} == {"super_admin", "admin", "manager"}
    assert len(users) == 3
    assert [task["order"] for task in tasks] == [1, 2]
    assert all(task["required"] for task in tasks)


@pytest.mark.asyncio
async def test_login_success(client):
    response = await client.post(
        "/api/login",
        json={"username": "superadmin", "password": "qwefscaghev12"}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["user"]["role"] == "super_admin"
    assert data["user"]["username"] == "superadmin"
    assert data["token"]


@pytest.mark.asyncio
async def test_login_wrong_password(client):
    response = await client.post(
        "/api/login",
        json={"username": "superadmin", "password": "wrong"}
    )

    assert response.status_code == 401
    assert response.json()["error_code"] == "ERR_AUTH_001"


@pytest.mark.asyncio
async def test_login_unknown_user(client):
    response = await client.post(
        "/api/login",
        json={"username": "ghost", "password": "qwefscaghev12"}
    )

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_login_stamps_last_login(client):
    response = await client.post(
        "/api/login",
        json={"username": "managersiz", "password": "siz2025"}
    )
    user_id = response.json()["user"]["id"]

    stored = (await client.get(f"/api/users/{user_id}")).json()
    assert stored["lastLogin"] is not None
    assert response.json()["user"]["lastLogin"] == stored["lastLogin"]


@pytest.mark.asyncio
async def test_login_survives_last_login_write_failure(client, mocker):
    mocker.patch(
        "dailyops.app.services.user_service.UserService.record_login",
        side_effect=PersistenceError("users", "disk full"),
    )

    response = await client.post(
        "/api/login",
        json={"username": "adminokk", "password": "okk2025"}
    )

    assert response.status_code == 200
    assert response.json()["user"]["role"] == "admin"


@pytest.mark.asyncio
async def test_token_carries_identity_claim(client):
    response = await client.post(
        "/api/login",
        json={"username": "managersiz", "password": "siz2025"}
    )

    claims = jwt.get_unverified_claims(response.json()["token"])
    assert claims["userId"] == "3"
    assert claims["role"] == "manager"
    assert isinstance(claims["time"], int)


@pytest.mark.asyncio
async def test_session_restore(client):
    login = await client.post(
        "/api/login",
        json={"username": "managersiz", "password": "siz2025"}
    )
    token = login.json()["token"]

    response = await client.get("/api/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200
    assert response.json()["id"] == "3"
    assert response.json()["fullName"] == "Сизиков Игорь"


@pytest.mark.asyncio
async def test_session_restore_requires_token(client):
    response = await client.get("/api/me")

    assert response.status_code == 401
    assert response.json()["error_code"] == "ERR_AUTH_002"


@pytest.mark.asyncio
async def test_session_restore_rejects_garbage_token(client):
    response = await client.get("/api/me", headers={"Authorization": "Bearer not-a-token"})

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_session_restore_for_deleted_user(client):
    login = await client.post(
        "/api/login",
        json={"username": "managersiz", "password": "siz2025"}
    )
    token = login.json()["token"]
    await client.delete("/api/users/3")

    response = await client.get("/api/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 404
