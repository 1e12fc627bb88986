"""
Catalog Backend - Authentication Flow Tests
============================================

What:  Register → login → protected resource, against a real SQLite database.
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import jwt
import pytest

from app.config import settings

CREDENTIALS = {"username": "admin", "password": "password"}


async def _register_and_login(client) -> str:
    await client.post("/api/auth/register", json=CREDENTIALS)
    response = await client.post("/api/auth/login", json=CREDENTIALS)
    return response.json()["access_token"]


class TestRegister:

    @pytest.mark.asyncio
    async def test_register_returns_identity_without_password(self, db_client):
        response = await db_client.post("/api/auth/register", json=CREDENTIALS)

        assert response.status_code == 201
        body = response.json()
        assert set(body) == {"id", "username"}
        assert body["username"] == "admin"

    @pytest.mark.asyncio
    async def test_duplicate_username_is_409(self, db_client):
        await db_client.post("/api/auth/register", json=CREDENTIALS)
        response = await db_client.post("/api/auth/register", json=CREDENTIALS)

        assert response.status_code == 409
        assert response.json()["message"] == "Username already exists"

    @pytest.mark.asyncio
    async def test_missing_password_is_400(self, db_client):
        response = await db_client.post("/api/auth/register", json={"username": "admin"})

        assert response.status_code == 400
        assert response.json()["message"] == ["password should not be empty"]


class TestLogin:

    @pytest.mark.asyncio
    async def test_login_returns_access_token(self, db_client):
        await db_client.post("/api/auth/register", json=CREDENTIALS)

        response = await db_client.post("/api/auth/login", json=CREDENTIALS)

        assert response.status_code == 200
        token = response.json()["access_token"]
        payload = jwt.decode(token, settings.jwt_secret, algorithms=["HS256"])
        assert payload["username"] == "admin"
        assert payload["exp"] - payload["iat"] == settings.jwt_expires_in

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "credentials",
        [
            {"username": "admin", "password": "wrong"},
            {"username": "ghost", "password": "password"},
        ],
    )
    async def test_bad_credentials_are_401(self, db_client, credentials):
        await db_client.post("/api/auth/register", json=CREDENTIALS)

        response = await db_client.post("/api/auth/login", json=credentials)

        assert response.status_code == 401
        assert response.json() == {
            "statusCode": 401,
            "message": "Invalid credentials",
            "error": "Unauthorized",
        }


class TestSecureResource:

    @pytest.mark.asyncio
    async def test_valid_token(self, db_client):
        token = await _register_and_login(db_client)

        response = await db_client.get(
            "/api/secure-resources", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 200
        assert response.text == "Protected Resource"

    @pytest.mark.asyncio
    async def test_missing_token(self, db_client):
        response = await db_client.get("/api/secure-resources")

        assert response.status_code == 401
        assert response.json()["message"] == "Unauthorized"

    @pytest.mark.asyncio
    async def test_expired_token(self, db_client):
        issued = datetime.now(timezone.utc) - timedelta(hours=2)
        token = jwt.encode(
            {"sub": str(uuid4()), "username": "admin", "iat": issued,
             "exp": issued + timedelta(hours=1)},
            settings.jwt_secret,
            algorithm="HS256",
        )

        response = await db_client.get(
            "/api/secure-resources", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_wrong_scheme(self, db_client):
        token = await _register_and_login(db_client)

        response = await db_client.get(
            "/api/secure-resources", headers={"Authorization": f"Basic {token}"}
        )

        assert response.status_code == 401
