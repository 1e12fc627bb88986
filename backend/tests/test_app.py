"""
Catalog Backend - Application-Level Tests
==========================================

What:  Behaviour owned by main.py and the middleware rather than by a route:
       unknown routes, request IDs, health checks.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from sqlalchemy.exc import OperationalError

from app import database
from app.middleware.trailing_slash import strip_trailing_slash


class TestUnknownRoutes:

    @pytest.mark.asyncio
    async def test_unknown_path(self, test_client):
        response = await test_client.get("/api/unknown")

        assert response.status_code == 404
        assert response.json() == {
            "statusCode": 404,
            "message": "Cannot GET /api/unknown",
            "error": "Not Found",
        }

    @pytest.mark.asyncio
    async def test_unsupported_method_on_known_path(self, test_client):
        response = await test_client.put("/api/services")

        assert response.status_code == 404
        assert response.json()["message"] == "Cannot PUT /api/services"


class TestTrailingSlash:

    @pytest.mark.parametrize(
        "path, expected",
        [
            ("/api/services/", "/api/services"),
            ("/api/services//", "/api/services"),
            ("/api/services", "/api/services"),
            ("/", "/"),
        ],
    )
    def test_strip_trailing_slash(self, path, expected):
        assert strip_trailing_slash(path) == expected

    @pytest.mark.asyncio
    async def test_collection_path_not_redirected(self, test_client):
        with patch("app.routes.services.service_dao") as dao:
            dao.list_services_with_version_count = AsyncMock(return_value=[])
            response = await test_client.get("/api/services/")

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_unknown_path_reported_without_slash(self, test_client):
        response = await test_client.get("/api/unknown/")

        assert response.status_code == 404
        assert response.json()["message"] == "Cannot GET /api/unknown"


class TestRequestId:

    @pytest.mark.asyncio
    async def test_generated_when_absent(self, test_client):
        response = await test_client.get("/api/unknown")

        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    async def test_client_value_echoed(self, test_client):
        response = await test_client.get("/api/unknown", headers={"X-Request-ID": "trace-42"})

        assert response.headers["X-Request-ID"] == "trace-42"


class TestHealth:

    @pytest.mark.asyncio
    async def test_healthy(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"

    @pytest.mark.asyncio
    async def test_database_down_is_503(self, test_client):
        broken = MagicMock()
        broken.connect.side_effect = OperationalError("SELECT 1", {}, Exception("refused"))
        with patch.object(database, "engine", broken):
            response = await test_client.get("/health")

        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"
