"""
Catalog Backend - Service DAO Tests
====================================

What:  ServiceDao against a real (SQLite) database.
Why:   The listing query's outer join, COALESCE, filter and pagination are
       SQL behaviour; mocks would only test that the query was built.

What we test:
    ✅ versionCount, including services with zero versions
    ✅ Case-insensitive name filter, LIKE wildcards matched literally
    ✅ Sorting and offset pagination
    ✅ Detail with versions, partial update, delete with cascade
    ✅ Update refreshes updated_at, leaves created_at
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest
from sqlalchemy import func, select

from app.dao.service_dao import ServiceDao
from app.models.service import Service
from app.models.version import Version
from app.schemas.service import CreateServiceRequest, UpdateServiceRequest


async def _add_service(db, name, description="desc", created_at=None, versions=()):
    service = Service(name=name, description=description)
    if created_at is not None:
        service.created_at = created_at
        service.updated_at = created_at
    db.add(service)
    await db.flush()
    for version_name in versions:
        db.add(Version(service_id=service.id, name=version_name, description="v"))
    await db.flush()
    return service


class TestListServices:
    """Tests for list_services_with_version_count."""

    def setup_method(self):
        self.dao = ServiceDao()

    @pytest.mark.asyncio
    async def test_counts_versions_and_keeps_services_without_any(self, db_session):
        await _add_service(db_session, "Payments", versions=("v1", "v2"))
        await _add_service(db_session, "Empty Service")
        await db_session.commit()

        rows = await self.dao.list_services_with_version_count(
            db_session, sort_by="name", order="ASC"
        )

        counts = {row.name: row.version_count for row in rows}
        assert counts == {"Empty Service": 0, "Payments": 2}

    @pytest.mark.asyncio
    async def test_filter_is_case_insensitive_substring(self, db_session):
        await _add_service(db_session, "Notification Hub")
        await _add_service(db_session, "Billing")
        await db_session.commit()

        rows = await self.dao.list_services_with_version_count(db_session, name="NOTIF")

        assert [row.name for row in rows] == ["Notification Hub"]

    @pytest.mark.asyncio
    async def test_filter_treats_percent_literally(self, db_session):
        await _add_service(db_session, "100% uptime")
        await _add_service(db_session, "1000 uptime")
        await db_session.commit()

        rows = await self.dao.list_services_with_version_count(db_session, name="0% u")

        assert [row.name for row in rows] == ["100% uptime"]

    @pytest.mark.asyncio
    async def test_sort_by_name(self, db_session):
        for name in ("Charlie", "Alpha", "Bravo"):
            await _add_service(db_session, name)
        await db_session.commit()

        asc = await self.dao.list_services_with_version_count(
            db_session, sort_by="name", order="ASC"
        )
        desc = await self.dao.list_services_with_version_count(
            db_session, sort_by="name", order="DESC"
        )

        assert [row.name for row in asc] == ["Alpha", "Bravo", "Charlie"]
        assert [row.name for row in desc] == ["Charlie", "Bravo", "Alpha"]

    @pytest.mark.asyncio
    async def test_default_order_is_newest_first(self, db_session):
        base = datetime(2024, 1, 1, tzinfo=timezone.utc)
        await _add_service(db_session, "Oldest", created_at=base)
        await _add_service(db_session, "Newest", created_at=base + timedelta(days=2))
        await _add_service(db_session, "Middle", created_at=base + timedelta(days=1))
        await db_session.commit()

        rows = await self.dao.list_services_with_version_count(db_session)

        assert [row.name for row in rows] == ["Newest", "Middle", "Oldest"]

    @pytest.mark.asyncio
    async def test_pagination_offsets_by_page(self, db_session):
        for index in range(5):
            await _add_service(db_session, f"Service {index}")
        await db_session.commit()

        page_two = await self.dao.list_services_with_version_count(
            db_session, page=2, limit=2, sort_by="name", order="ASC"
        )
        page_four = await self.dao.list_services_with_version_count(
            db_session, page=4, limit=2, sort_by="name", order="ASC"
        )

        assert [row.name for row in page_two] == ["Service 2", "Service 3"]
        assert page_four == []

    @pytest.mark.asyncio
    async def test_unknown_sort_field_rejected(self, db_session):
        with pytest.raises(ValueError):
            await self.dao.list_services_with_version_count(db_session, sort_by="id; DROP")


class TestServiceCrud:
    """Tests for detail, create, update and delete."""

    def setup_method(self):
        self.dao = ServiceDao()

    @pytest.mark.asyncio
    async def test_create_returns_full_service(self, db_session):
        created = await self.dao.create_service(
            db_session, CreateServiceRequest(name="Search", description="Full-text search")
        )
        await db_session.commit()

        assert created.id is not None
        assert created.name == "Search"
        assert created.created_at is not None
        assert created.updated_at is not None

    @pytest.mark.asyncio
    async def test_get_with_versions(self, db_session):
        service = await _add_service(db_session, "Gateway", versions=("v1", "v2"))
        await db_session.commit()

        result = await self.dao.get_service_with_versions(db_session, service.id)

        assert result.id == service.id
        assert sorted(v.name for v in result.versions) == ["v1", "v2"]

    @pytest.mark.asyncio
    async def test_get_missing_returns_none(self, db_session):
        assert await self.dao.get_service_with_versions(db_session, uuid4()) is None
        assert await self.dao.get_service_by_id(db_session, uuid4()) is None

    @pytest.mark.asyncio
    async def test_update_changes_only_supplied_fields(self, db_session):
        service = await _add_service(db_session, "Before", description="kept")
        await db_session.commit()

        updated = await self.dao.update_service(
            db_session, service.id, UpdateServiceRequest(name="After")
        )

        assert updated.name == "After"
        assert updated.description == "kept"

    @pytest.mark.asyncio
    async def test_update_refreshes_updated_at_only(self, db_session):
        an_hour_ago = datetime.now(timezone.utc) - timedelta(hours=1)
        service = await _add_service(db_session, "Stamped", created_at=an_hour_ago)
        await db_session.commit()
        before = await self.dao.get_service_by_id(db_session, service.id)

        updated = await self.dao.update_service(
            db_session, service.id, UpdateServiceRequest(description="touched")
        )

        assert updated.updated_at > before.updated_at
        assert updated.created_at == before.created_at

    @pytest.mark.asyncio
    async def test_update_missing_returns_none(self, db_session):
        result = await self.dao.update_service(
            db_session, uuid4(), UpdateServiceRequest(name="Whatever")
        )
        assert result is None

    @pytest.mark.asyncio
    async def test_delete_cascades_to_versions(self, db_session):
        service = await _add_service(db_session, "Doomed", versions=("v1", "v2"))
        await db_session.commit()

        assert await self.dao.delete_service(db_session, service.id) is True
        await db_session.commit()

        remaining = await db_session.execute(
            select(func.count(Version.id)).where(Version.service_id == service.id)
        )
        assert remaining.scalar_one() == 0

    @pytest.mark.asyncio
    async def test_delete_missing_returns_false(self, db_session):
        assert await self.dao.delete_service(db_session, uuid4()) is False
