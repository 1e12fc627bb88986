"""
Catalog Backend - Version DAO Tests
====================================

What:  VersionDao against SQLite, focused on constraint handling.

What we test:
    ✅ Duplicate (name, service) on create → None, not an exception
    ✅ Same name under a different service is allowed
    ✅ Unknown serviceId → ValidationError
    ✅ Rename onto a sibling's name → ConflictError
    ✅ Update refreshes updated_at, leaves created_at
    ✅ Absence → None / False
    ✅ Constraint identification from driver errors
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from app.dao.constraints import violated_constraint
from app.dao.version_dao import VersionDao
from app.exceptions import ConflictError, ValidationError
from app.models.service import Service
from app.models.version import Version
from app.schemas.version import CreateVersionRequest, UpdateVersionRequest


async def _service(db, name="Orders"):
    service = Service(name=name, description="desc")
    db.add(service)
    await db.commit()
    return service


def _create(service_id, name="v1.0", description="first release"):
    return CreateVersionRequest(serviceId=service_id, name=name, description=description)


class TestCreateVersion:
    """Tests for create_version."""

    def setup_method(self):
        self.dao = VersionDao()

    @pytest.mark.asyncio
    async def test_create_returns_version(self, db_session):
        service = await _service(db_session)

        version = await self.dao.create_version(db_session, _create(service.id))

        assert version.service_id == service.id
        assert version.name == "v1.0"
        assert version.created_at is not None

    @pytest.mark.asyncio
    async def test_duplicate_name_for_same_service_returns_none(self, db_session):
        service = await _service(db_session)
        await self.dao.create_version(db_session, _create(service.id))
        await db_session.commit()

        duplicate = await self.dao.create_version(db_session, _create(service.id))

        assert duplicate is None

    @pytest.mark.asyncio
    async def test_same_name_allowed_under_another_service(self, db_session):
        first = await _service(db_session, "First")
        second = await _service(db_session, "Second")
        await self.dao.create_version(db_session, _create(first.id))
        await db_session.commit()

        version = await self.dao.create_version(db_session, _create(second.id))

        assert version is not None
        assert version.service_id == second.id

    @pytest.mark.asyncio
    async def test_unknown_service_raises_validation_error(self, db_session):
        missing = uuid4()

        with pytest.raises(ValidationError) as exc_info:
            await self.dao.create_version(db_session, _create(missing))

        assert exc_info.value.messages == [f"service with ID {missing} does not exist"]


class TestVersionReadUpdateDelete:
    """Tests for get_version_by_id, update_version and delete_version."""

    def setup_method(self):
        self.dao = VersionDao()

    @pytest.mark.asyncio
    async def test_get_missing_returns_none(self, db_session):
        assert await self.dao.get_version_by_id(db_session, uuid4()) is None

    @pytest.mark.asyncio
    async def test_update_description_only(self, db_session):
        service = await _service(db_session)
        created = await self.dao.create_version(db_session, _create(service.id))
        await db_session.commit()

        updated = await self.dao.update_version(
            db_session, created.id, UpdateVersionRequest(description="patched")
        )

        assert updated.name == "v1.0"
        assert updated.description == "patched"

    @pytest.mark.asyncio
    async def test_update_refreshes_updated_at_only(self, db_session):
        service = await _service(db_session)
        an_hour_ago = datetime.now(timezone.utc) - timedelta(hours=1)
        version = Version(
            service_id=service.id,
            name="v1.0",
            description="first release",
            created_at=an_hour_ago,
            updated_at=an_hour_ago,
        )
        db_session.add(version)
        await db_session.commit()
        before = await self.dao.get_version_by_id(db_session, version.id)

        updated = await self.dao.update_version(
            db_session, version.id, UpdateVersionRequest(name="v1.1")
        )

        assert updated.updated_at > before.updated_at
        assert updated.created_at == before.created_at

    @pytest.mark.asyncio
    async def test_rename_onto_sibling_raises_conflict(self, db_session):
        service = await _service(db_session)
        await self.dao.create_version(db_session, _create(service.id, name="v1"))
        second = await self.dao.create_version(db_session, _create(service.id, name="v2"))
        await db_session.commit()

        with pytest.raises(ConflictError):
            await self.dao.update_version(
                db_session, second.id, UpdateVersionRequest(name="v1")
            )

    @pytest.mark.asyncio
    async def test_update_missing_returns_none(self, db_session):
        result = await self.dao.update_version(
            db_session, uuid4(), UpdateVersionRequest(name="v9")
        )
        assert result is None

    @pytest.mark.asyncio
    async def test_delete(self, db_session):
        service = await _service(db_session)
        created = await self.dao.create_version(db_session, _create(service.id))
        await db_session.commit()

        assert await self.dao.delete_version(db_session, created.id) is True
        assert await self.dao.delete_version(db_session, created.id) is False


class TestViolatedConstraint:
    """Constraint names come from the driver when it reports them."""

    def test_postgres_constraint_name_from_driver_cause(self):
        driver_error = Exception("unique_violation")
        driver_error.constraint_name = "uq_version_name_service"
        orig = Exception("duplicate key value violates unique constraint")
        orig.__cause__ = driver_error
        exc = IntegrityError("INSERT ...", {}, orig)

        assert violated_constraint(exc) == "uq_version_name_service"

    def test_sqlite_message_mapping(self):
        orig = Exception("UNIQUE constraint failed: user.username")
        exc = IntegrityError("INSERT ...", {}, orig)

        assert violated_constraint(exc) == "uq_user_username"

    def test_unknown_violation(self):
        exc = IntegrityError("INSERT ...", {}, Exception("NOT NULL constraint failed: x.y"))

        assert violated_constraint(exc) is None
