"""
Catalog Backend - Version DAO
==============================

What:  Queries and commands against the `version` table.
Who:   Called by the /api/versions route handlers.

Duplicate handling:
    (name, service_id) is unique in the database (uq_version_name_service).
    create_version() does not pre-check; it inserts and, if the database
    rejects the row for that constraint, returns None. The route turns None
    into 409. A pre-check would race with concurrent inserts anyway.

    A foreign key violation means serviceId names no existing service and is
    reported as a ValidationError. Any other integrity failure is unexpected
    and becomes DatabaseError.
"""

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.dao.constraints import violated_constraint
from app.exceptions import ConflictError, DatabaseError, ValidationError
from app.models.version import (
    SERVICE_FOREIGN_KEY_CONSTRAINT,
    UNIQUE_VERSION_NAME_CONSTRAINT,
    Version,
)
from app.schemas.transform import to_version
from app.schemas.version import (
    CreateVersionRequest,
    UpdateVersionRequest,
    VersionResponse,
)

logger = logging.getLogger(__name__)

DUPLICATE_VERSION_MESSAGE = "Duplicate version name for this service"


class VersionDao:
    """Data access for versions. Stateless; see ServiceDao."""

    async def create_version(
        self, db: AsyncSession, data: CreateVersionRequest
    ) -> Optional[VersionResponse]:
        """
        Insert a version.

        Returns:
            The created version, or None when the service already has a
            version with this name.

        Raises:
            ValidationError: serviceId does not reference an existing service
            DatabaseError:   any other database failure
        """
        version = Version(
            service_id=data.service_id,
            name=data.name,
            description=data.description,
        )
        db.add(version)
        try:
            await db.flush()
        except IntegrityError as e:
            await db.rollback()
            constraint = violated_constraint(e)
            if constraint == UNIQUE_VERSION_NAME_CONSTRAINT:
                logger.info(
                    "Duplicate version detected: service=%s name=%s",
                    data.service_id,
                    data.name,
                )
                return None
            if constraint == SERVICE_FOREIGN_KEY_CONSTRAINT:
                raise ValidationError(
                    [f"service with ID {data.service_id} does not exist"],
                    context={"service_id": str(data.service_id)},
                )
            logger.error("Integrity error creating version: %s", str(e))
            raise DatabaseError(context={"constraint": constraint})
        except SQLAlchemyError as e:
            logger.error("Database error creating version: %s", str(e), exc_info=True)
            raise DatabaseError(context={"error_type": type(e).__name__})

        logger.info("Version created: %s (service=%s)", version.id, version.service_id)
        return to_version(version)

    async def get_version_by_id(
        self, db: AsyncSession, version_id: UUID
    ) -> Optional[VersionResponse]:
        try:
            result = await db.execute(
                select(Version)
                .where(Version.id == version_id)
                .execution_options(populate_existing=True)
            )
            version = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching version %s: %s", version_id, str(e))
            raise DatabaseError(context={"version_id": str(version_id)})

        return to_version(version) if version is not None else None

    async def update_version(
        self, db: AsyncSession, version_id: UUID, data: UpdateVersionRequest
    ) -> Optional[VersionResponse]:
        """
        Apply only the supplied fields, then re-read the row.

        Raises:
            ConflictError: the new name is already used by a sibling version
        """
        changes = data.changes()
        if changes:
            try:
                await db.execute(
                    update(Version).where(Version.id == version_id).values(**changes)
                )
            except IntegrityError as e:
                await db.rollback()
                if violated_constraint(e) == UNIQUE_VERSION_NAME_CONSTRAINT:
                    raise ConflictError(
                        DUPLICATE_VERSION_MESSAGE,
                        context={"version_id": str(version_id)},
                    )
                logger.error("Integrity error updating version %s: %s", version_id, str(e))
                raise DatabaseError(context={"version_id": str(version_id)})
            except SQLAlchemyError as e:
                logger.error("Database error updating version %s: %s", version_id, str(e))
                raise DatabaseError(context={"version_id": str(version_id)})

        return await self.get_version_by_id(db, version_id)

    async def delete_version(self, db: AsyncSession, version_id: UUID) -> bool:
        try:
            result = await db.execute(delete(Version).where(Version.id == version_id))
        except SQLAlchemyError as e:
            logger.error("Database error deleting version %s: %s", version_id, str(e))
            raise DatabaseError(context={"version_id": str(version_id)})

        return result.rowcount > 0


version_dao = VersionDao()
