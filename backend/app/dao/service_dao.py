"""
Catalog Backend - Service DAO
==============================

What:  Queries and commands against the `service` table.
Who:   Called by the /api/services route handlers.

Listing query (GET /api/services):
    SELECT service.id, service.name, service.description,
           COALESCE(version_stats.version_count, 0) AS version_count
    FROM service
    LEFT OUTER JOIN (
        SELECT service_id, COUNT(id) AS version_count
        FROM version GROUP BY service_id
    ) AS version_stats ON version_stats.service_id = service.id
    [WHERE lower(service.name) LIKE lower(:name)]
    ORDER BY <sortBy> <order>
    LIMIT :limit OFFSET (:page - 1) * :limit

    The outer join keeps services that have no versions; COALESCE turns
    their missing count into 0.

Absence:
    get/update return None and delete returns False when no row has the id.
    Updates are last-write-wins; there is no version column to compare.
"""

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.dao.pagination import PaginationSpec, escape_like, order_by_clause
from app.exceptions import DatabaseError
from app.models.service import Service
from app.models.version import Version
from app.schemas.service import (
    CreateServiceRequest,
    ServiceResponse,
    ServiceWithVersionCountResponse,
    ServiceWithVersionsResponse,
    UpdateServiceRequest,
)
from app.schemas.transform import (
    to_service,
    to_service_with_version_count,
    to_service_with_versions,
)

logger = logging.getLogger(__name__)

_SORT_COLUMNS = {
    "created_at": Service.created_at,
    "updated_at": Service.updated_at,
    "name": Service.name,
}


class ServiceDao:
    """
    Data access for services.

    Stateless: every method receives the request's AsyncSession, so all work
    for one request shares one transaction.
    """

    async def list_services_with_version_count(
        self,
        db: AsyncSession,
        page: int = 1,
        limit: int = 10,
        name: Optional[str] = None,
        sort_by: str = "created_at",
        order: str = "DESC",
    ) -> List[ServiceWithVersionCountResponse]:
        """
        Return one page of services, each with its number of versions.

        Args:
            page:    1-based page number
            limit:   page size; at most `limit` rows come back
            name:    optional case-insensitive substring filter
            sort_by: created_at | updated_at | name
            order:   ASC | DESC
        """
        sort_column = _SORT_COLUMNS.get(sort_by)
        if sort_column is None:
            raise ValueError(f"Unsupported sort field '{sort_by}'")
        pagination = PaginationSpec(page=page, limit=limit)

        version_stats = (
            select(
                Version.service_id,
                func.count(Version.id).label("version_count"),
            )
            .group_by(Version.service_id)
            .subquery("version_stats")
        )

        query = select(
            Service.id,
            Service.name,
            Service.description,
            func.coalesce(version_stats.c.version_count, 0).label("version_count"),
        ).outerjoin(version_stats, version_stats.c.service_id == Service.id)

        if name:
            query = query.where(Service.name.ilike(f"%{escape_like(name)}%", escape="\\"))

        query = (
            query.order_by(order_by_clause(sort_column, order))
            .limit(pagination.limit)
            .offset(pagination.offset)
        )

        try:
            result = await db.execute(query)
            rows = result.all()
        except SQLAlchemyError as e:
            logger.error("Database error listing services: %s", str(e), exc_info=True)
            raise DatabaseError(context={"error_type": type(e).__name__})

        return [to_service_with_version_count(row) for row in rows]

    async def get_service_with_versions(
        self, db: AsyncSession, service_id: UUID
    ) -> Optional[ServiceWithVersionsResponse]:
        """Return the service and all of its versions, or None."""
        try:
            result = await db.execute(
                select(Service)
                .options(selectinload(Service.versions))
                .where(Service.id == service_id)
                .execution_options(populate_existing=True)
            )
            service = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching service %s: %s", service_id, str(e))
            raise DatabaseError(context={"service_id": str(service_id)})

        if service is None:
            return None
        return to_service_with_versions(service, service.versions)

    async def get_service_by_id(
        self, db: AsyncSession, service_id: UUID
    ) -> Optional[ServiceResponse]:
        """Return the service without its versions, or None."""
        try:
            result = await db.execute(
                select(Service)
                .where(Service.id == service_id)
                .execution_options(populate_existing=True)
            )
            service = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching service %s: %s", service_id, str(e))
            raise DatabaseError(context={"service_id": str(service_id)})

        return to_service(service) if service is not None else None

    async def create_service(
        self, db: AsyncSession, data: CreateServiceRequest
    ) -> ServiceResponse:
        service = Service(name=data.name, description=data.description)
        db.add(service)
        try:
            await db.flush()  # Assigns defaults without committing
        except SQLAlchemyError as e:
            logger.error("Database error creating service: %s", str(e), exc_info=True)
            raise DatabaseError(context={"error_type": type(e).__name__})

        logger.info("Service created: %s", service.id)
        return to_service(service)

    async def update_service(
        self, db: AsyncSession, service_id: UUID, data: UpdateServiceRequest
    ) -> Optional[ServiceResponse]:
        """
        Apply only the fields present in `data`, then re-read the row.

        updated_at is refreshed by the column's onupdate hook. An empty
        payload changes nothing and simply returns the current row.
        """
        changes = data.changes()
        if changes:
            try:
                await db.execute(
                    update(Service).where(Service.id == service_id).values(**changes)
                )
            except SQLAlchemyError as e:
                logger.error("Database error updating service %s: %s", service_id, str(e))
                raise DatabaseError(context={"service_id": str(service_id)})

        return await self.get_service_by_id(db, service_id)

    async def delete_service(self, db: AsyncSession, service_id: UUID) -> bool:
        """Delete the service; its versions go with it (ON DELETE CASCADE)."""
        try:
            result = await db.execute(delete(Service).where(Service.id == service_id))
        except SQLAlchemyError as e:
            logger.error("Database error deleting service %s: %s", service_id, str(e))
            raise DatabaseError(context={"service_id": str(service_id)})

        deleted = result.rowcount > 0
        if deleted:
            logger.info("Service deleted: %s", service_id)
        return deleted


# Stateless, so one shared instance is enough
service_dao = ServiceDao()
