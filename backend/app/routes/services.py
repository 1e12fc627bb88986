"""
Catalog Backend - Service Route Handlers
=========================================

What:  /api/services endpoints: listing, detail with versions, create,
       partial update, delete.
How:   Validate (FastAPI + Pydantic) → call ServiceDao → turn None/False into
       NotFoundError. Everything else is left to the global exception handlers.

Endpoints:
    GET    /api/services                 200  page of services with versionCount
    GET    /api/services/{id}/versions   200  service with its versions
    POST   /api/services                 201  created service
    PATCH  /api/services/{id}            200  updated service
    DELETE /api/services/{id}            204  no body
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Response, status
from pydantic import UUID4
from sqlalchemy.ext.asyncio import AsyncSession

from app.dao.service_dao import service_dao
from app.database import get_db_session
from app.dependencies import get_service_list_query
from app.exceptions import NotFoundError
from app.schemas.common import ErrorResponse
from app.schemas.service import (
    CreateServiceRequest,
    ServiceListQuery,
    ServiceResponse,
    ServiceWithVersionCountResponse,
    ServiceWithVersionsResponse,
    UpdateServiceRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/services", tags=["Services"])

_NOT_FOUND = {"description": "No service has this ID", "model": ErrorResponse}
_BAD_REQUEST = {"description": "Invalid input", "model": ErrorResponse}
_SERVER_ERROR = {"description": "Server error", "model": ErrorResponse}


@router.get(
    "",
    response_model=List[ServiceWithVersionCountResponse],
    responses={400: _BAD_REQUEST, 500: _SERVER_ERROR},
    summary="List services with their version counts",
)
async def list_services(
    query: ServiceListQuery = Depends(get_service_list_query),
    db: AsyncSession = Depends(get_db_session),
) -> List[ServiceWithVersionCountResponse]:
    """
    Paginated, filterable, sortable listing.

    Example:
        GET /api/services?page=2&limit=5&name=auth&sortBy=name&order=asc
    """
    return await service_dao.list_services_with_version_count(
        db,
        page=query.page,
        limit=query.limit,
        name=query.name,
        sort_by=query.sort_by,
        order=query.order,
    )


@router.get(
    "/{service_id}/versions",
    response_model=ServiceWithVersionsResponse,
    responses={400: _BAD_REQUEST, 404: _NOT_FOUND, 500: _SERVER_ERROR},
    summary="Get a service together with all of its versions",
)
async def get_service_with_versions(
    service_id: UUID4,
    db: AsyncSession = Depends(get_db_session),
) -> ServiceWithVersionsResponse:
    service = await service_dao.get_service_with_versions(db, service_id)
    if service is None:
        raise NotFoundError("Service", str(service_id))
    return service


@router.post(
    "",
    response_model=ServiceResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: _BAD_REQUEST, 500: _SERVER_ERROR},
    summary="Create a service",
)
async def create_service(
    body: CreateServiceRequest,
    db: AsyncSession = Depends(get_db_session),
) -> ServiceResponse:
    return await service_dao.create_service(db, body)


@router.patch(
    "/{service_id}",
    response_model=ServiceResponse,
    responses={400: _BAD_REQUEST, 404: _NOT_FOUND, 500: _SERVER_ERROR},
    summary="Update a service's name and/or description",
)
async def update_service(
    service_id: UUID4,
    body: UpdateServiceRequest,
    db: AsyncSession = Depends(get_db_session),
) -> ServiceResponse:
    """Only the fields present in the body change."""
    service = await service_dao.update_service(db, service_id, body)
    if service is None:
        raise NotFoundError("Service", str(service_id))
    return service


@router.delete(
    "/{service_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={400: _BAD_REQUEST, 404: _NOT_FOUND, 500: _SERVER_ERROR},
    summary="Delete a service and all of its versions",
)
async def delete_service(
    service_id: UUID4,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    if not await service_dao.delete_service(db, service_id):
        raise NotFoundError("Service", str(service_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
