"""
Catalog Backend - Version Route Handlers
=========================================

What:  /api/versions endpoints.

Endpoints:
    POST   /api/versions        201  created version
                                409  the service already has a version with this name
                                400  serviceId does not name an existing service
    GET    /api/versions/{id}   200  version
    PATCH  /api/versions/{id}   200  updated version (409 on a name clash)
    DELETE /api/versions/{id}   204  no body
"""

import logging

from fastapi import APIRouter, Depends, Response, status
from pydantic import UUID4
from sqlalchemy.ext.asyncio import AsyncSession

from app.dao.version_dao import DUPLICATE_VERSION_MESSAGE, version_dao
from app.database import get_db_session
from app.exceptions import ConflictError, NotFoundError
from app.schemas.common import ErrorResponse
from app.schemas.version import (
    CreateVersionRequest,
    UpdateVersionRequest,
    VersionResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/versions", tags=["Versions"])

_NOT_FOUND = {"description": "No version has this ID", "model": ErrorResponse}
_BAD_REQUEST = {"description": "Invalid input", "model": ErrorResponse}
_CONFLICT = {"description": "Duplicate version name for this service", "model": ErrorResponse}
_SERVER_ERROR = {"description": "Server error", "model": ErrorResponse}


@router.post(
    "",
    response_model=VersionResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: _BAD_REQUEST, 409: _CONFLICT, 500: _SERVER_ERROR},
    summary="Create a version of a service",
)
async def create_version(
    body: CreateVersionRequest,
    db: AsyncSession = Depends(get_db_session),
) -> VersionResponse:
    version = await version_dao.create_version(db, body)
    if version is None:
        raise ConflictError(
            DUPLICATE_VERSION_MESSAGE,
            context={"service_id": str(body.service_id), "name": body.name},
        )
    return version


@router.get(
    "/{version_id}",
    response_model=VersionResponse,
    responses={400: _BAD_REQUEST, 404: _NOT_FOUND, 500: _SERVER_ERROR},
    summary="Get a version",
)
async def get_version(
    version_id: UUID4,
    db: AsyncSession = Depends(get_db_session),
) -> VersionResponse:
    version = await version_dao.get_version_by_id(db, version_id)
    if version is None:
        raise NotFoundError("Version", str(version_id))
    return version


@router.patch(
    "/{version_id}",
    response_model=VersionResponse,
    responses={400: _BAD_REQUEST, 404: _NOT_FOUND, 409: _CONFLICT, 500: _SERVER_ERROR},
    summary="Update a version's name and/or description",
)
async def update_version(
    version_id: UUID4,
    body: UpdateVersionRequest,
    db: AsyncSession = Depends(get_db_session),
) -> VersionResponse:
    version = await version_dao.update_version(db, version_id, body)
    if version is None:
        raise NotFoundError("Version", str(version_id))
    return version


@router.delete(
    "/{version_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={400: _BAD_REQUEST, 404: _NOT_FOUND, 500: _SERVER_ERROR},
    summary="Delete a version",
)
async def delete_version(
    version_id: UUID4,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    if not await version_dao.delete_version(db, version_id):
        raise NotFoundError("Version", str(version_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
