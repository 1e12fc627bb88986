"""
Catalog Backend - Entity → DTO Mapping
=======================================

What:  Pure functions turning ORM rows into response models.
Why:   DAOs return DTOs, never ORM objects, so nothing outside the data
       access layer can trigger a lazy load or see a column by accident.
"""

from typing import Any, Iterable

from app.models.service import Service
from app.models.version import Version
from app.schemas.service import (
    ServiceResponse,
    ServiceVersionResponse,
    ServiceWithVersionCountResponse,
    ServiceWithVersionsResponse,
)
from app.schemas.version import VersionResponse


def to_service_with_version_count(row: Any) -> ServiceWithVersionCountResponse:
    """Map a listing row (id, name, description, version_count)."""
    return ServiceWithVersionCountResponse(
        id=row.id,
        name=row.name,
        description=row.description,
        version_count=int(row.version_count or 0),
    )


def to_service(service: Service) -> ServiceResponse:
    return ServiceResponse(
        id=service.id,
        name=service.name,
        description=service.description,
        created_at=service.created_at,
        updated_at=service.updated_at,
    )


def to_service_version(version: Version) -> ServiceVersionResponse:
    return ServiceVersionResponse(
        id=version.id,
        name=version.name,
        description=version.description,
        created_at=version.created_at,
        updated_at=version.updated_at,
    )


def to_service_with_versions(
    service: Service, versions: Iterable[Version]
) -> ServiceWithVersionsResponse:
    """
    Map a service plus its (already loaded) versions.

    Versions are passed explicitly because Service.versions is lazy="raise";
    the DAO decides how they get loaded.
    """
    return ServiceWithVersionsResponse(
        **to_service(service).model_dump(),
        versions=[to_service_version(version) for version in versions],
    )


def to_version(version: Version) -> VersionResponse:
    return VersionResponse(
        id=version.id,
        name=version.name,
        description=version.description,
        created_at=version.created_at,
        updated_at=version.updated_at,
        service_id=version.service_id,
    )
