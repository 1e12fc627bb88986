"""
Catalog Backend - Version Request/Response Schemas
===================================================

What:  Pydantic models for the /api/versions endpoints.

Validation rules:
    serviceId    UUID v4 of an existing service (existence is checked by the
                 database foreign key, not here)
    name         1-255 characters, unique per service
    description  1-500 characters
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import UUID4, Field

from app.schemas.common import CamelModel, StrictRequestModel, bounded_str

VersionName = bounded_str("version name", 1, 255)
VersionDescription = bounded_str("description", 1, 500)


class CreateVersionRequest(StrictRequestModel):
    """Body of POST /api/versions."""

    service_id: UUID4 = Field(alias="serviceId")
    name: VersionName
    description: VersionDescription


class UpdateVersionRequest(StrictRequestModel):
    """Body of PATCH /api/versions/{id}. The owning service cannot change."""

    name: Optional[VersionName] = None
    description: Optional[VersionDescription] = None

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True, exclude_none=True)


class VersionResponse(CamelModel):
    """Returned by every /api/versions endpoint that has a body."""

    id: uuid.UUID
    name: str
    description: str
    created_at: datetime
    updated_at: datetime
    service_id: uuid.UUID
