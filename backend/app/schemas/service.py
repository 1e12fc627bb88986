"""
Catalog Backend - Service Request/Response Schemas
===================================================

What:  Pydantic models for the /api/services endpoints.
Why:   Request models reject bad input before any DAO call; response models
       fix exactly which fields leave the API (camelCase).

Validation rules:
    name         3-255 characters
    description  1-500 characters
    page         integer ≥ 1 (default 1)
    limit        integer in [1, 100] (default 10)
    sortBy       created_at | updated_at | name (default created_at)
    order        ASC | DESC, any case (default DESC)
"""

import uuid
from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from app.schemas.common import (
    CamelModel,
    StrictRequestModel,
    bounded_str,
    custom_error,
)

SORTABLE_FIELDS = ("created_at", "updated_at", "name")
SORT_ORDERS = ("ASC", "DESC")
MAX_PAGE_SIZE = 100
# Largest page whose OFFSET still fits a signed 64-bit integer at any limit
MAX_PAGE = (2**63 - 1) // MAX_PAGE_SIZE + 1

ServiceName = bounded_str("name", 3, 255)
ServiceDescription = bounded_str("description", 1, 500)


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class CreateServiceRequest(StrictRequestModel):
    """Body of POST /api/services."""

    name: ServiceName
    description: ServiceDescription


class UpdateServiceRequest(StrictRequestModel):
    """
    Body of PATCH /api/services/{id}.

    Only fields present in the payload are applied; see `changes()`.
    """

    name: Optional[ServiceName] = None
    description: Optional[ServiceDescription] = None

    def changes(self) -> dict:
        """Fields the client actually sent, ready for an UPDATE ... SET."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


class ServiceListQuery(BaseModel):
    """
    Query parameters of GET /api/services.

    Built from raw query strings by the route dependency, so every rule
    parses its own input and reports a message the client can act on.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    page: int = 1
    limit: int = 10
    name: Optional[str] = None
    sort_by: str = Field(default="created_at", alias="sortBy")
    order: str = "DESC"

    @field_validator("page", "limit", mode="before")
    @classmethod
    def parse_integer(cls, value: Any, info: ValidationInfo) -> int:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        try:
            return int(str(value).strip())
        except ValueError:
            raise custom_error("{field} must be an integer", field=info.field_name)

    @field_validator("page")
    @classmethod
    def check_page(cls, value: int) -> int:
        if value < 1:
            raise custom_error("page must be at least 1")
        if value > MAX_PAGE:
            raise custom_error("page cannot exceed {max_page}", max_page=MAX_PAGE)
        return value

    @field_validator("limit")
    @classmethod
    def check_limit(cls, value: int) -> int:
        if value < 1:
            raise custom_error("limit must be at least 1")
        if value > MAX_PAGE_SIZE:
            raise custom_error("limit cannot exceed 100")
        return value

    @field_validator("name", mode="before")
    @classmethod
    def check_name(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        if not isinstance(value, str):
            raise custom_error("name must be a string")
        if not 3 <= len(value) <= 255:
            raise custom_error("name must be between 3 and 255 characters")
        return value

    @field_validator("sort_by", mode="before")
    @classmethod
    def check_sort_by(cls, value: Any) -> str:
        if value not in SORTABLE_FIELDS:
            raise custom_error("invalid sortBy field")
        return value

    @field_validator("order", mode="before")
    @classmethod
    def check_order(cls, value: Any) -> str:
        normalized = str(value).upper()
        if normalized not in SORT_ORDERS:
            raise custom_error("invalid order, must be ASC or DESC")
        return normalized


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class ServiceWithVersionCountResponse(CamelModel):
    """One row of GET /api/services."""

    id: uuid.UUID
    name: str
    description: str
    version_count: int = Field(description="Number of versions; 0 when there are none")


class ServiceResponse(CamelModel):
    """Returned by POST and PATCH /api/services."""

    id: uuid.UUID
    name: str
    description: str
    created_at: datetime
    updated_at: datetime


class ServiceVersionResponse(CamelModel):
    """A version nested inside its service (no serviceId, it is implied)."""

    id: uuid.UUID
    name: str
    description: str
    created_at: datetime
    updated_at: datetime


class ServiceWithVersionsResponse(ServiceResponse):
    """Returned by GET /api/services/{id}/versions."""

    versions: List[ServiceVersionResponse] = Field(default_factory=list)
