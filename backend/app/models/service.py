"""
Catalog Backend - Service SQLAlchemy Model
===========================================

What:  ORM model representing the `service` table.
Why:   Maps Python objects to database rows; Alembic reads it for migrations.
Who:   Used by ServiceDao for CRUD and listing.

Query Patterns:
    - Listing with version counts: service LEFT JOIN (per-service COUNT)
      ORDER BY created_at | updated_at | name, LIMIT/OFFSET
    - Name filter: case-insensitive substring; idx_service_name helps the
      name sort, not the substring match
    - Detail: SELECT ... WHERE id = :uuid plus a selectin load of versions
"""

import uuid
from datetime import datetime
from typing import List

from sqlalchemy import TIMESTAMP, Index, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base, utcnow
from app.models.version import Version


class Service(Base):
    """
    A catalog entry. Owns zero or more versions.

    Lifecycle:
        1. Created by POST /api/services
        2. Partially updated by PATCH (updated_at refreshes via onupdate)
        3. Deleted by DELETE; the database cascades to its versions
    """

    __tablename__ = "service"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    # Length bounds (3-255) are enforced by the request schema, not here.
    # Names are deliberately not unique.
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(String(500), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
        server_default=func.now(),
    )

    # passive_deletes: let ON DELETE CASCADE do the work instead of the ORM
    # loading and deleting each version.
    versions: Mapped[List[Version]] = relationship(
        Version,
        order_by=Version.created_at,
        passive_deletes=True,
        lazy="raise",
    )

    __table_args__ = (
        Index("idx_service_name", "name"),
    )

    def __repr__(self) -> str:
        return f"<Service(id={self.id}, name='{self.name}')>"
