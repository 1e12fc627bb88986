"""
Catalog Backend - Version SQLAlchemy Model
===========================================

What:  ORM model representing the `version` table.
Who:   Used by VersionDao for CRUD and by ServiceDao for version counts.

Constraints:
    - fk_version_service: service_id → service.id, ON DELETE CASCADE.
      Deleting a service removes its versions at the database level.
    - uq_version_name_service: (name, service_id) is unique. The DAO
      recognises a violation by this name and reports a duplicate.
"""

import uuid
from datetime import datetime

from sqlalchemy import (
    TIMESTAMP,
    ForeignKey,
    String,
    UniqueConstraint,
    Uuid,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base, utcnow

UNIQUE_VERSION_NAME_CONSTRAINT = "uq_version_name_service"
SERVICE_FOREIGN_KEY_CONSTRAINT = "fk_version_service"


class Version(Base):
    """A named, described release of a Service."""

    __tablename__ = "version"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    service_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("service.id", ondelete="CASCADE", name=SERVICE_FOREIGN_KEY_CONSTRAINT),
        nullable=False,
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(String(500), nullable=False)

    # Python-side defaults keep the values available right after flush
    # without a round trip; server defaults cover rows inserted by SQL.
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

    __table_args__ = (
        UniqueConstraint("name", "service_id", name=UNIQUE_VERSION_NAME_CONSTRAINT),
    )

    def __repr__(self) -> str:
        return f"<Version(id={self.id}, name='{self.name}', service_id={self.service_id})>"
