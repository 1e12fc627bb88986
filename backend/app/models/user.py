"""
Catalog Backend - User SQLAlchemy Model
========================================

What:  Credentials for token-based authentication.
Why:   The `user` table backs /api/auth/register and /api/auth/login.

Security:
    `password` holds a bcrypt hash (salt embedded), never plaintext.
    Usernames are unique through uq_user_username; the auth service turns
    a violation into 409.
"""

import uuid

from sqlalchemy import String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base

UNIQUE_USERNAME_CONSTRAINT = "uq_user_username"


class User(Base):
    """A registered API user. Created by register; never updated or deleted."""

    __tablename__ = "user"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    username: Mapped[str] = mapped_column(String(255), nullable=False)
    password: Mapped[str] = mapped_column(Text, nullable=False)

    __table_args__ = (
        UniqueConstraint("username", name=UNIQUE_USERNAME_CONSTRAINT),
    )

    def __repr__(self) -> str:
        # Never include the password hash
        return f"<User(id={self.id}, username='{self.username}')>"
