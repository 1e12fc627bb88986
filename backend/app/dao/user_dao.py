"""
Catalog Backend - User DAO
===========================

What:  Lookup and insert against the `user` table.
Who:   Called only by the auth service; routes never touch users directly.

Like create_version(), create_user() relies on the unique constraint
(uq_user_username) instead of a pre-check and returns None on a duplicate.
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.dao.constraints import violated_constraint
from app.exceptions import DatabaseError
from app.models.user import UNIQUE_USERNAME_CONSTRAINT, User

logger = logging.getLogger(__name__)


class UserDao:
    """
    Data access for users.

    Returns ORM rows rather than DTOs: the auth service needs the stored hash,
    which no response model is allowed to carry.
    """

    async def get_by_username(self, db: AsyncSession, username: str) -> Optional[User]:
        try:
            result = await db.execute(select(User).where(User.username == username))
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching user: %s", str(e))
            raise DatabaseError(context={"error_type": type(e).__name__})

    async def create_user(
        self, db: AsyncSession, username: str, password_hash: str
    ) -> Optional[User]:
        """
        Insert a user with an already hashed password.

        Returns:
            The new user, or None when the username is taken.
        """
        user = User(username=username, password=password_hash)
        db.add(user)
        try:
            await db.flush()
        except IntegrityError as e:
            await db.rollback()
            if violated_constraint(e) == UNIQUE_USERNAME_CONSTRAINT:
                logger.info("Duplicate username rejected")
                return None
            logger.error("Integrity error creating user: %s", str(e))
            raise DatabaseError(context={"error_type": type(e).__name__})
        except SQLAlchemyError as e:
            logger.error("Database error creating user: %s", str(e), exc_info=True)
            raise DatabaseError(context={"error_type": type(e).__name__})

        logger.info("User created: %s", user.id)
        return user


user_dao = UserDao()
