"""
Catalog Backend - Authentication Service
=========================================

What:  Registration, login and access token verification.
Who:   Called by the /api/auth routes and by the get_current_user dependency.

Flow:
    register:  bcrypt-hash password → insert user → {id, username}
    login:     look up user → bcrypt.checkpw → signed HS256 JWT
    verify:    decode JWT (signature + exp) → CurrentUser

Security:
    - Unknown username and wrong password produce the same 401
      "Invalid credentials"; the response never says which one failed.
    - Passwords and tokens are never logged.
    - bcrypt is CPU-bound (~50ms at cost 10), so hashing and checking run in a
      worker thread instead of blocking the event loop.

Token payload:
    sub       user id (string)
    username  username at the time of login
    iat, exp  issued-at and expiry (iat + JWT_EXPIRES_IN seconds)
"""

import asyncio
import logging
import uuid
from datetime import datetime, timedelta, timezone

import bcrypt
import jwt
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.dao.user_dao import user_dao
from app.exceptions import AuthenticationError, ConflictError
from app.schemas.auth import CurrentUser, TokenResponse, UserResponse

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid credentials"
DUPLICATE_USERNAME_MESSAGE = "Username already exists"

# bcrypt ignores everything after 72 bytes; newer releases raise instead
_BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    """Salted bcrypt hash, stored as text."""
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")


def check_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(_password_bytes(password), password_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        logger.error("Stored password hash is malformed")
        return False


class AuthService:
    """Stateless; the database session is passed per call."""

    async def register(
        self, db: AsyncSession, username: str, password: str
    ) -> UserResponse:
        """
        Create a user.

        Raises:
            ConflictError: the username is taken
        """
        password_hash = await asyncio.to_thread(hash_password, password)
        user = await user_dao.create_user(db, username, password_hash)
        if user is None:
            raise ConflictError(
                DUPLICATE_USERNAME_MESSAGE, context={"username": username}
            )
        return UserResponse(id=user.id, username=user.username)

    async def login(self, db: AsyncSession, username: str, password: str) -> TokenResponse:
        """
        Exchange credentials for an access token.

        Raises:
            AuthenticationError: unknown user or wrong password
        """
        user = await user_dao.get_by_username(db, username)
        if user is None or not await asyncio.to_thread(
            check_password, password, user.password
        ):
            logger.warning("Failed login attempt for username '%s'", username)
            raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)

        logger.info("User logged in: %s", user.id)
        return TokenResponse(access_token=self.issue_token(user.id, user.username))

    def issue_token(self, user_id: uuid.UUID, username: str) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "sub": str(user_id),
            "username": username,
            "iat": now,
            "exp": now + timedelta(seconds=settings.jwt_expires_in),
        }
        return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)

    def verify_token(self, token: str) -> CurrentUser:
        """
        Decode and verify an access token.

        Raises:
            AuthenticationError: bad signature, expired, malformed, or a
                payload without sub/username
        """
        try:
            payload = jwt.decode(
                token,
                settings.jwt_secret,
                algorithms=[settings.jwt_algorithm],
                options={"require": ["sub", "exp"]},
            )
        except jwt.ExpiredSignatureError:
            logger.info("Rejected expired access token")
            raise AuthenticationError()
        except jwt.InvalidTokenError as e:
            logger.info("Rejected invalid access token: %s", type(e).__name__)
            raise AuthenticationError()

        try:
            return CurrentUser(
                user_id=uuid.UUID(payload["sub"]),
                username=payload["username"],
            )
        except (KeyError, TypeError, ValueError):
            logger.info("Rejected access token with malformed payload")
            raise AuthenticationError()


auth_service = AuthService()
