"""
Catalog Backend - Authentication Schemas
=========================================

What:  Request and response models for /api/auth and the identity that the
       token dependency attaches to protected requests.
Why:   The register response must never carry the password hash, so it has
       its own model instead of echoing the ORM row.
"""

import uuid

from pydantic import BaseModel, Field

from app.schemas.common import StrictRequestModel, bounded_str

Username = bounded_str("username", 1, 255)
Password = bounded_str("password", 1, 72)  # bcrypt only reads the first 72 bytes


class CredentialsRequest(StrictRequestModel):
    """Body of POST /api/auth/register and POST /api/auth/login."""

    username: Username
    password: Password


class UserResponse(BaseModel):
    """Returned by register: identity only, no password hash."""

    id: uuid.UUID
    username: str

    model_config = {"from_attributes": True}


class TokenResponse(BaseModel):
    """Returned by login. Field name follows the OAuth2 convention."""

    access_token: str = Field(description="Signed JWT, valid for one hour by default")


class CurrentUser(BaseModel):
    """Identity decoded from a verified access token."""

    user_id: uuid.UUID
    username: str
