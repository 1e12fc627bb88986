"""
Catalog Backend - Authentication Route Handlers
================================================

What:  POST /api/auth/register and POST /api/auth/login.

Example:
    curl -X POST http://localhost:3000/api/auth/login \\
         -H "Content-Type: application/json" \\
         -d '{"username": "admin", "password": "password"}'
    → {"access_token": "<jwt>"}
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.schemas.auth import CredentialsRequest, TokenResponse, UserResponse
from app.schemas.common import ErrorResponse
from app.services.auth_service import auth_service

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post(
    "/register",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Invalid input", "model": ErrorResponse},
        409: {"description": "Username already exists", "model": ErrorResponse},
    },
    summary="Register a user",
)
async def register(
    body: CredentialsRequest,
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    return await auth_service.register(db, body.username, body.password)


@router.post(
    "/login",
    response_model=TokenResponse,
    status_code=status.HTTP_200_OK,
    responses={
        400: {"description": "Invalid input", "model": ErrorResponse},
        401: {"description": "Invalid credentials", "model": ErrorResponse},
    },
    summary="Exchange credentials for an access token",
)
async def login(
    body: CredentialsRequest,
    db: AsyncSession = Depends(get_db_session),
) -> TokenResponse:
    return await auth_service.login(db, body.username, body.password)
