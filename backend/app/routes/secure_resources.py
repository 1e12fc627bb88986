"""
Catalog Backend - Protected Resource
=====================================

What:  GET /api/secure-resources, a sample endpoint behind token auth.
How:   The get_current_user dependency rejects the request with
       401 before the handler runs when the Bearer token is missing,
       malformed, wrongly signed or expired.
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from app.dependencies import get_current_user
from app.schemas.auth import CurrentUser
from app.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/secure-resources",
    tags=["Secure Resources"],
    responses={401: {"description": "Missing or invalid token", "model": ErrorResponse}},
)


@router.get("", response_class=PlainTextResponse, summary="Fetch the protected resource")
async def get_resource(user: CurrentUser = Depends(get_current_user)) -> str:
    logger.debug("Protected resource served to %s", user.user_id)
    return "Protected Resource"
