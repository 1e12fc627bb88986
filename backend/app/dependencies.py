"""
Catalog Backend - Shared Route Dependencies
============================================

What:  FastAPI dependencies used by more than one route module.

    get_current_user      Bearer token → CurrentUser, or 401 before the
                          route body runs
    get_service_list_query  Raw query strings → ServiceListQuery, or 400
                          with every violated rule listed
"""

import logging
from typing import Optional

from fastapi import Depends, Query
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import ValidationError as PydanticValidationError

from app.exceptions import AuthenticationError, ValidationError
from app.schemas.auth import CurrentUser
from app.schemas.common import describe_validation_errors
from app.schemas.service import ServiceListQuery
from app.services.auth_service import auth_service

logger = logging.getLogger(__name__)

# auto_error=False: a missing header must produce our 401 body, not FastAPI's 403
_bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
) -> CurrentUser:
    if credentials is None:
        raise AuthenticationError()
    return auth_service.verify_token(credentials.credentials)


async def get_service_list_query(
    page: Optional[str] = Query(default=None, description="Page number, starting at 1"),
    limit: Optional[str] = Query(default=None, description="Items per page (max 100)"),
    name: Optional[str] = Query(
        default=None, description="Case-insensitive substring of the service name"
    ),
    sort_by: Optional[str] = Query(
        default=None,
        alias="sortBy",
        description="created_at (default), updated_at or name",
    ),
    order: Optional[str] = Query(default=None, description="ASC or DESC (default)"),
) -> ServiceListQuery:
    """
    Parse listing parameters.

    Values arrive as strings so that ServiceListQuery, not FastAPI, decides
    what "page=abc" or "limit=500" means and how the message reads.
    Omitted parameters take the model defaults.
    """
    supplied = {
        key: value
        for key, value in (
            ("page", page),
            ("limit", limit),
            ("name", name),
            ("sortBy", sort_by),
            ("order", order),
        )
        if value is not None
    }
    try:
        return ServiceListQuery.model_validate(supplied)
    except PydanticValidationError as e:
        raise ValidationError(
            describe_validation_errors(e.errors()),
            context={"query": supplied},
        )
