"""
Catalog Backend - Shared Schema Building Blocks
================================================

What:  Base model, bounded string type, error/health response models, and
       the translator that turns Pydantic errors into readable messages.
Why:   Every request model reports violations the same way:
       a 400 whose `message` is a list such as
       ["name must be between 3 and 255 characters", "property id should not exist"].
How:   Field-level rules raise PydanticCustomError with a ready-made message
       (type CUSTOM_ERROR_TYPE); built-in Pydantic error types are mapped to
       the same wording by describe_validation_errors().
"""

from typing import Annotated, Any, Callable, Iterable, List, Mapping, Optional, Union

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, StrictStr
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

# Errors raised with this type already carry their final wording
CUSTOM_ERROR_TYPE = "catalog_validation"

INVALID_ID_MESSAGE = "invalid ID format, must be a UUID v4"

# First element of a FastAPI error location names where the value came from
_REQUEST_SOURCES = {"body", "query", "path", "header", "cookie"}


def custom_error(message: str, **context: Any) -> PydanticCustomError:
    """Build a validation error whose message is used verbatim in the response."""
    return PydanticCustomError(CUSTOM_ERROR_TYPE, message, context or None)


def _length_check(field: str, min_length: int, max_length: int) -> Callable[[str], str]:
    def check(value: str) -> str:
        if not min_length <= len(value) <= max_length:
            raise custom_error(
                "{field} must be between {min_length} and {max_length} characters",
                field=field,
                min_length=min_length,
                max_length=max_length,
            )
        return value

    return check


def bounded_str(field: str, min_length: int, max_length: int) -> Any:
    """
    A strict string whose length must fall in [min_length, max_length].

    `field` is the name used in the error message, which for camelCase
    request fields differs from the Python attribute name.
    """
    return Annotated[StrictStr, AfterValidator(_length_check(field, min_length, max_length))]


class CamelModel(BaseModel):
    """
    Response base: Python attributes in snake_case, JSON in camelCase.

    FastAPI serializes response models by alias, so `created_at` leaves the
    API as `createdAt`.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class StrictRequestModel(BaseModel):
    """Request body base: unknown properties are rejected, not ignored."""

    model_config = ConfigDict(extra="forbid")


def describe_validation_errors(errors: Iterable[Mapping[str, Any]]) -> List[str]:
    """
    Translate Pydantic/FastAPI error dicts into human-readable messages.

    Order follows the input, duplicates are dropped.
    """
    messages: List[str] = []
    for error in errors:
        message = _describe(error)
        if message not in messages:
            messages.append(message)
    return messages


def _describe(error: Mapping[str, Any]) -> str:
    loc = tuple(error.get("loc") or ())
    source = loc[0] if loc and loc[0] in _REQUEST_SOURCES else None
    field = ".".join(str(part) for part in (loc[1:] if source else loc)) or None
    kind = error.get("type", "")

    if kind == CUSTOM_ERROR_TYPE:
        return error.get("msg", "invalid value")
    if kind == "json_invalid":
        return "request body must be valid JSON"
    if kind == "extra_forbidden":
        return f"property {field} should not exist"
    if kind.startswith("uuid"):
        return INVALID_ID_MESSAGE if source == "path" else f"{field} must be a UUID v4"
    if kind == "missing":
        return f"{field} should not be empty" if field else "request body should not be empty"
    if kind == "string_type":
        return f"{field} must be a string"
    if kind in {"model_attributes_type", "dict_type", "model_type"}:
        return "request body must be a JSON object"
    if field:
        return f"{field}: {error.get('msg', 'invalid value')}"
    return error.get("msg", "invalid request")


# ══════════════════════════════════════════════════════════════════════════
# Error & Health Response Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    What:  Error body returned by every failing endpoint.

    Example:
        {"statusCode": 400, "message": ["limit cannot exceed 100"], "error": "Bad Request"}
        {"statusCode": 404, "message": "Cannot GET /api/unknown", "error": "Not Found"}
    """

    statusCode: int = Field(description="HTTP status code")
    message: Union[str, List[str]] = Field(description="Description, or list of violations")
    error: Optional[str] = Field(default=None, description="HTTP reason phrase")


class HealthResponse(BaseModel):
    """Returned by GET /health for monitoring and load balancer checks."""

    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
