"""
Catalog Backend - Constraint Violation Identification
======================================================

What:  Names the database constraint behind an IntegrityError.
Why:   DAOs react to specific constraints (duplicate version name, unknown
       service, duplicate username) and let everything else propagate.
How:   PostgreSQL (asyncpg) reports the constraint name on the driver
       exception, which SQLAlchemy chains as `orig.__cause__`. SQLite does
       not name constraints in its errors, so its messages are mapped through
       a fixed table. Unknown violations return None.
"""

from typing import Optional

from sqlalchemy.exc import IntegrityError

from app.models.user import UNIQUE_USERNAME_CONSTRAINT
from app.models.version import (
    SERVICE_FOREIGN_KEY_CONSTRAINT,
    UNIQUE_VERSION_NAME_CONSTRAINT,
)

_SQLITE_MESSAGES = {
    "UNIQUE constraint failed: version.name, version.service_id": UNIQUE_VERSION_NAME_CONSTRAINT,
    "UNIQUE constraint failed: user.username": UNIQUE_USERNAME_CONSTRAINT,
    # version.service_id is the only foreign key in the schema
    "FOREIGN KEY constraint failed": SERVICE_FOREIGN_KEY_CONSTRAINT,
}


def violated_constraint(exc: IntegrityError) -> Optional[str]:
    """Return the name of the constraint `exc` violated, if it can be told."""
    driver_error = getattr(exc.orig, "__cause__", None)
    name = getattr(driver_error, "constraint_name", None) or getattr(
        exc.orig, "constraint_name", None
    )
    if name:
        return name

    message = str(exc.orig)
    for fragment, constraint in _SQLITE_MESSAGES.items():
        if fragment in message:
            return constraint
    return None
