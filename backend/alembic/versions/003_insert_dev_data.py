"""Insert development data

Revision ID: 003
Revises: 002
Create Date: 2025-03-02 12:00:00.000000+00:00

What:  Three services and three versions with fixed IDs, so a fresh local
       database has something to list and fetch by a known ID.
       Test Service 3 deliberately has no versions (versionCount 0).

Not for production: skip with `alembic upgrade 002`.
"""

import uuid
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

SERVICES = [
    ("550e8400-e29b-41d4-a716-446655440000", "Test Service 1", "Server 1"),
    ("97a60546-8205-40f2-b392-8c46cdce9cb9", "Test Service 2", "Server 2"),
    ("11c6edcd-9e48-44cb-aaa7-a3c7c6e3658a", "Test Service 3", "Server 3"),
]

VERSIONS = [
    ("1152e843-e3c5-40f1-8fad-b03d445591a0", SERVICES[0][0], "v1.0", "version 1.0"),
    ("a7718709-09cc-40f2-9a6c-dc6d7bf556a3", SERVICES[0][0], "v1.1", "version 1.1"),
    ("2253f954-f4d6-41f2-9adc-c03f556602b1", SERVICES[1][0], "v0.1", "version 0.1"),
]


def upgrade() -> None:
    service = sa.table(
        "service",
        sa.column("id", sa.Uuid),
        sa.column("name", sa.String),
        sa.column("description", sa.String),
    )
    version = sa.table(
        "version",
        sa.column("id", sa.Uuid),
        sa.column("service_id", sa.Uuid),
        sa.column("name", sa.String),
        sa.column("description", sa.String),
    )

    # Timestamps come from the server defaults
    op.bulk_insert(
        service,
        [{"id": uuid.UUID(sid), "name": name, "description": desc} for sid, name, desc in SERVICES],
    )
    op.bulk_insert(
        version,
        [
            {"id": uuid.UUID(vid), "service_id": uuid.UUID(sid), "name": name, "description": desc}
            for vid, sid, name, desc in VERSIONS
        ],
    )


def downgrade() -> None:
    version_ids = ", ".join(f"'{vid}'" for vid, _, _, _ in VERSIONS)
    service_ids = ", ".join(f"'{sid}'" for sid, _, _ in SERVICES)
    op.execute(f"DELETE FROM version WHERE id IN ({version_ids})")
    op.execute(f"DELETE FROM service WHERE id IN ({service_ids})")
