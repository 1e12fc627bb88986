"""Create user table

Revision ID: 002
Revises: 001
Create Date: 2025-03-02 00:00:00.000000+00:00

What:  Credentials table for /api/auth.
Note:  "user" is a reserved word in PostgreSQL; SQLAlchemy quotes it.
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers
revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "user",
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=True),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("username", sa.String(255), nullable=False),
        # bcrypt hash, never plaintext
        sa.Column("password", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username", name="uq_user_username"),
    )


def downgrade() -> None:
    op.drop_table("user")
