"""add_user_phone_and_status

Revision ID: 7c5e1d2a9f80
Revises: 0f3c2a9b7d41
Create Date: 2026-10-18 15:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '7c5e1d2a9f80'
down_revision: Union[str, Sequence[str], None] = '0f3c2a9b7d41'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.add_column("users", sa.Column("phone", sa.String(length=50), nullable=True))

    # Existing accounts are already trusted, so backfill them as approved
    op.add_column(
        "users",
        sa.Column("status", sa.String(length=20), server_default="approved", nullable=False),
    )
    op.alter_column("users", "status", server_default=None)
    op.create_index("ix_users_status", "users", ["status"])


def downgrade() -> None:
    op.drop_index("ix_users_status", table_name="users")
    op.drop_column("users", "status")
    op.drop_column("users", "phone")
