"""content config table

Revision ID: 0001_config
Revises: 
Create Date: 2026-10-16 12:00:00
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision = "0001_config"
down_revision = None
branch_labels = None
depends_on = None


def _has_config_table() -> bool:
    return sa.inspect(op.get_bind()).has_table("config")


def upgrade() -> None:
    # Sites moved from the old deployment already have this table; adopt it as is.
    if _has_config_table():
        return
    op.create_table(
        "config",
        sa.Column("key", sa.Text(), primary_key=True),
        sa.Column("value", sa.JSON().with_variant(postgresql.JSONB(), "postgresql"), nullable=True),
    )


def downgrade() -> None:
    if _has_config_table():
        op.drop_table("config")
