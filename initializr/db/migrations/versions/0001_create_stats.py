"""create stats table

Revision ID: 0001
Revises:
Create Date: 2026-10-18
"""

from datetime import datetime
from alembic import op
import sqlalchemy as sa

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    stats = op.create_table(
        "stats",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("total_generations", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("total_downloads", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("last_updated", sa.DateTime(), nullable=False),
    )
    op.bulk_insert(stats, [
        {"id": 1, "total_generations": 0, "total_downloads": 0, "last_updated": datetime(2026, 1, 1)},
    ])

def downgrade():
    op.drop_table("stats")
