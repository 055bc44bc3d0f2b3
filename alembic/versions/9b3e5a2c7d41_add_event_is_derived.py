"""add events.is_derived

Revision ID: 9b3e5a2c7d41
Revises: 4c1d9e7f2a10
Create Date: 2026-10-18 14:03:51.602317

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "9b3e5a2c7d41"
down_revision: str | None = "4c1d9e7f2a10"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.add_column(
        "events",
        sa.Column("is_derived", sa.Boolean(), server_default=sa.false(), nullable=False),
    )

    # Until now every item-linked event of these types was owned by the synchronizer
    op.execute(
        "UPDATE events SET is_derived = true "
        "WHERE item_id IS NOT NULL AND type IN ('expiration', 'maintenance', 'rotation')"
    )


def downgrade() -> None:
    op.drop_column("events", "is_derived")
