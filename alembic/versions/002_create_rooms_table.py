"""create rooms table

Revision ID: 002
Revises: 001
Create Date: 2025-02-03 10:05:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "rooms",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("colony_id", sa.String(36), nullable=False),
        sa.Column("room_number", sa.String(50), nullable=False),
        sa.Column("status", sa.String(10), server_default="Free", nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["colony_id"], ["colonies.id"], ondelete="CASCADE"),
        sa.CheckConstraint("status IN ('Free', 'Rented')", name="ck_rooms_status"),
    )
    op.create_index("ix_rooms_colony_id", "rooms", ["colony_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_rooms_colony_id", table_name="rooms")
    op.drop_table("rooms")
