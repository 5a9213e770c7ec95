"""create rental_history table

Revision ID: 004
Revises: 003
Create Date: 2025-02-03 10:15:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "004"
down_revision: Union[str, None] = "003"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # room_id has no foreign key: history outlives the room it describes
    op.create_table(
        "rental_history",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("rental_id", sa.String(36), nullable=True),
        sa.Column("room_id", sa.String(36), nullable=False),
        sa.Column("colony_id", sa.String(36), nullable=False),
        sa.Column("room_number", sa.String(50), nullable=False),
        sa.Column("company_name", sa.String(200), nullable=False),
        sa.Column("monthly_rent", sa.Numeric(12, 2), nullable=False),
        sa.Column("first_month_rent", sa.Numeric(12, 2), nullable=False),
        sa.Column("contract_start_date", sa.Date(), nullable=False),
        sa.Column("contract_end_date", sa.Date(), nullable=False),
        sa.Column("total_paid", sa.Numeric(12, 2), nullable=False),
        sa.Column("total_expected", sa.Numeric(12, 2), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["colony_id"], ["colonies.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_rental_history_colony_id", "rental_history", ["colony_id"], unique=False)
    op.create_index("ix_rental_history_rental_id", "rental_history", ["rental_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_rental_history_rental_id", table_name="rental_history")
    op.drop_index("ix_rental_history_colony_id", table_name="rental_history")
    op.drop_table("rental_history")
