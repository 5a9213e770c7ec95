"""create rentals table

Revision ID: 003
Revises: 002
Create Date: 2025-02-03 10:10:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "rentals",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("room_id", sa.String(36), nullable=False),
        sa.Column("company_name", sa.String(200), nullable=False),
        sa.Column("monthly_rent", sa.Numeric(12, 2), nullable=False),
        sa.Column("contract_start_date", sa.Date(), nullable=False),
        sa.Column("first_month_rent", sa.Numeric(12, 2), nullable=False),
        sa.Column("paid_amount", sa.Numeric(12, 2), server_default="0", nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["room_id"], ["rooms.id"], ondelete="CASCADE"),
        # A room holds at most one active rental
        sa.UniqueConstraint("room_id", name="uq_rentals_room_id"),
        sa.CheckConstraint("monthly_rent >= 0", name="ck_rentals_monthly_rent_non_negative"),
        sa.CheckConstraint(
            "first_month_rent >= 0", name="ck_rentals_first_month_rent_non_negative"
        ),
    )
    op.create_index("ix_rentals_room_id", "rentals", ["room_id"], unique=False)
    op.create_index("ix_rentals_company_name", "rentals", ["company_name"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_rentals_company_name", table_name="rentals")
    op.drop_index("ix_rentals_room_id", table_name="rentals")
    op.drop_table("rentals")
