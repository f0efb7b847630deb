"""create loyalty ledger tables

Revision ID: 4f1d2c3b5a60
Revises:
Create Date: 2026-10-18 09:12:41.318204

"""
import uuid
from decimal import Decimal
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '4f1d2c3b5a60'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


DEFAULT_LEVELS = [
    ("Bronze", 0, "1.00", "Entry level for every new member"),
    ("Silver", 1000, "1.25", "25% more points on every purchase"),
    ("Gold", 5000, "1.50", "50% more points on every purchase"),
    ("Platinum", 15000, "2.00", "Double points on every purchase"),
]


def upgrade() -> None:
    """Upgrade schema."""
    bind = op.get_bind()
    inspector = sa.inspect(bind)

    if not inspector.has_table("loyalty_levels"):
        op.create_table(
            "loyalty_levels",
            sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True, nullable=False),
            sa.Column("name", sa.String(length=50), nullable=False),
            sa.Column("description", sa.String(length=255), nullable=True),
            sa.Column("min_points", sa.Integer(), server_default="0", nullable=False),
            sa.Column("bonus_multiplier", sa.Numeric(5, 2), server_default="1", nullable=False),
            sa.Column("created_at", sa.TIMESTAMP(), server_default=sa.text("now()"), nullable=True),
            sa.UniqueConstraint("name", name="uq_loyalty_levels_name"),
            sa.CheckConstraint("bonus_multiplier > 0", name="ck_loyalty_levels_multiplier_positive"),
        )

    # the app may have created the table on startup, seed by content not by table
    levels = sa.table(
        "loyalty_levels",
        sa.column("id", postgresql.UUID(as_uuid=True)),
        sa.column("name", sa.String),
        sa.column("description", sa.String),
        sa.column("min_points", sa.Integer),
        sa.column("bonus_multiplier", sa.Numeric(5, 2)),
    )
    if bind.execute(sa.select(levels.c.id).limit(1)).first() is None:
        op.bulk_insert(
            levels,
            [
                {
                    "id": uuid.uuid4(),
                    "name": name,
                    "min_points": min_points,
                    "bonus_multiplier": Decimal(multiplier),
                    "description": description,
                }
                for name, min_points, multiplier, description in DEFAULT_LEVELS
            ],
        )

    if not inspector.has_table("users"):
        op.create_table(
            "users",
            sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True, nullable=False),
            sa.Column("email", sa.String(length=255), nullable=True),
            sa.Column("full_name", sa.String(length=200), nullable=True),
            sa.Column("points", sa.Integer(), server_default="0", nullable=False),
            sa.Column(
                "loyalty_level_id",
                postgresql.UUID(as_uuid=True),
                sa.ForeignKey("loyalty_levels.id"),
                nullable=True,
            ),
            sa.Column("created_at", sa.TIMESTAMP(), server_default=sa.text("now()"), nullable=True),
            sa.Column("updated_at", sa.TIMESTAMP(), server_default=sa.text("now()"), nullable=True),
            sa.CheckConstraint("points >= 0", name="ck_users_points_non_negative"),
        )

    if not inspector.has_table("transactions"):
        op.create_table(
            "transactions",
            sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True, nullable=False),
            sa.Column("user_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("users.id"), nullable=False),
            sa.Column("type", sa.String(length=20), nullable=False),
            sa.Column("amount", sa.Integer(), nullable=False),
            sa.Column("description", sa.String(length=255), nullable=True),
            sa.Column("created_at", sa.TIMESTAMP(), server_default=sa.text("now()"), nullable=False),
            sa.CheckConstraint(
                "type IN ('earned', 'spent', 'expired')",
                name="ck_transactions_type",
            ),
        )
        op.create_index("ix_transactions_user_created", "transactions", ["user_id", "created_at"])

    if not inspector.has_table("rewards"):
        op.create_table(
            "rewards",
            sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True, nullable=False),
            sa.Column("name", sa.String(length=100), nullable=False),
            sa.Column("description", sa.String(length=255), nullable=True),
            sa.Column("image_url", sa.String(length=500), nullable=True),
            sa.Column("points_cost", sa.Integer(), nullable=False),
            sa.Column("is_available", sa.Boolean(), server_default=sa.true(), nullable=False),
            sa.Column("stock", sa.Integer(), nullable=True),
            sa.Column("created_at", sa.TIMESTAMP(), server_default=sa.text("now()"), nullable=True),
            sa.CheckConstraint("points_cost > 0", name="ck_rewards_points_cost_positive"),
            sa.CheckConstraint("stock IS NULL OR stock >= 0", name="ck_rewards_stock_non_negative"),
        )

    if not inspector.has_table("user_rewards"):
        op.create_table(
            "user_rewards",
            sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True, nullable=False),
            sa.Column("user_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("users.id"), nullable=False),
            sa.Column("reward_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("rewards.id"), nullable=False),
            sa.Column("status", sa.String(length=20), server_default="pending", nullable=False),
            sa.Column("redeemed_at", sa.TIMESTAMP(), server_default=sa.text("now()"), nullable=True),
        )
        op.create_index("ix_user_rewards_user_redeemed", "user_rewards", ["user_id", "redeemed_at"])

    if not inspector.has_table("campaigns"):
        op.create_table(
            "campaigns",
            sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True, nullable=False),
            sa.Column("name", sa.String(length=100), nullable=False),
            sa.Column("description", sa.String(length=255), nullable=True),
            sa.Column("bonus_points", sa.Integer(), server_default="0", nullable=False),
            sa.Column("is_active", sa.Boolean(), server_default=sa.true(), nullable=True),
            sa.Column("start_date", sa.TIMESTAMP(), nullable=True),
            sa.Column("end_date", sa.TIMESTAMP(), nullable=True),
            sa.Column("created_at", sa.TIMESTAMP(), server_default=sa.text("now()"), nullable=True),
        )


def downgrade() -> None:
    """Downgrade schema."""
    bind = op.get_bind()
    inspector = sa.inspect(bind)

    if inspector.has_table("campaigns"):
        op.drop_table("campaigns")

    if inspector.has_table("user_rewards"):
        op.drop_index("ix_user_rewards_user_redeemed", table_name="user_rewards")
        op.drop_table("user_rewards")

    if inspector.has_table("rewards"):
        op.drop_table("rewards")

    if inspector.has_table("transactions"):
        op.drop_index("ix_transactions_user_created", table_name="transactions")
        op.drop_table("transactions")

    if inspector.has_table("users"):
        op.drop_table("users")

    if inspector.has_table("loyalty_levels"):
        op.drop_table("loyalty_levels")
