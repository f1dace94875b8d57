"""init tables

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19 10:00:00

"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None


def _id() -> sa.Column:
    return sa.Column("id", sa.Uuid(as_uuid=False), primary_key=True)


def _owner(unique: bool = False) -> sa.Column:
    return sa.Column("user_id", sa.Uuid(as_uuid=False), nullable=False, unique=unique)


def _created_at() -> sa.Column:
    return sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("NOW()"))


def _owner_fk(table: str) -> sa.ForeignKeyConstraint:
    return sa.ForeignKeyConstraint(["user_id"], ["profiles.id"], ondelete="CASCADE", name=f"fk_{table}_user_id")


def upgrade() -> None:
    op.create_table(
        "profiles",
        _id(),
        sa.Column("email", sa.String(length=255), nullable=False, unique=True),
        sa.Column("name", sa.String(length=100), nullable=True),
        sa.Column("currency", sa.String(length=3), nullable=False, server_default="IDR"),
        sa.Column("initial_balance", sa.Numeric(14, 2), nullable=False, server_default="0"),
        sa.Column("is_active", sa.Boolean(), nullable=True, server_default=sa.text("true")),
        sa.Column("activated_at", sa.DateTime(timezone=True), nullable=True),
        _created_at(),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("NOW()")),
    )

    op.create_table(
        "categories",
        _id(),
        _owner(),
        sa.Column("name", sa.String(length=64), nullable=False),
        sa.Column("icon", sa.String(length=16), nullable=False, server_default="💸"),
        sa.Column("color", sa.String(length=32), nullable=False, server_default="gray"),
        sa.Column("type", sa.String(length=16), nullable=False),
        sa.Column("is_default", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        _created_at(),
        _owner_fk("categories"),
        sa.UniqueConstraint("user_id", "name", "type", name="uq_categories_user_name_type"),
    )
    op.create_index("ix_categories_user_id", "categories", ["user_id"])

    op.create_table(
        "recurring_transactions",
        _id(),
        _owner(),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("type", sa.String(length=16), nullable=False),
        sa.Column("category_id", sa.Uuid(as_uuid=False), nullable=True),
        sa.Column("amount", sa.Numeric(14, 2), nullable=False),
        sa.Column("payment_method", sa.String(length=16), nullable=False, server_default="cash"),
        sa.Column("interval", sa.String(length=16), nullable=False, server_default="monthly"),
        sa.Column("next_date", sa.Date(), nullable=False),
        sa.Column("note", sa.Text(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        _created_at(),
        _owner_fk("recurring_transactions"),
    )
    op.create_index("ix_recurring_transactions_user_id", "recurring_transactions", ["user_id"])

    op.create_table(
        "transactions",
        _id(),
        _owner(),
        sa.Column("date", sa.Date(), nullable=False, server_default=sa.text("CURRENT_DATE")),
        sa.Column("type", sa.String(length=16), nullable=False),
        sa.Column("category_id", sa.Uuid(as_uuid=False), nullable=True),
        sa.Column("amount", sa.Numeric(14, 2), nullable=False),
        sa.Column("note", sa.Text(), nullable=True),
        sa.Column("payment_method", sa.String(length=16), nullable=False, server_default="cash"),
        sa.Column("tags", postgresql.ARRAY(sa.String(length=32)), nullable=True),
        sa.Column("recurring_id", sa.Uuid(as_uuid=False), nullable=True),
        _created_at(),
        _owner_fk("transactions"),
        sa.ForeignKeyConstraint(["recurring_id"], ["recurring_transactions.id"], ondelete="SET NULL"),
    )
    op.create_index("ix_transactions_user_id", "transactions", ["user_id"])

    op.create_table(
        "budgets",
        _id(),
        _owner(),
        sa.Column("category_id", sa.Uuid(as_uuid=False), nullable=False),
        sa.Column("amount", sa.Numeric(14, 2), nullable=False),
        sa.Column("month", sa.String(length=7), nullable=False),
        _created_at(),
        _owner_fk("budgets"),
    )
    op.create_index("ix_budgets_user_id", "budgets", ["user_id"])
    op.create_index("ix_budgets_month", "budgets", ["month"])

    op.create_table(
        "financial_goals",
        _id(),
        _owner(),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("target_amount", sa.Numeric(14, 2), nullable=False),
        sa.Column("current_amount", sa.Numeric(14, 2), nullable=False, server_default="0"),
        sa.Column("deadline", sa.Date(), nullable=True),
        sa.Column("icon", sa.String(length=16), nullable=False, server_default="🎯"),
        sa.Column("color", sa.String(length=16), nullable=False, server_default="#06b6d4"),
        _created_at(),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        _owner_fk("financial_goals"),
    )
    op.create_index("ix_financial_goals_user_id", "financial_goals", ["user_id"])

    op.create_table(
        "todos",
        _id(),
        _owner(),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("due_date", sa.Date(), nullable=True),
        sa.Column("priority", sa.String(length=16), nullable=False, server_default="medium"),
        sa.Column("status", sa.String(length=16), nullable=False, server_default="active"),
        _created_at(),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        _owner_fk("todos"),
    )
    op.create_index("ix_todos_user_id", "todos", ["user_id"])

    op.create_table(
        "notifications",
        _id(),
        _owner(),
        sa.Column("type", sa.String(length=24), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("is_read", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("reference_id", sa.Uuid(as_uuid=False), nullable=True),
        _created_at(),
        _owner_fk("notifications"),
    )
    op.create_index("ix_notifications_user_id", "notifications", ["user_id"])

    op.create_table(
        "user_roles",
        _id(),
        _owner(),
        sa.Column("role", sa.String(length=32), nullable=False),
        _owner_fk("user_roles"),
        sa.UniqueConstraint("user_id", "role", name="uq_user_roles_user_role"),
    )
    op.create_index("ix_user_roles_user_id", "user_roles", ["user_id"])

    op.create_table(
        "user_subscriptions",
        _id(),
        _owner(unique=True),
        sa.Column("status", sa.String(length=16), nullable=False, server_default="inactive"),
        _created_at(),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("NOW()")),
        _owner_fk("user_subscriptions"),
    )


def downgrade() -> None:
    op.drop_table("user_subscriptions")
    op.drop_table("user_roles")
    op.drop_table("notifications")
    op.drop_table("todos")
    op.drop_table("financial_goals")
    op.drop_table("budgets")
    op.drop_table("transactions")
    op.drop_table("recurring_transactions")
    op.drop_table("categories")
    op.drop_table("profiles")
