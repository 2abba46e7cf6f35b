"""create finance ledger tables

Revision ID: 3f9c1a7d2e40
Revises: 
Create Date: 2026-10-19 09:30:00.000000
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "3f9c1a7d2e40"
down_revision = None
branch_labels = None
depends_on = None

MONEY = sa.Numeric(14, 2)


def upgrade() -> None:
    op.create_table(
        "wallets",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("type", sa.String(length=20), nullable=False, server_default="Cash"),
        sa.Column("balance", MONEY, nullable=False, server_default="0"),
        sa.Column("currency", sa.String(length=10), nullable=False, server_default="PKR"),
        sa.Column("color", sa.String(length=20)),
        sa.Column("is_default", sa.Boolean(), server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True)),
    )

    op.create_table(
        "ledger_entries",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "wallet_id",
            sa.String(length=36),
            sa.ForeignKey("wallets.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("source_type", sa.String(length=20), nullable=False),
        sa.Column("source_id", sa.String(length=36), nullable=False),
        sa.Column("amount", MONEY, nullable=False),
        sa.Column("kind", sa.String(length=10), nullable=False, server_default="apply"),
        sa.Column("description", sa.String(length=255)),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_ledger_entries_wallet_id", "ledger_entries", ["wallet_id"])
    op.create_index("ix_ledger_entries_source_id", "ledger_entries", ["source_id"])

    op.create_table(
        "categories",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("type", sa.String(length=10), nullable=False),
        sa.Column("color", sa.String(length=20)),
        sa.Column("icon", sa.String(length=50)),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    op.create_table(
        "expenses",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("category", sa.String(length=100), nullable=False),
        sa.Column("category_id", sa.String(length=36), sa.ForeignKey("categories.id", ondelete="SET NULL")),
        sa.Column("amount", MONEY, nullable=False),
        sa.Column("paid_amount", MONEY, nullable=False, server_default="0"),
        sa.Column("wallet_id", sa.String(length=36), sa.ForeignKey("wallets.id")),
        sa.Column("payment_method", sa.String(length=20), nullable=False, server_default="Cash"),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="Paid"),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("is_recurring", sa.Boolean(), server_default=sa.false()),
        sa.Column("recurring_frequency", sa.String(length=10)),
        sa.Column("next_due_date", sa.Date()),
        sa.Column("notes", sa.Text()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_expenses_wallet_id", "expenses", ["wallet_id"])

    op.create_table(
        "expense_payments",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "expense_id",
            sa.String(length=36),
            sa.ForeignKey("expenses.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("position", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("amount", MONEY, nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("method", sa.String(length=20)),
        sa.Column("wallet_id", sa.String(length=36)),
        sa.Column("notes", sa.Text()),
    )
    op.create_index("ix_expense_payments_expense_id", "expense_payments", ["expense_id"])

    op.create_table(
        "income",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("source", sa.String(length=200), nullable=False),
        sa.Column("amount", MONEY, nullable=False),
        sa.Column("wallet_id", sa.String(length=36), sa.ForeignKey("wallets.id"), nullable=False),
        sa.Column("category_id", sa.String(length=36), sa.ForeignKey("categories.id", ondelete="SET NULL")),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("notes", sa.Text()),
        sa.Column("is_recurring", sa.Boolean(), server_default=sa.false()),
        sa.Column("recurring_frequency", sa.String(length=10)),
        sa.Column("next_due_date", sa.Date()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_income_wallet_id", "income", ["wallet_id"])

    op.create_table(
        "people",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("type", sa.String(length=20), nullable=False, server_default="Other"),
        sa.Column("phone", sa.String(length=30)),
        sa.Column("email", sa.String(length=100)),
        sa.Column("address", sa.String(length=255)),
        sa.Column("notes", sa.Text()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    op.create_table(
        "payments",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("person_id", sa.String(length=36), sa.ForeignKey("people.id"), nullable=False),
        sa.Column("wallet_id", sa.String(length=36), sa.ForeignKey("wallets.id")),
        sa.Column("type", sa.String(length=10), nullable=False),
        sa.Column("amount", MONEY, nullable=False),
        sa.Column("paid_amount", MONEY, nullable=False, server_default="0"),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="Pending"),
        sa.Column("method", sa.String(length=20), nullable=False, server_default="Cash"),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date()),
        sa.Column("notes", sa.Text()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_payments_person_id", "payments", ["person_id"])
    op.create_index("ix_payments_wallet_id", "payments", ["wallet_id"])

    op.create_table(
        "transfers",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("from_wallet_id", sa.String(length=36), sa.ForeignKey("wallets.id"), nullable=False),
        sa.Column("to_wallet_id", sa.String(length=36), sa.ForeignKey("wallets.id"), nullable=False),
        sa.Column("amount", MONEY, nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("notes", sa.String(length=255)),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_transfers_from_wallet_id", "transfers", ["from_wallet_id"])
    op.create_index("ix_transfers_to_wallet_id", "transfers", ["to_wallet_id"])

    op.create_table(
        "notifications",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("type", sa.String(length=10), nullable=False, server_default="info"),
        sa.Column("read", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("link", sa.String(length=255)),
        sa.Column("date", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )


def downgrade() -> None:
    op.drop_table("notifications")
    op.drop_index("ix_transfers_to_wallet_id", table_name="transfers")
    op.drop_index("ix_transfers_from_wallet_id", table_name="transfers")
    op.drop_table("transfers")
    op.drop_index("ix_payments_wallet_id", table_name="payments")
    op.drop_index("ix_payments_person_id", table_name="payments")
    op.drop_table("payments")
    op.drop_table("people")
    op.drop_index("ix_income_wallet_id", table_name="income")
    op.drop_table("income")
    op.drop_index("ix_expense_payments_expense_id", table_name="expense_payments")
    op.drop_table("expense_payments")
    op.drop_index("ix_expenses_wallet_id", table_name="expenses")
    op.drop_table("expenses")
    op.drop_table("categories")
    op.drop_index("ix_ledger_entries_source_id", table_name="ledger_entries")
    op.drop_index("ix_ledger_entries_wallet_id", table_name="ledger_entries")
    op.drop_table("ledger_entries")
    op.drop_table("wallets")
