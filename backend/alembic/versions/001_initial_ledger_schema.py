"""Initial ledger schema — accounts, catalog_items, inventory_holdings, transfer_records.

Seeds the merch catalog.

Revision ID: 001_initial_ledger
Revises: None
Create Date: 2026-10-17

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial_ledger"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

CATALOG = [
    ("t-shirt", 80),
    ("cup", 20),
    ("book", 50),
    ("pen", 10),
    ("powerbank", 200),
    ("hoody", 300),
    ("umbrella", 200),
    ("socks", 10),
    ("wallet", 50),
    ("pink-hoody", 500),
]


def upgrade() -> None:
    op.create_table(
        "accounts",
        sa.Column("id", sa.BigInteger, primary_key=True, autoincrement=True),
        sa.Column("username", sa.String(64), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("balance", sa.Integer, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("balance >= 0", name="ck_accounts_balance_non_negative"),
    )
    op.create_index("ix_accounts_username", "accounts", ["username"], unique=True)

    catalog_items = op.create_table(
        "catalog_items",
        sa.Column("id", sa.BigInteger, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(64), nullable=False, unique=True),
        sa.Column("price", sa.Integer, nullable=False),
        sa.CheckConstraint("price > 0", name="ck_catalog_items_price_positive"),
    )

    op.create_table(
        "inventory_holdings",
        sa.Column("id", sa.BigInteger, primary_key=True, autoincrement=True),
        sa.Column("account_id", sa.BigInteger, sa.ForeignKey("accounts.id"), nullable=False),
        sa.Column("item_id", sa.BigInteger, sa.ForeignKey("catalog_items.id"), nullable=False),
        sa.Column("quantity", sa.Integer, nullable=False, server_default="1"),
        sa.UniqueConstraint("account_id", "item_id", name="uq_inventory_holdings_account_item"),
        sa.CheckConstraint("quantity >= 1", name="ck_inventory_holdings_quantity_positive"),
    )
    op.create_index("ix_inventory_holdings_account_id", "inventory_holdings", ["account_id"])

    op.create_table(
        "transfer_records",
        sa.Column("id", sa.BigInteger, primary_key=True, autoincrement=True),
        sa.Column("from_account_id", sa.BigInteger, sa.ForeignKey("accounts.id"), nullable=False),
        sa.Column("to_account_id", sa.BigInteger, sa.ForeignKey("accounts.id"), nullable=False),
        sa.Column("amount", sa.Integer, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("amount > 0", name="ck_transfer_records_amount_positive"),
    )
    op.create_index("ix_transfer_records_from_account_id", "transfer_records", ["from_account_id"])
    op.create_index("ix_transfer_records_to_account_id", "transfer_records", ["to_account_id"])

    op.bulk_insert(
        catalog_items,
        [{"name": name, "price": price} for name, price in CATALOG],
    )


def downgrade() -> None:
    op.drop_table("transfer_records")
    op.drop_table("inventory_holdings")
    op.drop_table("catalog_items")
    op.drop_index("ix_accounts_username", table_name="accounts")
    op.drop_table("accounts")
