"""InventoryHolding ORM — how many of one catalog item an account owns.

Invariants:
    - (account_id, item_id) is unique: repeat purchases increment, never add rows
    - quantity >= 1 once the row exists; never decremented or deleted by the ledger
"""

from sqlalchemy import CheckConstraint, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from merchcoin.db.base import Base
from merchcoin.models.account import IdType


class InventoryHolding(Base):
    __tablename__ = "inventory_holdings"
    __table_args__ = (
        UniqueConstraint(
            "account_id", "item_id", name="uq_inventory_holdings_account_item",
        ),
        CheckConstraint("quantity >= 1", name="ck_inventory_holdings_quantity_positive"),
    )

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    account_id: Mapped[int] = mapped_column(
        IdType, ForeignKey("accounts.id"), nullable=False, index=True,
    )
    item_id: Mapped[int] = mapped_column(
        IdType, ForeignKey("catalog_items.id"), nullable=False,
    )
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
