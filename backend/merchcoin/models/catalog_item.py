"""CatalogItem ORM — static merch reference data, read-only to the ledger core."""

from sqlalchemy import CheckConstraint, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from merchcoin.db.base import Base
from merchcoin.models.account import IdType


class CatalogItem(Base):
    __tablename__ = "catalog_items"
    __table_args__ = (
        CheckConstraint("price > 0", name="ck_catalog_items_price_positive"),
    )

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    price: Mapped[int] = mapped_column(Integer, nullable=False)
