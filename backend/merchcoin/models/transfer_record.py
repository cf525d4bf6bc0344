"""TransferRecord ORM — append-only coin transfer log.

Invariants:
    - Rows are inserted only after both balance mutations succeeded in the same scope
    - Never updated or deleted; id order is insertion order
    - amount > 0
"""

from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column

from merchcoin.db.base import Base
from merchcoin.models.account import IdType


class TransferRecord(Base):
    """One coin movement from one account to another."""
    __tablename__ = "transfer_records"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_transfer_records_amount_positive"),
    )

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    from_account_id: Mapped[int] = mapped_column(
        IdType, ForeignKey("accounts.id"), nullable=False, index=True,
    )
    to_account_id: Mapped[int] = mapped_column(
        IdType, ForeignKey("accounts.id"), nullable=False, index=True,
    )
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
