"""Account ORM — identity, credential hash, and the coin balance.

Invariants:
    - username is unique
    - balance >= 0 (CHECK constraint backs up the conditional debit)
    - Rows are never deleted; balance changes only through the balance engine
"""

from datetime import datetime, timezone

from sqlalchemy import BigInteger, CheckConstraint, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from merchcoin.db.base import Base

# BIGSERIAL on PostgreSQL, INTEGER PRIMARY KEY (rowid alias) on SQLite
IdType = BigInteger().with_variant(Integer, "sqlite")


class Account(Base):
    """Account aggregate root — owns a balance."""
    __tablename__ = "accounts"
    __table_args__ = (
        CheckConstraint("balance >= 0", name="ck_accounts_balance_non_negative"),
    )

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(
        String(64), nullable=False, unique=True, index=True,
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    balance: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
