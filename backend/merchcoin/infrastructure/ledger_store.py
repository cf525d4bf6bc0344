"""Ledger Store — SQLAlchemy implementations of the repository protocols.

Invariants:
    - Every repository is bound to the AsyncSession of ONE atomic scope
    - Every method issues exactly one parameterized statement
    - Row locks on several accounts are always taken in ascending id order (lock_rows)
    - Balance mutations are UPDATE statements evaluated by the database, never a Python
      read-modify-write; the debit guard lives in the WHERE clause
    - ORM instances never leave this module — callers receive ledger_views dataclasses
      or CatalogItem rows they only read

Design Decisions:
    - synchronize_session=False on bulk UPDATEs: no ORM Account instances are held in the
      scope, so there is nothing in the identity map to refresh
"""

from dataclasses import dataclass

from sqlalchemy import func, insert, select, update
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from merchcoin.core.domain_types import AccountId, Coins, ItemId, TransferId
from merchcoin.core.ledger_views import (
    AccountRecord, InventoryLine, ReceivedTransfer, SentTransfer,
)
from merchcoin.models.account import Account
from merchcoin.models.catalog_item import CatalogItem
from merchcoin.models.inventory_holding import InventoryHolding
from merchcoin.models.transfer_record import TransferRecord


class AccountStore:
    """Accounts and balances."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_username(self, username: str) -> AccountRecord | None:
        result = await self.db.execute(
            select(
                Account.id, Account.username, Account.password_hash, Account.balance,
            ).where(Account.username == username),
        )
        row = result.one_or_none()
        if row is None:
            return None
        return AccountRecord(
            id=AccountId(row.id),
            username=row.username,
            password_hash=row.password_hash,
            balance=Coins(row.balance),
        )

    async def create(
        self, username: str, password_hash: str, balance: Coins,
    ) -> AccountId:
        result = await self.db.execute(
            insert(Account)
            .values(username=username, password_hash=password_hash, balance=balance)
            .returning(Account.id),
        )
        return AccountId(result.scalar_one())

    async def create_if_absent(
        self, username: str, password_hash: str, balance: Coins,
    ) -> AccountId | None:
        """INSERT ... ON CONFLICT (username) DO NOTHING. None when the name is taken."""
        if self.db.bind.dialect.name == "postgresql":
            stmt = postgresql_insert(Account)
        else:
            stmt = sqlite_insert(Account)
        result = await self.db.execute(
            stmt.values(username=username, password_hash=password_hash, balance=balance)
            .on_conflict_do_nothing(index_elements=[Account.username])
            .returning(Account.id),
        )
        account_id = result.scalar_one_or_none()
        return None if account_id is None else AccountId(account_id)

    async def lock_rows(self, account_ids: list[AccountId]) -> list[AccountId]:
        """SELECT ... FOR UPDATE in ascending id order. Returns the ids locked.

        Scopes that mutate several accounts take their row locks in one global order,
        so two opposite transfers queue instead of deadlocking. SQLite compiles no
        FOR UPDATE; its BEGIN IMMEDIATE lock already covers the whole database.
        """
        result = await self.db.execute(
            select(Account.id)
            .where(Account.id.in_(sorted(account_ids)))
            .order_by(Account.id)
            .with_for_update(),
        )
        return [AccountId(account_id) for account_id in result.scalars()]

    async def exists(self, account_id: AccountId) -> bool:
        result = await self.db.execute(
            select(Account.id).where(Account.id == account_id),
        )
        return result.scalar_one_or_none() is not None

    async def get_balance(self, account_id: AccountId) -> Coins | None:
        result = await self.db.execute(
            select(Account.balance).where(Account.id == account_id),
        )
        balance = result.scalar_one_or_none()
        return None if balance is None else Coins(balance)

    async def debit_if_sufficient(
        self, account_id: AccountId, amount: Coins,
    ) -> bool:
        """UPDATE ... SET balance = balance - amount WHERE id = ? AND balance >= amount."""
        result = await self.db.execute(
            update(Account)
            .where(Account.id == account_id, Account.balance >= amount)
            .values(balance=Account.balance - amount)
            .execution_options(synchronize_session=False),
        )
        return result.rowcount == 1

    async def credit(self, account_id: AccountId, amount: Coins) -> bool:
        result = await self.db.execute(
            update(Account)
            .where(Account.id == account_id)
            .values(balance=Account.balance + amount)
            .execution_options(synchronize_session=False),
        )
        return result.rowcount == 1


class CatalogStore:
    """Read-only catalog."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_name(self, name: str) -> CatalogItem | None:
        result = await self.db.execute(
            select(CatalogItem).where(CatalogItem.name == name),
        )
        return result.scalar_one_or_none()


class InventoryStore:
    """Inventory holdings."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_quantity(
        self, account_id: AccountId, item_id: ItemId,
    ) -> int | None:
        result = await self.db.execute(
            select(InventoryHolding.quantity).where(
                InventoryHolding.account_id == account_id,
                InventoryHolding.item_id == item_id,
            ),
        )
        return result.scalar_one_or_none()

    async def increment(self, account_id: AccountId, item_id: ItemId) -> None:
        await self.db.execute(
            update(InventoryHolding)
            .where(
                InventoryHolding.account_id == account_id,
                InventoryHolding.item_id == item_id,
            )
            .values(quantity=InventoryHolding.quantity + 1)
            .execution_options(synchronize_session=False),
        )

    async def insert(self, account_id: AccountId, item_id: ItemId) -> None:
        await self.db.execute(
            insert(InventoryHolding).values(
                account_id=account_id, item_id=item_id, quantity=1,
            ),
        )

    async def list_for_account(
        self, account_id: AccountId,
    ) -> list[InventoryLine]:
        """Holdings grouped by item name with summed quantity."""
        result = await self.db.execute(
            select(CatalogItem.name, func.sum(InventoryHolding.quantity))
            .join(CatalogItem, InventoryHolding.item_id == CatalogItem.id)
            .where(InventoryHolding.account_id == account_id)
            .group_by(CatalogItem.name)
            .order_by(CatalogItem.name),
        )
        return [
            InventoryLine(item_name=name, quantity=int(quantity))
            for name, quantity in result.all()
        ]


class TransferStore:
    """Append-only transfer log."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def record(
        self, from_account_id: AccountId, to_account_id: AccountId, amount: Coins,
    ) -> TransferId:
        result = await self.db.execute(
            insert(TransferRecord)
            .values(
                from_account_id=from_account_id,
                to_account_id=to_account_id,
                amount=amount,
            )
            .returning(TransferRecord.id),
        )
        return TransferId(result.scalar_one())

    async def received_by(
        self, account_id: AccountId,
    ) -> list[ReceivedTransfer]:
        sender = aliased(Account)
        result = await self.db.execute(
            select(sender.username, TransferRecord.amount)
            .join(sender, TransferRecord.from_account_id == sender.id)
            .where(TransferRecord.to_account_id == account_id)
            .order_by(TransferRecord.id),
        )
        return [
            ReceivedTransfer(from_username=username, amount=Coins(amount))
            for username, amount in result.all()
        ]

    async def sent_by(self, account_id: AccountId) -> list[SentTransfer]:
        recipient = aliased(Account)
        result = await self.db.execute(
            select(recipient.username, TransferRecord.amount)
            .join(recipient, TransferRecord.to_account_id == recipient.id)
            .where(TransferRecord.from_account_id == account_id)
            .order_by(TransferRecord.id),
        )
        return [
            SentTransfer(to_username=username, amount=Coins(amount))
            for username, amount in result.all()
        ]


@dataclass(frozen=True)
class LedgerScope:
    """The four repositories bound to one scope's session."""
    accounts: AccountStore
    catalog: CatalogStore
    inventory: InventoryStore
    transfers: TransferStore

    @classmethod
    def bind(cls, db: AsyncSession) -> "LedgerScope":
        return cls(
            accounts=AccountStore(db),
            catalog=CatalogStore(db),
            inventory=InventoryStore(db),
            transfers=TransferStore(db),
        )
