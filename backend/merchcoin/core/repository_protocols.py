"""Boundary Protocols — contracts between the ledger workflows and the store.

Invariants:
    - Services depend on these Protocols, never on SQLAlchemy directly
    - Every method is a single parameterized round trip inside the caller's scope
    - Conditional mutations report success as bool (row affected or not); they never raise
      for a business outcome

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - LedgerScopeLike bundles the four repositories bound to ONE transaction
"""

from typing import Protocol

from merchcoin.core.domain_types import AccountId, Coins, ItemId, TransferId
from merchcoin.core.ledger_views import (
    AccountRecord, InventoryLine, ReceivedTransfer, SentTransfer,
)


class CatalogItemLike(Protocol):
    """Structural contract for catalog rows handed to workflows."""
    id: int
    name: str
    price: int


class AccountRepository(Protocol):
    """Accounts and balances — implemented by shell."""
    async def get_by_username(self, username: str) -> AccountRecord | None: ...
    async def create(
        self, username: str, password_hash: str, balance: Coins,
    ) -> AccountId: ...
    async def create_if_absent(
        self, username: str, password_hash: str, balance: Coins,
    ) -> AccountId | None: ...
    async def lock_rows(self, account_ids: list[AccountId]) -> list[AccountId]: ...
    async def exists(self, account_id: AccountId) -> bool: ...
    async def get_balance(self, account_id: AccountId) -> Coins | None: ...
    async def debit_if_sufficient(
        self, account_id: AccountId, amount: Coins,
    ) -> bool: ...
    async def credit(self, account_id: AccountId, amount: Coins) -> bool: ...


class CatalogRepository(Protocol):
    """Read-only catalog — implemented by shell."""
    async def get_by_name(self, name: str) -> CatalogItemLike | None: ...


class InventoryRepository(Protocol):
    """Inventory holdings — implemented by shell."""
    async def get_quantity(
        self, account_id: AccountId, item_id: ItemId,
    ) -> int | None: ...
    async def increment(self, account_id: AccountId, item_id: ItemId) -> None: ...
    async def insert(self, account_id: AccountId, item_id: ItemId) -> None: ...
    async def list_for_account(
        self, account_id: AccountId,
    ) -> list[InventoryLine]: ...


class TransferRepository(Protocol):
    """Append-only transfer log — implemented by shell."""
    async def record(
        self, from_account_id: AccountId, to_account_id: AccountId, amount: Coins,
    ) -> TransferId: ...
    async def received_by(
        self, account_id: AccountId,
    ) -> list[ReceivedTransfer]: ...
    async def sent_by(self, account_id: AccountId) -> list[SentTransfer]: ...


class LedgerScopeLike(Protocol):
    """Repositories bound to one atomic scope."""
    accounts: AccountRepository
    catalog: CatalogRepository
    inventory: InventoryRepository
    transfers: TransferRepository
