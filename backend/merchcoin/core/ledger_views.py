"""Ledger Views — immutable payloads returned by workflows and read by the API layer.

Invariants:
    - Views are plain frozen dataclasses (no ORM objects escape a scope)
    - AccountInfo collections are lists, never None — empty when nothing exists
"""

from dataclasses import dataclass, field

from merchcoin.core.domain_types import AccountId, Coins, TransferId


@dataclass(frozen=True)
class AccountRecord:
    """Resolved identity — what the registry needs to authenticate and address an account."""
    id: AccountId
    username: str
    password_hash: str
    balance: Coins


@dataclass(frozen=True)
class InventoryLine:
    item_name: str
    quantity: int


@dataclass(frozen=True)
class ReceivedTransfer:
    from_username: str
    amount: Coins


@dataclass(frozen=True)
class SentTransfer:
    to_username: str
    amount: Coins


@dataclass(frozen=True)
class AccountInfo:
    """Consistent snapshot of one account: balance, holdings, and both transfer directions."""
    balance: Coins
    inventory: list[InventoryLine] = field(default_factory=list)
    received: list[ReceivedTransfer] = field(default_factory=list)
    sent: list[SentTransfer] = field(default_factory=list)


@dataclass(frozen=True)
class PurchaseReceipt:
    item_name: str
    price: Coins
    balance_after: Coins


@dataclass(frozen=True)
class TransferReceipt:
    transfer_id: TransferId
    to_username: str
    amount: Coins
    balance_after: Coins
