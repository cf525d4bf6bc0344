"""Domain Types — rich types that replace bare primitives across the ledger.

Invariants:
    - AccountId, ItemId, TransferId wrap ints — never pass a bare int id through services
    - Coins are whole integers; there are no fractional coins
    - STARTING_BALANCE is the single source of truth for new-account funding
    - FailureKind is the closed set of business-rule failures a workflow may return
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

AccountId = NewType("AccountId", int)
ItemId = NewType("ItemId", int)
TransferId = NewType("TransferId", int)


# ─── Value Types ─────────────────────────────────────────────────

Coins = NewType("Coins", int)


# ─── Policy Constants ────────────────────────────────────────────

STARTING_BALANCE: Coins = Coins(1000)


# ─── Enums ───────────────────────────────────────────────────────

class FailureKind(str, Enum):
    """Business-rule failures. Expected outcomes, not bugs — the caller changes inputs."""
    ITEM_NOT_FOUND = "item_not_found"
    INSUFFICIENT_BALANCE = "insufficient_balance"
    RECIPIENT_NOT_FOUND = "recipient_not_found"
    SELF_TRANSFER = "self_transfer"
