"""Balance Rules — pure precondition checks shared by the balance engine and workflows.

Invariants:
    - PURE: no IO, no store access; every function either returns or raises a typed error
    - ensure_affordable is the read-side check only; the conditional debit remains the
      authoritative guard against concurrent over-draw
"""

from merchcoin.core.errors import (
    InsufficientBalanceError, InvalidAmountError, SelfTransferError,
)


def ensure_positive_amount(amount: int) -> None:
    """Reject zero, negative and non-integer amounts (bool is not an amount)."""
    if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
        raise InvalidAmountError(amount)


def ensure_affordable(account_id: int, balance: int, cost: int) -> None:
    """Raise InsufficientBalanceError when cost exceeds the observed balance."""
    if cost > balance:
        raise InsufficientBalanceError(account_id)


def ensure_distinct_parties(sender_id: int, recipient_id: int) -> None:
    if sender_id == recipient_id:
        raise SelfTransferError(sender_id)
