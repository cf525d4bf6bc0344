"""Balance Engine — debit and credit against the accounts table inside a scope.

Invariants:
    - debit is ONE conditional update (balance >= amount in the WHERE clause): the check
      and the mutation cannot be separated by a concurrent debit
    - Zero rows on debit: existing account → InsufficientBalanceError (business rule),
      missing account → LedgerInvariantError (fatal, never a silent no-op)
    - Zero rows on credit → LedgerInvariantError
    - Non-positive amounts rejected before any statement is issued
"""

import logging

from merchcoin.core.balance_rules import ensure_positive_amount
from merchcoin.core.domain_types import AccountId, Coins
from merchcoin.core.errors import (
    ErrorContext, InsufficientBalanceError, LedgerInvariantError,
)
from merchcoin.core.repository_protocols import AccountRepository

logger = logging.getLogger(__name__)


async def debit(
    accounts: AccountRepository, account_id: AccountId, amount: Coins,
) -> None:
    """Subtract amount only if the balance covers it."""
    ensure_positive_amount(amount)
    if await accounts.debit_if_sufficient(account_id, amount):
        return
    if not await accounts.exists(account_id):
        logger.error(
            f"Debit hit missing account {account_id}",
            extra={"account_id": account_id, "amount": amount},
        )
        raise LedgerInvariantError(
            f"debit target account {account_id} does not exist",
            ErrorContext(account_id=account_id),
        )
    raise InsufficientBalanceError(account_id)


async def credit(
    accounts: AccountRepository, account_id: AccountId, amount: Coins,
) -> None:
    """Add amount unconditionally."""
    ensure_positive_amount(amount)
    if not await accounts.credit(account_id, amount):
        logger.error(
            f"Credit hit missing account {account_id}",
            extra={"account_id": account_id, "amount": amount},
        )
        raise LedgerInvariantError(
            f"credit target account {account_id} does not exist",
            ErrorContext(account_id=account_id),
        )
