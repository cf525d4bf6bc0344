"""Transfer Workflow — move coins from the authenticated account to another user.

Invariants:
    - amount is a strictly positive int, checked BEFORE a scope is opened
    - One scope, in order: resolve recipient → self-transfer guard → lock both account
      rows (ascending id) → balance check → debit sender → credit recipient →
      insert TransferRecord → commit
    - Debit and credit commit together or not at all
    - The TransferRecord is written only after both balance mutations succeeded

Design Decisions:
    - Locking both rows up front in id order means A→B and B→A transfers running at
      once wait on each other instead of deadlocking on PostgreSQL
"""

import logging

from merchcoin.core.balance_rules import (
    ensure_affordable, ensure_distinct_parties, ensure_positive_amount,
)
from merchcoin.core.domain_types import AccountId, Coins
from merchcoin.core.errors import LedgerInvariantError, RecipientNotFoundError
from merchcoin.core.ledger_views import TransferReceipt
from merchcoin.core.outcomes import Outcome
from merchcoin.core.repository_protocols import LedgerScopeLike
from merchcoin.infrastructure.unit_of_work import UnitOfWorkManager
from merchcoin.services import balance_engine

logger = logging.getLogger(__name__)


class TransferWorkflow:
    """send_coin entry point."""

    def __init__(self, uow: UnitOfWorkManager):
        self._uow = uow

    async def send_coin(
        self, from_account_id: AccountId, to_username: str, amount: int,
    ) -> Outcome[TransferReceipt]:
        ensure_positive_amount(amount)
        coins = Coins(amount)
        logger.info(
            f"Account {from_account_id} sending {amount} coins to {to_username}",
            extra={
                "account_id": from_account_id,
                "recipient": to_username,
                "amount": amount,
            },
        )

        async def transfer(scope: LedgerScopeLike) -> TransferReceipt:
            recipient = await scope.accounts.get_by_username(to_username)
            if recipient is None:
                raise RecipientNotFoundError(to_username)
            ensure_distinct_parties(from_account_id, recipient.id)
            await scope.accounts.lock_rows([from_account_id, recipient.id])

            balance = await scope.accounts.get_balance(from_account_id)
            if balance is None:
                raise LedgerInvariantError(
                    f"account {from_account_id} does not exist",
                )
            ensure_affordable(from_account_id, balance, coins)

            await balance_engine.debit(scope.accounts, from_account_id, coins)
            await balance_engine.credit(scope.accounts, recipient.id, coins)
            transfer_id = await scope.transfers.record(
                from_account_id, recipient.id, coins,
            )

            balance_after = await scope.accounts.get_balance(from_account_id)
            return TransferReceipt(
                transfer_id=transfer_id,
                to_username=recipient.username,
                amount=coins,
                balance_after=balance_after,
            )

        outcome = await self._uow.run(transfer)
        if outcome.ok:
            logger.info(
                f"Transferred {amount} coins from {from_account_id} to {to_username}",
                extra={"account_id": from_account_id, "recipient": to_username},
            )
        return outcome
