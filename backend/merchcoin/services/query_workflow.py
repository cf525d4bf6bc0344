"""Query Workflow — balance, inventory and transfer history in one read-only snapshot.

Invariants:
    - All four reads run inside ONE read-only scope
    - Collections are always lists (empty when nothing exists)
    - Unknown account id → LedgerInvariantError (identity is verified upstream)
"""

import logging

from merchcoin.core.domain_types import AccountId
from merchcoin.core.errors import ErrorContext, LedgerInvariantError
from merchcoin.core.ledger_views import AccountInfo
from merchcoin.core.outcomes import Outcome
from merchcoin.core.repository_protocols import LedgerScopeLike
from merchcoin.infrastructure.unit_of_work import UnitOfWorkManager

logger = logging.getLogger(__name__)


class QueryWorkflow:
    """get_account_info entry point."""

    def __init__(self, uow: UnitOfWorkManager):
        self._uow = uow

    async def get_account_info(self, account_id: AccountId) -> Outcome[AccountInfo]:
        logger.info(
            f"Fetching info for account {account_id}",
            extra={"account_id": account_id},
        )

        async def read_info(scope: LedgerScopeLike) -> AccountInfo:
            balance = await scope.accounts.get_balance(account_id)
            if balance is None:
                raise LedgerInvariantError(
                    f"account {account_id} does not exist",
                    ErrorContext(account_id=account_id),
                )
            return AccountInfo(
                balance=balance,
                inventory=list(await scope.inventory.list_for_account(account_id)),
                received=list(await scope.transfers.received_by(account_id)),
                sent=list(await scope.transfers.sent_by(account_id)),
            )

        return await self._uow.run(read_info, read_only=True)
