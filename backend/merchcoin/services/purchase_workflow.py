"""Purchase Workflow — buy one catalog item with coins.

Invariants:
    - One scope: catalog lookup → balance check → debit → inventory upsert → commit
    - On success: exactly one balance decrease and exactly one inventory mutation
    - On any failure: neither (the unit of work rolls the scope back)
    - Repeat purchases increment the existing holding; never a second row
    - No automatic retry — the caller resubmits
"""

import logging

from merchcoin.core.balance_rules import ensure_affordable
from merchcoin.core.domain_types import AccountId, Coins, ItemId
from merchcoin.core.errors import ItemNotFoundError, LedgerInvariantError
from merchcoin.core.ledger_views import PurchaseReceipt
from merchcoin.core.outcomes import Outcome
from merchcoin.core.repository_protocols import LedgerScopeLike
from merchcoin.infrastructure.unit_of_work import UnitOfWorkManager
from merchcoin.services import balance_engine

logger = logging.getLogger(__name__)


class PurchaseWorkflow:
    """buy_item entry point."""

    def __init__(self, uow: UnitOfWorkManager):
        self._uow = uow

    async def buy_item(
        self, account_id: AccountId, item_name: str,
    ) -> Outcome[PurchaseReceipt]:
        logger.info(
            f"Account {account_id} buying {item_name}",
            extra={"account_id": account_id, "item_name": item_name},
        )

        async def purchase(scope: LedgerScopeLike) -> PurchaseReceipt:
            item = await scope.catalog.get_by_name(item_name)
            if item is None:
                raise ItemNotFoundError(item_name)
            price = Coins(item.price)

            balance = await scope.accounts.get_balance(account_id)
            if balance is None:
                raise LedgerInvariantError(f"account {account_id} does not exist")
            ensure_affordable(account_id, balance, price)

            await balance_engine.debit(scope.accounts, account_id, price)

            item_id = ItemId(item.id)
            if await scope.inventory.get_quantity(account_id, item_id) is None:
                await scope.inventory.insert(account_id, item_id)
            else:
                await scope.inventory.increment(account_id, item_id)

            # re-read: the debited row is locked now, the earlier read may be stale
            balance_after = await scope.accounts.get_balance(account_id)
            return PurchaseReceipt(
                item_name=item_name, price=price, balance_after=balance_after,
            )

        outcome = await self._uow.run(purchase)
        if outcome.ok:
            logger.info(
                f"Account {account_id} bought {item_name}",
                extra={"account_id": account_id, "item_name": item_name},
            )
        return outcome
