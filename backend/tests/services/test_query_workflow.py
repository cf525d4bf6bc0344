"""Query Workflow — get_account_info snapshot."""

import pytest

from merchcoin.core.domain_types import AccountId
from merchcoin.core.errors import LedgerInvariantError
from merchcoin.core.ledger_views import (
    InventoryLine, ReceivedTransfer, SentTransfer,
)
from merchcoin.services.purchase_workflow import PurchaseWorkflow
from merchcoin.services.query_workflow import QueryWorkflow
from merchcoin.services.transfer_workflow import TransferWorkflow


@pytest.fixture
def queries(uow):
    return QueryWorkflow(uow)


async def test_fresh_account_has_empty_collections(queries, ledger):
    acct = await ledger.add_account("fresh")

    outcome = await queries.get_account_info(acct)

    assert outcome.ok
    info = outcome.value
    assert info.balance == 1000
    assert info.inventory == []
    assert info.received == []
    assert info.sent == []


async def test_info_reflects_purchases_and_both_transfer_directions(
    uow, queries, ledger, catalog,
):
    acct1 = await ledger.add_account("acct1")
    acct2 = await ledger.add_account("acct2")
    purchases = PurchaseWorkflow(uow)
    transfers = TransferWorkflow(uow)

    await purchases.buy_item(acct1, "cup")
    await purchases.buy_item(acct1, "cup")
    await purchases.buy_item(acct1, "t-shirt")
    await transfers.send_coin(acct1, "acct2", 100)
    await transfers.send_coin(acct2, "acct1", 30)
    await transfers.send_coin(acct1, "acct2", 5)

    info = (await queries.get_account_info(acct1)).value

    assert info.balance == 1000 - 2 * 20 - 80 - 100 + 30 - 5
    assert info.inventory == [
        InventoryLine(item_name="cup", quantity=2),
        InventoryLine(item_name="t-shirt", quantity=1),
    ]
    assert info.sent == [
        SentTransfer(to_username="acct2", amount=100),
        SentTransfer(to_username="acct2", amount=5),
    ]
    assert info.received == [ReceivedTransfer(from_username="acct2", amount=30)]

    other = (await queries.get_account_info(acct2)).value
    assert other.received == [
        ReceivedTransfer(from_username="acct1", amount=100),
        ReceivedTransfer(from_username="acct1", amount=5),
    ]
    assert other.inventory == []


async def test_unknown_account_is_an_invariant_violation(queries):
    with pytest.raises(LedgerInvariantError):
        await queries.get_account_info(AccountId(424242))
