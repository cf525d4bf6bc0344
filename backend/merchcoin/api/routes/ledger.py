"""Ledger Routes — info, sendCoin, buy. Thin: parse → workflow → map outcome.

Invariants:
    - Every route requires a verified bearer token (get_current_account_id)
    - Failure outcomes are rendered by failure_response; transport status never decided here
"""

from fastapi import APIRouter, Depends, Path

from merchcoin.api.dependencies import (
    get_current_account_id, get_purchase_workflow,
    get_query_workflow, get_transfer_workflow,
)
from merchcoin.api.error_handlers import failure_response
from merchcoin.core.domain_types import AccountId
from merchcoin.core.outcomes import Failure
from merchcoin.schemas.ledger import InfoResponse, SendCoinRequest, StatusResponse
from merchcoin.services.purchase_workflow import PurchaseWorkflow
from merchcoin.services.query_workflow import QueryWorkflow
from merchcoin.services.transfer_workflow import TransferWorkflow

router = APIRouter(prefix="/api", tags=["ledger"])


@router.get("/info", response_model=InfoResponse)
async def get_info(
    account_id: AccountId = Depends(get_current_account_id),
    workflow: QueryWorkflow = Depends(get_query_workflow),
):
    outcome = await workflow.get_account_info(account_id)
    if isinstance(outcome, Failure):
        return failure_response(outcome)
    return InfoResponse.from_account_info(outcome.value)


@router.post("/sendCoin", response_model=StatusResponse)
async def send_coin(
    body: SendCoinRequest,
    account_id: AccountId = Depends(get_current_account_id),
    workflow: TransferWorkflow = Depends(get_transfer_workflow),
):
    outcome = await workflow.send_coin(account_id, body.to_user, body.amount)
    if isinstance(outcome, Failure):
        return failure_response(outcome)
    return StatusResponse(status="coins were successfully sent to the user")


@router.get("/buy/{item}", response_model=StatusResponse)
async def buy_item(
    item: str = Path(min_length=1, max_length=64),
    account_id: AccountId = Depends(get_current_account_id),
    workflow: PurchaseWorkflow = Depends(get_purchase_workflow),
):
    outcome = await workflow.buy_item(account_id, item)
    if isinstance(outcome, Failure):
        return failure_response(outcome)
    return StatusResponse(status="item was successfully purchased")
