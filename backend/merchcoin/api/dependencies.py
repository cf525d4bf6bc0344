"""API Dependencies — wire application state into workflows and resolve the caller.

Invariants:
    - Session manager, unit of work and token issuer live on app.state (set in lifespan)
    - Workflows are constructed per request around the shared unit of work
    - The authenticated account id is passed to workflows as an explicit argument
    - Missing or malformed Authorization header → AuthenticationError (401)
"""

from fastapi import Depends, Header, Request

from merchcoin.core.domain_types import AccountId
from merchcoin.core.errors import AuthenticationError
from merchcoin.infrastructure.credentials import TokenIssuer
from merchcoin.infrastructure.database import DatabaseSessionManager
from merchcoin.infrastructure.unit_of_work import UnitOfWorkManager
from merchcoin.services.account_registry import AccountRegistry
from merchcoin.services.purchase_workflow import PurchaseWorkflow
from merchcoin.services.query_workflow import QueryWorkflow
from merchcoin.services.transfer_workflow import TransferWorkflow


def get_session_manager(request: Request) -> DatabaseSessionManager | None:
    return getattr(request.app.state, "session_manager", None)


def get_unit_of_work(request: Request) -> UnitOfWorkManager:
    uow = getattr(request.app.state, "unit_of_work", None)
    if uow is None:
        raise RuntimeError("Database not initialized")
    return uow


def get_token_issuer(request: Request) -> TokenIssuer:
    tokens = getattr(request.app.state, "token_issuer", None)
    if tokens is None:
        raise RuntimeError("Token issuer not initialized")
    return tokens


def get_current_account_id(
    authorization: str | None = Header(None),
    tokens: TokenIssuer = Depends(get_token_issuer),
) -> AccountId:
    """Resolve `Authorization: Bearer <token>` to the caller's account id."""
    if not authorization:
        raise AuthenticationError("empty auth header")
    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer" or not parts[1]:
        raise AuthenticationError("invalid auth header format")
    return tokens.verify(parts[1])


def get_account_registry(
    uow: UnitOfWorkManager = Depends(get_unit_of_work),
    tokens: TokenIssuer = Depends(get_token_issuer),
) -> AccountRegistry:
    return AccountRegistry(uow, tokens)


def get_purchase_workflow(
    uow: UnitOfWorkManager = Depends(get_unit_of_work),
) -> PurchaseWorkflow:
    return PurchaseWorkflow(uow)


def get_transfer_workflow(
    uow: UnitOfWorkManager = Depends(get_unit_of_work),
) -> TransferWorkflow:
    return TransferWorkflow(uow)


def get_query_workflow(
    uow: UnitOfWorkManager = Depends(get_unit_of_work),
) -> QueryWorkflow:
    return QueryWorkflow(uow)
