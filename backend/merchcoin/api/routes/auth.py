"""Auth Route — register-or-login, returns a bearer token."""

from fastapi import APIRouter, Depends

from merchcoin.api.dependencies import get_account_registry
from merchcoin.schemas.auth import AuthRequest, AuthResponse
from merchcoin.services.account_registry import AccountRegistry

router = APIRouter(prefix="/api", tags=["auth"])


@router.post("/auth", response_model=AuthResponse)
async def authenticate(
    body: AuthRequest,
    registry: AccountRegistry = Depends(get_account_registry),
):
    """Unknown usernames are registered with the starting balance, then logged in."""
    token = await registry.authenticate(body.username, body.password)
    return AuthResponse(token=token)
