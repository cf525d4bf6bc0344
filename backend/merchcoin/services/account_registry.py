"""Account Registry — identity resolution, registration, and register-or-login.

Invariants:
    - New accounts start with STARTING_BALANCE coins
    - authenticate() registers unknown usernames, then verifies the password and issues
      a token; a wrong password for an existing account raises AuthenticationError
    - A username registered by a concurrent request between lookup and insert is
      logged in against, never reported as a store failure
    - Registration and lookup run inside a unit-of-work scope like every other write
    - These scopes raise no business-rule violations, so their outcome is always Success
"""

import logging

from merchcoin.core.domain_types import AccountId, Coins, STARTING_BALANCE
from merchcoin.core.errors import (
    AuthenticationError, ErrorContext, LedgerInvariantError,
)
from merchcoin.core.ledger_views import AccountRecord
from merchcoin.core.repository_protocols import LedgerScopeLike
from merchcoin.infrastructure.credentials import (
    TokenIssuer, hash_password, verify_password,
)
from merchcoin.infrastructure.unit_of_work import UnitOfWorkManager

logger = logging.getLogger(__name__)


class AccountRegistry:
    """Resolves, creates and authenticates accounts."""

    def __init__(self, uow: UnitOfWorkManager, tokens: TokenIssuer):
        self._uow = uow
        self._tokens = tokens

    async def resolve_account(self, username: str) -> AccountRecord | None:
        async def lookup(scope: LedgerScopeLike) -> AccountRecord | None:
            return await scope.accounts.get_by_username(username)

        outcome = await self._uow.run(lookup, read_only=True)
        return outcome.value

    async def create_account(
        self,
        username: str,
        credential_hash: str,
        starting_balance: Coins = STARTING_BALANCE,
    ) -> AccountId:
        async def register(scope: LedgerScopeLike) -> AccountId:
            return await scope.accounts.create(
                username, credential_hash, starting_balance,
            )

        outcome = await self._uow.run(register)
        logger.info(
            f"Account {username} created",
            extra={"account_id": outcome.value},
        )
        return outcome.value

    async def authenticate(self, username: str, password: str) -> str:
        """Register-or-login. Returns a bearer token."""

        async def login(scope: LedgerScopeLike) -> AccountId:
            account = await scope.accounts.get_by_username(username)
            if account is None:
                account_id = await scope.accounts.create_if_absent(
                    username, hash_password(password), STARTING_BALANCE,
                )
                if account_id is not None:
                    logger.info(
                        f"Account {username} registered",
                        extra={"account_id": account_id},
                    )
                    return account_id
                # registered by a concurrent request: log in against that row
                account = await scope.accounts.get_by_username(username)
                if account is None:
                    raise LedgerInvariantError(
                        f"account {username} conflicted on insert but cannot be read",
                        ErrorContext(username=username),
                    )
            if not verify_password(account.password_hash, password):
                logger.warning(
                    f"Incorrect password for {username}",
                    extra={"account_id": account.id},
                )
                raise AuthenticationError(
                    "incorrect password", ErrorContext(username=username),
                )
            return account.id

        outcome = await self._uow.run(login)
        return self._tokens.issue(outcome.value)
