"""Unit of Work — one atomic scope per workflow call, commit-or-discard.

Invariants:
    - run() opens exactly one session and one transaction; nesting is not supported
    - All repositories handed to `work` share that transaction (LedgerScope.bind)
    - BusinessRuleViolation inside `work` → rollback → Failure(kind, message)
    - Any other exception (DatabaseError, LedgerInvariantError, CancelledError, bugs)
      → rollback → propagated unchanged
    - Normal return → commit → Success(value); nothing is visible to other callers before
    - The whole scope is bounded by `timeout`; exceeding it rolls back and raises
      StoreTimeoutError
    - read_only scopes on PostgreSQL run REPEATABLE READ READ ONLY (one snapshot)

Design Decisions:
    - Handle passed explicitly to each workflow (constructor injection), not a process-wide
      transaction manager
    - `scope_factory` injectable so tests can wrap repositories with failing fakes
"""

import asyncio
import logging
from typing import Awaitable, Callable, TypeVar

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from merchcoin.core.errors import BusinessRuleViolation, StoreTimeoutError
from merchcoin.core.outcomes import Failure, Outcome, Success
from merchcoin.core.repository_protocols import LedgerScopeLike
from merchcoin.infrastructure.database import DatabaseSessionManager
from merchcoin.infrastructure.ledger_store import LedgerScope

logger = logging.getLogger(__name__)

T = TypeVar("T")

ScopeWork = Callable[[LedgerScopeLike], Awaitable[T]]
ScopeFactory = Callable[[AsyncSession], LedgerScopeLike]


class UnitOfWorkManager:
    """Runs a sequence of store operations as one commit-or-discard unit."""

    def __init__(
        self,
        sessions: DatabaseSessionManager,
        timeout: float = 10.0,
        scope_factory: ScopeFactory = LedgerScope.bind,
    ):
        self._sessions = sessions
        self._timeout = timeout
        self._scope_factory = scope_factory

    async def run(
        self, work: ScopeWork[T], *, read_only: bool = False,
    ) -> Outcome[T]:
        """Execute `work` inside one transaction and report the typed outcome."""
        try:
            value = await asyncio.wait_for(
                self._execute(work, read_only), timeout=self._timeout,
            )
        except BusinessRuleViolation as violation:
            logger.warning(
                f"Scope aborted: {violation.message}",
                extra={
                    "failure_kind": violation.kind.value,
                    "account_id": violation.context.account_id,
                },
            )
            return Failure(violation.kind, violation.message)
        except asyncio.TimeoutError as e:
            logger.error(f"Scope exceeded {self._timeout}s, rolled back")
            raise StoreTimeoutError(
                f"scope exceeded {self._timeout}s", "transaction",
            ) from e
        return Success(value)

    async def _execute(self, work: ScopeWork[T], read_only: bool) -> T:
        async with self._sessions.session() as session:
            async with session.begin():
                if read_only:
                    await self._begin_snapshot(session)
                return await work(self._scope_factory(session))

    async def _begin_snapshot(self, session: AsyncSession) -> None:
        # SQLite already holds the database lock for the whole transaction
        if self._sessions.dialect_name == "postgresql":
            await session.execute(
                text("SET TRANSACTION ISOLATION LEVEL REPEATABLE READ READ ONLY"),
            )
