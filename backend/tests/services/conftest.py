"""Service test fixtures — file-backed SQLite ledger, unit of work, API client.

Invariants:
    - Every test gets a fresh SQLite database file under tmp_path
    - Engines come from create_ledger_engine, so BEGIN IMMEDIATE applies exactly as in prod
    - Seeding and assertions go through LedgerProbe, which opens and closes its own
      short session per call (no transaction is left open to block a workflow)

Design Decisions:
    - File database, not :memory: — concurrent scopes need separate connections
    - Route tests set app.state directly: ASGITransport does not run the lifespan
"""

from datetime import timedelta

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import func, select

from merchcoin.core.domain_types import AccountId, Coins, STARTING_BALANCE
from merchcoin.db.base import Base
from merchcoin.db.session import create_ledger_engine
from merchcoin.infrastructure.credentials import TokenIssuer
from merchcoin.infrastructure.database import DatabaseSessionManager
from merchcoin.infrastructure.unit_of_work import UnitOfWorkManager
from merchcoin.models import Account, CatalogItem, InventoryHolding, TransferRecord

CATALOG = {"t-shirt": 80, "cup": 20, "pen": 10, "pink-hoody": 500}


class LedgerProbe:
    """Seeds rows and reads committed state, one short session per call."""

    def __init__(self, sessions: DatabaseSessionManager):
        self._sessions = sessions

    async def add_account(
        self, username: str, balance: int = STARTING_BALANCE,
    ) -> AccountId:
        async with self._sessions.session() as db:
            account = Account(
                username=username, password_hash="not-a-real-hash", balance=balance,
            )
            db.add(account)
            await db.commit()
            return AccountId(account.id)

    async def add_item(self, name: str, price: int) -> int:
        async with self._sessions.session() as db:
            item = CatalogItem(name=name, price=price)
            db.add(item)
            await db.commit()
            return item.id

    async def balance(self, account_id: AccountId) -> Coins:
        async with self._sessions.session() as db:
            result = await db.execute(
                select(Account.balance).where(Account.id == account_id),
            )
            return Coins(result.scalar_one())

    async def holdings(self, account_id: AccountId) -> dict[str, int]:
        """item name → quantity, one entry per inventory row."""
        async with self._sessions.session() as db:
            result = await db.execute(
                select(CatalogItem.name, InventoryHolding.quantity)
                .join(CatalogItem, InventoryHolding.item_id == CatalogItem.id)
                .where(InventoryHolding.account_id == account_id),
            )
            rows = result.all()
        assert len(rows) == len({name for name, _ in rows}), "duplicate holding rows"
        return {name: quantity for name, quantity in rows}

    async def holding_rows(self) -> int:
        async with self._sessions.session() as db:
            result = await db.execute(select(func.count(InventoryHolding.id)))
            return result.scalar_one()

    async def transfers(self) -> list[tuple[int, int, int]]:
        async with self._sessions.session() as db:
            result = await db.execute(
                select(
                    TransferRecord.from_account_id,
                    TransferRecord.to_account_id,
                    TransferRecord.amount,
                ).order_by(TransferRecord.id),
            )
            return [tuple(row) for row in result.all()]


@pytest.fixture
async def test_engine(tmp_path):
    engine = create_ledger_engine(f"sqlite+aiosqlite:///{tmp_path / 'ledger.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_manager(test_engine):
    return DatabaseSessionManager(test_engine)


@pytest.fixture
def uow(session_manager):
    return UnitOfWorkManager(session_manager, timeout=5.0)


@pytest.fixture
def ledger(session_manager):
    return LedgerProbe(session_manager)


@pytest.fixture
async def catalog(ledger):
    """Seed the catalog used across workflow tests. Returns name → price."""
    for name, price in CATALOG.items():
        await ledger.add_item(name, price)
    return dict(CATALOG)


@pytest.fixture
def token_issuer():
    return TokenIssuer("test-secret-key-for-hs256-signing-000", ttl=timedelta(hours=1))


@pytest.fixture
async def client(session_manager, uow, token_issuer, catalog):
    """FastAPI test client wired to the test ledger through app.state."""
    from merchcoin.main import app

    app.state.session_manager = session_manager
    app.state.unit_of_work = uow
    app.state.token_issuer = token_issuer

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    del app.state.session_manager
    del app.state.unit_of_work
    del app.state.token_issuer
