import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlmodel import SQLModel

import src.domain  # noqa: F401
from src.depends import create_ledger_engine, create_session_factory, get_session
from src.domain.customer import Customer
from src.domain.loyalty_program import LoyaltyProgram
from tests.fixtures.ledger_wiring import LedgerHarness


@pytest_asyncio.fixture(scope="function")
async def engine(tmp_path):
    """Fresh SQLite database file per test"""
    engine = create_ledger_engine(f"sqlite+aiosqlite:///{tmp_path / 'ledger.db'}")

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return create_session_factory(engine)


@pytest_asyncio.fixture
async def seeded(session_factory):
    """
    tenant_a: customers cust_001, cust_002; programs prog_gold (min 100, 12 months)
    and prog_basic (no minimum, no expiry)
    tenant_b: customer cust_b01
    """
    async with session_factory() as session:
        session.add_all([
            Customer(id="cust_001", tenant_id="tenant_a", first_name="Ada", email="ada@example.com"),
            Customer(id="cust_002", tenant_id="tenant_a", first_name="Grace"),
            Customer(id="cust_b01", tenant_id="tenant_b", first_name="Linus"),
            LoyaltyProgram(
                id="prog_gold", tenant_id="tenant_a", name="Gold",
                minimum_redemption=100, expiration_months=12,
            ),
            LoyaltyProgram(
                id="prog_basic", tenant_id="tenant_a", name="Basic",
                minimum_redemption=0, expiration_months=None,
            ),
        ])
        await session.commit()


@pytest_asyncio.fixture
async def ledger(session_factory, seeded):
    return LedgerHarness(session_factory)


@pytest_asyncio.fixture
async def client(session_factory, seeded):
    """Create test client with one database session per request"""
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
