from typing import Optional
from fastapi import Depends
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.repositories import (
    SqlAlchemyCustomerRepository,
    SqlAlchemyLedgerAccountRepository,
    SqlAlchemyLedgerEventRepository,
    SqlAlchemyLedgerTransactionRepository,
    SqlAlchemyLoyaltyProgramRepository,
)
from src.app.use_cases.ledger.account_resolver import AccountResolver
from src.app.use_cases.ledger.transaction_processor import TransactionProcessor


def _serialize_sqlite_writers(engine: AsyncEngine) -> None:
    # SQLite ignores FOR UPDATE; take the write lock when the transaction starts
    @event.listens_for(engine.sync_engine, "connect")
    def _disable_driver_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def create_ledger_engine(db_uri: Optional[str] = None) -> AsyncEngine:
    engine = create_async_engine(db_uri or ApplicationConfig.DB_URI, echo=False, future=True)
    if engine.dialect.name == "sqlite":
        _serialize_sqlite_writers(engine)
    return engine


def create_session_factory(engine: AsyncEngine) -> sessionmaker:
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


engine = create_ledger_engine()

AsyncSessionLocal = create_session_factory(engine)


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


def get_account_resolver(session: AsyncSession = Depends(get_session)) -> AccountResolver:
    return AccountResolver(
        account_repo=SqlAlchemyLedgerAccountRepository(session),
        customer_repo=SqlAlchemyCustomerRepository(session),
        program_repo=SqlAlchemyLoyaltyProgramRepository(session),
    )


def get_transaction_processor(session: AsyncSession = Depends(get_session)) -> TransactionProcessor:
    return TransactionProcessor(
        account_repo=SqlAlchemyLedgerAccountRepository(session),
        event_repo=SqlAlchemyLedgerEventRepository(session),
        transaction_repo=SqlAlchemyLedgerTransactionRepository(session),
    )
