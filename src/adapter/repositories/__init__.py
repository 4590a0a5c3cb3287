from .ledger_account_repository import SqlAlchemyLedgerAccountRepository
from .ledger_event_repository import SqlAlchemyLedgerEventRepository
from .ledger_transaction_repository import SqlAlchemyLedgerTransactionRepository
from .loyalty_program_repository import SqlAlchemyLoyaltyProgramRepository
from .customer_repository import SqlAlchemyCustomerRepository

__all__ = [
    "SqlAlchemyLedgerAccountRepository",
    "SqlAlchemyLedgerEventRepository",
    "SqlAlchemyLedgerTransactionRepository",
    "SqlAlchemyLoyaltyProgramRepository",
    "SqlAlchemyCustomerRepository",
]
