from .ledger_account_repository import LedgerAccountRepository
from .ledger_event_repository import LedgerEventRepository
from .ledger_transaction_repository import LedgerTransactionRepository
from .loyalty_program_repository import LoyaltyProgramRepository
from .customer_repository import CustomerRepository

__all__ = [
    "LedgerAccountRepository",
    "LedgerEventRepository",
    "LedgerTransactionRepository",
    "LoyaltyProgramRepository",
    "CustomerRepository",
]
