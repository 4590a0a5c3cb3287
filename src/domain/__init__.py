from .base import BaseModel
from .customer import Customer
from .loyalty_program import LoyaltyProgram
from .ledger_account import LedgerAccount
from .ledger_event import LedgerEvent, LedgerEventType, CREDITING_TYPES, DEBITING_TYPES
from .ledger_transaction import LedgerTransaction
from .expiration_policy import compute_expires_at, add_calendar_months

__all__ = [
    "BaseModel",
    "Customer",
    "LoyaltyProgram",
    "LedgerAccount",
    "LedgerEvent",
    "LedgerEventType",
    "CREDITING_TYPES",
    "DEBITING_TYPES",
    "LedgerTransaction",
    "compute_expires_at",
    "add_calendar_months",
]
