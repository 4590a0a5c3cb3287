"""Ledger use cases"""
from .accrue_points import AccruePoints
from .redeem_points import RedeemPoints
from .charge_credit import ChargeCredit
from .record_payment import RecordPayment
from .adjust_balance import AdjustBalance
from .set_account_status import SetAccountStatus
from .get_balance import GetBalance
from .list_accounts import ListAccounts
from .list_transactions import ListLedgerTransactions
from .reconcile_ledger import ReconcileLedger
from .account_resolver import AccountResolver
from .transaction_processor import MutationOutcome, TransactionProcessor
from .dtos import (
    AccrueCommandDTO,
    RedeemCommandDTO,
    ChargeCommandDTO,
    PaymentCommandDTO,
    AdjustCommandDTO,
    SetAccountStatusCommandDTO,
    LedgerMutationResponseDTO,
    AccountDTO,
    ListAccountsResponseDTO,
    LedgerTransactionDTO,
    ListLedgerTransactionsResponseDTO,
    LedgerDiscrepancyDTO,
    ReconciliationResultDTO,
)

__all__ = [
    "AccruePoints",
    "RedeemPoints",
    "ChargeCredit",
    "RecordPayment",
    "AdjustBalance",
    "SetAccountStatus",
    "GetBalance",
    "ListAccounts",
    "ListLedgerTransactions",
    "ReconcileLedger",
    "AccountResolver",
    "MutationOutcome",
    "TransactionProcessor",
    "AccrueCommandDTO",
    "RedeemCommandDTO",
    "ChargeCommandDTO",
    "PaymentCommandDTO",
    "AdjustCommandDTO",
    "SetAccountStatusCommandDTO",
    "LedgerMutationResponseDTO",
    "AccountDTO",
    "ListAccountsResponseDTO",
    "LedgerTransactionDTO",
    "ListLedgerTransactionsResponseDTO",
    "LedgerDiscrepancyDTO",
    "ReconciliationResultDTO",
]
