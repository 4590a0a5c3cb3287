"""Ledger error taxonomy

Exceptions raised inside a unit of work. Use cases roll back and convert
them into ``libs.result.Error`` values; nothing here is retried by the
ledger itself.
"""

import logging
from typing import Any, Optional
from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError, SQLAlchemyError
from libs.result import Error, Result, Return


class LedgerError(Exception):
    """Base ledger error carrying a code and structured details"""

    code = "LEDGER_ERROR"
    retryable = False

    def __init__(self, message: str, reason: Optional[str] = None, **details: Any):
        super().__init__(message)
        self.message = message
        self.reason = reason
        self.details = details

    def to_error(self) -> Error:
        return Error(
            code=self.code,
            message=self.message,
            reason=self.reason,
            details=dict(self.details),
            retryable=self.retryable,
        )


class NotFoundError(LedgerError):
    code = "NOT_FOUND"


class AccountNotFoundError(NotFoundError):
    code = "ACCOUNT_NOT_FOUND"


class InvalidAmountError(LedgerError):
    code = "INVALID_AMOUNT"


class AccountInactiveError(LedgerError):
    code = "ACCOUNT_INACTIVE"


class InsufficientBalanceError(LedgerError):
    code = "INSUFFICIENT_BALANCE"


class PolicyViolationError(LedgerError):
    code = "POLICY_VIOLATION"


class ConflictError(LedgerError):
    code = "CONFLICT"
    retryable = True


class StoreUnavailableError(LedgerError):
    code = "STORE_UNAVAILABLE"
    retryable = True


_CONFLICT_MARKERS = (
    "could not serialize",
    "deadlock",
    "database is locked",
    "lock timeout",
    "lock_timeout",
)


def translate_store_error(exc: BaseException) -> LedgerError:
    """
    Map a datastore failure onto the retryable part of the taxonomy

    Unique violations, serialization failures and lock waits become
    ConflictError; anything else from the driver is StoreUnavailableError.
    """
    if isinstance(exc, IntegrityError):
        return ConflictError(
            "Concurrent write conflict",
            reason=str(exc.orig) if exc.orig is not None else str(exc),
        )
    if isinstance(exc, (OperationalError, DBAPIError)):
        text = str(exc).lower()
        if any(marker in text for marker in _CONFLICT_MARKERS):
            return ConflictError("Ledger write conflict, retry the request", reason=str(exc))
        return StoreUnavailableError("Ledger store unavailable", reason=str(exc))
    if isinstance(exc, (SQLAlchemyError, OSError)):
        return StoreUnavailableError("Ledger store unavailable", reason=str(exc))
    return StoreUnavailableError("Unexpected ledger store failure", reason=repr(exc))


def failure_result(operation: str, exc: Exception, log: logging.Logger) -> Result[Any]:
    """
    Convert an exception caught at a use-case boundary into Return.err

    Business rejections are logged at INFO, conflicts at WARNING and
    store failures at ERROR.
    """
    error = exc if isinstance(exc, LedgerError) else translate_store_error(exc)
    if isinstance(error, StoreUnavailableError):
        log.error(f"{operation} failed: {error.code} {error.message} ({error.reason})")
    elif isinstance(error, ConflictError):
        log.warning(f"{operation} conflicted: {error.message} ({error.reason})")
    else:
        log.info(f"{operation} rejected: {error.code} {error.message}")
    return Return.err(error.to_error())
