"""Transaction Processor

Writes the event, the transaction and the account update for one balance
mutation. The account passed in must already be locked by the current
unit of work; committing is left to the caller.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, Optional
from src.app.repositories.ledger_account_repository import LedgerAccountRepository
from src.app.repositories.ledger_event_repository import LedgerEventRepository
from src.app.repositories.ledger_transaction_repository import LedgerTransactionRepository
from src.domain.expiration_policy import compute_expires_at
from src.domain.ledger_account import LedgerAccount
from src.domain.ledger_event import CREDITING_TYPES, DEBITING_TYPES, LedgerEvent, LedgerEventType
from src.domain.ledger_transaction import LedgerTransaction
from src.domain.loyalty_program import LoyaltyProgram
from .dtos import LedgerMutationResponseDTO
from .errors import ConflictError, InsufficientBalanceError, InvalidAmountError, StoreUnavailableError
from .validation import MAX_AMOUNT

logger = logging.getLogger(__name__)

_DEFAULT_DESCRIPTIONS = {
    LedgerEventType.EARNED: "Earned {amount} points",
    LedgerEventType.REDEEMED: "Redeemed {amount} points",
    LedgerEventType.CHARGE: "Charge of {amount}",
    LedgerEventType.PAYMENT: "Payment of {amount}",
    LedgerEventType.FEE: "Fee of {amount}",
    LedgerEventType.ADJUSTMENT: "Adjustment of {signed:+d}",
}


@dataclass
class MutationOutcome:
    """Rows written (or found again on replay) for one mutation"""

    account: LedgerAccount
    event: LedgerEvent
    transaction: LedgerTransaction
    replayed: bool = False

    @property
    def new_balance(self) -> int:
        return self.transaction.balance_after

    def to_response(self) -> LedgerMutationResponseDTO:
        event_type = self.event.event_type
        return LedgerMutationResponseDTO(
            transaction_id=self.transaction.id,
            event_id=self.event.id,
            account_id=self.account.id,
            tenant_id=self.account.tenant_id,
            customer_id=self.account.customer_id,
            program_id=self.account.program_id,
            event_type=event_type.value if hasattr(event_type, "value") else event_type,
            amount=self.event.amount,
            amount_change=self.transaction.amount_change,
            balance_before=self.transaction.balance_before,
            new_balance=self.transaction.balance_after,
            expires_at=self.transaction.expires_at,
            order_id=self.event.order_id,
            idempotency_key=self.event.idempotency_key,
            replayed=self.replayed,
            created_at=self.transaction.created_at,
        )


class TransactionProcessor:
    """
    Apply one signed balance change atomically

    Business Rules:
    1. balance_after = balance_before + amount_change, never negative
    2. Sign follows the event type (earned/payment credit, redeemed/charge/fee debit)
    3. Earned points get an expiry from the program policy
    4. earned/payment raise lifetime_earned, redeemed/charge/fee raise lifetime_spent
    5. The same idempotency key replays the stored transaction
    """

    def __init__(
        self,
        account_repo: LedgerAccountRepository,
        event_repo: LedgerEventRepository,
        transaction_repo: LedgerTransactionRepository,
        clock: Callable[[], datetime] = datetime.utcnow,
    ):
        self.account_repo = account_repo
        self.event_repo = event_repo
        self.transaction_repo = transaction_repo
        self.clock = clock

    async def find_replay(
        self,
        tenant_id: str,
        idempotency_key: str,
        event_type: LedgerEventType,
        amount: int,
        customer_id: Optional[str] = None,
        program_id: Optional[str] = None,
        account_id: Optional[int] = None,
    ) -> Optional[MutationOutcome]:
        """
        Look up an earlier mutation made with the same idempotency key

        Returns:
            The stored outcome, or None when the key is unused

        Raises:
            ConflictError: the key was used for a different mutation
        """
        event = await self.event_repo.get_by_idempotency_key(tenant_id, idempotency_key)
        if event is None:
            return None

        account = await self.account_repo.get_by_id(tenant_id, event.account_id)
        transaction = await self.transaction_repo.get_by_event_id(event.id)
        if account is None or transaction is None:
            raise StoreUnavailableError(
                "Ledger event without account or transaction",
                event_id=event.id,
                idempotency_key=idempotency_key,
            )

        mismatched = event.event_type != event_type or event.amount != abs(amount)
        if event_type == LedgerEventType.ADJUSTMENT and transaction.amount_change != amount:
            mismatched = True
        if account_id is not None and account.id != account_id:
            mismatched = True
        if customer_id is not None and (
            account.customer_id != customer_id or account.program_id != program_id
        ):
            mismatched = True

        if mismatched:
            raise ConflictError(
                "Idempotency key already used for a different request",
                reason="idempotency_key_reused",
                idempotency_key=idempotency_key,
                event_id=event.id,
            )

        logger.info(
            f"Replaying ledger transaction {transaction.id} for tenant {tenant_id} "
            f"(idempotency_key={idempotency_key})"
        )
        return MutationOutcome(
            account=account, event=event, transaction=transaction, replayed=True
        )

    async def apply_mutation(
        self,
        account: LedgerAccount,
        event_type: LedgerEventType,
        signed_amount: int,
        *,
        actor_id: str,
        idempotency_key: str,
        description: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
        order_id: Optional[str] = None,
        program: Optional[LoyaltyProgram] = None,
    ) -> MutationOutcome:
        self._check_sign(event_type, signed_amount)

        balance_before = account.current_balance
        balance_after = balance_before + signed_amount
        if balance_after < 0:
            raise InsufficientBalanceError(
                f"Insufficient balance. Available: {balance_before}, Requested: {-signed_amount}",
                reason=f"balance={balance_before}, required={-signed_amount}",
                account_id=account.id,
                current_balance=balance_before,
                requested_amount=-signed_amount,
            )

        magnitude = abs(signed_amount)
        lifetime_earned = account.lifetime_earned + (magnitude if event_type in CREDITING_TYPES else 0)
        lifetime_spent = account.lifetime_spent + (magnitude if event_type in DEBITING_TYPES else 0)
        if max(balance_after, lifetime_earned, lifetime_spent) > MAX_AMOUNT:
            raise InvalidAmountError(
                f"Amount {magnitude} would overflow account {account.id}",
                reason="balance_overflow",
                account_id=account.id,
                current_balance=balance_before,
                requested_amount=signed_amount,
            )

        now = self.clock()

        event = await self.event_repo.create(
            LedgerEvent(
                tenant_id=account.tenant_id,
                account_id=account.id,
                event_type=event_type,
                amount=magnitude,
                description=description
                or _DEFAULT_DESCRIPTIONS[event_type].format(amount=magnitude, signed=signed_amount),
                event_metadata=metadata,
                order_id=order_id,
                idempotency_key=idempotency_key,
                created_by=actor_id,
                created_at=now,
            )
        )

        expires_at = None
        if event_type == LedgerEventType.EARNED and program is not None:
            expires_at = compute_expires_at(program.expiration_months, now)

        transaction = await self.transaction_repo.create(
            LedgerTransaction(
                tenant_id=account.tenant_id,
                account_id=account.id,
                event_id=event.id,
                amount_change=signed_amount,
                balance_before=balance_before,
                balance_after=balance_after,
                expires_at=expires_at,
                created_at=now,
            )
        )

        account.current_balance = balance_after
        account.lifetime_earned = lifetime_earned
        account.lifetime_spent = lifetime_spent
        await self.account_repo.update(account)

        logger.info(
            f"Ledger {event_type.value} on account {account.id} (tenant {account.tenant_id}): "
            f"{balance_before} -> {balance_after}"
        )
        return MutationOutcome(account=account, event=event, transaction=transaction)

    @staticmethod
    def _check_sign(event_type: LedgerEventType, signed_amount: int) -> None:
        if event_type in CREDITING_TYPES:
            valid = signed_amount > 0
        elif event_type in DEBITING_TYPES:
            valid = signed_amount < 0
        else:
            valid = signed_amount != 0
        if not valid:
            raise InvalidAmountError(
                f"Amount {signed_amount} does not match event type {event_type.value}",
                event_type=event_type.value,
                requested_amount=signed_amount,
            )
