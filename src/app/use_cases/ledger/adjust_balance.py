"""AdjustBalance Use Case

Administrative signed correction of an account balance.
"""

import logging
from sqlalchemy.exc import SQLAlchemyError
from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.ledger_event import LedgerEventType
from .account_resolver import AccountResolver
from .dtos import AdjustCommandDTO, LedgerMutationResponseDTO
from .errors import LedgerError, failure_result
from .transaction_processor import TransactionProcessor
from .validation import validate_signed_amount

logger = logging.getLogger(__name__)


class AdjustBalance:
    """
    Use Case: Manual balance adjustment

    Business Rules:
    1. Amount is signed and non-zero
    2. Account must exist; is_active is not checked
    3. A negative adjustment cannot take the balance below zero
    4. Lifetime counters are left untouched
    """

    def __init__(
        self,
        uow: UnitOfWork,
        resolver: AccountResolver,
        processor: TransactionProcessor,
    ):
        self.uow = uow
        self.resolver = resolver
        self.processor = processor

    async def execute(self, command: AdjustCommandDTO) -> Result[LedgerMutationResponseDTO]:
        try:
            async with self.uow:
                amount = validate_signed_amount(command.amount)

                replay = await self.processor.find_replay(
                    command.tenant_id,
                    command.idempotency_key,
                    LedgerEventType.ADJUSTMENT,
                    amount,
                    account_id=command.account_id,
                )
                if replay:
                    return Return.ok(replay.to_response())

                account = await self.resolver.resolve_by_id(command.tenant_id, command.account_id)

                outcome = await self.processor.apply_mutation(
                    account,
                    LedgerEventType.ADJUSTMENT,
                    amount,
                    actor_id=command.actor_id,
                    idempotency_key=command.idempotency_key,
                    description=command.description,
                    metadata=command.metadata,
                )

                await self.uow.commit()

            return Return.ok(outcome.to_response())

        except (LedgerError, SQLAlchemyError, OSError) as e:
            return failure_result(
                f"Adjustment of account {command.account_id} for tenant {command.tenant_id}",
                e,
                logger,
            )
