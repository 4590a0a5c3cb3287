"""RecordPayment Use Case

Credits a payment to a customer's credit account.
"""

import logging
from sqlalchemy.exc import SQLAlchemyError
from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.ledger_event import LedgerEventType
from .account_resolver import AccountResolver
from .dtos import PaymentCommandDTO, LedgerMutationResponseDTO
from .errors import LedgerError, failure_result
from .transaction_processor import TransactionProcessor
from .validation import validate_active, validate_amount

logger = logging.getLogger(__name__)


class RecordPayment:
    """Use Case: Record a payment (credit account created if needed, must be active)"""

    def __init__(
        self,
        uow: UnitOfWork,
        resolver: AccountResolver,
        processor: TransactionProcessor,
    ):
        self.uow = uow
        self.resolver = resolver
        self.processor = processor

    async def execute(self, command: PaymentCommandDTO) -> Result[LedgerMutationResponseDTO]:
        try:
            async with self.uow:
                amount = validate_amount(command.amount)

                replay = await self.processor.find_replay(
                    command.tenant_id,
                    command.idempotency_key,
                    LedgerEventType.PAYMENT,
                    amount,
                    customer_id=command.customer_id,
                    program_id=None,
                )
                if replay:
                    return Return.ok(replay.to_response())

                account, _ = await self.resolver.resolve(
                    command.tenant_id,
                    command.customer_id,
                    None,
                    create_if_missing=True,
                )

                validate_active(account, amount)

                outcome = await self.processor.apply_mutation(
                    account,
                    LedgerEventType.PAYMENT,
                    amount,
                    actor_id=command.actor_id,
                    idempotency_key=command.idempotency_key,
                    description=command.description,
                    metadata=command.metadata,
                    order_id=command.order_id,
                )

                await self.uow.commit()

            return Return.ok(outcome.to_response())

        except (LedgerError, SQLAlchemyError, OSError) as e:
            return failure_result(f"Payment for tenant {command.tenant_id}", e, logger)
