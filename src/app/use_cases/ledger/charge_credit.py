"""ChargeCredit Use Case

Debits a customer's credit account for a charge or a fee.
"""

import logging
from sqlalchemy.exc import SQLAlchemyError
from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.ledger_event import LedgerEventType
from .account_resolver import AccountResolver
from .dtos import ChargeCommandDTO, LedgerMutationResponseDTO
from .errors import LedgerError, failure_result
from .transaction_processor import TransactionProcessor
from .validation import validate_amount, validate_debit

logger = logging.getLogger(__name__)


class ChargeCredit:
    """
    Use Case: Charge a customer credit account

    The credit account is resolved with create-if-missing, so a first-time
    customer is rejected with INSUFFICIENT_BALANCE and the new row rolls back
    with the rest of the unit of work.
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

    async def execute(self, command: ChargeCommandDTO) -> Result[LedgerMutationResponseDTO]:
        event_type = LedgerEventType.FEE if command.fee else LedgerEventType.CHARGE
        try:
            async with self.uow:
                amount = validate_amount(command.amount)

                replay = await self.processor.find_replay(
                    command.tenant_id,
                    command.idempotency_key,
                    event_type,
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

                validate_debit(account, amount)

                outcome = await self.processor.apply_mutation(
                    account,
                    event_type,
                    -amount,
                    actor_id=command.actor_id,
                    idempotency_key=command.idempotency_key,
                    description=command.description,
                    metadata=command.metadata,
                    order_id=command.order_id,
                )

                await self.uow.commit()

            return Return.ok(outcome.to_response())

        except (LedgerError, SQLAlchemyError, OSError) as e:
            return failure_result(
                f"{event_type.value.capitalize()} for tenant {command.tenant_id}", e, logger
            )
