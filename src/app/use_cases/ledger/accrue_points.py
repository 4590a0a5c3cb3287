"""AccruePoints Use Case

Credits loyalty points to a customer's program account, creating the
account on first accrual.
"""

import logging
from sqlalchemy.exc import SQLAlchemyError
from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.ledger_event import LedgerEventType
from .account_resolver import AccountResolver
from .dtos import AccrueCommandDTO, LedgerMutationResponseDTO
from .errors import LedgerError, failure_result
from .transaction_processor import TransactionProcessor
from .validation import validate_amount

logger = logging.getLogger(__name__)


class AccruePoints:
    """
    Use Case: Accrue loyalty points

    Business Rules:
    1. Idempotency: same idempotency_key returns the original transaction
    2. Points must be a positive integer
    3. Account is created when missing (customer and program must exist)
    4. Inactive accounts still accrue
    5. Earned points expire per the program's expiration_months

    Flow:
    1. Validate amount
    2. Check idempotency (return existing if found)
    3. Resolve account with lock (SELECT FOR UPDATE), create if missing
    4. Write event + transaction, update balance
    5. Commit
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

    async def execute(self, command: AccrueCommandDTO) -> Result[LedgerMutationResponseDTO]:
        """
        Execute point accrual

        Args:
            command: AccrueCommandDTO with tenant, customer, program, points and idempotency key

        Returns:
            Result[LedgerMutationResponseDTO]: Transaction details or error
        """
        try:
            async with self.uow:
                points = validate_amount(command.points)

                replay = await self.processor.find_replay(
                    command.tenant_id,
                    command.idempotency_key,
                    LedgerEventType.EARNED,
                    points,
                    customer_id=command.customer_id,
                    program_id=command.program_id,
                )
                if replay:
                    return Return.ok(replay.to_response())

                account, program = await self.resolver.resolve(
                    command.tenant_id,
                    command.customer_id,
                    command.program_id,
                    create_if_missing=True,
                )

                outcome = await self.processor.apply_mutation(
                    account,
                    LedgerEventType.EARNED,
                    points,
                    actor_id=command.actor_id,
                    idempotency_key=command.idempotency_key,
                    description=command.description,
                    metadata=command.metadata,
                    order_id=command.order_id,
                    program=program,
                )

                await self.uow.commit()

            return Return.ok(outcome.to_response())

        except (LedgerError, SQLAlchemyError, OSError) as e:
            return failure_result(f"Accrue for tenant {command.tenant_id}", e, logger)
